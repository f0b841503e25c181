import click

from rims.infrastructure.cli.item_commands import (
    item_add,
    item_deactivate,
    item_list,
    item_show,
    item_update,
)
from rims.infrastructure.cli.location_commands import (
    location_add,
    location_deactivate,
    location_list,
    location_nearest,
    location_update,
)
from rims.infrastructure.cli.stock_commands import (
    stock_action,
    stock_audit,
    stock_create,
    stock_dispatch,
    stock_list,
    stock_refresh,
    stock_reserve,
    stock_restock,
    stock_show,
    stock_update,
)
from rims.infrastructure.logging_setup import setup_logging
from rims.infrastructure.settings import get_settings


@click.group()
def cli() -> None:
    """RIMS — Relief Inventory Management System"""
    setup_logging(get_settings())


@cli.group()
def item() -> None:
    """Manage the item catalog."""


@cli.group()
def location() -> None:
    """Manage stock locations."""


@cli.group()
def stock() -> None:
    """Manage stock entries."""


# Register subcommands
item.add_command(item_add)
item.add_command(item_deactivate)
item.add_command(item_list)
item.add_command(item_show)
item.add_command(item_update)
location.add_command(location_add)
location.add_command(location_deactivate)
location.add_command(location_list)
location.add_command(location_nearest)
location.add_command(location_update)
stock.add_command(stock_action)
stock.add_command(stock_audit)
stock.add_command(stock_create)
stock.add_command(stock_dispatch)
stock.add_command(stock_list)
stock.add_command(stock_refresh)
stock.add_command(stock_reserve)
stock.add_command(stock_restock)
stock.add_command(stock_show)
stock.add_command(stock_update)
