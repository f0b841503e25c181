"""CLI commands for the item catalog."""

from __future__ import annotations

import click

from rims.application.add_item import AddItemHandler
from rims.application.list_items import ListItemsHandler
from rims.application.update_item import DeactivateItemHandler, UpdateItemHandler
from rims.domain.exceptions import DomainException
from rims.domain.model.item import ItemCategory
from rims.infrastructure.bootstrap import item_repository

_CATEGORIES = click.Choice([c.value for c in ItemCategory], case_sensitive=False)


@click.command("add")
@click.option("--name", required=True, help="Item name.")
@click.option("--category", required=True, type=_CATEGORIES, help="Item category.")
@click.option("--unit", required=True, help="Unit of measure, e.g. kits or liters.")
@click.option("--description", default=None, help="Free-text description.")
@click.option("--sku", default=None, help="Stock keeping unit (unique).")
@click.option("--barcode", default=None, help="Barcode (unique).")
@click.option("--image", default=None, help="Image reference.")
def item_add(
    name: str,
    category: str,
    unit: str,
    description: str | None,
    sku: str | None,
    barcode: str | None,
    image: str | None,
) -> None:
    """Add a new item to the catalog."""
    handler = AddItemHandler(item_repo=item_repository())

    try:
        item = handler.handle(
            name=name,
            category=category,
            unit=unit,
            description=description,
            sku=sku,
            barcode=barcode,
            image=image,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item.id} '{item.name}' added ({item.category.value}, {item.unit})")


@click.command("update")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--category", default=None, type=_CATEGORIES, help="New category.")
@click.option("--unit", default=None, help="New unit of measure.")
@click.option("--description", default=None, help="New description.")
@click.option("--sku", default=None, help="New SKU ('' clears it).")
@click.option("--barcode", default=None, help="New barcode ('' clears it).")
def item_update(item_id: str, **fields: str | None) -> None:
    """Update descriptive fields of an item."""
    changes = {k: v for k, v in fields.items() if v is not None}
    handler = UpdateItemHandler(item_repo=item_repository())

    try:
        item = handler.handle(item_id, **changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item.id} updated.")


@click.command("deactivate")
@click.option("--id", "item_id", required=True, help="Item ID.")
def item_deactivate(item_id: str) -> None:
    """Mark an item inactive (items are never deleted)."""
    handler = DeactivateItemHandler(item_repo=item_repository())

    try:
        item = handler.handle(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item.id} '{item.name}' deactivated.")


@click.command("list")
@click.option("--search", default=None, help="Match name or description.")
@click.option("--category", default=None, type=_CATEGORIES, help="Filter by category.")
@click.option("--active/--inactive", "is_active", default=None, help="Filter by active flag.")
def item_list(search: str | None, category: str | None, is_active: bool | None) -> None:
    """List catalog items."""
    handler = ListItemsHandler(item_repo=item_repository())
    items = handler.handle(search=search, category=category, is_active=is_active)

    if not items:
        click.echo("No items found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Category':<10} {'Unit':<8} {'SKU':<14} {'Active':<6}")
    click.echo("-" * 73)
    for i in items:
        click.echo(
            f"{i.id:<6} {i.name:<24} {i.category.value:<10} {i.unit:<8} "
            f"{i.sku or '-':<14} {'yes' if i.is_active else 'no':<6}"
        )


@click.command("show")
@click.option("--id", "item_id", required=True, help="Item ID.")
def item_show(item_id: str) -> None:
    """Show a single item."""
    handler = ListItemsHandler(item_repo=item_repository())

    try:
        item = handler.get(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item.id}  {item.name}")
    click.echo(f"Category:    {item.category.value}")
    click.echo(f"Unit:        {item.unit}")
    click.echo(f"SKU:         {item.sku or '-'}")
    click.echo(f"Barcode:     {item.barcode or '-'}")
    click.echo(f"Description: {item.description or '-'}")
    click.echo(f"Active:      {'yes' if item.is_active else 'no'}")
