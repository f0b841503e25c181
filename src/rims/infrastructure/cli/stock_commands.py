"""CLI commands for stock entries."""

from __future__ import annotations

from datetime import datetime

import click

from rims.application.append_action import AppendActionHandler
from rims.application.append_audit_entry import AppendAuditEntryHandler
from rims.application.dispatch_stock import DispatchHandler
from rims.application.dto import StockEntryDTO
from rims.application.find_locations import ListLocationsHandler
from rims.application.list_items import ListItemsHandler
from rims.application.refresh_stock_status import RefreshStockStatusHandler
from rims.application.reserve_stock import ReserveHandler
from rims.application.restock_stock import RestockHandler
from rims.application.show_stock import ListStockHandler, ShowStockEntryHandler
from rims.application.upsert_stock_entry import UpsertStockEntryHandler
from rims.domain.exceptions import DomainException, EntityNotFoundError
from rims.domain.model.stock_entry import ActionStatus, ActionType, BatchCondition
from rims.domain.model.stock_status import StockStatus
from rims.infrastructure.bootstrap import (
    item_repository,
    location_repository,
    stock_entry_repository,
)
from rims.infrastructure.settings import get_settings

_USER = click.option("--user", "user_id", required=True, help="ID of the acting user.")


@click.command("create")
@click.option("--item-id", required=True, help="Catalog item to stock.")
@click.option("--location-id", required=True, help="Location holding the stock.")
@click.option("--quantity", required=True, help="Current quantity on hand.")
@click.option("--threshold", required=True, help="Low-stock threshold.")
@click.option("--reserved", default="0", show_default=True, help="Reserved quantity.")
@click.option("--unit", default=None, help="Unit (defaults to the item's unit).")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable).")
@_USER
def stock_create(
    item_id: str,
    location_id: str,
    quantity: str,
    threshold: str,
    reserved: str,
    unit: str | None,
    tags: tuple[str, ...],
    user_id: str,
) -> None:
    """Create the stock entry for an item at a location."""
    settings = get_settings()
    handler = UpsertStockEntryHandler(
        stock_repo=stock_entry_repository(settings),
        allow_over_reservation=settings.allow_over_reservation,
    )

    try:
        catalog_item = ListItemsHandler(item_repository(settings)).get(item_id)
        site = ListLocationsHandler(location_repository(settings)).get(location_id)
        entry = handler.handle(
            item=catalog_item.snapshot(),
            location=site.snapshot(),
            current_quantity=quantity,
            reserved_quantity=reserved,
            threshold=threshold,
            unit=unit or catalog_item.unit,
            tags=list(tags),
            user_id=user_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock entry #{entry.id} created for '{entry.item.name}' at "
        f"'{entry.location.name}' (status={entry.status.value}, "
        f"available={entry.inventory.available_quantity})"
    )


@click.command("update")
@click.option("--id", "entry_id", required=True, help="Stock entry ID.")
@click.option("--quantity", default=None, help="New current quantity.")
@click.option("--reserved", default=None, help="New reserved quantity.")
@click.option("--threshold", default=None, help="New threshold.")
@click.option("--unit", default=None, help="New unit.")
@click.option("--tag", "tags", multiple=True, help="Replace tags (repeatable).")
@_USER
def stock_update(
    entry_id: str,
    quantity: str | None,
    reserved: str | None,
    threshold: str | None,
    unit: str | None,
    tags: tuple[str, ...],
    user_id: str,
) -> None:
    """Manually adjust the levels of a stock entry."""
    settings = get_settings()
    repo = stock_entry_repository(settings)
    entry = repo.get_by_id(entry_id)
    if entry is None:
        raise click.ClickException(str(EntityNotFoundError(f"Stock entry '{entry_id}' not found")))

    handler = UpsertStockEntryHandler(
        stock_repo=repo,
        allow_over_reservation=settings.allow_over_reservation,
    )
    inv = entry.inventory

    try:
        entry = handler.handle(
            item=entry.item,
            location=entry.location,
            current_quantity=quantity if quantity is not None else inv.current_quantity,
            reserved_quantity=reserved if reserved is not None else inv.reserved_quantity,
            threshold=threshold if threshold is not None else inv.threshold,
            unit=unit,
            tags=list(tags) if tags else None,
            entry_id=entry_id,
            user_id=user_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock entry #{entry.id} updated (status={entry.status.value}, "
        f"available={entry.inventory.available_quantity})"
    )


@click.command("restock")
@click.option("--id", "entry_id", required=True, help="Stock entry ID.")
@click.option("--quantity", required=True, help="Units received.")
@click.option("--batch", "batch_number", default=None, help="Batch number; records a batch.")
@click.option("--expires", default=None, type=click.DateTime(formats=["%Y-%m-%d"]),
              help="Batch expiry date (YYYY-MM-DD).")
@click.option("--condition", default=None,
              type=click.Choice([c.value for c in BatchCondition], case_sensitive=False),
              help="Batch condition.")
@click.option("--notes", default=None, help="Action notes.")
@_USER
def stock_restock(
    entry_id: str,
    quantity: str,
    batch_number: str | None,
    expires: datetime | None,
    condition: str | None,
    notes: str | None,
    user_id: str,
) -> None:
    """Add received units to a stock entry."""
    settings = get_settings()
    handler = RestockHandler(
        stock_repo=stock_entry_repository(settings),
        shelf_life_days=settings.default_batch_shelf_life_days,
    )

    try:
        entry = handler.handle(
            entry_id, quantity, user_id,
            batch_number=batch_number,
            expiry_date=expires,
            condition=condition,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock entry #{entry.id} restocked — now {entry.inventory.current_quantity} "
        f"{entry.inventory.unit} (status={entry.status.value})"
    )


@click.command("dispatch")
@click.option("--id", "entry_id", required=True, help="Stock entry ID.")
@click.option("--quantity", required=True, help="Units to send out.")
@click.option("--destination", default=None, help="Where the units are going.")
@click.option("--notes", default=None, help="Action notes.")
@_USER
def stock_dispatch(
    entry_id: str,
    quantity: str,
    destination: str | None,
    notes: str | None,
    user_id: str,
) -> None:
    """Send available units out of a location."""
    handler = DispatchHandler(stock_repo=stock_entry_repository())

    try:
        entry = handler.handle(entry_id, quantity, user_id, destination=destination, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock entry #{entry.id} dispatched — now {entry.inventory.current_quantity} "
        f"{entry.inventory.unit} (status={entry.status.value})"
    )


@click.command("reserve")
@click.option("--id", "entry_id", required=True, help="Stock entry ID.")
@click.option("--quantity", required=True, help="Units to earmark.")
@click.option("--notes", default=None, help="What the reservation is for.")
@_USER
def stock_reserve(entry_id: str, quantity: str, notes: str | None, user_id: str) -> None:
    """Earmark available units without removing them."""
    handler = ReserveHandler(stock_repo=stock_entry_repository())

    try:
        entry = handler.handle(entry_id, quantity, user_id, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock entry #{entry.id} reserved — {entry.inventory.reserved_quantity} reserved, "
        f"{entry.inventory.available_quantity} available"
    )


@click.command("action")
@click.option("--id", "entry_id", required=True, help="Stock entry ID.")
@click.option("--type", "action_type", required=True,
              type=click.Choice([t.value for t in ActionType], case_sensitive=False))
@click.option("--status", default=ActionStatus.PENDING.value, show_default=True,
              type=click.Choice([s.value for s in ActionStatus], case_sensitive=False))
@click.option("--notes", default=None, help="Action notes.")
@_USER
def stock_action(
    entry_id: str, action_type: str, status: str, notes: str | None, user_id: str
) -> None:
    """Append an action to a stock entry (quantities are not changed)."""
    handler = AppendActionHandler(stock_repo=stock_entry_repository())

    try:
        action = handler.handle(entry_id, action_type, user_id, status=status, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{action.type.value} action ({action.status.value}) added to stock entry #{entry_id}.")


@click.command("audit")
@click.option("--id", "entry_id", required=True, help="Stock entry ID.")
@click.option("--change", required=True, help="Free-text change description.")
@_USER
def stock_audit(entry_id: str, change: str, user_id: str) -> None:
    """Append a free-text audit line to a stock entry."""
    handler = AppendAuditEntryHandler(stock_repo=stock_entry_repository())

    try:
        handler.handle(entry_id, user_id, change)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Audit entry added to stock entry #{entry_id}.")


@click.command("list")
@click.option("--sku", default=None, help="Filter by SKU (substring).")
@click.option("--warehouse", "warehouse_id", default=None, help="Filter by warehouse ID.")
@click.option("--category", default=None, help="Filter by item category.")
@click.option("--status", default=None,
              type=click.Choice([s.value for s in StockStatus]), help="Filter by status.")
@click.option("--tag", default=None, help="Filter by tag.")
def stock_list(
    sku: str | None,
    warehouse_id: str | None,
    category: str | None,
    status: str | None,
    tag: str | None,
) -> None:
    """Show stock levels across locations."""
    handler = ListStockHandler(stock_repo=stock_entry_repository())
    lines = handler.handle(
        sku=sku, warehouse_id=warehouse_id, category=category, status=status, tag=tag
    )

    if not lines:
        click.echo("No stock entries found.")
        return

    click.echo(
        f"{'ID':<5} {'Item':<20} {'SKU':<12} {'Location':<18} {'Status':<10} "
        f"{'Current':>8} {'Reserved':>9} {'Available':>10}"
    )
    click.echo("-" * 97)
    for line in lines:
        click.echo(
            f"{line.id:<5} {line.item_name:<20} {line.sku:<12} {line.location_name:<18} "
            f"{line.status:<10} {line.current:>8} {line.reserved:>9} {line.available:>10}"
        )


def _display_entry(dto: StockEntryDTO) -> None:
    line = dto.line
    click.echo(f"Stock entry #{line.id}  (status={line.status})")
    click.echo(f"Item:      {line.item_name} [{line.sku}] ({dto.category})")
    click.echo(f"Location:  {line.location_name} [{line.warehouse_id}]")
    click.echo(f"Address:   {dto.address}")
    if dto.manager:
        click.echo(f"Manager:   {dto.manager}")
    click.echo(
        f"Inventory: {line.current} {line.unit} on hand, {line.reserved} reserved, "
        f"{line.available} available (threshold {line.threshold})"
    )
    if dto.tags:
        click.echo(f"Tags:      {', '.join(dto.tags)}")
    click.echo(f"Updated:   {dto.last_updated}")

    if dto.batches:
        click.echo()
        click.echo(f"  {'Batch':<14} {'Qty':>6} {'Received':<11} {'Expires':<11} {'Condition':<9}")
        click.echo(f"  {'-'*55}")
        for b in dto.batches:
            click.echo(
                f"  {b.batch_number:<14} {b.quantity:>6} {b.received_date:<11} "
                f"{b.expiry_date:<11} {b.condition:<9}"
            )

    if dto.actions:
        click.echo()
        click.echo("  Actions:")
        for a in dto.actions:
            click.echo(f"  {a.timestamp}  {a.type:<10} {a.status:<9} {a.triggered_by}  {a.notes}")

    if dto.audit_log:
        click.echo()
        click.echo("  Audit log:")
        for a in dto.audit_log:
            click.echo(f"  {a.timestamp}  {a.user_id}: {a.change}")


@click.command("show")
@click.option("--id", "entry_id", required=True, help="Stock entry ID.")
def stock_show(entry_id: str) -> None:
    """Show a stock entry with its batches and history."""
    handler = ShowStockEntryHandler(stock_repo=stock_entry_repository())

    try:
        dto = handler.handle(entry_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_entry(dto)


@click.command("refresh")
def stock_refresh() -> None:
    """Re-evaluate every entry's status (e.g. after batches expire)."""
    handler = RefreshStockStatusHandler(stock_repo=stock_entry_repository())
    changes = handler.handle()

    if not changes:
        click.echo("All statuses are current.")
        return

    for c in changes:
        click.echo(f"Stock entry #{c.id} [{c.sku} @ {c.warehouse_id}]: {c.old_status} -> {c.new_status}")
