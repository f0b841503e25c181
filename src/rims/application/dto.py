"""Read models handed from the query handlers to the CLI.

Timestamps are pre-formatted strings and enums are plain values, so the
CLI never touches domain objects for display.
"""

from __future__ import annotations

from dataclasses import dataclass

from rims.domain.model.stock_entry import StockEntry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class StockLineDTO:
    """Output: one row of the stock overview."""

    id: str
    item_name: str
    sku: str
    warehouse_id: str
    location_name: str
    status: str
    current: int
    reserved: int
    available: int
    threshold: int
    unit: str


@dataclass(frozen=True)
class BatchDTO:
    batch_number: str
    quantity: int
    expiry_date: str
    received_date: str
    condition: str


@dataclass(frozen=True)
class ActionDTO:
    type: str
    triggered_by: str
    timestamp: str
    status: str
    notes: str


@dataclass(frozen=True)
class AuditLineDTO:
    user_id: str
    change: str
    timestamp: str


@dataclass(frozen=True)
class StockEntryDTO:
    """Output: a complete stock entry as displayed to the user."""

    line: StockLineDTO
    category: str
    address: str
    manager: str
    tags: list[str]
    batches: list[BatchDTO]
    actions: list[ActionDTO]
    audit_log: list[AuditLineDTO]
    last_updated: str


@dataclass(frozen=True)
class LocationDistanceDTO:
    """Output: a location with its distance from a query point."""

    id: str
    name: str
    city: str
    state: str
    distance_km: float


@dataclass(frozen=True)
class StatusChangeDTO:
    """Output: an entry whose status moved during a refresh sweep."""

    id: str
    sku: str
    warehouse_id: str
    old_status: str
    new_status: str


# --- Mapping ------------------------------------------------------------------


def to_stock_line(entry: StockEntry) -> StockLineDTO:
    inv = entry.inventory
    return StockLineDTO(
        id=entry.id,  # type: ignore[arg-type]
        item_name=entry.item.name,
        sku=entry.item.sku,
        warehouse_id=entry.location.warehouse_id,
        location_name=entry.location.name,
        status=entry.status.value,
        current=inv.current_quantity,
        reserved=inv.reserved_quantity,
        available=inv.available_quantity,
        threshold=inv.threshold,
        unit=inv.unit,
    )


def to_stock_entry_dto(entry: StockEntry) -> StockEntryDTO:
    manager = entry.location.manager
    manager_text = ", ".join(part for part in (manager.name, manager.contact, manager.email) if part)
    return StockEntryDTO(
        line=to_stock_line(entry),
        category=entry.item.category,
        address=entry.location.address,
        manager=manager_text,
        tags=list(entry.tags),
        batches=[
            BatchDTO(
                batch_number=b.batch_number,
                quantity=b.quantity,
                expiry_date=b.expiry_date.strftime("%Y-%m-%d"),
                received_date=b.received_date.strftime("%Y-%m-%d"),
                condition=b.condition.value,
            )
            for b in entry.batches
        ],
        actions=[
            ActionDTO(
                type=a.type.value,
                triggered_by=a.triggered_by,
                timestamp=a.timestamp.strftime(TIMESTAMP_FORMAT),
                status=a.status.value,
                notes=a.notes or "",
            )
            for a in entry.actions
        ],
        audit_log=[
            AuditLineDTO(
                user_id=a.user_id,
                change=a.change,
                timestamp=a.timestamp.strftime(TIMESTAMP_FORMAT),
            )
            for a in entry.audit_log
        ],
        last_updated=entry.last_updated.strftime(TIMESTAMP_FORMAT),
    )
