"""StockEntry aggregate — the ledger row for one item at one location.

A stock entry owns value copies (snapshots) of the item and the location it
was created for.  They are deliberately *not* references: editing the
catalog or relocating a warehouse must never rewrite the history of an
existing entry.

Invariants (hold after every ``recompute()``, which every write performs):
- ``inventory.available_quantity == max(0, current - reserved)``
- ``status == classify_status(current, threshold, batch expiries, now)``

``reserved_quantity`` may exceed ``current_quantity`` while over-reservation
is allowed; the available quantity then clamps to zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum

from rims.domain.exceptions import InsufficientStockError, InvalidQuantityError, ValidationError
from rims.domain.model.audit import (
    ChangeEvent,
    Dispatched,
    QuantityChanged,
    Reserved,
    ReservedChanged,
    Restocked,
)
from rims.domain.model.stock_status import StockStatus, available_quantity, classify_status
from rims.domain.model.value_objects import GeoPoint, coerce_quantity, optional_text, require_text

DEFAULT_SHELF_LIFE_DAYS = 365


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BatchCondition(Enum):
    NEW = "New"
    GOOD = "Good"
    FAIR = "Fair"
    DAMAGED = "Damaged"


class ActionType(Enum):
    RESTOCK = "Restock"
    DISPATCH = "Dispatch"
    TRANSFER = "Transfer"
    ADJUSTMENT = "Adjustment"
    EXPIRY = "Expiry"


class ActionStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


def _parse_enum(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if str(value).strip().lower() == member.value.lower():
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(f"Unknown {label} {value!r} (expected one of: {allowed})")


def as_utc_datetime(value: object, field_name: str) -> datetime:
    """Return *value* as an aware datetime.

    Naive datetimes and ISO-8601 strings without an offset are taken as UTC.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValidationError(f"{field_name} must be an ISO-8601 date, got {value!r}") from exc
    if not isinstance(value, datetime):
        raise ValidationError(f"{field_name} must be a date and time, got {value!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ItemSnapshot:
    name: str
    category: str
    sku: str
    description: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", require_text(self.name, "Item name"))
        object.__setattr__(self, "category", require_text(self.category, "Item category"))
        object.__setattr__(self, "sku", require_text(self.sku, "SKU"))
        object.__setattr__(self, "description", optional_text(self.description))


@dataclass(frozen=True)
class Manager:
    name: str = ""
    contact: str = ""
    email: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", (self.name or "").strip())
        object.__setattr__(self, "contact", (self.contact or "").strip())
        object.__setattr__(self, "email", (self.email or "").strip().lower())


@dataclass(frozen=True)
class LocationSnapshot:
    warehouse_id: str
    name: str
    address: str
    coordinates: GeoPoint = GeoPoint(longitude=0.0, latitude=0.0)
    manager: Manager = Manager()

    def __post_init__(self) -> None:
        object.__setattr__(self, "warehouse_id", require_text(self.warehouse_id, "Warehouse ID"))
        object.__setattr__(self, "name", require_text(self.name, "Location name"))
        object.__setattr__(self, "address", require_text(self.address, "Address"))


# ---------------------------------------------------------------------------
# Ledger parts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Batch:
    """A physically distinct lot.  Informational: not reconciled with the
    entry's current quantity."""

    batch_number: str
    quantity: int
    expiry_date: datetime
    received_date: datetime
    condition: BatchCondition = BatchCondition.NEW

    def __post_init__(self) -> None:
        object.__setattr__(self, "batch_number", require_text(self.batch_number, "Batch number"))
        object.__setattr__(self, "quantity", coerce_quantity(self.quantity, "Batch quantity"))
        object.__setattr__(self, "expiry_date", as_utc_datetime(self.expiry_date, "Expiry date"))
        object.__setattr__(
            self, "received_date", as_utc_datetime(self.received_date, "Received date")
        )
        object.__setattr__(
            self, "condition", _parse_enum(BatchCondition, self.condition, "batch condition")
        )

    @staticmethod
    def receive(
        batch_number: str,
        quantity: int,
        now: datetime,
        expiry_date: datetime | None = None,
        condition: str | BatchCondition | None = None,
        shelf_life_days: int = DEFAULT_SHELF_LIFE_DAYS,
    ) -> Batch:
        """Build a batch received at *now*, defaulting expiry to the shelf life."""
        return Batch(
            batch_number=batch_number,
            quantity=quantity,
            expiry_date=expiry_date or now + timedelta(days=shelf_life_days),
            received_date=now,
            condition=condition or BatchCondition.NEW,
        )


@dataclass(frozen=True)
class StockAction:
    type: ActionType
    triggered_by: str
    timestamp: datetime
    status: ActionStatus = ActionStatus.PENDING
    notes: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", _parse_enum(ActionType, self.type, "action type"))
        object.__setattr__(self, "status", _parse_enum(ActionStatus, self.status, "action status"))
        object.__setattr__(self, "triggered_by", require_text(self.triggered_by, "Triggered by"))
        object.__setattr__(self, "notes", optional_text(self.notes))


@dataclass(frozen=True)
class AuditEntry:
    user_id: str
    change: str
    timestamp: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "user_id", require_text(self.user_id, "User ID"))
        object.__setattr__(self, "change", require_text(self.change, "Change description"))


@dataclass
class InventoryLevels:
    current_quantity: int
    unit: str
    threshold: int = 0
    reserved_quantity: int = 0
    available_quantity: int = 0


# ---------------------------------------------------------------------------
# Aggregate root
# ---------------------------------------------------------------------------


@dataclass
class StockEntry:
    """Aggregate root for one item's inventory at one location.

    Use ``StockEntry.create()`` for new entries.  The ``__init__`` stays
    simple so repositories can reconstitute persisted entries as stored.
    """

    id: str | None
    item: ItemSnapshot
    location: LocationSnapshot
    inventory: InventoryLevels
    status: StockStatus = StockStatus.IN_STOCK
    batches: list[Batch] = field(default_factory=list)
    actions: list[StockAction] = field(default_factory=list)
    audit_log: list[AuditEntry] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    last_updated: datetime = field(default_factory=utc_now)
    created_at: datetime = field(default_factory=utc_now)

    # --- Factory ----------------------------------------------------------

    @staticmethod
    def create(
        item: ItemSnapshot,
        location: LocationSnapshot,
        unit: str,
        current_quantity: object,
        reserved_quantity: object,
        threshold: object,
        now: datetime,
        batches: list[Batch] | None = None,
        tags: list[str] | None = None,
        allow_over_reservation: bool = True,
    ) -> StockEntry:
        entry = StockEntry(
            id=None,
            item=item,
            location=location,
            inventory=InventoryLevels(current_quantity=0, unit=require_text(unit, "Unit")),
            batches=list(batches or []),
            tags=normalize_tags(tags or []),
            created_at=now,
        )
        entry.set_levels(
            current_quantity,
            reserved_quantity,
            threshold,
            allow_over_reservation=allow_over_reservation,
        )
        entry.recompute(now)
        return entry

    @property
    def key(self) -> tuple[str, str]:
        """The unique (SKU, warehouse id) pair."""
        return self.item.sku, self.location.warehouse_id

    # --- Level changes ----------------------------------------------------

    def set_levels(
        self,
        current_quantity: object,
        reserved_quantity: object,
        threshold: object,
        unit: str | None = None,
        allow_over_reservation: bool = True,
    ) -> list[ChangeEvent]:
        """Replace the caller-owned inventory fields.

        All three values are validated before any of them is applied.
        Returns the quantity change events, for callers that keep an audit
        trail of manual adjustments.
        """
        current = coerce_quantity(current_quantity, "Current quantity")
        reserved = coerce_quantity(reserved_quantity, "Reserved quantity")
        limit = coerce_quantity(threshold, "Threshold")
        if not allow_over_reservation and reserved > current:
            raise InvalidQuantityError(
                f"Reserved quantity {reserved} exceeds current quantity {current}"
            )
        new_unit = require_text(unit, "Unit") if unit is not None else self.inventory.unit

        events: list[ChangeEvent] = []
        if current != self.inventory.current_quantity:
            events.append(QuantityChanged(self.inventory.current_quantity, current, new_unit))
        if reserved != self.inventory.reserved_quantity:
            events.append(ReservedChanged(self.inventory.reserved_quantity, reserved))

        self.inventory.current_quantity = current
        self.inventory.reserved_quantity = reserved
        self.inventory.threshold = limit
        self.inventory.unit = new_unit
        return events

    def restock(self, quantity: object, batch: Batch | None = None) -> Restocked:
        qty = _positive(quantity, "Restock quantity")
        old = self.inventory.current_quantity
        self.inventory.current_quantity = old + qty
        if batch is not None:
            self.batches.append(batch)
        return Restocked(qty, self.inventory.unit, old, self.inventory.current_quantity)

    def dispatch(self, quantity: object, destination: str | None = None) -> Dispatched:
        qty = _positive(quantity, "Dispatch quantity")
        self._require_available(qty)
        old = self.inventory.current_quantity
        self.inventory.current_quantity = old - qty
        return Dispatched(
            qty, self.inventory.unit, old, self.inventory.current_quantity,
            destination=optional_text(destination),
        )

    def reserve(self, quantity: object, notes: str | None = None) -> Reserved:
        qty = _positive(quantity, "Reservation quantity")
        self._require_available(qty)
        old = self.inventory.reserved_quantity
        self.inventory.reserved_quantity = old + qty
        return Reserved(
            qty, self.inventory.unit, old, self.inventory.reserved_quantity,
            notes=optional_text(notes),
        )

    # --- Append-only logs -------------------------------------------------

    def append_action(
        self,
        action_type: str | ActionType,
        triggered_by: str,
        now: datetime,
        status: str | ActionStatus = ActionStatus.PENDING,
        notes: str | None = None,
    ) -> StockAction:
        """Record an operational event.  Quantities are not touched."""
        action = StockAction(
            type=action_type,  # type: ignore[arg-type]
            triggered_by=triggered_by,
            timestamp=now,
            status=status,  # type: ignore[arg-type]
            notes=notes,
        )
        self.actions.append(action)
        return action

    def append_audit(self, user_id: str, change: str | ChangeEvent, now: datetime) -> AuditEntry:
        text = change if isinstance(change, str) else change.render()
        entry = AuditEntry(user_id=user_id, change=text, timestamp=now)
        self.audit_log.append(entry)
        return entry

    # --- Derived state ----------------------------------------------------

    def classify(self, now: datetime) -> StockStatus:
        return classify_status(
            self.inventory.current_quantity,
            self.inventory.threshold,
            (batch.expiry_date for batch in self.batches),
            now,
        )

    def recompute(self, now: datetime) -> None:
        """Refresh every derived field.  Must run before each persist."""
        self.inventory.available_quantity = available_quantity(
            self.inventory.current_quantity, self.inventory.reserved_quantity
        )
        self.status = self.classify(now)
        self.last_updated = now

    # --- Internal helpers -------------------------------------------------

    def _require_available(self, qty: int) -> None:
        available = available_quantity(
            self.inventory.current_quantity, self.inventory.reserved_quantity
        )
        if available < qty:
            raise InsufficientStockError(
                f"Insufficient available quantity for {self.item.name} "
                f"at {self.location.name} (need {qty}, have {available} available)"
            )


def _positive(quantity: object, field_name: str) -> int:
    qty = coerce_quantity(quantity, field_name)
    if qty == 0:
        raise InvalidQuantityError(f"{field_name} must be positive")
    return qty


def normalize_tags(tags: list[str]) -> list[str]:
    """Strip blanks and duplicates, keeping first-seen order."""
    seen: list[str] = []
    for tag in tags:
        tag = str(tag).strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen
