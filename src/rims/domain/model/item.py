"""Item aggregate — a reusable catalog entry.

Items are looked up by stock entries only once, when a snapshot is taken.
Editing an item never reaches back into existing stock entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from rims.domain.exceptions import ValidationError
from rims.domain.model.stock_entry import ItemSnapshot
from rims.domain.model.value_objects import optional_text, require_text


class ItemCategory(Enum):
    MEDICAL = "medical"
    FOOD = "food"
    WATER = "water"
    SHELTER = "shelter"
    TRANSPORT = "transport"
    EQUIPMENT = "equipment"
    CLOTHING = "clothing"
    OTHER = "other"

    @staticmethod
    def parse(value: str | ItemCategory) -> ItemCategory:
        if isinstance(value, ItemCategory):
            return value
        try:
            return ItemCategory(str(value).strip().lower())
        except ValueError as exc:
            allowed = ", ".join(c.value for c in ItemCategory)
            raise ValidationError(
                f"Unknown category {value!r} (expected one of: {allowed})"
            ) from exc


_UPDATABLE_FIELDS = frozenset(
    {"name", "category", "unit", "description", "sku", "barcode", "image", "is_active"}
)

_TRUE_WORDS = frozenset({"true", "yes", "1", "on"})
_FALSE_WORDS = frozenset({"false", "no", "0", "off"})


def parse_flag(value: object, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValidationError(f"{field_name} must be true or false, got {value!r}")


@dataclass
class Item:
    """A catalog entry.

    Use ``Item.create()`` for new items.  The ``__init__`` is left plain so
    the repository can reconstitute persisted items without re-validating.
    """

    id: str | None
    name: str
    category: ItemCategory
    unit: str
    description: str | None = None
    sku: str | None = None
    barcode: str | None = None
    image: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        category: str | ItemCategory,
        unit: str,
        description: str | None = None,
        sku: str | None = None,
        barcode: str | None = None,
        image: str | None = None,
        is_active: bool = True,
    ) -> Item:
        return Item(
            id=None,
            name=require_text(name, "Item name"),
            category=ItemCategory.parse(category),
            unit=require_text(unit, "Unit"),
            description=optional_text(description),
            sku=optional_text(sku),
            barcode=optional_text(barcode),
            image=optional_text(image),
            is_active=parse_flag(is_active, "Active flag"),
        )

    def update(self, now: datetime, **changes: object) -> None:
        """Apply a partial update of descriptive fields.

        Only keys that are present are applied.  Passing ``sku=""`` or
        ``barcode=""`` clears the identifier.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown item field(s): {', '.join(sorted(unknown))}")
        active = parse_flag(changes["is_active"], "Active flag") if "is_active" in changes else None

        if "name" in changes:
            self.name = require_text(changes["name"], "Item name")  # type: ignore[arg-type]
        if "category" in changes:
            self.category = ItemCategory.parse(changes["category"])  # type: ignore[arg-type]
        if "unit" in changes:
            self.unit = require_text(changes["unit"], "Unit")  # type: ignore[arg-type]
        for name in ("description", "sku", "barcode", "image"):
            if name in changes:
                setattr(self, name, optional_text(changes[name]))  # type: ignore[arg-type]
        if active is not None:
            self.is_active = active
        self.updated_at = now

    def deactivate(self, now: datetime) -> None:
        self.is_active = False
        self.updated_at = now

    def snapshot(self) -> ItemSnapshot:
        """Copy the fields a stock entry keeps about this item."""
        if not self.sku:
            raise ValidationError(f"Item '{self.name}' has no SKU and cannot be stocked")
        return ItemSnapshot(
            name=self.name,
            category=self.category.value,
            sku=self.sku,
            description=self.description,
        )
