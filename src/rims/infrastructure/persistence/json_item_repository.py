"""JSON-file-backed implementation of ItemRepository."""

from __future__ import annotations

from pathlib import Path

from rims.domain.exceptions import DuplicateKeyError
from rims.domain.model.item import Item, ItemCategory
from rims.domain.repository.item_repository import ItemRepository
from rims.infrastructure.persistence.json_files import (
    ensure_file,
    from_iso,
    load_records,
    next_numeric_id,
    persist_records,
    to_iso,
)


class JsonItemRepository(ItemRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path)

    # --- ItemRepository interface ---------------------------------------------

    def next_id(self) -> str:
        return next_numeric_id(load_records(self._file_path))

    def get_by_id(self, item_id: str) -> Item | None:
        for raw in load_records(self._file_path):
            if raw["id"] == item_id:
                return self._to_domain(raw)
        return None

    def get_by_sku(self, sku: str) -> Item | None:
        return self._find_by("sku", sku)

    def get_by_barcode(self, barcode: str) -> Item | None:
        return self._find_by("barcode", barcode)

    def list_all(self) -> list[Item]:
        return [self._to_domain(raw) for raw in load_records(self._file_path)]

    def save(self, item: Item) -> None:
        records = load_records(self._file_path)
        if item.id is None:
            item.id = next_numeric_id(records)

        # Sparse unique indexes on sku and barcode.
        for raw in records:
            if raw["id"] == item.id:
                continue
            for key in ("sku", "barcode"):
                value = getattr(item, key)
                if value and raw.get(key) == value:
                    raise DuplicateKeyError(f"{key.upper()} '{value}' already exists")

        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == item.id:
                records[i] = self._to_raw(item)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(item))
        persist_records(self._file_path, records)

    # --- Serialization --------------------------------------------------------

    def _find_by(self, key: str, value: str) -> Item | None:
        for raw in load_records(self._file_path):
            if raw.get(key) == value:
                return self._to_domain(raw)
        return None

    @staticmethod
    def _to_raw(item: Item) -> dict:
        return {
            "id": item.id,
            "name": item.name,
            "description": item.description,
            "category": item.category.value,
            "unit": item.unit,
            "sku": item.sku,
            "barcode": item.barcode,
            "image": item.image,
            "isActive": item.is_active,
            "createdAt": to_iso(item.created_at),
            "updatedAt": to_iso(item.updated_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Item:
        return Item(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description"),
            category=ItemCategory(raw["category"]),
            unit=raw["unit"],
            sku=raw.get("sku"),
            barcode=raw.get("barcode"),
            image=raw.get("image"),
            is_active=raw.get("isActive", True),
            created_at=from_iso(raw["createdAt"]),
            updated_at=from_iso(raw["updatedAt"]),
        )
