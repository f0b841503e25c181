"""JSON-file-backed implementation of StockEntryRepository.

Documents use the camelCase shape the rest of the application reads:

    {item, location, inventory, status, batches, actions, auditLog, tags,
     lastUpdated, createdAt}

The whole document is replaced on every save.  A second document with the
same (item.sku, location.warehouseId) pair is refused, as a unique index
would refuse it.
"""

from __future__ import annotations

from pathlib import Path

from rims.domain.exceptions import DuplicateKeyError
from rims.domain.model.stock_entry import (
    ActionStatus,
    ActionType,
    AuditEntry,
    Batch,
    BatchCondition,
    InventoryLevels,
    ItemSnapshot,
    LocationSnapshot,
    Manager,
    StockAction,
    StockEntry,
)
from rims.domain.model.stock_status import StockStatus
from rims.domain.model.value_objects import GeoPoint
from rims.domain.repository.stock_entry_repository import StockEntryRepository
from rims.infrastructure.persistence.json_files import (
    ensure_file,
    from_iso,
    load_records,
    next_numeric_id,
    persist_records,
    to_iso,
)


class JsonStockEntryRepository(StockEntryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path)

    # --- StockEntryRepository interface ---------------------------------------

    def next_id(self) -> str:
        return next_numeric_id(load_records(self._file_path))

    def get_by_id(self, entry_id: str) -> StockEntry | None:
        for raw in load_records(self._file_path):
            if raw["id"] == entry_id:
                return self._to_domain(raw)
        return None

    def get_by_key(self, sku: str, warehouse_id: str) -> StockEntry | None:
        for raw in load_records(self._file_path):
            if raw["item"]["sku"] == sku and raw["location"]["warehouseId"] == warehouse_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[StockEntry]:
        return [self._to_domain(raw) for raw in load_records(self._file_path)]

    def save(self, entry: StockEntry) -> None:
        records = load_records(self._file_path)
        if entry.id is None:
            entry.id = next_numeric_id(records)

        sku, warehouse_id = entry.key
        for raw in records:
            if (
                raw["id"] != entry.id
                and raw["item"]["sku"] == sku
                and raw["location"]["warehouseId"] == warehouse_id
            ):
                raise DuplicateKeyError(
                    f"Stock entry already exists for SKU '{sku}' and warehouse '{warehouse_id}'"
                )

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == entry.id:
                records[i] = self._to_raw(entry)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(entry))
        persist_records(self._file_path, records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(entry: StockEntry) -> dict:
        loc = entry.location
        inv = entry.inventory
        return {
            "id": entry.id,
            "item": {
                "name": entry.item.name,
                "category": entry.item.category,
                "sku": entry.item.sku,
                "description": entry.item.description,
            },
            "location": {
                "warehouseId": loc.warehouse_id,
                "name": loc.name,
                "address": loc.address,
                "coordinates": {
                    "latitude": loc.coordinates.latitude,
                    "longitude": loc.coordinates.longitude,
                },
                "manager": {
                    "name": loc.manager.name,
                    "contact": loc.manager.contact,
                    "email": loc.manager.email,
                },
            },
            "inventory": {
                "currentQuantity": inv.current_quantity,
                "unit": inv.unit,
                "threshold": inv.threshold,
                "reservedQuantity": inv.reserved_quantity,
                "availableQuantity": inv.available_quantity,
            },
            "status": entry.status.value,
            "batches": [
                {
                    "batchNumber": b.batch_number,
                    "quantity": b.quantity,
                    "expiryDate": to_iso(b.expiry_date),
                    "receivedDate": to_iso(b.received_date),
                    "condition": b.condition.value,
                }
                for b in entry.batches
            ],
            "actions": [
                {
                    "type": a.type.value,
                    "triggeredBy": a.triggered_by,
                    "timestamp": to_iso(a.timestamp),
                    "status": a.status.value,
                    "notes": a.notes,
                }
                for a in entry.actions
            ],
            "auditLog": [
                {
                    "userId": a.user_id,
                    "change": a.change,
                    "timestamp": to_iso(a.timestamp),
                }
                for a in entry.audit_log
            ],
            "tags": list(entry.tags),
            "lastUpdated": to_iso(entry.last_updated),
            "createdAt": to_iso(entry.created_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockEntry:
        item = raw["item"]
        loc = raw["location"]
        inv = raw["inventory"]
        return StockEntry(
            id=raw["id"],
            item=ItemSnapshot(
                name=item["name"],
                category=item["category"],
                sku=item["sku"],
                description=item.get("description"),
            ),
            location=LocationSnapshot(
                warehouse_id=loc["warehouseId"],
                name=loc["name"],
                address=loc["address"],
                coordinates=GeoPoint(
                    longitude=loc["coordinates"]["longitude"],
                    latitude=loc["coordinates"]["latitude"],
                ),
                manager=Manager(**loc.get("manager", {})),
            ),
            inventory=InventoryLevels(
                current_quantity=inv["currentQuantity"],
                unit=inv["unit"],
                threshold=inv["threshold"],
                reserved_quantity=inv.get("reservedQuantity", 0),
                available_quantity=inv.get("availableQuantity", 0),
            ),
            status=StockStatus(raw["status"]),
            batches=[
                Batch(
                    batch_number=b["batchNumber"],
                    quantity=b["quantity"],
                    expiry_date=from_iso(b["expiryDate"]),
                    received_date=from_iso(b["receivedDate"]),
                    condition=BatchCondition(b.get("condition", "New")),
                )
                for b in raw.get("batches", [])
            ],
            actions=[
                StockAction(
                    type=ActionType(a["type"]),
                    triggered_by=a["triggeredBy"],
                    timestamp=from_iso(a["timestamp"]),
                    status=ActionStatus(a.get("status", "Pending")),
                    notes=a.get("notes"),
                )
                for a in raw.get("actions", [])
            ],
            audit_log=[
                AuditEntry(
                    user_id=a["userId"],
                    change=a["change"],
                    timestamp=from_iso(a["timestamp"]),
                )
                for a in raw.get("auditLog", [])
            ],
            tags=list(raw.get("tags", [])),
            last_updated=from_iso(raw["lastUpdated"]),
            created_at=from_iso(raw["createdAt"]),
        )
