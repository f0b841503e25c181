"""Shared builders for test data."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from rims.domain.model.stock_entry import (
    Batch,
    ItemSnapshot,
    LocationSnapshot,
    Manager,
    StockEntry,
)
from rims.domain.model.value_objects import GeoPoint

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
YESTERDAY = NOW - timedelta(days=1)
NEXT_YEAR = NOW + timedelta(days=365)


def fixed_clock() -> datetime:
    return NOW


def item_snapshot(sku: str = "MED-001", name: str = "First Aid Kit") -> ItemSnapshot:
    return ItemSnapshot(name=name, category="medical", sku=sku, description="Basic kit")


def location_snapshot(warehouse_id: str = "WH-1", name: str = "Central Depot") -> LocationSnapshot:
    return LocationSnapshot(
        warehouse_id=warehouse_id,
        name=name,
        address="1 Relief Way, Springfield, IL 62701, United States",
        coordinates=GeoPoint(longitude=-89.65, latitude=39.78),
        manager=Manager(name="Dana Cole", contact="555-0100", email="Dana@Example.org"),
    )


def batch(number: str = "B-1", quantity: int = 10, expiry=NEXT_YEAR) -> Batch:
    return Batch(
        batch_number=number,
        quantity=quantity,
        expiry_date=expiry,
        received_date=NOW - timedelta(days=30),
    )


def make_entry(
    current: int = 150,
    reserved: int = 0,
    threshold: int = 100,
    batches: list[Batch] | None = None,
    sku: str = "MED-001",
    warehouse_id: str = "WH-1",
    tags: list[str] | None = None,
) -> StockEntry:
    return StockEntry.create(
        item=item_snapshot(sku),
        location=location_snapshot(warehouse_id),
        unit="kits",
        current_quantity=current,
        reserved_quantity=reserved,
        threshold=threshold,
        now=NOW,
        batches=batches,
        tags=tags,
    )
