"""Composition root: builds the JSON repositories from runtime settings.

CLI commands get their repositories here and hand them to the handlers,
which only see the abstract interfaces.
"""

from __future__ import annotations

from rims.infrastructure.persistence.json_item_repository import JsonItemRepository
from rims.infrastructure.persistence.json_location_repository import (
    JsonLocationRepository,
)
from rims.infrastructure.persistence.json_stock_entry_repository import (
    JsonStockEntryRepository,
)
from rims.infrastructure.settings import Settings, get_settings


def item_repository(settings: Settings | None = None) -> JsonItemRepository:
    settings = settings or get_settings()
    return JsonItemRepository(settings.data_dir / "inventory_items.json")


def location_repository(settings: Settings | None = None) -> JsonLocationRepository:
    settings = settings or get_settings()
    return JsonLocationRepository(settings.data_dir / "stock_locations.json")


def stock_entry_repository(settings: Settings | None = None) -> JsonStockEntryRepository:
    settings = settings or get_settings()
    return JsonStockEntryRepository(settings.data_dir / "stock_entries.json")
