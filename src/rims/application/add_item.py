"""Application service: Add Item use case."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.domain.exceptions import DuplicateKeyError
from rims.domain.model.item import Item, ItemCategory
from rims.domain.model.stock_entry import utc_now
from rims.domain.repository.item_repository import ItemRepository

logger = logging.getLogger(__name__)


def ensure_unique_identifiers(
    item_repo: ItemRepository,
    sku: str | None,
    barcode: str | None,
    exclude_id: str | None = None,
) -> None:
    """Raise DuplicateKeyError if another item already uses *sku* or *barcode*."""
    if sku:
        holder = item_repo.get_by_sku(sku)
        if holder is not None and holder.id != exclude_id:
            logger.warning("Rejected duplicate SKU %r (held by item %s)", sku, holder.id)
            raise DuplicateKeyError(f"SKU '{sku}' already exists")
    if barcode:
        holder = item_repo.get_by_barcode(barcode)
        if holder is not None and holder.id != exclude_id:
            logger.warning("Rejected duplicate barcode %r (held by item %s)", barcode, holder.id)
            raise DuplicateKeyError(f"Barcode '{barcode}' already exists")


class AddItemHandler:

    def __init__(
        self,
        item_repo: ItemRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._item_repo = item_repo
        self._clock = clock

    def handle(
        self,
        name: str,
        category: str | ItemCategory,
        unit: str,
        description: str | None = None,
        sku: str | None = None,
        barcode: str | None = None,
        image: str | None = None,
        is_active: bool = True,
    ) -> Item:
        """Add a new item to the catalog."""
        item = Item.create(
            name=name,
            category=category,
            unit=unit,
            description=description,
            sku=sku,
            barcode=barcode,
            image=image,
            is_active=is_active,
        )
        ensure_unique_identifiers(self._item_repo, item.sku, item.barcode)

        now = self._clock()
        item.created_at = now
        item.updated_at = now
        self._item_repo.save(item)
        logger.info("Added item %s '%s' (sku=%s)", item.id, item.name, item.sku)
        return item
