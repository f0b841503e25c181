"""Application service: Update / Deactivate Item use cases.

Edits never reach existing stock entries: they hold their own snapshot
of the item taken when they were created.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.application.add_item import ensure_unique_identifiers
from rims.domain.exceptions import EntityNotFoundError
from rims.domain.model.item import Item
from rims.domain.model.stock_entry import utc_now
from rims.domain.model.value_objects import optional_text
from rims.domain.repository.item_repository import ItemRepository

logger = logging.getLogger(__name__)


class UpdateItemHandler:

    def __init__(
        self,
        item_repo: ItemRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._item_repo = item_repo
        self._clock = clock

    def handle(self, item_id: str, **changes: object) -> Item:
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Item with ID '{item_id}' not found")

        sku = optional_text(changes["sku"]) if "sku" in changes else item.sku  # type: ignore[arg-type]
        barcode = (
            optional_text(changes["barcode"]) if "barcode" in changes else item.barcode  # type: ignore[arg-type]
        )
        ensure_unique_identifiers(self._item_repo, sku, barcode, exclude_id=item.id)

        item.update(self._clock(), **changes)
        self._item_repo.save(item)
        logger.info("Updated item %s (%s)", item.id, ", ".join(sorted(changes)) or "no fields")
        return item


class DeactivateItemHandler:

    def __init__(
        self,
        item_repo: ItemRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._item_repo = item_repo
        self._clock = clock

    def handle(self, item_id: str) -> Item:
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Item with ID '{item_id}' not found")
        item.deactivate(self._clock())
        self._item_repo.save(item)
        logger.info("Deactivated item %s '%s'", item.id, item.name)
        return item
