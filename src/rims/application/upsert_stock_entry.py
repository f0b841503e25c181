"""Application service: Upsert Stock Entry use case.

Creates the ledger row for an (item, location) pair, or replaces the
caller-owned fields of an existing one.  Either way the derived fields
(available quantity, status, last updated) are recomputed before the
single document write.

The upsert does not record actions.  An audit entry is written only when
the caller identifies itself with ``user_id``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.domain.exceptions import DuplicateKeyError, EntityNotFoundError, ValidationError
from rims.domain.model.audit import EntryCreated, render_changes
from rims.domain.model.stock_entry import (
    Batch,
    ItemSnapshot,
    LocationSnapshot,
    StockEntry,
    normalize_tags,
    utc_now,
)
from rims.domain.repository.stock_entry_repository import StockEntryRepository

logger = logging.getLogger(__name__)


class UpsertStockEntryHandler:

    def __init__(
        self,
        stock_repo: StockEntryRepository,
        clock: Callable[[], datetime] = utc_now,
        allow_over_reservation: bool = True,
    ) -> None:
        self._stock_repo = stock_repo
        self._clock = clock
        self._allow_over_reservation = allow_over_reservation

    def handle(
        self,
        item: ItemSnapshot,
        location: LocationSnapshot,
        current_quantity: object,
        reserved_quantity: object,
        threshold: object,
        batches: list[Batch] | None = None,
        unit: str | None = None,
        tags: list[str] | None = None,
        entry_id: str | None = None,
        user_id: str | None = None,
    ) -> StockEntry:
        """Create (no ``entry_id``) or update (``entry_id``) a stock entry.

        Raises:
            InvalidQuantityError: a quantity or threshold is negative or
                not a whole number.
            DuplicateKeyError: another entry already holds the
                (SKU, warehouse) pair.
            EntityNotFoundError: ``entry_id`` does not resolve.
        """
        now = self._clock()
        if entry_id is None:
            entry = self._create(
                item, location, current_quantity, reserved_quantity, threshold,
                batches, unit, tags, now,
            )
            if user_id:
                entry.append_audit(
                    user_id,
                    EntryCreated(entry.inventory.current_quantity, entry.inventory.unit),
                    now,
                )
        else:
            entry = self._update(
                entry_id, item, location, current_quantity, reserved_quantity, threshold,
                batches, unit, tags, now, user_id,
            )

        entry.recompute(now)
        self._stock_repo.save(entry)
        logger.info(
            "Saved stock entry %s (sku=%s, warehouse=%s): current=%d reserved=%d "
            "available=%d status=%s",
            entry.id, entry.item.sku, entry.location.warehouse_id,
            entry.inventory.current_quantity, entry.inventory.reserved_quantity,
            entry.inventory.available_quantity, entry.status.value,
        )
        return entry

    # --- Internal helpers -----------------------------------------------------

    def _create(
        self, item, location, current_quantity, reserved_quantity, threshold,
        batches, unit, tags, now,
    ) -> StockEntry:
        if unit is None:
            raise ValidationError("Unit is required")
        self._ensure_key_free(item.sku, location.warehouse_id, entry_id=None)
        return StockEntry.create(
            item=item,
            location=location,
            unit=unit,
            current_quantity=current_quantity,
            reserved_quantity=reserved_quantity,
            threshold=threshold,
            now=now,
            batches=batches,
            tags=tags,
            allow_over_reservation=self._allow_over_reservation,
        )

    def _update(
        self, entry_id, item, location, current_quantity, reserved_quantity, threshold,
        batches, unit, tags, now, user_id,
    ) -> StockEntry:
        entry = self._stock_repo.get_by_id(entry_id)
        if entry is None:
            logger.warning("Upsert rejected: stock entry %s not found", entry_id)
            raise EntityNotFoundError(f"Stock entry '{entry_id}' not found")
        self._ensure_key_free(item.sku, location.warehouse_id, entry_id=entry.id)

        # Levels are validated first so a bad quantity leaves the entry untouched.
        events = entry.set_levels(
            current_quantity,
            reserved_quantity,
            threshold,
            unit=unit,
            allow_over_reservation=self._allow_over_reservation,
        )
        entry.item = item
        entry.location = location
        if batches is not None:
            entry.batches = list(batches)
        if tags is not None:
            entry.tags = normalize_tags(tags)
        if user_id and events:
            entry.append_audit(user_id, render_changes(events), now)
        return entry

    def _ensure_key_free(self, sku: str, warehouse_id: str, entry_id: str | None) -> None:
        holder = self._stock_repo.get_by_key(sku, warehouse_id)
        if holder is not None and holder.id != entry_id:
            logger.warning(
                "Upsert rejected: sku=%s warehouse=%s already held by entry %s",
                sku, warehouse_id, holder.id,
            )
            raise DuplicateKeyError(
                f"Stock entry already exists for SKU '{sku}' and warehouse '{warehouse_id}'"
            )
