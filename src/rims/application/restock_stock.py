"""Application service: Restock use case.

Adds units to an entry, optionally as a new batch, and records both a
completed Restock action and an audit line in the same write.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.domain.exceptions import EntityNotFoundError
from rims.domain.model.stock_entry import (
    DEFAULT_SHELF_LIFE_DAYS,
    ActionStatus,
    ActionType,
    Batch,
    BatchCondition,
    StockEntry,
    utc_now,
)
from rims.domain.repository.stock_entry_repository import StockEntryRepository

logger = logging.getLogger(__name__)


class RestockHandler:

    def __init__(
        self,
        stock_repo: StockEntryRepository,
        clock: Callable[[], datetime] = utc_now,
        shelf_life_days: int = DEFAULT_SHELF_LIFE_DAYS,
    ) -> None:
        self._stock_repo = stock_repo
        self._clock = clock
        self._shelf_life_days = shelf_life_days

    def handle(
        self,
        entry_id: str,
        quantity: object,
        user_id: str,
        batch_number: str | None = None,
        expiry_date: datetime | None = None,
        condition: str | BatchCondition | None = None,
        notes: str | None = None,
    ) -> StockEntry:
        entry = self._stock_repo.get_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError(f"Stock entry '{entry_id}' not found")

        now = self._clock()
        batch = None
        if batch_number:
            batch = Batch.receive(
                batch_number,
                quantity,  # type: ignore[arg-type]
                now,
                expiry_date=expiry_date,
                condition=condition,
                shelf_life_days=self._shelf_life_days,
            )

        event = entry.restock(quantity, batch)
        entry.append_action(
            ActionType.RESTOCK,
            user_id,
            now,
            status=ActionStatus.COMPLETED,
            notes=notes or f"Restocked {event.quantity} {event.unit}",
        )
        entry.append_audit(user_id, event, now)
        entry.recompute(now)
        self._stock_repo.save(entry)
        logger.info(
            "Restocked entry %s by %d (now %d, status=%s)",
            entry.id, event.quantity, event.new, entry.status.value,
        )
        return entry
