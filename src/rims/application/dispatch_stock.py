"""Application service: Dispatch use case.

Removes units from an entry.  Only the available quantity (on hand minus
reserved) may be dispatched.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.domain.exceptions import EntityNotFoundError
from rims.domain.model.stock_entry import ActionStatus, ActionType, StockEntry, utc_now
from rims.domain.repository.stock_entry_repository import StockEntryRepository

logger = logging.getLogger(__name__)


class DispatchHandler:

    def __init__(
        self,
        stock_repo: StockEntryRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._stock_repo = stock_repo
        self._clock = clock

    def handle(
        self,
        entry_id: str,
        quantity: object,
        user_id: str,
        destination: str | None = None,
        notes: str | None = None,
    ) -> StockEntry:
        entry = self._stock_repo.get_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError(f"Stock entry '{entry_id}' not found")

        now = self._clock()
        event = entry.dispatch(quantity, destination)
        target = f" to {event.destination}" if event.destination else ""
        entry.append_action(
            ActionType.DISPATCH,
            user_id,
            now,
            status=ActionStatus.COMPLETED,
            notes=notes or f"Dispatched {event.quantity} {event.unit}{target}",
        )
        entry.append_audit(user_id, event, now)
        entry.recompute(now)
        self._stock_repo.save(entry)
        logger.info(
            "Dispatched %d from entry %s%s (now %d, status=%s)",
            event.quantity, entry.id, target, event.new, entry.status.value,
        )
        return entry
