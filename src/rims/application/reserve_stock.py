"""Application service: Reserve use case.

Earmarks available units.  Reservations only change the reserved and
available quantities; nothing leaves the location.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.domain.exceptions import EntityNotFoundError
from rims.domain.model.stock_entry import StockEntry, utc_now
from rims.domain.repository.stock_entry_repository import StockEntryRepository

logger = logging.getLogger(__name__)


class ReserveHandler:

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
        notes: str | None = None,
    ) -> StockEntry:
        entry = self._stock_repo.get_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError(f"Stock entry '{entry_id}' not found")

        now = self._clock()
        event = entry.reserve(quantity, notes)
        entry.append_audit(user_id, event, now)
        entry.recompute(now)
        self._stock_repo.save(entry)
        logger.info(
            "Reserved %d on entry %s (reserved %d, available %d)",
            event.quantity, entry.id, event.new, entry.inventory.available_quantity,
        )
        return entry
