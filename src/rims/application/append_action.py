"""Application service: Append Action use case.

A pure append to the entry's action log.  Quantities are not reconciled
against the action; callers that move stock use the restock / dispatch
handlers instead.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.domain.exceptions import EntityNotFoundError
from rims.domain.model.stock_entry import ActionStatus, ActionType, StockAction, utc_now
from rims.domain.repository.stock_entry_repository import StockEntryRepository

logger = logging.getLogger(__name__)


class AppendActionHandler:

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
        action_type: str | ActionType,
        triggered_by: str,
        status: str | ActionStatus = ActionStatus.PENDING,
        notes: str | None = None,
    ) -> StockAction:
        entry = self._stock_repo.get_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError(f"Stock entry '{entry_id}' not found")

        now = self._clock()
        action = entry.append_action(action_type, triggered_by, now, status=status, notes=notes)
        entry.recompute(now)
        self._stock_repo.save(entry)
        logger.info(
            "Appended %s action (%s) to stock entry %s",
            action.type.value, action.status.value, entry.id,
        )
        return action
