"""Application service: Append Audit Entry use case."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.domain.exceptions import EntityNotFoundError
from rims.domain.model.audit import FreeText
from rims.domain.model.stock_entry import AuditEntry, utc_now
from rims.domain.repository.stock_entry_repository import StockEntryRepository

logger = logging.getLogger(__name__)


class AppendAuditEntryHandler:

    def __init__(
        self,
        stock_repo: StockEntryRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._stock_repo = stock_repo
        self._clock = clock

    def handle(self, entry_id: str, user_id: str, change_description: str) -> AuditEntry:
        """Append a free-text change description.  No structure is enforced."""
        entry = self._stock_repo.get_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError(f"Stock entry '{entry_id}' not found")

        now = self._clock()
        audit = entry.append_audit(user_id, FreeText(change_description), now)
        entry.recompute(now)
        self._stock_repo.save(entry)
        logger.info("Appended audit entry by %s to stock entry %s", audit.user_id, entry.id)
        return audit
