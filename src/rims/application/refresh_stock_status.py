"""Application service: Refresh Stock Status use case.

Status is normally evaluated only when an entry is written, so a batch
that expires between writes leaves the stored status stale.  This sweep
re-runs the classifier over every entry and persists only the entries
whose status actually moved.  It is not scheduled; run it on demand.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.application.dto import StatusChangeDTO
from rims.domain.model.stock_entry import utc_now
from rims.domain.repository.stock_entry_repository import StockEntryRepository

logger = logging.getLogger(__name__)


class RefreshStockStatusHandler:

    def __init__(
        self,
        stock_repo: StockEntryRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._stock_repo = stock_repo
        self._clock = clock

    def handle(self) -> list[StatusChangeDTO]:
        now = self._clock()
        changes: list[StatusChangeDTO] = []

        for entry in self._stock_repo.list_all():
            old_status = entry.status
            if entry.classify(now) == old_status:
                continue
            entry.recompute(now)
            self._stock_repo.save(entry)
            changes.append(
                StatusChangeDTO(
                    id=entry.id,  # type: ignore[arg-type]
                    sku=entry.item.sku,
                    warehouse_id=entry.location.warehouse_id,
                    old_status=old_status.value,
                    new_status=entry.status.value,
                )
            )
            logger.info(
                "Refreshed stock entry %s: %s -> %s",
                entry.id, old_status.value, entry.status.value,
            )

        logger.info("Status refresh complete: %d entr(y/ies) changed", len(changes))
        return changes
