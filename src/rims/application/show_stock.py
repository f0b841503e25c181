"""Application services: Show / List Stock use cases (queries)."""

from __future__ import annotations

from rims.application.dto import (
    StockEntryDTO,
    StockLineDTO,
    to_stock_entry_dto,
    to_stock_line,
)
from rims.domain.exceptions import EntityNotFoundError
from rims.domain.repository.stock_entry_repository import StockEntryRepository


class ShowStockEntryHandler:

    def __init__(self, stock_repo: StockEntryRepository) -> None:
        self._stock_repo = stock_repo

    def handle(self, entry_id: str) -> StockEntryDTO:
        entry = self._stock_repo.get_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError(f"Stock entry '{entry_id}' not found")
        return to_stock_entry_dto(entry)


class ListStockHandler:

    def __init__(self, stock_repo: StockEntryRepository) -> None:
        self._stock_repo = stock_repo

    def handle(
        self,
        sku: str | None = None,
        warehouse_id: str | None = None,
        category: str | None = None,
        status: str | None = None,
        tag: str | None = None,
    ) -> list[StockLineDTO]:
        """Return matching entries, most recently updated first.

        ``sku`` and ``category`` match case-insensitive substrings;
        ``warehouse_id``, ``status`` and ``tag`` must match exactly.
        """
        entries = []
        for entry in self._stock_repo.list_all():
            if sku and sku.lower() not in entry.item.sku.lower():
                continue
            if warehouse_id and entry.location.warehouse_id != warehouse_id:
                continue
            if category and category.lower() not in entry.item.category.lower():
                continue
            if status and entry.status.value != status:
                continue
            if tag and tag not in entry.tags:
                continue
            entries.append(entry)

        entries.sort(key=lambda e: e.last_updated, reverse=True)
        return [to_stock_line(e) for e in entries]
