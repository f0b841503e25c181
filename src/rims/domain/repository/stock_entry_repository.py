"""Abstract repository for the StockEntry aggregate.

Implementations store each entry as one document and write it whole:
there is no partial update and no version check, so the last writer wins.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rims.domain.model.stock_entry import StockEntry


class StockEntryRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique stock entry ID."""

    @abstractmethod
    def get_by_id(self, entry_id: str) -> StockEntry | None:
        """Return a stock entry by its ID, or None if not found."""

    @abstractmethod
    def get_by_key(self, sku: str, warehouse_id: str) -> StockEntry | None:
        """Return the entry for an (SKU, warehouse) pair, or None."""

    @abstractmethod
    def list_all(self) -> list[StockEntry]:
        """Return every stock entry."""

    @abstractmethod
    def save(self, entry: StockEntry) -> None:
        """Persist a new or updated stock entry."""
