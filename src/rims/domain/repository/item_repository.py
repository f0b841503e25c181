"""Abstract repository for the Item aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rims.domain.model.item import Item


class ItemRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique item ID."""

    @abstractmethod
    def get_by_id(self, item_id: str) -> Item | None:
        """Return an item by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Item | None:
        """Return the item carrying *sku*, or None."""

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> Item | None:
        """Return the item carrying *barcode*, or None."""

    @abstractmethod
    def list_all(self) -> list[Item]:
        """Return every item in the catalog."""

    @abstractmethod
    def save(self, item: Item) -> None:
        """Persist a new or updated item."""
