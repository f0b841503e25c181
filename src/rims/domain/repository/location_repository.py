"""Abstract repository for the StockLocation aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rims.domain.model.location import StockLocation


class LocationRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique location ID."""

    @abstractmethod
    def get_by_id(self, location_id: str) -> StockLocation | None:
        """Return a location by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[StockLocation]:
        """Return every location."""

    @abstractmethod
    def save(self, location: StockLocation) -> None:
        """Persist a new or updated location."""
