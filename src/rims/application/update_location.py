"""Application service: Update / Deactivate Stock Location use cases.

Relocating a site or changing its contact does not touch stock entries
already created for it; they keep the snapshot taken at creation.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.domain.exceptions import EntityNotFoundError
from rims.domain.model.location import StockLocation
from rims.domain.model.stock_entry import utc_now
from rims.domain.model.value_objects import Address, Capacity, ContactPerson, GeoPoint
from rims.domain.repository.location_repository import LocationRepository

logger = logging.getLogger(__name__)


class UpdateLocationHandler:

    def __init__(
        self,
        location_repo: LocationRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._location_repo = location_repo
        self._clock = clock

    def handle(
        self,
        location_id: str,
        name: str | None = None,
        address: Address | None = None,
        coordinates: GeoPoint | None = None,
        contact_person: ContactPerson | None = None,
        capacity: Capacity | None = None,
        is_active: bool | None = None,
    ) -> StockLocation:
        """Apply the given changes; arguments left as None are unchanged."""
        location = self._location_repo.get_by_id(location_id)
        if location is None:
            raise EntityNotFoundError(f"Location with ID '{location_id}' not found")

        now = self._clock()
        if name is not None:
            location.rename(name, now)
        if address is not None or coordinates is not None:
            location.relocate(
                address or location.address,
                coordinates or location.coordinates,
                now,
            )
        if contact_person is not None:
            location.change_contact(contact_person, now)
        if capacity is not None:
            location.change_capacity(capacity, now)
        if is_active is True:
            location.activate(now)
        elif is_active is False:
            location.deactivate(now)

        self._location_repo.save(location)
        logger.info("Updated location %s '%s'", location.id, location.name)
        return location


class DeactivateLocationHandler:

    def __init__(
        self,
        location_repo: LocationRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._location_repo = location_repo
        self._clock = clock

    def handle(self, location_id: str) -> StockLocation:
        location = self._location_repo.get_by_id(location_id)
        if location is None:
            raise EntityNotFoundError(f"Location with ID '{location_id}' not found")
        location.deactivate(self._clock())
        self._location_repo.save(location)
        logger.info("Deactivated location %s '%s'", location.id, location.name)
        return location
