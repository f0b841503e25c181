"""Application service: Add Stock Location use case."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from rims.domain.model.location import StockLocation
from rims.domain.model.stock_entry import utc_now
from rims.domain.model.value_objects import Address, Capacity, ContactPerson, GeoPoint
from rims.domain.repository.location_repository import LocationRepository

logger = logging.getLogger(__name__)


class AddLocationHandler:

    def __init__(
        self,
        location_repo: LocationRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._location_repo = location_repo
        self._clock = clock

    def handle(
        self,
        name: str,
        address: Address,
        coordinates: GeoPoint,
        contact_person: ContactPerson | None = None,
        capacity: Capacity | None = None,
        is_active: bool = True,
    ) -> StockLocation:
        """Register a physical storage site.

        Coordinates are validated when the GeoPoint is built, so an
        out-of-range pair never reaches this point.
        """
        location = StockLocation.create(
            name=name,
            address=address,
            coordinates=coordinates,
            contact_person=contact_person,
            capacity=capacity,
            is_active=is_active,
        )
        now = self._clock()
        location.created_at = now
        location.updated_at = now
        self._location_repo.save(location)
        logger.info(
            "Added location %s '%s' at (%s, %s)",
            location.id, location.name, coordinates.longitude, coordinates.latitude,
        )
        return location
