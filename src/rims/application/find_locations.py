"""Application services: location queries (filtering and proximity)."""

from __future__ import annotations

from rims.application.dto import LocationDistanceDTO
from rims.domain.exceptions import EntityNotFoundError, ValidationError
from rims.domain.model.location import StockLocation
from rims.domain.model.value_objects import GeoPoint
from rims.domain.repository.location_repository import LocationRepository


class ListLocationsHandler:

    def __init__(self, location_repo: LocationRepository) -> None:
        self._location_repo = location_repo

    def handle(
        self,
        city: str | None = None,
        state: str | None = None,
        is_active: bool | None = None,
    ) -> list[StockLocation]:
        """City and state are case-insensitive substring filters."""
        result = []
        for loc in self._location_repo.list_all():
            if city and city.strip().lower() not in loc.address.city.lower():
                continue
            if state and state.strip().lower() not in loc.address.state.lower():
                continue
            if is_active is not None and loc.is_active != is_active:
                continue
            result.append(loc)
        return sorted(result, key=lambda loc: loc.created_at, reverse=True)

    def get(self, location_id: str) -> StockLocation:
        location = self._location_repo.get_by_id(location_id)
        if location is None:
            raise EntityNotFoundError(f"Location with ID '{location_id}' not found")
        return location


class FindNearestLocationsHandler:

    def __init__(self, location_repo: LocationRepository) -> None:
        self._location_repo = location_repo

    def handle(
        self,
        longitude: float,
        latitude: float,
        limit: int = 5,
        max_distance_km: float | None = None,
    ) -> list[LocationDistanceDTO]:
        """Return active locations ordered by great-circle distance."""
        if limit <= 0:
            raise ValidationError("Limit must be positive")
        origin = GeoPoint(longitude=longitude, latitude=latitude)

        ranked: list[LocationDistanceDTO] = []
        for loc in self._location_repo.list_all():
            if not loc.is_active:
                continue
            distance = origin.distance_km(loc.coordinates)
            if max_distance_km is not None and distance > max_distance_km:
                continue
            ranked.append(
                LocationDistanceDTO(
                    id=loc.id,  # type: ignore[arg-type]
                    name=loc.name,
                    city=loc.address.city,
                    state=loc.address.state,
                    distance_km=round(distance, 3),
                )
            )
        ranked.sort(key=lambda dto: dto.distance_km)
        return ranked[:limit]
