"""JSON-file-backed implementation of LocationRepository.

Coordinates are stored as a GeoJSON point, ``[longitude, latitude]``.
"""

from __future__ import annotations

from pathlib import Path

from rims.domain.model.location import StockLocation
from rims.domain.model.value_objects import Address, Capacity, ContactPerson, GeoPoint
from rims.domain.repository.location_repository import LocationRepository
from rims.infrastructure.persistence.json_files import (
    ensure_file,
    from_iso,
    load_records,
    next_numeric_id,
    persist_records,
    to_iso,
)


class JsonLocationRepository(LocationRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path)

    # --- LocationRepository interface -----------------------------------------

    def next_id(self) -> str:
        return next_numeric_id(load_records(self._file_path))

    def get_by_id(self, location_id: str) -> StockLocation | None:
        for raw in load_records(self._file_path):
            if raw["id"] == location_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[StockLocation]:
        return [self._to_domain(raw) for raw in load_records(self._file_path)]

    def save(self, location: StockLocation) -> None:
        records = load_records(self._file_path)
        if location.id is None:
            location.id = next_numeric_id(records)

        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == location.id:
                records[i] = self._to_raw(location)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(location))
        persist_records(self._file_path, records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(location: StockLocation) -> dict:
        address = location.address
        contact = location.contact_person
        capacity = location.capacity
        return {
            "id": location.id,
            "name": location.name,
            "address": {
                "street": address.street,
                "suite": address.suite,
                "city": address.city,
                "state": address.state,
                "zipCode": address.zip_code,
                "country": address.country,
            },
            "coordinates": {"type": "Point", "coordinates": location.coordinates.as_pair()},
            "contactPerson": (
                {"name": contact.name, "phone": contact.phone, "email": contact.email}
                if contact else None
            ),
            "capacity": {"total": capacity.total, "unit": capacity.unit} if capacity else None,
            "isActive": location.is_active,
            "createdAt": to_iso(location.created_at),
            "updatedAt": to_iso(location.updated_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockLocation:
        addr = raw["address"]
        contact = raw.get("contactPerson")
        capacity = raw.get("capacity")
        return StockLocation(
            id=raw["id"],
            name=raw["name"],
            address=Address(
                street=addr["street"],
                suite=addr.get("suite"),
                city=addr["city"],
                state=addr["state"],
                zip_code=addr["zipCode"],
                country=addr.get("country", "United States"),
            ),
            coordinates=GeoPoint.from_pair(raw["coordinates"]["coordinates"]),
            contact_person=ContactPerson(**contact) if contact else None,
            capacity=Capacity(**capacity) if capacity else None,
            is_active=raw.get("isActive", True),
            created_at=from_iso(raw["createdAt"]),
            updated_at=from_iso(raw["updatedAt"]),
        )
