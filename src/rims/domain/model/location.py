"""StockLocation aggregate — a physical warehouse or storage site.

Locations are created once per site, edited on relocation or contact
changes, and deactivated (never deleted) when retired.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from rims.domain.exceptions import ValidationError
from rims.domain.model.stock_entry import LocationSnapshot, Manager
from rims.domain.model.value_objects import (
    Address,
    Capacity,
    ContactPerson,
    GeoPoint,
    require_text,
)


@dataclass
class StockLocation:

    id: str | None
    name: str
    address: Address
    coordinates: GeoPoint
    contact_person: ContactPerson | None = None
    capacity: Capacity | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        address: Address,
        coordinates: GeoPoint,
        contact_person: ContactPerson | None = None,
        capacity: Capacity | None = None,
        is_active: bool = True,
    ) -> StockLocation:
        return StockLocation(
            id=None,
            name=require_text(name, "Location name"),
            address=address,
            coordinates=coordinates,
            contact_person=contact_person,
            capacity=capacity,
            is_active=is_active,
        )

    def relocate(self, address: Address, coordinates: GeoPoint, now: datetime) -> None:
        self.address = address
        self.coordinates = coordinates
        self.updated_at = now

    def rename(self, name: str, now: datetime) -> None:
        self.name = require_text(name, "Location name")
        self.updated_at = now

    def change_contact(self, contact_person: ContactPerson | None, now: datetime) -> None:
        self.contact_person = contact_person
        self.updated_at = now

    def change_capacity(self, capacity: Capacity | None, now: datetime) -> None:
        self.capacity = capacity
        self.updated_at = now

    def deactivate(self, now: datetime) -> None:
        self.is_active = False
        self.updated_at = now

    def activate(self, now: datetime) -> None:
        self.is_active = True
        self.updated_at = now

    def snapshot(self, manager: Manager | None = None) -> LocationSnapshot:
        """Copy the fields a stock entry keeps about this location.

        The manager defaults to the site's contact person.
        """
        if self.id is None:
            raise ValidationError(f"Location '{self.name}' must be saved before it is stocked")
        if manager is None and self.contact_person is not None:
            manager = Manager(
                name=self.contact_person.name,
                contact=self.contact_person.phone,
                email=self.contact_person.email or "",
            )
        return LocationSnapshot(
            warehouse_id=self.id,
            name=self.name,
            address=self.address.one_line(),
            coordinates=self.coordinates,
            manager=manager or Manager(),
        )
