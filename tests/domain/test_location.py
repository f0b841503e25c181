"""Unit tests for the StockLocation aggregate."""

import pytest

from rims.domain.exceptions import ValidationError
from rims.domain.model.location import StockLocation
from rims.domain.model.stock_entry import Manager
from rims.domain.model.value_objects import Address, Capacity, ContactPerson, GeoPoint
from tests.factories import NOW


def _location(**overrides) -> StockLocation:
    fields = dict(
        name="North Depot",
        address=Address(street="12 Main St", city="Dayton", state="OH", zip_code="45402"),
        coordinates=GeoPoint(longitude=-84.19, latitude=39.76),
    )
    fields.update(overrides)
    return StockLocation.create(**fields)


def test_create_defaults():
    loc = _location()
    assert loc.is_active is True
    assert loc.contact_person is None
    assert loc.id is None


def test_name_required():
    with pytest.raises(ValidationError):
        _location(name="  ")


def test_relocate_replaces_address_and_coordinates():
    loc = _location()
    loc.relocate(
        Address(street="1 River Rd", city="Columbus", state="OH", zip_code="43004"),
        GeoPoint(longitude=-82.99, latitude=39.96),
        NOW,
    )
    assert loc.address.city == "Columbus"
    assert loc.coordinates.latitude == 39.96
    assert loc.updated_at == NOW


def test_deactivate_and_activate():
    loc = _location()
    loc.deactivate(NOW)
    assert loc.is_active is False
    loc.activate(NOW)
    assert loc.is_active is True


def test_change_capacity():
    loc = _location()
    loc.change_capacity(Capacity(total=5000, unit="sqft"), NOW)
    assert str(loc.capacity) == "5000 sqft"


def test_snapshot_requires_saved_location():
    with pytest.raises(ValidationError, match="must be saved"):
        _location().snapshot()


def test_snapshot_uses_contact_person_as_manager():
    loc = _location(contact_person=ContactPerson(name="Ari Lee", phone="555-0199", email="ARI@x.org"))
    loc.id = "7"
    snap = loc.snapshot()
    assert snap.warehouse_id == "7"
    assert snap.address == "12 Main St, Dayton, OH 45402, United States"
    assert snap.manager == Manager(name="Ari Lee", contact="555-0199", email="ari@x.org")
    assert snap.coordinates == loc.coordinates


def test_snapshot_explicit_manager_wins():
    loc = _location(contact_person=ContactPerson(name="Ari Lee", phone="555-0199"))
    loc.id = "7"
    snap = loc.snapshot(manager=Manager(name="Sam"))
    assert snap.manager.name == "Sam"


def test_snapshot_without_contact_has_blank_manager():
    loc = _location()
    loc.id = "7"
    assert loc.snapshot().manager == Manager()
