"""Integration tests for the stock location use cases."""

import pytest

from rims.application.add_location import AddLocationHandler
from rims.application.find_locations import FindNearestLocationsHandler, ListLocationsHandler
from rims.application.update_location import DeactivateLocationHandler, UpdateLocationHandler
from rims.domain.exceptions import EntityNotFoundError, InvalidCoordinatesError, ValidationError
from rims.domain.model.value_objects import Address, ContactPerson, GeoPoint
from tests.factories import NOW, fixed_clock
from tests.fakes import FakeLocationRepository


def _address(city: str, state: str) -> Address:
    return Address(street="1 Main St", city=city, state=state, zip_code="00000")


def _seed() -> FakeLocationRepository:
    repo = FakeLocationRepository()
    add = AddLocationHandler(repo, clock=fixed_clock)
    add.handle("Chicago Hub", _address("Chicago", "IL"), GeoPoint(longitude=-87.63, latitude=41.88))
    add.handle("Springfield Depot", _address("Springfield", "IL"), GeoPoint(longitude=-89.65, latitude=39.78))
    add.handle("Denver Yard", _address("Denver", "CO"), GeoPoint(longitude=-104.99, latitude=39.74))
    return repo


class TestAddLocation:

    def test_add_location(self):
        repo = FakeLocationRepository()
        loc = AddLocationHandler(repo, clock=fixed_clock).handle(
            "Central Depot",
            _address("Springfield", "IL"),
            GeoPoint(longitude=-89.65, latitude=39.78),
            contact_person=ContactPerson(name="Dana Cole", phone="555-0100"),
        )
        stored = repo.get_by_id(loc.id)
        assert stored.name == "Central Depot"
        assert stored.contact_person.name == "Dana Cole"
        assert stored.created_at == NOW

    def test_out_of_range_coordinates_never_reach_store(self):
        repo = FakeLocationRepository()
        with pytest.raises(InvalidCoordinatesError):
            AddLocationHandler(repo, clock=fixed_clock).handle(
                "Nowhere", _address("X", "Y"), GeoPoint(longitude=200, latitude=0),
            )
        assert repo.list_all() == []


class TestUpdateLocation:

    def test_relocate_keeps_other_fields(self):
        repo = _seed()
        UpdateLocationHandler(repo, clock=fixed_clock).handle(
            "1", coordinates=GeoPoint(longitude=-87.0, latitude=41.0),
        )
        stored = repo.get_by_id("1")
        assert stored.coordinates.longitude == -87.0
        assert stored.address.city == "Chicago"
        assert stored.name == "Chicago Hub"

    def test_deactivate_via_update_and_handler(self):
        repo = _seed()
        UpdateLocationHandler(repo, clock=fixed_clock).handle("1", is_active=False)
        DeactivateLocationHandler(repo, clock=fixed_clock).handle("2")
        assert [loc.is_active for loc in ListLocationsHandler(repo).handle(is_active=False)] == [False, False]

    def test_update_unknown(self):
        with pytest.raises(EntityNotFoundError, match="Location with ID '8' not found"):
            UpdateLocationHandler(FakeLocationRepository(), clock=fixed_clock).handle("8", name="x")


class TestQueries:

    def test_filter_by_state_and_city(self):
        handler = ListLocationsHandler(_seed())
        assert {loc.name for loc in handler.handle(state="il")} == {"Chicago Hub", "Springfield Depot"}
        assert [loc.name for loc in handler.handle(city="denv")] == ["Denver Yard"]

    def test_nearest_orders_by_distance(self):
        result = FindNearestLocationsHandler(_seed()).handle(longitude=-88.0, latitude=41.5, limit=2)
        assert [r.name for r in result] == ["Chicago Hub", "Springfield Depot"]
        assert result[0].distance_km < result[1].distance_km

    def test_nearest_respects_max_distance(self):
        result = FindNearestLocationsHandler(_seed()).handle(
            longitude=-87.63, latitude=41.88, max_distance_km=50,
        )
        assert [r.name for r in result] == ["Chicago Hub"]
        assert result[0].distance_km == 0.0

    def test_nearest_skips_inactive(self):
        repo = _seed()
        DeactivateLocationHandler(repo, clock=fixed_clock).handle("1")
        result = FindNearestLocationsHandler(repo).handle(longitude=-87.63, latitude=41.88)
        assert "Chicago Hub" not in [r.name for r in result]

    def test_nearest_rejects_bad_limit(self):
        with pytest.raises(ValidationError, match="Limit must be positive"):
            FindNearestLocationsHandler(_seed()).handle(longitude=0, latitude=0, limit=0)

    def test_nearest_rejects_bad_origin(self):
        with pytest.raises(InvalidCoordinatesError):
            FindNearestLocationsHandler(_seed()).handle(longitude=0, latitude=-91)
