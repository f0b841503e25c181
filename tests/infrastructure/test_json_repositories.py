"""Tests for the JSON collection repositories (real files under tmp_path)."""

import json
from datetime import timedelta

import pytest

from rims.domain.exceptions import DuplicateKeyError
from rims.domain.model.item import Item
from rims.domain.model.location import StockLocation
from rims.domain.model.value_objects import Address, Capacity, ContactPerson, GeoPoint
from rims.infrastructure.persistence.json_item_repository import JsonItemRepository
from rims.infrastructure.persistence.json_location_repository import JsonLocationRepository
from rims.infrastructure.persistence.json_stock_entry_repository import JsonStockEntryRepository
from tests.factories import NOW, batch, make_entry


class TestJsonItemRepository:

    def test_file_created_empty(self, tmp_path):
        path = tmp_path / "data" / "inventory_items.json"
        repo = JsonItemRepository(path)
        assert path.read_text(encoding="utf-8") == "[]"
        assert repo.list_all() == []

    def test_save_assigns_ids_and_reloads(self, tmp_path):
        repo = JsonItemRepository(tmp_path / "items.json")
        item = Item.create("Bottled Water", "water", "liters", sku="WAT-1")
        item.created_at = item.updated_at = NOW
        repo.save(item)
        repo.save(Item.create("Tent", "shelter", "units"))

        assert item.id == "1"
        assert repo.next_id() == "3"
        loaded = JsonItemRepository(tmp_path / "items.json").get_by_sku("WAT-1")
        assert loaded.name == "Bottled Water"
        assert loaded.created_at == NOW

    def test_sparse_unique_sku(self, tmp_path):
        repo = JsonItemRepository(tmp_path / "items.json")
        repo.save(Item.create("Blanket", "clothing", "units"))
        repo.save(Item.create("Jacket", "clothing", "units"))
        repo.save(Item.create("Tent", "shelter", "units", sku="TNT-1"))
        with pytest.raises(DuplicateKeyError):
            repo.save(Item.create("Tarp", "shelter", "units", sku="TNT-1"))
        assert len(repo.list_all()) == 3

    def test_documents_are_camel_case(self, tmp_path):
        path = tmp_path / "items.json"
        JsonItemRepository(path).save(Item.create("Tent", "shelter", "units"))
        raw = json.loads(path.read_text(encoding="utf-8"))[0]
        assert {"isActive", "createdAt", "updatedAt"} <= set(raw)


class TestJsonLocationRepository:

    def test_round_trip(self, tmp_path):
        repo = JsonLocationRepository(tmp_path / "locations.json")
        loc = StockLocation.create(
            name="North Depot",
            address=Address(street="12 Main St", suite="B", city="Dayton", state="OH", zip_code="45402"),
            coordinates=GeoPoint(longitude=-84.19, latitude=39.76),
            contact_person=ContactPerson(name="Ari Lee", phone="555-0199", email="ari@x.org"),
            capacity=Capacity(total=5000),
        )
        repo.save(loc)

        loaded = repo.get_by_id(loc.id)
        assert loaded.address == loc.address
        assert loaded.coordinates == loc.coordinates
        assert loaded.contact_person == loc.contact_person
        assert loaded.capacity == loc.capacity

    def test_coordinates_stored_as_geojson_point(self, tmp_path):
        path = tmp_path / "locations.json"
        JsonLocationRepository(path).save(
            StockLocation.create(
                name="Depot",
                address=Address(street="1 A St", city="B", state="C", zip_code="1"),
                coordinates=GeoPoint(longitude=-84.19, latitude=39.76),
            )
        )
        raw = json.loads(path.read_text(encoding="utf-8"))[0]
        assert raw["coordinates"] == {"type": "Point", "coordinates": [-84.19, 39.76]}
        assert raw["contactPerson"] is None


class TestJsonStockEntryRepository:

    def test_round_trip_keeps_history(self, tmp_path):
        repo = JsonStockEntryRepository(tmp_path / "stock.json")
        entry = make_entry(current=40, reserved=5, batches=[batch()], tags=["flood"])
        entry.append_action("Dispatch", "user-1", NOW, notes="to shelter")
        entry.append_audit("user-1", "Counted", NOW + timedelta(minutes=5))
        repo.save(entry)

        loaded = repo.get_by_key("MED-001", "WH-1")
        assert loaded == entry

    def test_document_shape(self, tmp_path):
        path = tmp_path / "stock.json"
        JsonStockEntryRepository(path).save(make_entry(current=0))
        raw = json.loads(path.read_text(encoding="utf-8"))[0]
        assert raw["status"] == "Depleted"
        assert raw["location"]["warehouseId"] == "WH-1"
        assert raw["location"]["coordinates"] == {"latitude": 39.78, "longitude": -89.65}
        assert raw["inventory"]["availableQuantity"] == 0
        assert set(raw) >= {"auditLog", "lastUpdated", "createdAt", "batches", "actions", "tags"}

    def test_duplicate_key_refused(self, tmp_path):
        repo = JsonStockEntryRepository(tmp_path / "stock.json")
        repo.save(make_entry())
        with pytest.raises(DuplicateKeyError):
            repo.save(make_entry())
        assert len(repo.list_all()) == 1

    def test_save_replaces_existing_document(self, tmp_path):
        repo = JsonStockEntryRepository(tmp_path / "stock.json")
        entry = make_entry(current=150)
        repo.save(entry)
        entry.restock(10)
        entry.recompute(NOW)
        repo.save(entry)

        assert len(repo.list_all()) == 1
        assert repo.get_by_id(entry.id).inventory.current_quantity == 160

    def test_no_temp_file_left_behind(self, tmp_path):
        repo = JsonStockEntryRepository(tmp_path / "stock.json")
        repo.save(make_entry())
        assert [p.name for p in tmp_path.iterdir()] == ["stock.json"]
