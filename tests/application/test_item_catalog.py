"""Integration tests for the item catalog use cases."""

from datetime import timedelta

import pytest

from rims.application.add_item import AddItemHandler
from rims.application.list_items import ListItemsHandler
from rims.application.update_item import DeactivateItemHandler, UpdateItemHandler
from rims.domain.exceptions import DuplicateKeyError, EntityNotFoundError, ValidationError
from rims.domain.model.item import ItemCategory
from tests.factories import NOW, fixed_clock
from tests.fakes import FakeItemRepository


def _ticking_clock():
    ticks = iter(NOW + timedelta(minutes=n) for n in range(100))
    return lambda: next(ticks)


class TestAddItem:

    def test_add_item(self):
        repo = FakeItemRepository()
        item = AddItemHandler(repo, clock=fixed_clock).handle(
            "Bottled Water", "water", "liters", sku="WAT-1", barcode="0001",
        )
        stored = repo.get_by_id(item.id)
        assert stored.category == ItemCategory.WATER
        assert stored.created_at == NOW
        assert stored.updated_at == NOW

    def test_duplicate_sku_rejected(self):
        repo = FakeItemRepository()
        handler = AddItemHandler(repo, clock=fixed_clock)
        handler.handle("Bottled Water", "water", "liters", sku="WAT-1")
        with pytest.raises(DuplicateKeyError, match="SKU 'WAT-1' already exists"):
            handler.handle("Spring Water", "water", "liters", sku="WAT-1")
        assert len(repo.list_all()) == 1

    def test_duplicate_barcode_rejected(self):
        repo = FakeItemRepository()
        handler = AddItemHandler(repo, clock=fixed_clock)
        handler.handle("Tent", "shelter", "units", barcode="555")
        with pytest.raises(DuplicateKeyError, match="Barcode '555'"):
            handler.handle("Tarp", "shelter", "units", barcode="555")

    def test_items_without_sku_do_not_collide(self):
        repo = FakeItemRepository()
        handler = AddItemHandler(repo, clock=fixed_clock)
        handler.handle("Blanket", "clothing", "units")
        handler.handle("Jacket", "clothing", "units")
        assert len(repo.list_all()) == 2

    def test_unknown_category_rejected(self):
        repo = FakeItemRepository()
        with pytest.raises(ValidationError):
            AddItemHandler(repo, clock=fixed_clock).handle("Thing", "gadgets", "units")
        assert repo.list_all() == []


class TestUpdateItem:

    def test_update_fields(self):
        repo = FakeItemRepository()
        item = AddItemHandler(repo, clock=fixed_clock).handle("Tent", "shelter", "units", sku="TNT-1")
        later = NOW + timedelta(hours=1)
        UpdateItemHandler(repo, clock=lambda: later).handle(item.id, name="Family Tent")

        stored = repo.get_by_id(item.id)
        assert stored.name == "Family Tent"
        assert stored.sku == "TNT-1"
        assert stored.updated_at == later
        assert stored.created_at == NOW

    def test_keeping_own_sku_is_not_a_duplicate(self):
        repo = FakeItemRepository()
        item = AddItemHandler(repo, clock=fixed_clock).handle("Tent", "shelter", "units", sku="TNT-1")
        UpdateItemHandler(repo, clock=fixed_clock).handle(item.id, sku="TNT-1", unit="boxes")
        assert repo.get_by_id(item.id).unit == "boxes"

    def test_taking_another_items_sku_rejected(self):
        repo = FakeItemRepository()
        add = AddItemHandler(repo, clock=fixed_clock)
        add.handle("Tent", "shelter", "units", sku="TNT-1")
        tarp = add.handle("Tarp", "shelter", "units", sku="TRP-1")
        with pytest.raises(DuplicateKeyError):
            UpdateItemHandler(repo, clock=fixed_clock).handle(tarp.id, sku="TNT-1")
        assert repo.get_by_id(tarp.id).sku == "TRP-1"

    def test_update_unknown_item(self):
        with pytest.raises(EntityNotFoundError, match="Item with ID '9' not found"):
            UpdateItemHandler(FakeItemRepository(), clock=fixed_clock).handle("9", name="x")

    def test_deactivate(self):
        repo = FakeItemRepository()
        item = AddItemHandler(repo, clock=fixed_clock).handle("Tent", "shelter", "units")
        DeactivateItemHandler(repo, clock=fixed_clock).handle(item.id)
        assert repo.get_by_id(item.id).is_active is False


class TestListItems:

    def _seed(self):
        repo = FakeItemRepository()
        add = AddItemHandler(repo, clock=_ticking_clock())
        add.handle("Bottled Water", "water", "liters", description="500 ml bottles")
        add.handle("Water Purification Tablets", "medical", "packs")
        add.handle("Tent", "shelter", "units", is_active=False)
        return repo

    def test_newest_first(self):
        items = ListItemsHandler(self._seed()).handle()
        assert [i.name for i in items] == ["Tent", "Water Purification Tablets", "Bottled Water"]

    def test_search_matches_name_and_description(self):
        handler = ListItemsHandler(self._seed())
        assert {i.name for i in handler.handle(search="WATER")} == {
            "Bottled Water", "Water Purification Tablets",
        }
        assert [i.name for i in handler.handle(search="bottles")] == ["Bottled Water"]

    def test_filter_by_category_and_active(self):
        handler = ListItemsHandler(self._seed())
        assert [i.name for i in handler.handle(category="medical")] == ["Water Purification Tablets"]
        assert [i.name for i in handler.handle(is_active=False)] == ["Tent"]

    def test_get_unknown(self):
        with pytest.raises(EntityNotFoundError):
            ListItemsHandler(FakeItemRepository()).get("1")
