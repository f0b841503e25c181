"""Unit tests for audit change event wording."""

from rims.domain.model.audit import (
    Dispatched,
    EntryCreated,
    FreeText,
    QuantityChanged,
    Reserved,
    ReservedChanged,
    Restocked,
    render_changes,
)


def test_entry_created():
    assert EntryCreated(40, "kits").render() == "Stock entry created with 40 kits"


def test_quantity_increase_and_decrease():
    assert QuantityChanged(10, 25, "liters").render() == "Quantity increased by 15 liters"
    assert QuantityChanged(25, 10, "liters").render() == "Quantity decreased by 15 liters"


def test_reserved_change():
    assert ReservedChanged(5, 0).render() == "Reserved quantity decreased by 5"


def test_restocked():
    assert (
        Restocked(20, "kits", 10, 30).render()
        == "Restocked 20 kits. Quantity changed from 10 to 30"
    )


def test_dispatched_with_and_without_destination():
    assert (
        Dispatched(5, "kits", 30, 25, destination="Shelter A").render()
        == "Dispatched 5 kits to Shelter A. Quantity changed from 30 to 25"
    )
    assert (
        Dispatched(5, "kits", 30, 25).render()
        == "Dispatched 5 kits. Quantity changed from 30 to 25"
    )


def test_reserved_with_notes():
    assert (
        Reserved(8, "kits", 2, 10, notes="school shelter").render()
        == "Reserved 8 kits: school shelter. Reserved quantity changed from 2 to 10"
    )


def test_render_changes_joins_events():
    line = render_changes([QuantityChanged(10, 12, "kits"), ReservedChanged(0, 3)])
    assert line == "Quantity increased by 2 kits, Reserved quantity increased by 3"


def test_free_text_passes_through():
    assert FreeText("Recounted after flood").render() == "Recounted after flood"
