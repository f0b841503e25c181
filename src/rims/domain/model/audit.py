"""Structured audit change events.

Consumers of the audit log read a plain ``change`` string, so every event
renders itself to the same wording the log has always used.  Keeping the
events structured until that point lets callers build them from numbers
instead of formatting strings by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class EntryCreated:
    quantity: int
    unit: str

    def render(self) -> str:
        return f"Stock entry created with {self.quantity} {self.unit}"


@dataclass(frozen=True)
class QuantityChanged:
    old: int
    new: int
    unit: str

    def render(self) -> str:
        diff = self.new - self.old
        direction = "increased" if diff >= 0 else "decreased"
        return f"Quantity {direction} by {abs(diff)} {self.unit}"


@dataclass(frozen=True)
class ReservedChanged:
    old: int
    new: int

    def render(self) -> str:
        diff = self.new - self.old
        direction = "increased" if diff >= 0 else "decreased"
        return f"Reserved quantity {direction} by {abs(diff)}"


@dataclass(frozen=True)
class Restocked:
    quantity: int
    unit: str
    old: int
    new: int

    def render(self) -> str:
        return (
            f"Restocked {self.quantity} {self.unit}. "
            f"Quantity changed from {self.old} to {self.new}"
        )


@dataclass(frozen=True)
class Dispatched:
    quantity: int
    unit: str
    old: int
    new: int
    destination: str | None = None

    def render(self) -> str:
        target = f" to {self.destination}" if self.destination else ""
        return (
            f"Dispatched {self.quantity} {self.unit}{target}. "
            f"Quantity changed from {self.old} to {self.new}"
        )


@dataclass(frozen=True)
class Reserved:
    quantity: int
    unit: str
    old: int
    new: int
    notes: str | None = None

    def render(self) -> str:
        note = f": {self.notes}" if self.notes else ""
        return (
            f"Reserved {self.quantity} {self.unit}{note}. "
            f"Reserved quantity changed from {self.old} to {self.new}"
        )


@dataclass(frozen=True)
class FreeText:
    text: str

    def render(self) -> str:
        return self.text


ChangeEvent = Union[
    EntryCreated, QuantityChanged, ReservedChanged, Restocked, Dispatched, Reserved, FreeText
]


def render_changes(events: list[ChangeEvent]) -> str:
    """Join several events into one log line, as a single edit may touch both levels."""
    return ", ".join(event.render() for event in events)
