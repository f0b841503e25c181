"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from rims.domain.exceptions import (
    InvalidCoordinatesError,
    InvalidQuantityError,
    ValidationError,
)

EARTH_RADIUS_KM = 6371.0088


def coerce_quantity(value: object, field_name: str = "Quantity") -> int:
    """Coerce *value* to a non-negative integer.

    Accepts ints, integral floats and numeric strings.  Anything else,
    including booleans and negative numbers, raises InvalidQuantityError.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidQuantityError(f"{field_name} must be a whole number, got {value!r}")

    if isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidQuantityError(f"{field_name} must be a whole number, got {value!r}")
        result = int(value)
    elif isinstance(value, str):
        try:
            result = int(value.strip())
        except ValueError as exc:
            raise InvalidQuantityError(
                f"{field_name} must be a whole number, got {value!r}"
            ) from exc
    else:
        raise InvalidQuantityError(
            f"{field_name} must be a whole number, got {type(value).__name__}"
        )

    if result < 0:
        raise InvalidQuantityError(f"{field_name} cannot be negative, got {result}")
    return result


def require_text(value: str | None, field_name: str) -> str:
    """Return *value* stripped, or raise if it is missing or blank."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 point stored as (longitude, latitude)."""

    longitude: float
    latitude: float

    def __post_init__(self) -> None:
        for name in ("longitude", "latitude"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidCoordinatesError(f"{name.capitalize()} must be a number, got {value!r}")
            if math.isnan(value):
                raise InvalidCoordinatesError(f"{name.capitalize()} must be a number, got NaN")
        if not -180 <= self.longitude <= 180:
            raise InvalidCoordinatesError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )
        if not -90 <= self.latitude <= 90:
            raise InvalidCoordinatesError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )

    def distance_km(self, other: GeoPoint) -> float:
        """Great-circle distance using the haversine formula."""
        lon1, lat1, lon2, lat2 = map(
            math.radians, (self.longitude, self.latitude, other.longitude, other.latitude)
        )
        a = (
            math.sin((lat2 - lat1) / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
        )
        return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))

    def as_pair(self) -> list[float]:
        """GeoJSON ordering: [longitude, latitude]."""
        return [self.longitude, self.latitude]

    @staticmethod
    def from_pair(pair: list[float] | tuple[float, float]) -> GeoPoint:
        if len(pair) != 2:
            raise InvalidCoordinatesError(
                "Invalid coordinates. Must be [longitude, latitude]"
            )
        return GeoPoint(longitude=pair[0], latitude=pair[1])


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    state: str
    zip_code: str
    country: str = "United States"
    suite: str | None = None

    def __post_init__(self) -> None:
        for name, label in (
            ("street", "Street address"),
            ("city", "City"),
            ("state", "State"),
            ("zip_code", "Zip code"),
            ("country", "Country"),
        ):
            object.__setattr__(self, name, require_text(getattr(self, name), label))
        object.__setattr__(self, "suite", optional_text(self.suite))

    def one_line(self) -> str:
        """Render as a single postal line, e.g. for stock entry snapshots."""
        street = f"{self.street}, {self.suite}" if self.suite else self.street
        return f"{street}, {self.city}, {self.state} {self.zip_code}, {self.country}"


@dataclass(frozen=True)
class ContactPerson:
    name: str
    phone: str
    email: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", require_text(self.name, "Contact name"))
        object.__setattr__(self, "phone", require_text(self.phone, "Contact phone"))
        email = optional_text(self.email)
        object.__setattr__(self, "email", email.lower() if email else None)


@dataclass(frozen=True)
class Capacity:
    total: int = 0
    unit: str = "sqft"

    def __post_init__(self) -> None:
        object.__setattr__(self, "total", coerce_quantity(self.total, "Capacity"))
        object.__setattr__(self, "unit", require_text(self.unit, "Capacity unit"))

    def __str__(self) -> str:
        return f"{self.total} {self.unit}"
