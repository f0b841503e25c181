"""CLI commands for stock locations."""

from __future__ import annotations

import click

from rims.application.add_location import AddLocationHandler
from rims.application.find_locations import FindNearestLocationsHandler, ListLocationsHandler
from rims.application.update_location import DeactivateLocationHandler, UpdateLocationHandler
from rims.domain.exceptions import DomainException
from rims.domain.model.value_objects import Address, Capacity, ContactPerson, GeoPoint
from rims.infrastructure.bootstrap import location_repository


@click.command("add")
@click.option("--name", required=True, help="Location name.")
@click.option("--street", required=True, help="Street address.")
@click.option("--suite", default=None, help="Suite / unit.")
@click.option("--city", required=True, help="City.")
@click.option("--state", required=True, help="State.")
@click.option("--zip", "zip_code", required=True, help="Zip code.")
@click.option("--country", default="United States", show_default=True, help="Country.")
@click.option("--lng", "longitude", required=True, type=float, help="Longitude.")
@click.option("--lat", "latitude", required=True, type=float, help="Latitude.")
@click.option("--contact-name", default=None, help="Contact person name.")
@click.option("--contact-phone", default=None, help="Contact person phone.")
@click.option("--contact-email", default=None, help="Contact person email.")
@click.option("--capacity", default=None, type=int, help="Total capacity.")
@click.option("--capacity-unit", default="sqft", show_default=True, help="Capacity unit.")
def location_add(
    name: str,
    street: str,
    suite: str | None,
    city: str,
    state: str,
    zip_code: str,
    country: str,
    longitude: float,
    latitude: float,
    contact_name: str | None,
    contact_phone: str | None,
    contact_email: str | None,
    capacity: int | None,
    capacity_unit: str,
) -> None:
    """Register a storage location."""
    handler = AddLocationHandler(location_repo=location_repository())

    try:
        location = handler.handle(
            name=name,
            address=Address(
                street=street, suite=suite, city=city, state=state,
                zip_code=zip_code, country=country,
            ),
            coordinates=GeoPoint(longitude=longitude, latitude=latitude),
            contact_person=(
                ContactPerson(name=contact_name, phone=contact_phone or "", email=contact_email)
                if contact_name else None
            ),
            capacity=Capacity(total=capacity, unit=capacity_unit) if capacity is not None else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Location #{location.id} '{location.name}' added in {location.address.city}")


@click.command("update")
@click.option("--id", "location_id", required=True, help="Location ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--lng", "longitude", default=None, type=float, help="New longitude.")
@click.option("--lat", "latitude", default=None, type=float, help="New latitude.")
@click.option("--contact-name", default=None, help="New contact person name.")
@click.option("--contact-phone", default=None, help="New contact person phone.")
@click.option("--contact-email", default=None, help="New contact person email.")
def location_update(
    location_id: str,
    name: str | None,
    longitude: float | None,
    latitude: float | None,
    contact_name: str | None,
    contact_phone: str | None,
    contact_email: str | None,
) -> None:
    """Rename, move, or change the contact of a location."""
    if (longitude is None) != (latitude is None):
        raise click.ClickException("--lng and --lat must be given together")

    handler = UpdateLocationHandler(location_repo=location_repository())

    try:
        location = handler.handle(
            location_id,
            name=name,
            coordinates=(
                GeoPoint(longitude=longitude, latitude=latitude)
                if longitude is not None and latitude is not None else None
            ),
            contact_person=(
                ContactPerson(name=contact_name, phone=contact_phone or "", email=contact_email)
                if contact_name else None
            ),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Location #{location.id} updated.")


@click.command("deactivate")
@click.option("--id", "location_id", required=True, help="Location ID.")
def location_deactivate(location_id: str) -> None:
    """Retire a location (locations are never deleted)."""
    handler = DeactivateLocationHandler(location_repo=location_repository())

    try:
        location = handler.handle(location_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Location #{location.id} '{location.name}' deactivated.")


@click.command("list")
@click.option("--city", default=None, help="Filter by city.")
@click.option("--state", default=None, help="Filter by state.")
@click.option("--active/--inactive", "is_active", default=None, help="Filter by active flag.")
def location_list(city: str | None, state: str | None, is_active: bool | None) -> None:
    """List stock locations."""
    handler = ListLocationsHandler(location_repo=location_repository())
    locations = handler.handle(city=city, state=state, is_active=is_active)

    if not locations:
        click.echo("No locations found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'City':<16} {'State':<8} {'Active':<6}")
    click.echo("-" * 64)
    for loc in locations:
        click.echo(
            f"{loc.id:<6} {loc.name:<24} {loc.address.city:<16} "
            f"{loc.address.state:<8} {'yes' if loc.is_active else 'no':<6}"
        )


@click.command("nearest")
@click.option("--lng", "longitude", required=True, type=float, help="Longitude.")
@click.option("--lat", "latitude", required=True, type=float, help="Latitude.")
@click.option("--limit", default=5, show_default=True, type=int, help="Maximum results.")
@click.option("--max-km", default=None, type=float, help="Maximum distance in km.")
def location_nearest(
    longitude: float, latitude: float, limit: int, max_km: float | None
) -> None:
    """Find the active locations closest to a point."""
    handler = FindNearestLocationsHandler(location_repo=location_repository())

    try:
        results = handler.handle(longitude, latitude, limit=limit, max_distance_km=max_km)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not results:
        click.echo("No locations found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'City':<16} {'Distance (km)':>14}")
    click.echo("-" * 63)
    for r in results:
        click.echo(f"{r.id:<6} {r.name:<24} {r.city:<16} {r.distance_km:>14.1f}")
