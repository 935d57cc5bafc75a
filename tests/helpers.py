"""Shared helpers for building catalog rows in tests."""

from sqlalchemy.orm import Session

from locator.models.location import Location
from locator.schemas.location import LocationKind, LocationRecord

# Origin used across tests; one degree of latitude is about 69.09 miles
ORIGIN_LAT = 40.0
ORIGIN_LNG = -75.0


def north_of_origin(miles: float) -> float:
    """Latitude lying ``miles`` due north of the test origin."""
    return ORIGIN_LAT + miles / 69.0930


def create_location(
    db: Session,
    location_id: int,
    kind: LocationKind,
    latitude=None,
    longitude=ORIGIN_LNG,
    name=None,
    **fields,
) -> Location:
    """Helper function to insert a catalog row"""
    if latitude is None:
        longitude = None
    location = Location(
        location_id=location_id,
        location_type=kind.value,
        location_name=name or f"{kind.value} {location_id}",
        latitude=latitude,
        longitude=longitude,
        **fields,
    )
    db.add(location)
    db.commit()
    db.refresh(location)
    return location


def make_record(location_id: int, kind: LocationKind, **fields) -> LocationRecord:
    """Helper function to build a LocationRecord without touching the database"""
    fields.setdefault("location_name", f"{kind.value} {location_id}")
    return LocationRecord(location_id=location_id, location_type=kind, **fields)
