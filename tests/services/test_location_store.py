"""
Unit tests for the SQLAlchemy location store.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from locator.models.location import Location
from locator.schemas.geo import Coordinates
from locator.schemas.location import LocationKind
from locator.services.location_store import (
    LocationDataError,
    LocationQueryError,
    SqlLocationStore,
)
from locator.services.matcher_service import MatcherService
from tests.helpers import ORIGIN_LAT, ORIGIN_LNG, create_location, north_of_origin

ORIGIN = Coordinates(latitude=ORIGIN_LAT, longitude=ORIGIN_LNG)


def ids(results) -> list:
    return [getattr(r, "location", r).location_id for r in results]


def test_nearest_filters_kinds_and_excludes_ids(db: Session, store: SqlLocationStore):
    """Test nearest honours the kind filter and excluded ids"""
    create_location(db, 1, LocationKind.EVENT, north_of_origin(1))
    create_location(db, 2, LocationKind.CENTER, north_of_origin(2))
    create_location(db, 3, LocationKind.EVENT, north_of_origin(3))
    create_location(db, 4, LocationKind.EVENT, north_of_origin(4))

    results = store.nearest(ORIGIN, [LocationKind.EVENT], 2, exclude_ids=[1])

    assert ids(results) == [3, 4]


def test_nearest_ignores_entries_without_coordinates(db: Session, store: SqlLocationStore):
    """Test online events without a position are never ranked"""
    create_location(db, 1, LocationKind.ONLINE_EVENT)
    create_location(db, 2, LocationKind.CENTER, north_of_origin(500))

    assert ids(store.nearest(ORIGIN, None, 10)) == [2]


def test_within_applies_matcher(db: Session, store: SqlLocationStore):
    """Test within filters rows with the matcher before ranking"""
    create_location(db, 1, LocationKind.EVENT, north_of_origin(1), location_tag="#kids#")
    create_location(db, 2, LocationKind.EVENT, north_of_origin(2), location_tag="#adults#")
    create_location(db, 3, LocationKind.EVENT, north_of_origin(30), location_tag="#kids#")

    results = store.within(ORIGIN, 20, None, MatcherService.for_tag("kids"), 100)

    assert ids(results) == [1]


def test_within_with_never_matcher_skips_query():
    """Test a matcher that matches nothing short-circuits without a query"""
    db = MagicMock()
    store = SqlLocationStore(db)

    assert store.within(ORIGIN, 20, None, MatcherService.for_tag(""), 100) == []
    db.query.assert_not_called()


def test_exact_at_uses_four_decimal_rounding(db: Session, store: SqlLocationStore):
    """Test exact_at compares coordinates rounded to 4 places"""
    create_location(db, 1, LocationKind.CENTER, 40.12341, -75.43211)
    create_location(db, 2, LocationKind.SATSANG, 40.12344, -75.43214)
    create_location(db, 3, LocationKind.SATSANG, 40.12346, -75.43211)
    create_location(db, 4, LocationKind.EVENT, 40.1234, -75.4321)

    point = Coordinates(latitude=40.1234, longitude=-75.4321)

    assert sorted(ids(store.exact_at(point, [LocationKind.CENTER, LocationKind.SATSANG]))) == [1, 2]
    assert sorted(ids(store.exact_at(point, None))) == [1, 2, 4]


def test_by_slug_normalizes_stored_url_and_orders_by_start(db: Session, store: SqlLocationStore):
    """Test slug lookup ignores case and spaces in the stored URL"""
    create_location(
        db, 1, LocationKind.EVENT, location_url="Spring Retreat", event_start_date=datetime(2025, 5, 2)
    )
    create_location(
        db, 2, LocationKind.EVENT, location_url="springretreat", event_start_date=datetime(2025, 5, 1)
    )
    create_location(db, 3, LocationKind.CENTER, location_url="springretreat")

    assert ids(store.by_slug("springretreat", [LocationKind.EVENT])) == [2, 1]
    assert ids(store.by_slug("springretreat", None)) == [3, 2, 1]


def test_by_slug_ignores_tabs_and_newlines_in_stored_url(db: Session, store: SqlLocationStore):
    """Test stored URLs lose every kind of whitespace before comparison"""
    create_location(db, 1, LocationKind.CENTER, location_url="My\tCenter")
    create_location(db, 2, LocationKind.SATSANG, location_url=" my\r\ncenter\n")

    assert ids(store.by_slug("mycenter", None)) == [1, 2]


def test_listing_orders_by_start_and_limits(db: Session, store: SqlLocationStore):
    """Test listings are ordered by start time and truncated"""
    for location_id, day in ((1, 3), (2, 1), (3, 2)):
        create_location(
            db,
            location_id,
            LocationKind.ONLINE_EVENT,
            event_start_date=datetime(2025, 7, day, 18, 0),
        )

    assert ids(store.listing([LocationKind.ONLINE_EVENT])) == [2, 3, 1]
    assert ids(store.listing([LocationKind.ONLINE_EVENT], exclude_ids=[2], limit=1)) == [3]


def test_by_tag_or_center(db: Session, store: SqlLocationStore):
    """Test the center id widens a tag listing"""
    create_location(db, 1, LocationKind.EVENT, location_tag="#retreat#")
    create_location(db, 2, LocationKind.EVENT, center_id=77)
    create_location(db, 3, LocationKind.EVENT)

    matcher = MatcherService.for_tag("retreat")

    assert ids(store.by_tag_or_center(matcher, [LocationKind.EVENT])) == [1]
    assert ids(store.by_tag_or_center(matcher, [LocationKind.EVENT], center_id=77)) == [1, 2]
    assert ids(store.by_tag_or_center(MatcherService.for_tag(None), None, center_id=77)) == [2]


def test_in_bounds(db: Session, store: SqlLocationStore):
    """Test viewport queries, including one crossing the antimeridian"""
    create_location(db, 1, LocationKind.CENTER, 10.0, 170.0)
    create_location(db, 2, LocationKind.CENTER, 10.0, -170.0)
    create_location(db, 3, LocationKind.CENTER, 10.0, 0.0)
    create_location(db, 4, LocationKind.CENTER, 50.0, 0.0)

    assert ids(store.in_bounds(20.0, 0.0, -10.0, 10.0)) == [3]
    assert ids(store.in_bounds(20.0, 0.0, 160.0, -160.0)) == [1, 2]


def test_locales_at(db: Session, store: SqlLocationStore):
    """Test distinct locales at a point, missing locale read as English"""
    create_location(db, 1, LocationKind.CENTER, 12.5, 8.25, primary_locale="fr")
    create_location(db, 2, LocationKind.SATSANG, 12.5, 8.25)
    create_location(db, 3, LocationKind.SATSANG, 12.50001, 8.25, primary_locale="fr")
    create_location(db, 4, LocationKind.SATSANG, 12.6, 8.25, primary_locale="de")

    assert store.locales_at(Coordinates(latitude=12.5, longitude=8.25)) == ["en", "fr"]


def test_query_failure_raises_query_error():
    """Test database errors surface as LocationQueryError"""
    db = MagicMock()
    db.query.return_value.filter.return_value.filter.return_value.all.side_effect = (
        OperationalError("SELECT", {}, Exception("connection lost"))
    )
    store = SqlLocationStore(db)

    with pytest.raises(LocationQueryError):
        store.nearest(ORIGIN, [LocationKind.EVENT], 5)


def test_invalid_row_raises_data_error(db: Session, store: SqlLocationStore):
    """Test rows with an unknown kind are rejected at the store boundary"""
    create_location(db, 1, LocationKind.CENTER, north_of_origin(1))
    row = db.get(Location, 1)
    row.location_type = "Temple"
    db.commit()

    with pytest.raises(LocationDataError):
        store.nearest(ORIGIN, None, 5)
