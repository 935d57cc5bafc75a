"""
Location Store

Read-only access to the location catalog. ``LocationStore`` is the contract
the search services depend on; ``SqlLocationStore`` implements it with
SQLAlchemy over the ``web_locations`` table.

Kind, tag and keyword filters run in the database as bound parameters;
distance ranking runs in Python through the proximity service.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

from fastapi import Depends
from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from locator.db.database import get_db
from locator.models.location import Location
from locator.schemas.geo import Coordinates
from locator.schemas.location import (
    DEFAULT_LOCALE,
    LocationKind,
    LocationRecord,
    SearchResult,
)
from locator.services.matcher_service import (
    FieldEquals,
    KindMatcher,
    LocationMatcher,
    without_whitespace,
)
from locator.services.proximity_service import proximity_service, start_key

logger = logging.getLogger(__name__)

# Half a unit in the 4th decimal place, plus slack for float error
_ROUNDING_WINDOW = 0.00006


class LocationStoreError(Exception):
    """Base exception for location store errors."""


class LocationQueryError(LocationStoreError):
    """Raised when the catalog query fails."""


class LocationDataError(LocationStoreError):
    """Raised when a catalog row cannot be read as a LocationRecord."""


def _same_point(record_coordinates: Optional[Coordinates], point: Coordinates) -> bool:
    return record_coordinates is not None and record_coordinates.rounded() == point


class LocationStore(ABC):
    """Read-only catalog contract used by the search services."""

    @abstractmethod
    def nearest(
        self,
        origin: Coordinates,
        kinds: Optional[Iterable[LocationKind]],
        limit: int,
        exclude_ids: Sequence[int] = (),
    ) -> List[SearchResult]:
        """The ``limit`` entries nearest to origin, by distance then start time."""

    @abstractmethod
    def within(
        self,
        origin: Coordinates,
        radius: float,
        kinds: Optional[Iterable[LocationKind]],
        matcher: Optional[LocationMatcher],
        limit: int,
    ) -> List[SearchResult]:
        """Nearest ``limit`` matching entries, then those closer than ``radius``."""

    @abstractmethod
    def exact_at(
        self, coordinates: Coordinates, kinds: Optional[Iterable[LocationKind]]
    ) -> List[LocationRecord]:
        """Entries whose coordinates round (4 places) to the rounded point."""

    @abstractmethod
    def by_slug(self, slug: str, kinds: Optional[Iterable[LocationKind]]) -> List[LocationRecord]:
        """Entries whose normalized URL equals ``slug``, by start time."""

    @abstractmethod
    def listing(
        self,
        kinds: Optional[Iterable[LocationKind]],
        matcher: Optional[LocationMatcher] = None,
        exclude_ids: Sequence[int] = (),
        limit: Optional[int] = None,
    ) -> List[LocationRecord]:
        """Matching entries ordered by start time."""

    @abstractmethod
    def in_bounds(
        self, lat_top: float, lat_bottom: float, lng_left: float, lng_right: float
    ) -> List[LocationRecord]:
        """Entries strictly inside a map rectangle."""

    @abstractmethod
    def locales_at(self, coordinates: Coordinates) -> List[str]:
        """Distinct locales of entries at the rounded point, absent locale as 'en'."""

    def by_tag_or_center(
        self,
        matcher: LocationMatcher,
        kinds: Optional[Iterable[LocationKind]],
        center_id: Optional[int] = None,
    ) -> List[LocationRecord]:
        """Entries matching ``matcher`` or belonging to ``center_id``, by start time."""
        if center_id is not None:
            matcher = matcher | FieldEquals("center_id", center_id)
        return self.listing(kinds, matcher)


class SqlLocationStore(LocationStore):
    """LocationStore backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self._db = db

    def _query(
        self,
        kinds: Optional[Iterable[LocationKind]] = None,
        matcher: Optional[LocationMatcher] = None,
    ) -> Query:
        query = self._db.query(Location)
        if kinds is not None:
            query = query.filter(KindMatcher(kinds).clause())
        if matcher is not None:
            query = query.filter(matcher.clause())
        return query

    def _fetch(self, query: Query) -> List[LocationRecord]:
        try:
            rows = query.all()
        except SQLAlchemyError as e:
            logger.error("Location catalog query failed: %s", str(e))
            raise LocationQueryError(f"Catalog query failed: {str(e)}") from e

        try:
            return [LocationRecord.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error("Invalid location row in catalog: %s", str(e))
            raise LocationDataError(f"Invalid catalog row: {str(e)}") from e

    def _spatial_query(
        self,
        kinds: Optional[Iterable[LocationKind]] = None,
        matcher: Optional[LocationMatcher] = None,
    ) -> Query:
        return self._query(kinds, matcher).filter(
            Location.latitude.isnot(None), Location.longitude.isnot(None)
        )

    def nearest(
        self,
        origin: Coordinates,
        kinds: Optional[Iterable[LocationKind]],
        limit: int,
        exclude_ids: Sequence[int] = (),
    ) -> List[SearchResult]:
        query = self._spatial_query(kinds)
        if exclude_ids:
            query = query.filter(Location.location_id.notin_(list(exclude_ids)))
        return proximity_service.rank(self._fetch(query), origin, limit)

    def within(
        self,
        origin: Coordinates,
        radius: float,
        kinds: Optional[Iterable[LocationKind]],
        matcher: Optional[LocationMatcher],
        limit: int,
    ) -> List[SearchResult]:
        if matcher is not None and matcher.never:
            return []
        records = self._fetch(self._spatial_query(kinds, matcher))
        return proximity_service.within(records, origin, radius, limit)

    def exact_at(
        self, coordinates: Coordinates, kinds: Optional[Iterable[LocationKind]]
    ) -> List[LocationRecord]:
        point = coordinates.rounded()
        query = self._spatial_query(kinds).filter(
            Location.latitude.between(
                point.latitude - _ROUNDING_WINDOW, point.latitude + _ROUNDING_WINDOW
            ),
            Location.longitude.between(
                point.longitude - _ROUNDING_WINDOW, point.longitude + _ROUNDING_WINDOW
            ),
        )
        return [record for record in self._fetch(query) if _same_point(record.coordinates, point)]

    def by_slug(self, slug: str, kinds: Optional[Iterable[LocationKind]]) -> List[LocationRecord]:
        normalized_url = func.lower(without_whitespace(func.coalesce(Location.location_url, "")))
        query = self._query(kinds).filter(normalized_url == slug)
        return sorted(self._fetch(query), key=lambda r: (start_key(r), r.location_id))

    def listing(
        self,
        kinds: Optional[Iterable[LocationKind]],
        matcher: Optional[LocationMatcher] = None,
        exclude_ids: Sequence[int] = (),
        limit: Optional[int] = None,
    ) -> List[LocationRecord]:
        if matcher is not None and matcher.never:
            return []
        query = self._query(kinds, matcher)
        if exclude_ids:
            query = query.filter(Location.location_id.notin_(list(exclude_ids)))
        records = sorted(self._fetch(query), key=lambda r: (start_key(r), r.location_id))
        if limit is not None:
            records = records[:limit]
        return records

    def in_bounds(
        self, lat_top: float, lat_bottom: float, lng_left: float, lng_right: float
    ) -> List[LocationRecord]:
        query = self._spatial_query().filter(
            Location.latitude < lat_top, Location.latitude > lat_bottom
        )
        if lng_right > lng_left:
            query = query.filter(Location.longitude > lng_left, Location.longitude < lng_right)
        else:
            # Viewport wraps around the antimeridian
            query = query.filter(
                ((Location.longitude > lng_left) & (Location.longitude < 180))
                | ((Location.longitude > -180) & (Location.longitude < lng_right))
            )
        return sorted(self._fetch(query), key=lambda r: r.location_id)

    def locales_at(self, coordinates: Coordinates) -> List[str]:
        point = coordinates.rounded()
        query = self._db.query(
            Location.latitude,
            Location.longitude,
            func.coalesce(Location.primary_locale, DEFAULT_LOCALE).label("locale"),
        ).filter(
            Location.latitude.between(
                point.latitude - _ROUNDING_WINDOW, point.latitude + _ROUNDING_WINDOW
            ),
            Location.longitude.between(
                point.longitude - _ROUNDING_WINDOW, point.longitude + _ROUNDING_WINDOW
            ),
        )
        try:
            rows = query.all()
        except SQLAlchemyError as e:
            logger.error("Locale query failed: %s", str(e))
            raise LocationQueryError(f"Catalog query failed: {str(e)}") from e

        locales = {
            row.locale
            for row in rows
            if Coordinates(latitude=row.latitude, longitude=row.longitude).rounded() == point
        }
        return sorted(locales)


def get_location_store(db: Session = Depends(get_db)) -> LocationStore:
    return SqlLocationStore(db)
