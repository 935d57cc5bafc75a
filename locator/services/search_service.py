"""
Search Service

Proximity searches over the catalog: plain radius searches, tag and
keyword searches, viewport queries, nearest-event lookups and the
per-point locale listing.
"""

import logging
from typing import List, Optional

from locator.schemas.geo import Coordinates
from locator.schemas.location import DEFAULT_LOCALE, LocationKind, LocationRecord, SearchResult
from locator.schemas.search import DEFAULT_RADIUS_MILES, BoundsRequest, SearchQuery
from locator.services.location_store import LocationStore
from locator.services.matcher_service import FieldEquals, matcher_service

logger = logging.getLogger(__name__)

WIDE_SEARCH_RADIUS = 1500
WIDE_SEARCH_LIMIT = 2
LOCAL_SEARCH_LIMIT = 10
NEAREST_FOUR = 4
NEAREST_FIVE = 5
NEAREST_FIVE_DEFAULT_RADIUS = 25000

EVENT_KINDS = [LocationKind.EVENT]
HOST_KINDS = [LocationKind.CENTER, LocationKind.SATSANG]


class SearchService:
    """Proximity and filter searches."""

    @staticmethod
    def search_all_locations(store: LocationStore, query: SearchQuery) -> List[SearchResult]:
        """Every kind of entry within the radius, nearest first."""
        logger.info(
            "Location search: origin=%s, radius=%s, limit=%s",
            query.origin,
            query.effective_radius,
            query.effective_limit,
        )
        return store.within(
            query.origin, query.effective_radius, None, None, query.effective_limit
        )

    @staticmethod
    def search_locations(
        store: LocationStore, origin: Coordinates, radius: Optional[float] = None
    ) -> List[SearchResult]:
        """
        Quick nearby search.

        A radius of exactly 1500 miles is the "closest location anywhere"
        lookup and returns at most 2 entries; other radii return up to 10.
        """
        radius = DEFAULT_RADIUS_MILES if radius is None else radius
        limit = WIDE_SEARCH_LIMIT if radius == WIDE_SEARCH_RADIUS else LOCAL_SEARCH_LIMIT
        return store.within(origin, radius, None, None, limit)

    @staticmethod
    def search_by_tag_and_radius(store: LocationStore, query: SearchQuery) -> List[SearchResult]:
        """
        Entries tagged ``#tag#`` within the radius, optionally limited to the
        kinds named in ``location_types``. No tag gives no results.
        """
        matcher = matcher_service.for_tag(
            query.location_tag, kinds=matcher_service.parse_kinds(query.location_types)
        )
        if matcher.never:
            return []
        logger.info(
            "Tag search: tag=%s, types=%s, origin=%s, radius=%s",
            query.location_tag,
            query.location_types,
            query.origin,
            query.effective_radius,
        )
        return store.within(
            query.origin, query.effective_radius, None, matcher, query.effective_limit
        )

    @staticmethod
    def search_by_keywords_and_radius(
        store: LocationStore, query: SearchQuery
    ) -> List[SearchResult]:
        """
        Centers, satsangs and keyword-matching events within the radius.

        Keywords only filter events. Without keywords the result is empty.
        """
        matcher = matcher_service.for_combined_search(
            query.event_keywords, query.exclude_keywords, query.location_types
        )
        if matcher.never:
            return []
        logger.info(
            "Keyword search: keywords=%s, exclude=%s, types=%s, origin=%s, radius=%s",
            query.event_keywords,
            query.exclude_keywords,
            query.location_types,
            query.origin,
            query.effective_radius,
        )
        return store.within(
            query.origin, query.effective_radius, None, matcher, query.effective_limit
        )

    @staticmethod
    def search_by_bounds(store: LocationStore, bounds: BoundsRequest) -> List[LocationRecord]:
        return store.in_bounds(bounds.lat_top, bounds.lat_bottom, bounds.lng_left, bounds.lng_right)

    @staticmethod
    def search_nearest_four_events(store: LocationStore, origin: Coordinates) -> List[SearchResult]:
        return store.nearest(origin, EVENT_KINDS, NEAREST_FOUR)

    @staticmethod
    def search_nearest_five_events(
        store: LocationStore,
        origin: Coordinates,
        radius: Optional[float] = None,
        exclude_id: Optional[int] = None,
    ) -> List[SearchResult]:
        """
        The five nearest events other than ``exclude_id``, cut at the radius.

        A missing or non-positive radius means 25000 miles.
        """
        radius_limit = radius if radius is not None and radius > 0 else NEAREST_FIVE_DEFAULT_RADIUS
        exclude_ids = [exclude_id] if exclude_id is not None else []
        nearest = store.nearest(origin, EVENT_KINDS, NEAREST_FIVE, exclude_ids)
        return [result for result in nearest if result.distance < radius_limit]

    @staticmethod
    def locales_at(store: LocationStore, origin: Coordinates) -> List[str]:
        """
        Locales offered at a map point.

        English comes first when present, the rest follow in order. A point
        with no locale at all reports English.
        """
        locales: List[str] = []
        has_english = False
        for locale in store.locales_at(origin):
            if not locale:
                continue
            if locale.lower() == DEFAULT_LOCALE:
                has_english = True
            else:
                locales.append(locale)
        if has_english or not locales:
            locales.insert(0, DEFAULT_LOCALE)
        return locales

    @staticmethod
    def locations_by_center(store: LocationStore, center_id: int) -> List[LocationRecord]:
        """Satsangs run by a center."""
        return store.listing([LocationKind.SATSANG], FieldEquals("center_id", center_id))

    @staticmethod
    def locations_by_country(store: LocationStore, country: str) -> List[LocationRecord]:
        return store.listing(HOST_KINDS, FieldEquals("country", country))


search_service = SearchService()
