"""
Radius Search Service

Finds events around a location. Without an explicit radius the search
widens in fixed steps until enough events turn up, and finally falls back
to the nearest few events at any distance.
"""

import logging
from typing import List, Optional, Tuple

from locator.schemas.geo import Coordinates
from locator.schemas.location import LocationKind, SearchResult
from locator.services.location_store import LocationStore
from locator.services.url_resolver_service import UrlResolverService, url_resolver_service

logger = logging.getLogger(__name__)

# (radius in miles, minimum result count to stop at this stage)
RADIUS_STAGES: Tuple[Tuple[float, int], ...] = ((50, 2), (100, 2), (500, 1))
FALLBACK_EVENT_COUNT = 5
EVENT_POOL_SIZE = 500
DEFAULT_EXPLICIT_RADIUS = 50

EVENT_KINDS = [LocationKind.EVENT]


class RadiusSearchService:
    """Progressive and fixed-radius event searches."""

    def __init__(self, resolver: UrlResolverService):
        self._resolver = resolver

    @staticmethod
    def events_within(store: LocationStore, origin: Coordinates, radius: float) -> List[SearchResult]:
        """Events closer than ``radius`` miles, single pass with no fallback."""
        return store.within(origin, radius, EVENT_KINDS, None, EVENT_POOL_SIZE)

    @classmethod
    def events_near(cls, store: LocationStore, origin: Coordinates) -> List[SearchResult]:
        """
        Events near a point using progressively wider radii.

        Each stage replaces the previous one and runs only when the previous
        stage came up short. If no event lies within the widest radius, the
        nearest events are returned regardless of distance.

        Args:
            store: Catalog access
            origin: Point to search around

        Returns:
            List of SearchResult ordered by distance
        """
        for radius, enough in RADIUS_STAGES:
            events = cls.events_within(store, origin, radius)
            logger.debug("Radius stage %s mi around %s found %d events", radius, origin, len(events))
            if len(events) >= enough:
                return events

        logger.debug(
            "No event within %s mi of %s, using nearest events", RADIUS_STAGES[-1][0], origin
        )
        return store.nearest(origin, EVENT_KINDS, FALLBACK_EVENT_COUNT)

    def events_by_location(self, store: LocationStore, slug: Optional[str]) -> List[SearchResult]:
        """Progressive event search around the location a slug names."""
        origin = self._anchor(store, slug)
        if origin is None:
            return []
        return self.events_near(store, origin)

    def events_within_radius_by_location(
        self, store: LocationStore, slug: Optional[str], radius_limit: Optional[str]
    ) -> List[SearchResult]:
        """
        Fixed-radius event search around the location a slug names.

        ``radius_limit`` comes straight from the URL and is truncated to whole
        miles; anything that is not a finite number falls back to 50 miles.
        """
        try:
            radius = int(float(radius_limit))  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            logger.warning(
                "Invalid radius limit %r, defaulting to %d", radius_limit, DEFAULT_EXPLICIT_RADIUS
            )
            radius = DEFAULT_EXPLICIT_RADIUS

        origin = self._anchor(store, slug)
        if origin is None:
            return []
        return self.events_within(store, origin, radius)

    def _anchor(self, store: LocationStore, slug: Optional[str]) -> Optional[Coordinates]:
        anchor = self._resolver.resolve_anchor(store, slug)
        if anchor is None:
            return None
        if anchor.coordinates is None:
            logger.warning(
                "Location %s has no coordinates, cannot search events around it",
                anchor.location_id,
            )
        return anchor.coordinates


radius_search_service = RadiusSearchService(url_resolver_service)
