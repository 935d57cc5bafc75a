"""
Nearest Service

Finds the K nearest distinct map points. Entries plotted at exactly the same
coordinate collapse into one marker, and a marker that is not a center is
swapped for the center or satsang sharing its point when there is one.
"""

import logging
from typing import Dict, List, Tuple

from locator.schemas.geo import Coordinates
from locator.schemas.location import LocationKind, LocationRecord, SearchResult
from locator.services.location_store import LocationStore

logger = logging.getLogger(__name__)

CANDIDATE_POOL_SIZE = 400
NEAREST_POINT_COUNT = 6
PREFERRED_LOCALE = "en"

HOST_KINDS = [LocationKind.CENTER, LocationKind.SATSANG]


def _preferred(records: List[LocationRecord]) -> LocationRecord:
    """First English-locale entry if any, else the first entry."""
    for record in records:
        if record.primary_locale and record.primary_locale.lower() == PREFERRED_LOCALE:
            return record
    return records[0]


class NearestService:
    """Nearest distinct points with co-located record substitution."""

    @staticmethod
    def collapse_points(candidates: List[SearchResult]) -> List[SearchResult]:
        """
        One result per exact coordinate.

        Each point keeps its lowest-id entry and the smallest distance seen
        at that point. Output is ordered by distance, then id.
        """
        groups: Dict[Tuple[float, float], Tuple[LocationRecord, float]] = {}
        for candidate in candidates:
            record = candidate.location
            point = (record.latitude, record.longitude)
            if point not in groups:
                groups[point] = (record, candidate.distance)
                continue
            kept, distance = groups[point]
            if record.location_id < kept.location_id:
                kept = record
            groups[point] = (kept, min(distance, candidate.distance))

        collapsed = [SearchResult(location=r, distance=d) for r, d in groups.values()]
        collapsed.sort(key=lambda result: (result.distance, result.location.location_id))
        return collapsed

    @classmethod
    def nearest_points(
        cls,
        store: LocationStore,
        origin: Coordinates,
        count: int = NEAREST_POINT_COUNT,
    ) -> List[SearchResult]:
        """
        The ``count`` nearest distinct points around origin.

        Positions are kept as ranked by distance. Where a non-center marker
        shares its rounded coordinate with centers or satsangs, one of those
        (English locale first) takes its position with distance 0.

        Args:
            store: Catalog access
            origin: Search origin
            count: Number of points to return

        Returns:
            List of SearchResult, at most ``count`` long
        """
        candidates = store.nearest(origin, None, CANDIDATE_POOL_SIZE)
        points = cls.collapse_points(candidates)[:count]

        results: List[SearchResult] = []
        for result in points:
            record = result.location
            if record.location_type is not LocationKind.CENTER:
                hosts = store.exact_at(record.coordinates, HOST_KINDS)
                if hosts:
                    host = _preferred(hosts)
                    logger.debug(
                        "Replacing %s %s with co-located %s %s",
                        record.location_type.value,
                        record.location_id,
                        host.location_type.value,
                        host.location_id,
                    )
                    result = SearchResult(location=host, distance=0.0)
            results.append(result)
        return results


nearest_service = NearestService()
