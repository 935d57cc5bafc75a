"""
Proximity service: distance ranking and radius filtering over catalog entries.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from locator.schemas.geo import Coordinates
from locator.schemas.location import LocationRecord, SearchResult
from locator.utils.geo import great_circle_distance


def start_key(record: LocationRecord) -> Tuple[bool, datetime]:
    """Sort key for start timestamps; entries without one sort first."""
    start = record.event_start_date
    if start is None:
        return (False, datetime.min)
    return (True, start)


def result_key(result: SearchResult):
    return (result.distance, start_key(result.location), result.location.location_id)


class ProximityService:
    """Ranks candidates by great-circle distance from an origin."""

    @staticmethod
    def rank(
        records: Iterable[LocationRecord],
        origin: Coordinates,
        limit: Optional[int] = None,
    ) -> List[SearchResult]:
        """
        Rank entries by ascending distance from the origin.

        Ties are broken by start timestamp, then identifier. Entries without
        coordinates cannot be ranked and are left out.

        Args:
            records: Candidate entries
            origin: Search origin
            limit: Keep at most this many of the nearest entries (all if None)

        Returns:
            List of SearchResult ordered by distance
        """
        results = []
        for record in records:
            coordinates = record.coordinates
            if coordinates is None:
                continue
            results.append(
                SearchResult(location=record, distance=great_circle_distance(origin, coordinates))
            )
        results.sort(key=result_key)
        if limit is not None:
            results = results[:limit]
        return results

    @classmethod
    def within(
        cls,
        records: Iterable[LocationRecord],
        origin: Coordinates,
        radius: float,
        limit: int,
    ) -> List[SearchResult]:
        """
        Entries strictly closer than ``radius`` miles.

        The nearest ``limit`` entries are taken first and only then cut at the
        radius, so an entry inside the radius but outside the nearest
        ``limit`` is not returned.
        """
        return [result for result in cls.rank(records, origin, limit) if result.distance < radius]


proximity_service = ProximityService()
