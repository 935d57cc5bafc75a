"""
Great-circle distance helpers.

Distances use the spherical law of cosines with the same constants as the
catalog's historical SQL queries, so rankings line up with stored data.
"""

import math

from locator.schemas.geo import Coordinates

DEGREES_PER_RADIAN = 57.2958
EARTH_RADIUS_MILES = 3958.75


def great_circle_distance(a: Coordinates, b: Coordinates) -> float:
    """
    Surface distance between two coordinates in statute miles.

    Returns exactly 0 for identical points and the same value whichever
    argument comes first. The cosine is clamped into [-1, 1] so rounding
    error never takes ``acos`` out of its domain.
    """
    if a.latitude == b.latitude and a.longitude == b.longitude:
        return 0.0

    lat1 = a.latitude / DEGREES_PER_RADIAN
    lng1 = a.longitude / DEGREES_PER_RADIAN
    lat2 = b.latitude / DEGREES_PER_RADIAN
    lng2 = b.longitude / DEGREES_PER_RADIAN

    # Each term is a product of per-point factors so swapping a and b is exact
    c = (
        (math.cos(lat1) * math.cos(lng1)) * (math.cos(lat2) * math.cos(lng2))
        + (math.cos(lat1) * math.sin(lng1)) * (math.cos(lat2) * math.sin(lng2))
        + math.sin(lat1) * math.sin(lat2)
    )
    c = max(-1.0, min(1.0, c))
    return math.acos(c) * EARTH_RADIUS_MILES
