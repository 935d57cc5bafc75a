"""
Search Request Schemas

Pydantic models for the search operations and their API request bodies.
"""

from typing import Optional

from pydantic import BaseModel, Field

from locator.schemas.geo import Coordinates

DEFAULT_RADIUS_MILES = 20.0
DEFAULT_RESULT_LIMIT = 100


class SearchQuery(BaseModel):
    """Proximity search parameters with optional tag, keyword and kind filters."""

    origin: Coordinates = Field(..., description="Search origin")
    radius: Optional[float] = Field(
        None, description="Search radius in miles (default: 20)"
    )
    limit_result_count: Optional[int] = Field(
        None, description="Maximum number of results (default: 100)"
    )
    location_tag: Optional[str] = Field(None, description="Exact tag, matched as #tag#")
    event_keywords: Optional[str] = Field(
        None, description="Keywords separated by ',' or ';' (any must match)"
    )
    exclude_keywords: Optional[str] = Field(
        None, description="Keywords separated by ',' or ';' (none may match)"
    )
    location_types: Optional[str] = Field(
        None, description="Kind whitelist separated by ',' or ';', e.g. 'Center;Event'"
    )

    @property
    def effective_radius(self) -> float:
        if self.radius is None or self.radius <= 0:
            return DEFAULT_RADIUS_MILES
        return self.radius

    @property
    def effective_limit(self) -> int:
        if self.limit_result_count is None or self.limit_result_count <= 0:
            return DEFAULT_RESULT_LIMIT
        return self.limit_result_count


class NearbyRequest(BaseModel):
    """Request body carrying an origin and an optional radius."""

    origin: Coordinates
    radius: Optional[float] = None


class NearestEventsRequest(BaseModel):
    """Request body for the nearest-five-events search."""

    origin: Coordinates
    radius: Optional[float] = None
    event_id: Optional[int] = Field(None, description="Event to leave out of the results")


class BoundsRequest(BaseModel):
    """Map viewport. ``lng_right <= lng_left`` means the box crosses the antimeridian."""

    lat_top: float
    lat_bottom: float
    lng_left: float
    lng_right: float


class CenterRequest(BaseModel):
    center_id: int


class CountryRequest(BaseModel):
    country: str
