"""
Location Schema

Pydantic models for catalog entries and the results produced by the
search and resolution services.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from locator.schemas.geo import Coordinates

DEFAULT_LOCALE = "en"


class LocationKind(str, Enum):
    """Kinds of catalog entries."""

    CENTER = "Center"
    SATSANG = "Satsang"
    EVENT = "Event"
    ONLINE_EVENT = "OnlineEvent"
    MASTER_EVENT = "MasterEvent"


class LocationRecord(BaseModel):
    """A read-only catalog entry."""

    location_id: int
    location_type: LocationKind
    location_name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location_blurb: Optional[str] = None
    location_tag: Optional[str] = None
    location_url: Optional[str] = None
    event_start_date: Optional[datetime] = None
    center_id: Optional[int] = None
    primary_locale: Optional[str] = None
    country: Optional[str] = None
    conference_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def coordinates(self) -> Optional[Coordinates]:
        """Coordinates of the entry, or None for online and master events without one."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    @property
    def locale(self) -> str:
        return self.primary_locale or DEFAULT_LOCALE


class SearchResult(BaseModel):
    """A catalog entry paired with its distance from the search origin."""

    location: LocationRecord
    distance: float = Field(..., description="Distance from the origin in statute miles")


class LocationLookup(BaseModel):
    """Outcome of resolving a URL slug."""

    location: Optional[LocationRecord] = None
    photo_gallery: List[str] = Field(default_factory=list)
    empty: bool = False
    resolved_url: Optional[str] = Field(
        None, description="Normalized slug, set when nothing matched"
    )

    @classmethod
    def not_found(cls, slug: str) -> "LocationLookup":
        return cls(empty=True, resolved_url=slug)
