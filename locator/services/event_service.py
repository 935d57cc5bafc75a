"""
Event service for event and master-event listings.
"""

from typing import List, Optional

from locator.schemas.location import LocationKind, LocationRecord
from locator.services.location_store import LocationStore
from locator.services.matcher_service import FieldEquals, matcher_service

UPCOMING_LIMIT = 5
LATEST_MASTER_EVENTS_LIMIT = 5

ONLINE_KINDS = [LocationKind.ONLINE_EVENT]
ALL_EVENT_KINDS = [LocationKind.ONLINE_EVENT, LocationKind.EVENT]
EVENT_KINDS = [LocationKind.EVENT]
MASTER_KINDS = [LocationKind.MASTER_EVENT]


class EventService:
    """Listings ordered by start time."""

    @staticmethod
    def list_online_events(store: LocationStore) -> List[LocationRecord]:
        return store.listing(ONLINE_KINDS)

    @staticmethod
    def online_events_by_tag(store: LocationStore, tag: Optional[str]) -> List[LocationRecord]:
        return store.listing(ONLINE_KINDS, matcher_service.for_tag(tag))

    @staticmethod
    def all_events_by_tag(store: LocationStore, tag: Optional[str]) -> List[LocationRecord]:
        """In-person and online events carrying the tag."""
        return store.listing(ALL_EVENT_KINDS, matcher_service.for_tag(tag))

    @staticmethod
    def online_events_by_conference(
        store: LocationStore, conference_id: str
    ) -> List[LocationRecord]:
        return store.listing(ONLINE_KINDS, FieldEquals("conference_id", conference_id))

    @staticmethod
    def upcoming_online_events(store: LocationStore, exclude_id: int) -> List[LocationRecord]:
        """The next online events, leaving out the one being viewed."""
        return store.listing(ONLINE_KINDS, exclude_ids=[exclude_id], limit=UPCOMING_LIMIT)

    @staticmethod
    def events_by_tag(
        store: LocationStore, tag: Optional[str], center_id: Optional[int] = None
    ) -> List[LocationRecord]:
        """
        In-person events carrying the tag.

        With a positive ``center_id``, events hosted by that center are
        included even without the tag.
        """
        center = center_id if center_id is not None and center_id > 0 else None
        return store.by_tag_or_center(matcher_service.for_tag(tag), EVENT_KINDS, center)

    @staticmethod
    def list_master_events(store: LocationStore) -> List[LocationRecord]:
        return store.listing(MASTER_KINDS)

    @staticmethod
    def latest_master_events(store: LocationStore) -> List[LocationRecord]:
        return store.listing(MASTER_KINDS, limit=LATEST_MASTER_EVENTS_LIMIT)


event_service = EventService()
