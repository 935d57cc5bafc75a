"""
URL Resolver Service

Resolves URL slugs to catalog entries. Slugs are compared lowercased with
all whitespace removed; each lookup walks a fixed chain of kind-scoped
searches and returns the first hit.
"""

import logging
import re
from typing import Optional

from locator.schemas.location import LocationKind, LocationLookup, LocationRecord
from locator.services.gallery_service import GalleryKind, GalleryService, gallery_service
from locator.services.location_store import LocationStore

logger = logging.getLogger(__name__)

WHITESPACE = re.compile(r"\s+", re.ASCII)

NON_EVENT_KINDS = [kind for kind in LocationKind if kind is not LocationKind.EVENT]


def normalize_slug(slug: Optional[str]) -> str:
    """Lowercase a slug and strip all whitespace from it."""
    return WHITESPACE.sub("", slug or "").lower()


class UrlResolverService:
    """Slug resolution for locations, events and master events."""

    def __init__(self, galleries: GalleryService):
        self._galleries = galleries

    def resolve_location(self, store: LocationStore, slug: Optional[str]) -> LocationLookup:
        """
        Resolve a center or satsang page.

        Non-event entries are searched; a center wins over a satsang sharing
        the slug. Any other kind found here is treated as not found.
        """
        normalized = normalize_slug(slug)
        if not normalized:
            return LocationLookup.not_found(normalized)
        matches = store.by_slug(normalized, NON_EVENT_KINDS)

        for kind, gallery in (
            (LocationKind.CENTER, GalleryKind.CENTER),
            (LocationKind.SATSANG, GalleryKind.SATSANG),
        ):
            found = next((r for r in matches if r.location_type is kind), None)
            if found is not None:
                return LocationLookup(
                    location=found,
                    photo_gallery=self._galleries.load(found.location_id, gallery),
                )

        if matches:
            logger.info(
                "Slug %s matched only %s entries", normalized, matches[0].location_type.value
            )
        return LocationLookup.not_found(normalized)

    def resolve_event(self, store: LocationStore, slug: Optional[str]) -> LocationLookup:
        """Resolve an event page: in-person events first, then online events."""
        normalized = normalize_slug(slug)
        if not normalized:
            return LocationLookup.not_found(normalized)
        for kind in (LocationKind.EVENT, LocationKind.ONLINE_EVENT):
            matches = store.by_slug(normalized, [kind])
            if matches:
                return LocationLookup(location=matches[0])
        return LocationLookup.not_found(normalized)

    def resolve_master_event(self, store: LocationStore, slug: Optional[str]) -> LocationLookup:
        normalized = normalize_slug(slug)
        if not normalized:
            return LocationLookup.not_found(normalized)
        matches = store.by_slug(normalized, [LocationKind.MASTER_EVENT])
        if matches:
            return LocationLookup(location=matches[0])
        return LocationLookup.not_found(normalized)

    def resolve_anchor(self, store: LocationStore, slug: Optional[str]) -> Optional[LocationRecord]:
        """
        Resolve the location an event search is centred on.

        Non-event entries are preferred; if none carries the slug, any kind is
        accepted.
        """
        normalized = normalize_slug(slug)
        if not normalized:
            return None
        matches = store.by_slug(normalized, NON_EVENT_KINDS) or store.by_slug(normalized, None)
        return matches[0] if matches else None


url_resolver_service = UrlResolverService(gallery_service)
