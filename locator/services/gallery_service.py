"""
Photo gallery lookup for centers and satsangs.

Galleries live on disk under ``LOCATOR_MEDIA_BASE_PATH/<gallery kind>/``;
a location with its own folder uses it, everyone else gets the stock photos.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

from locator.core.config import settings

logger = logging.getLogger(__name__)

STOCK_FOLDER = "StockPhotos"
PHOTO_SUFFIX = ".jpg"


class GalleryKind(str, Enum):
    CENTER = "CenterGallery"
    SATSANG = "SatsangGallery"


class GalleryService:
    """Lists photo links for a location's gallery."""

    def __init__(self, base_path: Optional[str] = None, link_prefix: Optional[str] = None):
        self._base_path = Path(base_path or settings.LOCATOR_MEDIA_BASE_PATH)
        self._link_prefix = link_prefix or settings.LOCATOR_MEDIA_BASE_LINK_PREFIX

    def load(self, location_id: int, kind: GalleryKind) -> List[str]:
        """
        Photo links for a location.

        Args:
            location_id: Catalog identifier of the center or satsang
            kind: Which gallery tree to look in

        Returns:
            Links to every .jpg in the location's folder, or in the stock folder
            when the location has none. Empty if the folder cannot be read.
        """
        folder_name = str(location_id)
        folder = self._base_path / kind.value / folder_name
        if not folder.is_dir():
            folder_name = STOCK_FOLDER
            folder = self._base_path / kind.value / STOCK_FOLDER

        try:
            files = sorted(
                entry.name
                for entry in folder.iterdir()
                if entry.is_file() and entry.name.lower().endswith(PHOTO_SUFFIX)
            )
        except OSError as e:
            logger.warning("Could not read gallery folder %s: %s", folder, str(e))
            return []

        prefix = f"{self._link_prefix}{kind.value}/{folder_name}/"
        return [prefix + name for name in files]


gallery_service = GalleryService()
