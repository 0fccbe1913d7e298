"""Media catalog enums shared by providers and canonical records."""

from __future__ import annotations

import enum


class MediaLot(str, enum.Enum):
    """Media kinds tracked by the catalog."""
    STUDIES = "studies"
    COMIC = "comic"


class MediaSource(str, enum.Enum):
    """External catalogs that metadata can be fetched from."""
    MAL = "mal"


class MetadataImageLot(str, enum.Enum):
    """Roles an image can play on a media detail page."""
    POSTER = "poster"
    BACKDROP = "backdrop"
