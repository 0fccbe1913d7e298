"""Canonical media records produced by metadata providers."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mediacatalog.models.media import MediaLot, MediaSource, MetadataImageLot

T = TypeVar("T")


class FrozenModel(BaseModel):
    """Base model for immutable, source-owned records."""

    model_config = ConfigDict(frozen=True)


class MetadataSearchItem(FrozenModel):
    """Single hit returned by a provider search."""
    identifier: str
    title: str
    publish_year: int | None = None
    image: str | None = None


class SearchDetails(FrozenModel):
    """Paging information for a search response.

    ``total`` may be an upper-bound placeholder when the upstream does not
    report a real count; treat it as advisory.
    """
    total: int
    next_page: int | None = None


class SearchResults(FrozenModel, Generic[T]):
    """Search response wrapper shared by all providers."""
    items: list[T] = Field(default_factory=list)
    details: SearchDetails


class MetadataImage(FrozenModel):
    image: str
    lot: MetadataImageLot


class PartialMetadataWithoutId(FrozenModel):
    """Lightweight cross-reference used for related and recommended items."""
    identifier: str
    title: str
    image: str | None = None
    source: MediaSource
    lot: MediaLot


class StudiesSpecifics(FrozenModel):
    episodes: int | None = None


class ComicSpecifics(FrozenModel):
    chapters: int | None = None
    volumes: int | None = None
    url: str | None = None


class MediaDetails(FrozenModel):
    """Canonical record for one catalog entry.

    Invariants:
    - Only the specifics variant matching ``lot`` may be populated.
    """
    identifier: str
    title: str
    source: MediaSource
    description: str | None = None
    lot: MediaLot
    is_nsfw: bool | None = None
    production_status: str | None = None
    trackers: list[str] = Field(default_factory=list)
    url_images: list[MetadataImage] = Field(default_factory=list)
    publish_year: int | None = None
    publish_date: date | None = None
    suggestions: list[PartialMetadataWithoutId] = Field(default_factory=list)
    provider_rating: Decimal | None = None
    studies_specifics: StudiesSpecifics | None = None
    comic_specifics: ComicSpecifics | None = None

    @model_validator(mode="after")
    def _validate_specifics_match_lot(self) -> "MediaDetails":
        if self.lot is MediaLot.STUDIES and self.comic_specifics is not None:
            raise ValueError("comic_specifics is not allowed on a studies record")
        if self.lot is MediaLot.COMIC and self.studies_specifics is not None:
            raise ValueError("studies_specifics is not allowed on a comic record")
        return self
