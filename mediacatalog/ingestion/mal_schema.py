"""Raw MAL payload shapes validated before normalization."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class RawModel(BaseModel):
    """Lenient base: unknown upstream keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class ItemImage(RawModel):
    large: str


class NamedObject(RawModel):
    name: str


class ItemNode(RawModel):
    """A catalog node as returned by the list and detail endpoints."""

    id: int
    title: str
    main_picture: ItemImage | None = None
    nsfw: str | None = None
    synopsis: str | None = None
    trackers: list[NamedObject] | None = None
    start_date: str | None = None
    mean: Decimal | None = None
    status: str | None = None
    num_episodes: int | None = None
    num_chapters: int | None = None
    num_volumes: int | None = None
    related_studies: list["ItemData"] | None = None
    related_comic: list["ItemData"] | None = None
    recommendations: list["ItemData"] | None = None

    @property
    def large_image(self) -> str | None:
        return self.main_picture.large if self.main_picture else None


class ItemData(RawModel):
    node: ItemNode


class SearchPaging(RawModel):
    next: str | None = None


class SearchResponse(RawModel):
    data: list[ItemData]
    paging: SearchPaging | None = None


ItemNode.model_rebuild()
