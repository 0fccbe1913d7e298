"""Canonical media record invariants."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mediacatalog.models.media import MediaLot, MediaSource
from mediacatalog.schema.media import (
    ComicSpecifics,
    MediaDetails,
    MetadataSearchItem,
    SearchDetails,
    SearchResults,
    StudiesSpecifics,
)


def test_studies_record_rejects_comic_specifics() -> None:
    with pytest.raises(ValidationError):
        MediaDetails(
            identifier="1",
            title="Steel",
            source=MediaSource.MAL,
            lot=MediaLot.STUDIES,
            comic_specifics=ComicSpecifics(chapters=1, volumes=1),
        )


def test_comic_record_rejects_studies_specifics() -> None:
    with pytest.raises(ValidationError):
        MediaDetails(
            identifier="1",
            title="Steel",
            source=MediaSource.MAL,
            lot=MediaLot.COMIC,
            studies_specifics=StudiesSpecifics(episodes=12),
        )


def test_records_are_immutable() -> None:
    item = MetadataSearchItem(identifier="1", title="Steel")

    with pytest.raises(ValidationError):
        item.title = "Iron"  # type: ignore[misc]


def test_media_details_defaults_and_json_dump() -> None:
    details = MediaDetails(identifier="1", title="Steel", source=MediaSource.MAL, lot=MediaLot.STUDIES)

    dumped = details.model_dump(mode="json")

    assert dumped["trackers"] == []
    assert dumped["suggestions"] == []
    assert dumped["is_nsfw"] is None
    assert dumped["lot"] == "studies"
    assert dumped["source"] == "mal"


def test_search_results_are_generic_over_items() -> None:
    results = SearchResults[MetadataSearchItem](
        items=[{"identifier": "1", "title": "Steel", "publish_year": 2021}],
        details=SearchDetails(total=100, next_page=None),
    )

    assert isinstance(results.items[0], MetadataSearchItem)
    assert results.items[0].publish_year == 2021
