"""Command-line lookup script tests."""

from __future__ import annotations

import json

import pytest

from mediacatalog.ingestion.base import MediaProvider
from mediacatalog.ingestion.errors import TransportError
from mediacatalog.models.media import MediaLot, MediaSource
from mediacatalog.schema.media import MediaDetails, MetadataSearchItem, SearchDetails, SearchResults
from mediacatalog.scripts import lookup


class StubProvider(MediaProvider):
    source = MediaSource.MAL

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple] = []

    async def search(self, query, page=None, show_adult_content=False):
        self.calls.append(("search", query, page, show_adult_content))
        if self.fail:
            raise TransportError("Upstream returned HTTP 503", status_code=503, source="mal", operation="search")
        return SearchResults[MetadataSearchItem](
            items=[MetadataSearchItem(identifier="1", title="Steel", publish_year=2021)],
            details=SearchDetails(total=100, next_page=2),
        )

    async def fetch_details(self, identifier):
        self.calls.append(("details", identifier))
        return MediaDetails(identifier=identifier, title="Steel", source=MediaSource.MAL, lot=MediaLot.COMIC)


@pytest.fixture()
def stub_provider(monkeypatch: pytest.MonkeyPatch) -> StubProvider:
    provider = StubProvider()
    requested: list[tuple] = []

    def _get_provider(source, lot=None):
        requested.append((source, lot))
        return provider

    monkeypatch.setattr(lookup, "get_provider", _get_provider)
    monkeypatch.setattr(lookup, "configure_logging", lambda level=None: None)
    provider.requested = requested  # type: ignore[attr-defined]
    return provider


def test_lookup_search_prints_results(stub_provider: StubProvider, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = lookup.main(["search", "studies", "steel", "--page", "2", "--adult"])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["items"][0]["title"] == "Steel"
    assert output["details"]["next_page"] == 2
    assert stub_provider.calls == [("search", "steel", 2, True)]
    assert stub_provider.requested == [(MediaSource.MAL, MediaLot.STUDIES)]  # type: ignore[attr-defined]


def test_lookup_details_prints_record(stub_provider: StubProvider, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = lookup.main(["details", "comic", "25"])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["identifier"] == "25"
    assert output["lot"] == "comic"


def test_lookup_reports_provider_errors(stub_provider: StubProvider, capsys: pytest.CaptureFixture[str]) -> None:
    stub_provider.fail = True

    exit_code = lookup.main(["search", "studies", "steel"])

    assert exit_code == 1
    assert "HTTP 503" in capsys.readouterr().err


def test_lookup_rejects_unknown_lot() -> None:
    with pytest.raises(SystemExit) as excinfo:
        lookup.main(["search", "podcast", "steel"])

    assert excinfo.value.code == 2
