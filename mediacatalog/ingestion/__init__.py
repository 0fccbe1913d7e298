"""Provider registry for metadata sources."""

from __future__ import annotations

from typing import Dict

from mediacatalog.ingestion.base import MediaProvider
from mediacatalog.ingestion.mal import MalComicProvider, MalStudiesProvider, NonMediaMalProvider
from mediacatalog.models.media import MediaLot, MediaSource

_PROVIDERS: Dict[tuple[MediaSource, MediaLot | None], MediaProvider] = {}


def get_provider(source: MediaSource | str, lot: MediaLot | str | None = None) -> MediaProvider:
    """Return a provider instance for the given source and media lot."""
    try:
        key = (MediaSource(source), MediaLot(lot) if lot is not None else None)
    except ValueError as exc:
        raise ValueError(f"Unsupported source {source} / lot {lot}") from exc
    if key not in _PROVIDERS:
        if key == (MediaSource.MAL, MediaLot.STUDIES):
            _PROVIDERS[key] = MalStudiesProvider()
        elif key == (MediaSource.MAL, MediaLot.COMIC):
            _PROVIDERS[key] = MalComicProvider()
        elif key == (MediaSource.MAL, None):
            _PROVIDERS[key] = NonMediaMalProvider()
        else:
            raise ValueError(f"Unsupported source {source} / lot {lot}")
    return _PROVIDERS[key]


async def close_providers() -> None:
    """Close and forget every cached provider."""
    providers = list(_PROVIDERS.values())
    _PROVIDERS.clear()
    for provider in providers:
        await provider.aclose()
