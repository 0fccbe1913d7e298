"""Base provider primitives for external metadata catalogs."""

from __future__ import annotations

from typing import Any

from mediacatalog.ingestion.errors import UnsupportedOperationError
from mediacatalog.models.media import MediaSource
from mediacatalog.schema.media import MediaDetails, MetadataSearchItem, SearchResults


class MediaProvider:
    """Provider interface every metadata source implements.

    The default operations raise ``UnsupportedOperationError`` so sources that
    only offer auxiliary data can satisfy the contract without a catalog.
    """
    source: MediaSource

    @classmethod
    def supported_languages(cls) -> list[str]:
        """Locales the provider can localize requests for."""
        raise NotImplementedError

    @classmethod
    def default_language(cls) -> str:
        raise NotImplementedError

    async def search(
        self,
        query: str,
        page: int | None = None,
        show_adult_content: bool = False,
    ) -> SearchResults[MetadataSearchItem]:
        """Search the catalog and return normalized hits."""
        raise UnsupportedOperationError(
            "Catalog search is not supported",
            source=self.source.value,
            operation="search",
            context={"query": query},
        )

    async def fetch_details(self, identifier: str) -> MediaDetails:
        """Fetch one catalog entry by provider identifier."""
        raise UnsupportedOperationError(
            "Catalog details are not supported",
            source=self.source.value,
            operation="details",
            context={"identifier": identifier},
        )

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
        return None

    async def __aenter__(self) -> "MediaProvider":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
