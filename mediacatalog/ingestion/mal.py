"""MyStudiesList providers for the episodic and print catalogs.

Both catalogs share one JSON node shape, so a single set of fetch and
normalize functions serves them, parameterized by the catalog namespace.
"""

from __future__ import annotations

import json
import logging
import random
import time
from typing import Any, Awaitable, Callable, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from mediacatalog.core.config import settings
from mediacatalog.ingestion.base import MediaProvider
from mediacatalog.ingestion.errors import (
    DecodeError,
    InvariantViolation,
    MissingCredentialsError,
    ProviderError,
)
from mediacatalog.ingestion.http import build_client, get_json
from mediacatalog.ingestion.mal_schema import ItemData, ItemNode, SearchResponse
from mediacatalog.models.media import MediaLot, MediaSource, MetadataImageLot
from mediacatalog.schema.media import (
    ComicSpecifics,
    MediaDetails,
    MetadataImage,
    MetadataSearchItem,
    PartialMetadataWithoutId,
    SearchDetails,
    SearchResults,
    StudiesSpecifics,
)
from mediacatalog.utils.datetime import parse_date, parse_year

logger = logging.getLogger("mediacatalog.ingestion")

CLIENT_ID_HEADER = "X-MAL-CLIENT-ID"
SEARCH_FIELDS = "start_date"
DETAIL_FIELDS = (
    "start_date,end_date,synopsis,trackers,status,num_episodes,num_volumes,num_chapters,"
    "recommendations,related_comic,related_studies,mean,nsfw"
)
# The search payload carries no result count; this is an upper bound, not a total.
SEARCH_TOTAL_PLACEHOLDER = 100
SFW_RATING = "white"

_NAMESPACE_LOTS: dict[str, MediaLot] = {
    "studies": MediaLot.STUDIES,
    "comic": MediaLot.COMIC,
}

ModelT = TypeVar("ModelT", bound=BaseModel)
ResultT = TypeVar("ResultT")


def lot_for_namespace(namespace: str) -> MediaLot:
    """Map a catalog namespace to its media lot."""
    try:
        return _NAMESPACE_LOTS[namespace]
    except KeyError as exc:
        raise InvariantViolation(f"Unknown MAL namespace {namespace!r}") from exc


def _decode(model: type[ModelT], payload: Any, *, operation: str, context: dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(
            f"Unexpected {model.__name__} payload: {exc.error_count()} validation error(s)",
            source=MediaSource.MAL.value,
            operation=operation,
            context=context,
        ) from exc


def normalize_search(response: SearchResponse, page: int) -> SearchResults[MetadataSearchItem]:
    """Map a decoded search page into canonical search results."""
    items = [
        MetadataSearchItem(
            identifier=str(entry.node.id),
            title=entry.node.title,
            publish_year=parse_year(entry.node.start_date),
            image=entry.node.large_image,
        )
        for entry in response.data
    ]
    has_next = bool(items) and response.paging is not None and response.paging.next is not None
    return SearchResults[MetadataSearchItem](
        items=items,
        details=SearchDetails(
            total=SEARCH_TOTAL_PLACEHOLDER,
            next_page=page + 1 if has_next else None,
        ),
    )


def _suggestions(entries: list[ItemData] | None, lot: MediaLot) -> list[PartialMetadataWithoutId]:
    return [
        PartialMetadataWithoutId(
            identifier=str(entry.node.id),
            title=entry.node.title,
            image=entry.node.large_image,
            source=MediaSource.MAL,
            lot=lot,
        )
        for entry in entries or []
    ]


def normalize_details(
    node: ItemNode,
    namespace: str,
    rng: random.Random | None = None,
) -> MediaDetails:
    """Map a decoded detail node into a canonical media record.

    Implementation notes:
    - Comic specifics need both chapter and volume counts.
    - Related entries and recommendations are merged into one shuffled list;
      recommendations inherit the node's own lot.
    - ``is_nsfw`` stays ``None`` when the upstream omits the rating.
    """
    lot = lot_for_namespace(namespace)

    studies_specifics = None
    comic_specifics = None
    if lot is MediaLot.STUDIES and node.num_episodes is not None:
        studies_specifics = StudiesSpecifics(episodes=node.num_episodes)
    if lot is MediaLot.COMIC and node.num_chapters is not None and node.num_volumes is not None:
        comic_specifics = ComicSpecifics(chapters=node.num_chapters, volumes=node.num_volumes)

    suggestions = [
        *_suggestions(node.related_studies, MediaLot.STUDIES),
        *_suggestions(node.related_comic, MediaLot.COMIC),
        *_suggestions(node.recommendations, lot),
    ]
    (rng or random).shuffle(suggestions)

    image = node.large_image
    return MediaDetails(
        identifier=str(node.id),
        title=node.title,
        source=MediaSource.MAL,
        description=node.synopsis,
        lot=lot,
        is_nsfw=None if node.nsfw is None else node.nsfw != SFW_RATING,
        production_status=node.status,
        trackers=[tracker.name for tracker in node.trackers or []],
        url_images=[MetadataImage(image=image, lot=MetadataImageLot.POSTER)] if image else [],
        publish_year=parse_year(node.start_date),
        publish_date=parse_date(node.start_date),
        suggestions=suggestions,
        provider_rating=node.mean,
        studies_specifics=studies_specifics,
        comic_specifics=comic_specifics,
    )


async def search_catalog(
    client: httpx.AsyncClient,
    namespace: str,
    query: str,
    page: int | None,
    limit: int,
) -> SearchResults[MetadataSearchItem]:
    """Fetch one page of catalog search results."""
    page = page if page is not None else 1
    context = {"namespace": namespace, "query": query, "page": page}
    payload = await get_json(
        client,
        namespace,
        params={"q": query, "limit": limit, "offset": (page - 1) * limit, "fields": SEARCH_FIELDS},
        source=MediaSource.MAL.value,
        operation="search",
        context=context,
    )
    response = _decode(SearchResponse, payload, operation="search", context=context)
    return normalize_search(response, page)


async def fetch_catalog_details(
    client: httpx.AsyncClient,
    namespace: str,
    identifier: str,
    rng: random.Random | None = None,
) -> MediaDetails:
    """Fetch and normalize a single catalog entry."""
    lot_for_namespace(namespace)
    identifier = identifier.strip()
    context = {"namespace": namespace, "identifier": identifier}
    payload = await get_json(
        client,
        f"{namespace}/{quote(identifier, safe='')}",
        params={"fields": DETAIL_FIELDS},
        source=MediaSource.MAL.value,
        operation="details",
        context=context,
    )
    node = _decode(ItemNode, payload, operation="details", context=context)
    return normalize_details(node, namespace, rng)


class MalService(MediaProvider):
    """Shared MAL locale declarations."""
    source = MediaSource.MAL

    @classmethod
    def supported_languages(cls) -> list[str]:
        return ["us"]

    @classmethod
    def default_language(cls) -> str:
        return "us"


class NonMediaMalProvider(MalService):
    """MAL provider for auxiliary lookups; catalog operations are unsupported."""


class MalCatalogProvider(MalService):
    """MAL catalog provider bound to one namespace.

    The client, page limit, and randomness source are fixed at construction
    and never mutated, so one instance can serve concurrent callers.
    """
    namespace: str

    def __init__(
        self,
        client_id: str | None = None,
        page_limit: int | None = None,
        *,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        rng: random.Random | None = None,
    ) -> None:
        client_id = client_id or settings.mal_client_id
        if not client_id:
            raise MissingCredentialsError(
                "MAL client id missing; set MAL_CLIENT_ID",
                source=self.source.value,
                operation="init",
            )
        limit = page_limit if page_limit is not None else settings.mal_page_limit
        if limit < 1:
            raise ValueError("page_limit must be at least 1")
        self._page_limit = limit
        self._lot = lot_for_namespace(self.namespace)
        self._rng = rng or random.Random()
        self._owns_client = client is None
        if client is None:
            client = build_client(base_url or settings.mal_base_url, {CLIENT_ID_HEADER: client_id})
        else:
            client.headers[CLIENT_ID_HEADER] = client_id
        self._client = client

    @property
    def page_limit(self) -> int:
        return self._page_limit

    @property
    def lot(self) -> MediaLot:
        return self._lot

    async def _tracked(
        self,
        operation: str,
        func: Callable[[], Awaitable[ResultT]],
        *,
        context: dict[str, Any],
    ) -> ResultT:
        """Run an operation and emit one structured log line for its outcome."""
        start = time.monotonic()
        payload: dict[str, Any] = {
            "source": self.source.value,
            "operation": operation,
            "namespace": self.namespace,
            "context": context,
        }
        try:
            result = await func()
        except ProviderError as exc:
            payload["event"] = "provider_failure"
            payload["error"] = str(exc)
            payload["latency_ms"] = round((time.monotonic() - start) * 1000, 2)
            logger.warning(json.dumps(payload))
            raise
        payload["event"] = "provider_success"
        payload["latency_ms"] = round((time.monotonic() - start) * 1000, 2)
        logger.info(json.dumps(payload))
        return result

    async def search(
        self,
        query: str,
        page: int | None = None,
        show_adult_content: bool = False,
    ) -> SearchResults[MetadataSearchItem]:
        # MAL search has no adult filter; the flag is accepted for contract parity.
        return await self._tracked(
            "search",
            lambda: search_catalog(self._client, self.namespace, query, page, self._page_limit),
            context={"query": query, "page": page},
        )

    async def fetch_details(self, identifier: str) -> MediaDetails:
        return await self._tracked(
            "details",
            lambda: fetch_catalog_details(self._client, self.namespace, identifier, self._rng),
            context={"identifier": identifier},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class MalStudiesProvider(MalCatalogProvider):
    namespace = "studies"


class MalComicProvider(MalCatalogProvider):
    namespace = "comic"
