from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from mediacatalog.core.config import settings
from mediacatalog.ingestion.errors import DecodeError, TransportError

logger = logging.getLogger("mediacatalog.ingestion")

_RETRY_WAIT = wait_exponential_jitter(initial=1, max=8)


class _ServerError(Exception):
    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"Server error {response.status_code}")
        self.response = response


def build_client(
    base_url: str,
    headers: dict[str, str],
    *,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Return an async client with static headers attached once."""
    return httpx.AsyncClient(
        base_url=base_url,
        headers={"accept": "application/json", **headers},
        timeout=timeout if timeout is not None else settings.http_timeout_seconds,
        transport=transport,
    )


def _log_retry(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    error = outcome.exception() if outcome is not None else None
    payload = {
        "event": "transport_retry",
        "attempt": retry_state.attempt_number,
        "error": str(error) if error else None,
    }
    logger.warning(json.dumps(payload))


async def get_json(
    client: httpx.AsyncClient,
    path: str,
    *,
    params: dict[str, Any] | None = None,
    max_attempts: int | None = None,
    source: str | None = None,
    operation: str | None = None,
    context: dict[str, Any] | None = None,
) -> Any:
    """GET ``path`` and decode the JSON body.

    Connection errors and 5xx responses are retried; 4xx responses are not.
    """
    error_kwargs: dict[str, Any] = {"source": source, "operation": operation, "context": context}
    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max_attempts or settings.http_max_attempts),
            wait=_RETRY_WAIT,
            retry=retry_if_exception_type((httpx.TransportError, _ServerError)),
            before_sleep=_log_retry,
            reraise=True,
        ):
            with attempt:
                response = await client.get(path, params=params)
                if response.status_code >= 500:
                    raise _ServerError(response)
    except _ServerError as exc:
        raise TransportError(
            str(exc), status_code=exc.response.status_code, **error_kwargs
        ) from exc
    except httpx.HTTPError as exc:
        raise TransportError(str(exc) or exc.__class__.__name__, **error_kwargs) from exc

    if response.is_error:
        raise TransportError(
            f"Upstream returned HTTP {response.status_code}",
            status_code=response.status_code,
            **error_kwargs,
        )
    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError("Response body is not valid JSON", **error_kwargs) from exc
