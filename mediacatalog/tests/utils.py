"""Shared helpers for provider tests."""

from __future__ import annotations

from collections import deque
from typing import Any

import httpx

BASE_URL = "https://api.test/v2/"


class StubUpstream:
    """Queue canned upstream responses and record the requests that consume them."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: deque[httpx.Response | Exception] = deque()

    def queue(self, *, status: int = 200, json_data: Any | None = None, content: bytes | None = None) -> None:
        if content is not None:
            self._responses.append(httpx.Response(status_code=status, content=content))
        else:
            self._responses.append(httpx.Response(status_code=status, json=json_data if json_data is not None else {}))

    def queue_error(self, error: Exception) -> None:
        self._responses.append(error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise RuntimeError("No stub responses configured")
        response = self._responses.popleft()
        if isinstance(response, Exception):
            raise response
        return response

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(self.handler))


def search_node(identifier: int, title: str, *, start_date: str | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {
        "id": identifier,
        "title": title,
        "main_picture": {"large": f"https://img.test/{identifier}l.jpg"},
    }
    if start_date is not None:
        node["start_date"] = start_date
    return {"node": node}
