"""Shared pytest fixtures for provider tests."""

from __future__ import annotations

import pytest
from tenacity import wait_none

from mediacatalog.ingestion import http as http_module
from mediacatalog.tests.utils import StubUpstream


@pytest.fixture(autouse=True)
def _skip_retry_sleeps(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(http_module, "_RETRY_WAIT", wait_none())


@pytest.fixture()
def upstream() -> StubUpstream:
    return StubUpstream()
