"""Shared fixtures: a scripted fake of the remote API on `httpx.MockTransport`."""

from __future__ import annotations

from typing import Any, Iterator

import httpx
import pytest

from adapters.connection import Session, open_session
from core.config import AppSettings

BASE_URL = "https://graph.test/v1.0"

STORE_PATH = "sites/root/termStore"
GROUP_ID = "11111111-1111-1111-1111-111111111111"
SET_ID = "22222222-2222-2222-2222-222222222222"
SET_PATH = f"{STORE_PATH}/groups/{GROUP_ID}/sets/{SET_ID}"


class FakeGraph:
    """Routes requests by path to queued responses and records every request.

    A queue with several responses is consumed in order; its last response
    keeps answering. Unknown paths answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[str, list[tuple[int, Any, dict[str, str]]]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, payload: Any = None, *, status: int = 200, headers: dict[str, str] | None = None) -> None:
        self.routes.setdefault(path, []).append((status, payload, headers or {}))

    def collection(self, path: str, items: list[dict[str, Any]]) -> None:
        self.add(path, {"value": items})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1.0/")
        queue = self.routes.get(path)
        if not queue:
            return httpx.Response(404, json={"error": {"code": "itemNotFound", "message": "Item not found"}})
        status, payload, headers = queue.pop(0) if len(queue) > 1 else queue[0]
        if payload is None:
            return httpx.Response(status, headers=headers)
        return httpx.Response(status, json=payload, headers=headers)

    @property
    def paths(self) -> list[str]:
        return [r.url.path.removeprefix("/v1.0/") for r in self.requests]

    def params_for(self, path: str) -> list[httpx.QueryParams]:
        return [r.url.params for r in self.requests if r.url.path.removeprefix("/v1.0/") == path]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        graph_base_url=BASE_URL,
        access_token="test-token",
        site_id="root",
        max_retries=2,
        retry_backoff_seconds=0.0,
        page_size=50,
    )


@pytest.fixture
def graph() -> FakeGraph:
    return FakeGraph()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def session(settings: AppSettings, graph: FakeGraph, sleeps: list[float]) -> Iterator[Session]:
    with open_session(settings, transport=httpx.MockTransport(graph.handler), sleep=sleeps.append) as s:
        yield s


def label(name: str, *, default: bool = True) -> dict[str, Any]:
    return {"name": name, "languageTag": "en-US", "isDefault": default}


def term(term_id: str, name: str, **extra: Any) -> dict[str, Any]:
    return {"id": term_id, "labels": [label(name)], **extra}


@pytest.fixture
def taxonomy(graph: FakeGraph) -> FakeGraph:
    """Default store with group "Corporate" and set "Departments"."""

    graph.add(STORE_PATH, {"id": "store-1", "defaultLanguageTag": "en-US", "languageTags": ["en-US"]})
    graph.collection(
        f"{STORE_PATH}/groups",
        [
            {"id": "99999999-0000-0000-0000-000000000000", "displayName": "People"},
            {"id": GROUP_ID, "displayName": "Corporate", "scope": "global"},
        ],
    )
    graph.add(f"{STORE_PATH}/groups/{GROUP_ID}", {"id": GROUP_ID, "displayName": "Corporate"})
    graph.collection(
        f"{STORE_PATH}/groups/{GROUP_ID}/sets",
        [{"id": SET_ID, "localizedNames": [{"name": "Departments", "languageTag": "en-US"}]}],
    )
    graph.add(SET_PATH, {"id": SET_ID, "localizedNames": [{"name": "Departments", "languageTag": "en-US"}]})
    return graph
