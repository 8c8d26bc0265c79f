"""Retry, paging and error mapping of the remote client."""

import httpx
import pytest

from adapters.graph_client import GraphClient
from adapters.http_client import build_client
from core.domain.errors import RemoteServiceError

from conftest import BASE_URL


def test_bearer_token_and_user_agent_are_sent(session, graph):
    graph.add("me", {"id": "me"})
    session.client.get_json("me")
    request = graph.requests[0]
    assert request.headers["Authorization"] == "Bearer test-token"
    assert request.headers["User-Agent"] == "collabkit/0.1"


def test_throttled_request_is_retried_honoring_retry_after(session, graph, sleeps):
    graph.add("groups/x", {"error": {"code": "TooManyRequests"}}, status=429, headers={"Retry-After": "7"})
    graph.add("groups/x", {"id": "x"})

    assert session.client.get_json("groups/x") == {"id": "x"}
    assert graph.paths == ["groups/x", "groups/x"]
    assert sleeps == [7.0]


def test_retry_budget_is_bounded(session, graph, sleeps):
    graph.add("groups/x", {"error": {"code": "serviceNotAvailable", "message": "Busy"}}, status=503)

    with pytest.raises(RemoteServiceError) as excinfo:
        session.client.get_json("groups/x")

    # max_retries=2 -> three attempts, two waits
    assert len(graph.requests) == 3
    assert len(sleeps) == 2
    assert excinfo.value.status_code == 503
    assert excinfo.value.code == "serviceNotAvailable"
    assert "Busy" in str(excinfo.value)


def test_client_errors_are_not_retried(session, graph, sleeps):
    graph.add("groups/x", {"error": {"code": "Authorization_RequestDenied", "message": "Denied"}}, status=403)

    with pytest.raises(RemoteServiceError) as excinfo:
        session.client.get_json("groups/x")

    assert len(graph.requests) == 1
    assert sleeps == []
    assert excinfo.value.status_code == 403


def test_not_found_is_none_for_lookups(session, graph):
    assert session.client.get_json_or_none("groups/missing") is None


def test_transport_errors_are_retried_then_raised(settings):
    attempts = []

    def handler(request):
        attempts.append(request)
        raise httpx.ConnectError("boom", request=request)

    http = build_client(settings, transport=httpx.MockTransport(handler))
    client = GraphClient(http, settings, sleep=lambda _: None)
    with pytest.raises(RemoteServiceError):
        client.get_json("groups")
    assert len(attempts) == settings.max_retries + 1


def test_collections_follow_next_link(session, graph):
    graph.add(
        "groups/g/owners",
        {"value": [{"id": "a"}, {"id": "b"}], "@odata.nextLink": f"{BASE_URL}/groups/g/owners?$skiptoken=abc"},
    )
    graph.add("groups/g/owners", {"value": [{"id": "c"}]})

    items = list(session.client.iter_collection("groups/g/owners", params={"$top": 2}))

    assert [i["id"] for i in items] == ["a", "b", "c"]
    first, second = graph.requests
    assert first.url.params["$top"] == "2"
    assert second.url.params["$skiptoken"] == "abc"
