"""Tests for the AniList search backend using an in-memory transport."""

from __future__ import annotations

import json

import httpx
import pytest

from facetfeed.domain.models.query import RemoteQuery
from facetfeed.errors import RemoteSearchError
from facetfeed.infrastructure.anilist import AniListSearchBackend

ENDPOINT = "https://anilist.test/graphql"


def _backend(handler) -> AniListSearchBackend:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return AniListSearchBackend(client, endpoint=ENDPOINT)


def _page(media, has_next):
    return {"data": {"Page": {"media": media, "pageInfo": {"hasNextPage": has_next}}}}


def test_search_posts_query_and_unwraps_page():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_page([{"id": 1}, {"id": 2}], True))

    backend = _backend(handler)
    result = backend.search(RemoteQuery(page=2, per_page=20, search="eva", genre=["Mecha"]))

    assert result.items == [{"id": 1}, {"id": 2}]
    assert result.has_more is True
    assert seen["url"] == ENDPOINT
    assert "Page(page: $page, perPage: $perPage)" in seen["body"]["query"]
    assert seen["body"]["variables"] == {
        "page": 2,
        "perPage": 20,
        "search": "eva",
        "genre": ["Mecha"],
        "sort": ["SEARCH_MATCH"],
    }


def test_null_has_next_page_means_no_more():
    backend = _backend(lambda request: httpx.Response(200, json=_page([], None)))

    assert backend.search(RemoteQuery()).has_more is False


def test_graphql_errors_raise_with_status():
    payload = {"errors": [{"message": "Too Many Requests.", "status": 429}], "data": None}
    backend = _backend(lambda request: httpx.Response(429, json=payload))

    with pytest.raises(RemoteSearchError) as excinfo:
        backend.search(RemoteQuery())

    assert str(excinfo.value) == "Too Many Requests."
    assert excinfo.value.status_code == 429


def test_error_object_raises():
    backend = _backend(lambda request: httpx.Response(200, json={"error": {"message": "nope"}}))

    with pytest.raises(RemoteSearchError, match="nope"):
        backend.search(RemoteQuery())


def test_http_error_without_payload_error():
    backend = _backend(lambda request: httpx.Response(500, json={}))

    with pytest.raises(RemoteSearchError) as excinfo:
        backend.search(RemoteQuery())

    assert excinfo.value.status_code == 500


def test_non_json_response_raises():
    backend = _backend(lambda request: httpx.Response(502, text="<html>bad gateway</html>"))

    with pytest.raises(RemoteSearchError, match="not JSON"):
        backend.search(RemoteQuery())


def test_malformed_page_raises():
    payload = {"data": {"Page": {"media": "oops", "pageInfo": {"hasNextPage": True}}}}
    backend = _backend(lambda request: httpx.Response(200, json=payload))

    with pytest.raises(RemoteSearchError, match="Malformed"):
        backend.search(RemoteQuery())


def test_transport_failure_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    backend = _backend(handler)

    with pytest.raises(RemoteSearchError) as excinfo:
        backend.search(RemoteQuery())

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_injected_client_is_not_closed():
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    with AniListSearchBackend(client, endpoint=ENDPOINT):
        pass

    assert client.is_closed is False
    client.close()
