"""Tests for switchyard.http.request — immutable request with async body."""

import pytest

from switchyard.http.headers import Headers
from switchyard.http.query import QueryParams
from switchyard.http.request import Request


def _receiver(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]

    async def receive() -> dict:
        return messages.pop(0)

    return receive


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        scope = {
            "type": "http",
            "method": "POST",
            "path": "/users/",
            "headers": [(b"content-type", b"application/json")],
            "query_string": b"page=2",
            "http_version": "2",
            "server": ("example.com", 443),
            "client": ("10.0.0.1", 51234),
        }
        request = Request.from_asgi(scope, _receiver(b""))
        assert request.method == "POST"
        assert request.path == "/users/"
        assert request.content_type == "application/json"
        assert request.query.get("page") == "2"
        assert request.http_version == "2"
        assert request.server == ("example.com", 443)
        assert request.client_host == "10.0.0.1"
        assert request.path_params == {}

    def test_missing_optional_fields(self) -> None:
        request = Request.from_asgi({"type": "http", "method": "GET", "path": "/"}, _receiver(b""))
        assert request.client is None
        assert request.client_host is None
        assert request.url == "/"

    def test_url_includes_query(self) -> None:
        request = Request(method="GET", path="/search", query=QueryParams(b"q=x&page=1"))
        assert request.url == "/search?q=x&page=1"


class TestRequestImmutability:
    def test_frozen(self) -> None:
        request = Request(method="GET", path="/")
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]

    def test_with_path_params_returns_copy(self) -> None:
        request = Request(method="GET", path="/users/1", headers=Headers.from_dict({"X-A": "1"}))
        bound = request.with_path_params({"id": "1"})
        assert bound.path_params == {"id": "1"}
        assert request.path_params == {}
        assert bound.headers.get("x-a") == "1"


class TestRequestBody:
    async def test_body_joins_chunks(self) -> None:
        request = Request(method="POST", path="/", _receive=_receiver(b"hel", b"lo"))
        assert await request.body() == b"hello"

    async def test_body_cached(self) -> None:
        request = Request(method="POST", path="/", _receive=_receiver(b"once"))
        assert await request.body() == b"once"
        # The receiver is exhausted; a second read must come from the cache
        assert await request.body() == b"once"

    async def test_cache_shared_with_bound_copy(self) -> None:
        request = Request(method="POST", path="/", _receive=_receiver(b'{"a": 1}'))
        assert await request.json() == {"a": 1}
        bound = request.with_path_params({"id": "1"})
        assert await bound.json() == {"a": 1}

    async def test_text(self) -> None:
        request = Request(method="POST", path="/", _receive=_receiver("héllo".encode()))
        assert await request.text() == "héllo"

    async def test_json_empty_body_is_none(self) -> None:
        request = Request(method="POST", path="/")
        assert await request.json() is None

    async def test_json_invalid(self) -> None:
        request = Request(method="POST", path="/", _receive=_receiver(b"{not json"))
        with pytest.raises(ValueError):
            await request.json()

    async def test_stream(self) -> None:
        request = Request(method="POST", path="/", _receive=_receiver(b"a", b"b", b"c"))
        assert [chunk async for chunk in request.stream()] == [b"a", b"b", b"c"]
