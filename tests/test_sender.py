"""Tests for switchyard.server.sender — Response to ASGI messages."""

from typing import Any

import pytest

from switchyard.http.response import Response
from switchyard.server.sender import body_allowed, encode_headers, send_response


class _Collector:
    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)


class TestBodyAllowed:
    @pytest.mark.parametrize("status", [100, 101, 204, 304])
    def test_no_body(self, status: int) -> None:
        assert not body_allowed(status)

    @pytest.mark.parametrize("status", [200, 201, 404, 500])
    def test_body(self, status: int) -> None:
        assert body_allowed(status)


class TestEncodeHeaders:
    def test_lowercases_names_and_adds_length(self) -> None:
        response = Response("x", content_type="text/html").with_header("X-Trace", "1")
        assert encode_headers(response, 1) == [
            (b"content-type", b"text/html"),
            (b"x-trace", b"1"),
            (b"content-length", b"1"),
        ]

    def test_none_length_omits_header(self) -> None:
        response = Response("", status=204)
        assert encode_headers(response, None) == [(b"content-type", b"text/plain; charset=utf-8")]


class TestSendResponse:
    async def test_start_then_body(self) -> None:
        send = _Collector()
        await send_response(Response("hello", status=201), send)
        start, body = send.messages
        assert start["type"] == "http.response.start"
        assert start["status"] == 201
        assert (b"content-length", b"5") in start["headers"]
        assert body == {"type": "http.response.body", "body": b"hello"}

    @pytest.mark.parametrize("status", [204, 304])
    async def test_bodiless_status_drops_body_and_length(self, status: int) -> None:
        send = _Collector()
        await send_response(Response("ignored", status=status), send)
        names = [name for name, _ in send.messages[0]["headers"]]
        assert b"content-length" not in names
        assert send.messages[1]["body"] == b""

    async def test_head_keeps_length(self) -> None:
        send = _Collector()
        await send_response(Response("hello"), send, method="HEAD")
        assert (b"content-length", b"5") in send.messages[0]["headers"]
        assert send.messages[1]["body"] == b""
