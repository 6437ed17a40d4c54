"""HTTP responses.

``ResponseWriter`` is the handle middleware, param hooks and handlers
write to during dispatch. Once the pipeline is done the server freezes
it into an immutable ``Response`` and sends that.

``Response`` keeps the chainable ``.with_*()`` API: each call returns a
new ``Response``.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = DEFAULT_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def with_body(self, body: str | bytes) -> Response:
        return replace(self, body=body)

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        return json_module.loads(self.body_bytes)


# Called with the built Response; may return a replacement
FinishCallback = Callable[[Response], Response | None]


class ResponseWriter:
    """Mutable response handle passed through the dispatch pipeline.

    Anything may set headers or status until ``end()`` is called. After
    that the writer is finished: further writes raise ``RuntimeError``.

    Usage::

        async def show_user(request, response):
            response.set_header("Cache-Control", "no-cache")
            response.json({"id": request.path_params["id"]})
    """

    __slots__ = ("_body", "_finish_callbacks", "_headers", "finished", "status")

    def __init__(self) -> None:
        self.status: int = 200
        self.finished: bool = False
        self._headers: dict[str, tuple[str, str]] = {}
        self._body = bytearray()
        self._finish_callbacks: list[FinishCallback] = []

    # -- Headers --

    def set_header(self, name: str, value: str | int) -> None:
        """Set header *name*, replacing any earlier value."""
        self._check_open()
        self._headers[name.lower()] = (name, str(value))

    def get_header(self, name: str) -> str | None:
        entry = self._headers.get(name.lower())
        return entry[1] if entry else None

    def remove_header(self, name: str) -> None:
        self._check_open()
        self._headers.pop(name.lower(), None)

    @property
    def headers(self) -> dict[str, str]:
        """Snapshot of the current headers, keyed by their original names."""
        return dict(self._headers.values())

    def write_head(self, status: int, headers: Mapping[str, str | int] | None = None) -> None:
        """Set the status and, optionally, a batch of headers."""
        self._check_open()
        self.status = status
        for name, value in (headers or {}).items():
            self.set_header(name, value)

    # -- Body --

    def write(self, chunk: str | bytes) -> None:
        """Append *chunk* to the buffered body."""
        self._check_open()
        self._body += chunk.encode("utf-8") if isinstance(chunk, str) else chunk

    def end(self, chunk: str | bytes | None = None) -> None:
        """Append a final *chunk* and mark the response complete."""
        if chunk:
            self.write(chunk)
        self._check_open()
        self.finished = True

    def json(self, data: Any, status: int = 200, headers: Mapping[str, str] | None = None) -> None:
        """Write *data* as a compact JSON body and finish the response."""
        self.write_head(status, {"Content-Type": JSON_CONTENT_TYPE, **(headers or {})})
        self.end(json_module.dumps(data, separators=(",", ":")))

    def text(self, body: str, status: int = 200) -> None:
        self.write_head(status, {"Content-Type": DEFAULT_CONTENT_TYPE})
        self.end(body)

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    # -- Finish --

    def on_finish(self, callback: FinishCallback) -> None:
        """Run *callback* on the built response before it is sent.

        Callbacks run in registration order. A callback returning a
        ``Response`` replaces the one passed to the next callback.
        """
        self._finish_callbacks.append(callback)

    def build(self) -> Response:
        """Freeze the writer into a ``Response`` and run finish callbacks."""
        content_type = DEFAULT_CONTENT_TYPE
        headers: list[tuple[str, str]] = []
        for key, (name, value) in self._headers.items():
            if key == "content-type":
                content_type = value
            elif key != "content-length":
                headers.append((name, value))

        response = Response(
            body=bytes(self._body),
            status=self.status,
            content_type=content_type,
            headers=tuple(headers),
        )
        return self.finalize(response)

    def finalize(self, response: Response) -> Response:
        """Run the finish callbacks over *response*.

        Also used by the server for error responses that replace the
        writer's own content.
        """
        for callback in self._finish_callbacks:
            replacement = callback(response)
            if replacement is not None:
                response = replacement
        return response

    def _check_open(self) -> None:
        if self.finished:
            msg = "Response already finished; cannot write after end()."
            raise RuntimeError(msg)
