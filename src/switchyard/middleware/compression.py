"""Gzip response compression.

Registers a finish callback, so compression happens on the built
response after the handler is done, whatever wrote the body.
"""

import gzip

from switchyard.http.request import Request
from switchyard.http.response import Response, ResponseWriter
from switchyard.middleware.protocol import Flow


def accepts_gzip(request: Request) -> bool:
    return "gzip" in (request.headers.get("accept-encoding") or "").lower()


class GzipMiddleware:
    """Compress response bodies of at least ``min_size`` bytes.

    Only applies when the client sent ``Accept-Encoding: gzip`` and the
    response isn't already encoded.
    """

    __slots__ = ("level", "min_size")

    def __init__(self, min_size: int = 1024, *, level: int = 6) -> None:
        self.min_size = min_size
        self.level = level

    def _compress(self, response: Response) -> Response | None:
        body = response.body_bytes
        if len(body) < self.min_size or response.header("content-encoding") is not None:
            return None
        return (
            response.with_body(gzip.compress(body, compresslevel=self.level))
            .with_header("Content-Encoding", "gzip")
            .with_header("Vary", "Accept-Encoding")
        )

    def __call__(self, request: Request, response: ResponseWriter) -> Flow:
        if accepts_gzip(request):
            response.on_finish(self._compress)
        return Flow.CONTINUE
