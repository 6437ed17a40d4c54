"""Outer error boundary.

The dispatcher lets exceptions escape; this module turns them into
complete JSON responses so no request is left half-answered.
"""

import json
import logging
from http import HTTPStatus

from switchyard.errors import HTTPError
from switchyard.http.request import Request
from switchyard.http.response import JSON_CONTENT_TYPE, Response

logger = logging.getLogger("switchyard.server")


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Error"


def error_response(status: int, message: str) -> Response:
    """A JSON error response: ``{"error": <reason>, "message": <message>}``."""
    body = json.dumps({"error": _reason(status), "message": message}, separators=(",", ":"))
    return Response(body=body, status=status, content_type=JSON_CONTENT_TYPE)


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an ``HTTPError`` raised during dispatch to its response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    response = error_response(exc.status, exc.detail or _reason(exc.status))
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Log an unexpected exception and answer 500.

    The exception text is only exposed when *debug* is on.
    """
    logger.exception("500 %s %s", request.method, request.path)
    message = str(exc) if debug else "An unexpected error occurred"
    return error_response(500, message)
