"""ASGI handler — translates ASGI scope/messages to switchyard types.

The only component that touches raw ASGI for HTTP. Builds a ``Request``
and a ``ResponseWriter``, runs the dispatcher, and is the error boundary
the dispatcher relies on: whatever escapes the pipeline becomes a
complete JSON error response here.
"""

import logging

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard.config import AppConfig
from switchyard.context import request_scope
from switchyard.dispatcher import Dispatcher
from switchyard.errors import HTTPError
from switchyard.http.request import Request
from switchyard.http.response import Response, ResponseWriter
from switchyard.server.errors import error_response, handle_http_error, handle_internal_error
from switchyard.server.sender import send_response

logger = logging.getLogger("switchyard.server")


def _too_large(request: Request, limit: int) -> bool:
    length = request.headers.get("content-length")
    if length is None or not length.isdigit():
        return False
    return int(length) > limit


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    writer = ResponseWriter()

    if _too_large(request, config.max_content_length):
        await send_response(
            error_response(413, f"Request body exceeds {config.max_content_length} bytes"),
            send,
            method=request.method,
        )
        return

    response: Response
    with request_scope(request):
        try:
            await dispatcher.dispatch(request, writer)
            if not writer.finished and config.warn_unfinished:
                logger.warning(
                    "%s %s: pipeline ended without finishing the response",
                    request.method,
                    request.path,
                )
            response = writer.build()
        except HTTPError as exc:
            response = writer.finalize(handle_http_error(exc, request))
        except Exception as exc:
            response = writer.finalize(handle_internal_error(exc, request, debug=config.debug))

    await send_response(response, send, method=request.method)
