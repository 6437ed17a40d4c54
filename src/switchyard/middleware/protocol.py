"""Middleware protocol and the Flow continuation signal.

A middleware is any callable matching::

    async def my_mw(request: Request, response: ResponseWriter) -> Flow | bool | None: ...

No base class required. Plain ``def`` works too.

The return value decides whether the pipeline goes on:

- ``Flow.STOP`` or exactly ``False``: stop here. No later middleware,
  param hook or handler runs, and no 404 is written. The middleware is
  expected to have finished the response itself.
- anything else (``Flow.CONTINUE``, ``None``, ``True``...): continue.

Failing is raising: exceptions propagate to the ASGI error boundary.
"""

import enum
from typing import Any, Protocol

from switchyard.http.request import Request
from switchyard.http.response import ResponseWriter


class Flow(enum.Enum):
    """Structured outcome of a middleware or param hook."""

    CONTINUE = "continue"
    STOP = "stop"


def should_stop(result: Any) -> bool:
    """True when *result* asks the pipeline to stop."""
    return result is False or result is Flow.STOP


class Middleware(Protocol):
    """Protocol for switchyard middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def powered_by(request: Request, response: ResponseWriter) -> None:
            response.set_header("X-Powered-By", "switchyard")

        # Class middleware
        class Maintenance:
            async def __call__(self, request, response) -> Flow:
                response.json({"error": "Maintenance"}, status=503)
                return Flow.STOP
    """

    def __call__(self, request: Request, response: ResponseWriter) -> Any: ...


class ParamHook(Protocol):
    """Protocol for per-parameter hooks registered with ``param()``."""

    def __call__(
        self, request: Request, response: ResponseWriter, value: str, name: str
    ) -> Any: ...
