"""Bearer token authentication middleware.

Reads ``Authorization: Bearer <token>``, resolves it to a principal and
stores the principal on ``g.user`` for the rest of the request. Requests
without a usable token are answered 401 and stop the pipeline.

Usage::

    async def lookup(token: str) -> User | None:
        return await users.by_token(token)

    app.use("/api/*", BearerAuthMiddleware(verify=lookup))

    @app.get("/api/me")
    def me(request, response):
        response.json({"id": g.user.id})
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from switchyard._internal.invoke import invoke
from switchyard.context import g
from switchyard.http.request import Request
from switchyard.http.response import ResponseWriter
from switchyard.middleware.protocol import Flow

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True, slots=True)
class TokenUser:
    """Principal used when no ``verify`` callable is configured."""

    token: str


def bearer_token(request: Request) -> str | None:
    """The bearer token of *request*, or ``None``."""
    header = request.headers.get("authorization")
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX) :].strip()
    return token or None


class BearerAuthMiddleware:
    """Require a bearer token.

    Args:
        verify: Sync or async ``token -> principal | None``. ``None``
            rejects the token. When omitted, any non-empty token is
            accepted and wrapped in a ``TokenUser``.
    """

    __slots__ = ("_verify",)

    def __init__(self, verify: Callable[[str], Any] | None = None) -> None:
        self._verify = verify

    async def __call__(self, request: Request, response: ResponseWriter) -> Flow:
        token = bearer_token(request)
        if token is None:
            return self._reject(response)

        if self._verify is None:
            user: Any = TokenUser(token=token)
        else:
            user = await invoke(self._verify, token)
            if user is None:
                return self._reject(response)

        g.user = user
        return Flow.CONTINUE

    @staticmethod
    def _reject(response: ResponseWriter) -> Flow:
        response.json(
            {"error": "Unauthorized"},
            status=401,
            headers={"WWW-Authenticate": "Bearer"},
        )
        return Flow.STOP
