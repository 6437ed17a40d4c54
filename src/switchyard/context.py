"""Per-request state.

``request_scope`` binds a request for one pass through the pipeline:
inside it, ``get_request()`` returns that request and ``g`` starts out
empty. Both live in ContextVars, so concurrent requests never see each
other's values.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from switchyard.http.request import Request

request_var: ContextVar[Request] = ContextVar("switchyard_request")
_locals: ContextVar[dict[str, Any]] = ContextVar("switchyard_g")


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()


@contextmanager
def request_scope(request: Request) -> Iterator[None]:
    """Bind *request* and an empty ``g`` until the block exits."""
    request_token = request_var.set(request)
    locals_token = _locals.set({})
    try:
        yield
    finally:
        _locals.reset(locals_token)
        request_var.reset(request_token)


def _current() -> dict[str, Any]:
    try:
        return _locals.get()
    except LookupError:
        msg = "g is only available while a request is being handled"
        raise RuntimeError(msg) from None


class RequestLocals:
    """Values one pipeline step hands to the next.

    The auth middleware stores its principal as ``g.user``; param hooks
    store whatever they loaded for the handler::

        @app.param("user_id")
        def load_user(request, response, value, name):
            g.user_record = users[value]
    """

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        try:
            return _current()[name]
        except KeyError:
            msg = f"g has no {name!r} for this request"
            raise AttributeError(msg) from None

    def __setattr__(self, name: str, value: Any) -> None:
        _current()[name] = value

    def __contains__(self, name: str) -> bool:
        return name in _current()


g = RequestLocals()
