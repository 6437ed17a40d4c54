"""Dispatcher — route table, middleware chain and param hooks.

One request goes through, in order:

1. every middleware whose pattern matches the path (registration order);
   a ``Flow.STOP`` / ``False`` result ends the request right there;
2. route matching (first route in registration order; literal paths
   are found by key lookup);
3. the param hook of every bound parameter name (hook-table order);
4. the matched handler;

or, when no route matches, a JSON 404.

Exceptions raised by middleware, hooks or handlers are not caught here.
The caller (the ASGI handler) owns the error boundary.
"""

import logging

from switchyard._internal.invoke import invoke
from switchyard._internal.types import Handler, MiddlewareHandler, ParamHook
from switchyard.context import request_var
from switchyard.errors import ConfigurationError
from switchyard.http.request import Request
from switchyard.http.response import ResponseWriter
from switchyard.middleware.protocol import should_stop
from switchyard.routing.pattern import normalize_path, parse_pattern
from switchyard.routing.route import MiddlewareEntry, Route, RouteMatch
from switchyard.routing.router import Router

logger = logging.getLogger("switchyard.routing")

# Pattern for middleware registered without one
MATCH_ALL = "/*"


def write_not_found(request: Request, response: ResponseWriter) -> None:
    """Write the standard 404 body for an unmatched request."""
    response.json(
        {"error": "Not Found", "message": f"Route {request.path} not found"},
        status=404,
    )


class Dispatcher:
    """Owns the registered routes, middleware and param hooks.

    Populated during setup, then only read while serving.

    Usage::

        dispatcher = Dispatcher()
        dispatcher.use(cors_middleware)
        dispatcher.param("id", load_user)
        dispatcher.get("/users/:id", show_user)

        await dispatcher.dispatch(request, response)
    """

    __slots__ = ("_middleware", "_param_hooks", "router")

    def __init__(self, router: Router | None = None) -> None:
        self.router = router or Router()
        self._middleware: list[MiddlewareEntry] = []
        self._param_hooks: dict[str, ParamHook] = {}

    # -- Registration --

    def register(self, method: str, path: str, handler: Handler) -> Route:
        """Register *handler* for *method* and *path*.

        Raises ``DuplicateRoute`` if the pair is already registered.
        """
        return self.router.add(method, path, handler)

    def get(self, path: str, handler: Handler) -> Route:
        return self.register("GET", path, handler)

    def post(self, path: str, handler: Handler) -> Route:
        return self.register("POST", path, handler)

    def put(self, path: str, handler: Handler) -> Route:
        return self.register("PUT", path, handler)

    def patch(self, path: str, handler: Handler) -> Route:
        return self.register("PATCH", path, handler)

    def delete(self, path: str, handler: Handler) -> Route:
        return self.register("DELETE", path, handler)

    def head(self, path: str, handler: Handler) -> Route:
        return self.register("HEAD", path, handler)

    def options(self, path: str, handler: Handler) -> Route:
        return self.register("OPTIONS", path, handler)

    def use(self, pattern: str | MiddlewareHandler, *handlers: MiddlewareHandler) -> None:
        """Add middleware.

        ``use(mw)`` runs *mw* for every path. ``use("/api/*", a, b)``
        adds *a* then *b*, each as its own entry, for paths matching
        ``/api/*``.
        """
        if callable(pattern):
            handlers = (pattern, *handlers)
            pattern = MATCH_ALL
        elif not handlers:
            msg = f"use({pattern!r}) needs at least one middleware handler."
            raise ConfigurationError(msg)

        compiled = parse_pattern(pattern)
        for handler in handlers:
            self._middleware.append(
                MiddlewareEntry(pattern=compiled.path, matcher=compiled.matcher, handler=handler)
            )
            logger.debug("Registered middleware %r for %s", handler, compiled.path)

    def param(self, name: str, hook: ParamHook) -> None:
        """Run *hook* whenever a matched route binds parameter *name*.

        One hook per name: a later registration replaces the earlier one.
        """
        if name in self._param_hooks:
            logger.debug("Replacing param hook for %r", name)
        self._param_hooks[name] = hook

    @property
    def middleware(self) -> tuple[MiddlewareEntry, ...]:
        return tuple(self._middleware)

    @property
    def param_hooks(self) -> dict[str, ParamHook]:
        return dict(self._param_hooks)

    # -- Matching --

    def match(self, method: str, path: str) -> RouteMatch | None:
        return self.router.match(method, path)

    # -- Dispatch --

    async def dispatch(self, request: Request, response: ResponseWriter) -> None:
        """Run the full pipeline for one request."""
        path = normalize_path(request.path)

        for entry in self._middleware:
            if not entry.applies_to(path):
                continue
            if should_stop(await invoke(entry.handler, request, response)):
                return

        match = self.match(request.method, path)
        if match is None:
            write_not_found(request, response)
            return

        request = request.with_path_params(match.path_params)
        request_var.set(request)

        for name, hook in self._param_hooks.items():
            if name not in match.path_params:
                continue
            value = match.path_params[name]
            if should_stop(await invoke(hook, request, response, value, name)):
                return

        await invoke(match.handler, request, response)
