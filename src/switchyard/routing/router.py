"""Route table with exact-key lookup and ordered pattern scan.

Routes are kept in an insertion-ordered dict keyed by
``"METHOD:/normalized/path"``. The first route in registration order
whose matcher accepts the path wins, so overlapping patterns are resolved
by registration order, not by specificity: register catch-all routes
last. A literal key is found by dict lookup; only the pattern routes
registered before it still need to be tried.
"""

import logging
from collections.abc import Callable
from typing import Any

from switchyard.errors import DuplicateRoute
from switchyard.routing.pattern import normalize_path, parse_pattern
from switchyard.routing.route import Route, RouteMatch, route_key

logger = logging.getLogger("switchyard.routing")


def _bind(route: Route, method: str, path: str) -> RouteMatch | None:
    if route.method != method:
        return None
    captures = route.matcher.match(path)
    if captures is None:
        return None
    return RouteMatch(route=route, path_params=dict(zip(route.param_names, captures, strict=True)))


class Router:
    """Insertion-ordered route table.

    Usage::

        router = Router()
        router.add("GET", "/users/:id", get_user)
        match = router.match("GET", "/users/42")
        match.path_params  # {"id": "42"}
    """

    __slots__ = ("_dynamic", "_order", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}
        self._order: dict[str, int] = {}
        # Routes with parameters or wildcards, in registration order
        self._dynamic: list[Route] = []

    def add(self, method: str, path: str, handler: Callable[..., Any]) -> Route:
        """Register *handler* for *method* and *path*.

        Raises ``DuplicateRoute`` if the normalized pair is already
        registered; the existing route is left untouched.
        """
        method = method.upper()
        pattern = parse_pattern(path)
        key = route_key(method, pattern.path)
        if key in self._routes:
            raise DuplicateRoute(method, pattern.path)

        route = Route(
            method=method,
            path=pattern.path,
            param_names=pattern.param_names,
            matcher=pattern.matcher,
            handler=handler,
        )
        self._order[key] = len(self._routes)
        self._routes[key] = route
        if not route.is_static:
            self._dynamic.append(route)
        logger.debug("Registered %s %s -> %r", method, pattern.path, handler)
        return route

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, key: object) -> bool:
        return key in self._routes

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Resolve *method* and *path* to a route.

        Returns ``None`` when no route accepts the request.
        """
        method = method.upper()
        path = normalize_path(path)

        exact = self._routes.get(route_key(method, path))
        if exact is not None:
            position = self._order[exact.key]
            for route in self._dynamic:
                if self._order[route.key] >= position:
                    break
                match = _bind(route, method, path)
                if match is not None:
                    return match
            return RouteMatch(route=exact, path_params={})

        for route in self._dynamic:
            match = _bind(route, method, path)
            if match is not None:
                return match

        return None
