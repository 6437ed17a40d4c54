"""Route, MiddlewareEntry and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from switchyard.routing.pattern import Matcher


def route_key(method: str, path: str) -> str:
    """Lookup key for a route: ``"METHOD:/normalized/path"``."""
    return f"{method}:{path}"


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route.

    Created at registration time and never modified afterwards.
    ``path`` is already normalized and ``method`` upper-cased.
    """

    method: str
    path: str
    param_names: tuple[str, ...]
    matcher: Matcher
    handler: Callable[..., Any]

    @property
    def key(self) -> str:
        return route_key(self.method, self.path)

    @property
    def is_static(self) -> bool:
        """True when the path declares no parameters and no wildcard."""
        return not self.param_names and "*" not in self.path


@dataclass(frozen=True, slots=True)
class MiddlewareEntry:
    """A middleware bound to the path pattern it runs for."""

    pattern: str
    matcher: Matcher
    handler: Callable[..., Any]

    def applies_to(self, path: str) -> bool:
        return self.matcher.match(path) is not None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]

    @property
    def handler(self) -> Callable[..., Any]:
        return self.route.handler
