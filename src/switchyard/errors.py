"""Switchyard exception hierarchy.

Shared across Router, Dispatcher, App and the ASGI handler so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class SwitchyardError(Exception):
    """Base for all switchyard-specific errors."""


class ConfigurationError(SwitchyardError):
    """Raised when the route table or middleware setup is invalid.

    Raised synchronously during setup; never a runtime condition.
    """


class DuplicateRoute(ConfigurationError):  # noqa: N818
    """A (method, normalized path) pair was registered twice."""

    def __init__(self, method: str, path: str) -> None:
        self.method = method
        self.path = path
        super().__init__(f"Route {method} {path} already exists")


@dataclass(frozen=True, slots=True)
class HTTPError(SwitchyardError):
    """An error that maps directly to an HTTP status code.

    Handlers and middleware may raise it; the ASGI handler turns it into
    a JSON error response with the given status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)
