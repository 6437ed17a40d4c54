"""Query string of a request."""

from dataclasses import dataclass
from urllib.parse import parse_qsl


@dataclass(frozen=True, slots=True)
class QueryParams:
    """The query string exactly as the client sent it.

    ``Request.url`` echoes ``raw`` back unchanged; lookups decode it on
    demand, keeping blank values (``?flag=`` gives ``""``).
    """

    raw: bytes = b""

    def _pairs(self) -> list[tuple[str, str]]:
        return parse_qsl(self.raw.decode("latin-1"), keep_blank_values=True)

    def get(self, key: str, default: str | None = None) -> str | None:
        """First value for *key*, or *default*."""
        for name, value in self._pairs():
            if name == key:
                return value
        return default

    def getall(self, key: str) -> list[str]:
        return [value for name, value in self._pairs() if name == key]

    def __contains__(self, key: object) -> bool:
        return any(name == key for name, _ in self._pairs())

    def __bool__(self) -> bool:
        return bool(self.raw)
