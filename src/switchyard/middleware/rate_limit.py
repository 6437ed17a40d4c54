"""Sliding-window rate limiting.

The request log lives in an explicit ``RateLimitStore`` that the app
owns and injects, instead of process-wide state. Its ``run_sweeper``
coroutine drops idle clients periodically; run it for the server's
lifetime with ``App.background``::

    store = RateLimitStore(RateLimitConfig(max_requests=100, window_seconds=60))
    app.use("/api/*", RateLimitMiddleware(store))
    app.background(store.run_sweeper)
"""

import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

import anyio

from switchyard.http.request import Request
from switchyard.http.response import ResponseWriter
from switchyard.middleware.protocol import Flow


@dataclass(frozen=True, slots=True)
class RateLimitConfig:
    """Rate limiter configuration."""

    max_requests: int = 100
    window_seconds: float = 60.0
    # Trusted proxy header carrying the client address (first hop wins)
    key_header: str | None = None


class RateLimitStore:
    """Per-client request timestamps within the current window.

    Thread-safe: one lock guards the table, so the store can be shared
    by workers running on separate threads.
    """

    __slots__ = ("_clock", "_hits", "_lock", "config")

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or RateLimitConfig()
        self._clock = clock
        self._lock = threading.Lock()
        self._hits: dict[str, list[float]] = {}

    def now(self) -> float:
        return self._clock()

    def hit(self, key: str, now: float) -> tuple[bool, int]:
        """Record a request from *key* at *now*.

        Returns ``(allowed, remaining)``. Rejected requests are not
        recorded, so a blocked client recovers as its window slides.
        """
        cfg = self.config
        with self._lock:
            recent = [t for t in self._hits.get(key, ()) if now - t < cfg.window_seconds]
            if len(recent) >= cfg.max_requests:
                self._hits[key] = recent
                return False, 0
            recent.append(now)
            self._hits[key] = recent
            return True, cfg.max_requests - len(recent)

    def sweep(self, now: float) -> int:
        """Drop expired timestamps and idle clients. Returns clients removed."""
        window = self.config.window_seconds
        removed = 0
        with self._lock:
            for key in list(self._hits):
                recent = [t for t in self._hits[key] if now - t < window]
                if recent:
                    self._hits[key] = recent
                else:
                    del self._hits[key]
                    removed += 1
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    async def run_sweeper(self, interval: float | None = None) -> None:
        """Sweep every *interval* seconds (default: the window) until cancelled."""
        interval = self.config.window_seconds if interval is None else interval
        while True:
            await anyio.sleep(interval)
            self.sweep(self.now())


class RateLimitMiddleware:
    """Answer 429 once a client exceeds ``max_requests`` per window.

    Allowed requests get ``X-RateLimit-Limit``, ``X-RateLimit-Remaining``
    and ``X-RateLimit-Reset`` headers.
    """

    __slots__ = ("store",)

    def __init__(self, store: RateLimitStore) -> None:
        self.store = store

    def _client_key(self, request: Request) -> str:
        header_name = self.store.config.key_header
        if header_name:
            raw = request.headers.get(header_name)
            if raw:
                forwarded = raw.split(",")[0].strip()
                if forwarded:
                    return forwarded
        return request.client_host or "unknown"

    def __call__(self, request: Request, response: ResponseWriter) -> Flow:
        cfg = self.store.config
        now = self.store.now()
        allowed, remaining = self.store.hit(self._client_key(request), now)
        retry_after = math.ceil(cfg.window_seconds)

        if not allowed:
            response.json(
                {
                    "error": "Too Many Requests",
                    "message": f"Rate limit exceeded. Try again in {retry_after} seconds.",
                },
                status=429,
                headers={"Retry-After": str(retry_after)},
            )
            return Flow.STOP

        reset = datetime.fromtimestamp(now + cfg.window_seconds, tz=UTC)
        response.set_header("X-RateLimit-Limit", cfg.max_requests)
        response.set_header("X-RateLimit-Remaining", remaining)
        response.set_header("X-RateLimit-Reset", reset.isoformat())
        return Flow.CONTINUE
