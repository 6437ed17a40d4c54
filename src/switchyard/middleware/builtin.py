"""Built-in middleware: access logging and CORS."""

import logging
import time
from dataclasses import dataclass

from switchyard.http.request import Request
from switchyard.http.response import Response, ResponseWriter
from switchyard.middleware.protocol import Flow

access_logger = logging.getLogger("switchyard.access")


class AccessLogMiddleware:
    """Log one line per request once its response is built.

    Format: ``GET /users?page=2 - 200 - 3ms``. Never stops the pipeline.
    """

    __slots__ = ("_logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or access_logger

    def __call__(self, request: Request, response: ResponseWriter) -> Flow:
        start = time.perf_counter()
        url = request.url

        def log_finished(built: Response) -> None:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self._logger.info("%s %s - %d - %dms", request.method, url, built.status, elapsed_ms)

        response.on_finish(log_finished)
        return Flow.CONTINUE


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS middleware configuration.

    Defaults allow any origin without credentials::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_credentials=True,
        )
    """

    allow_origins: tuple[str, ...] = ("*",)
    allow_methods: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
    allow_headers: tuple[str, ...] = ("Content-Type", "Authorization")
    allow_credentials: bool = False
    max_age: int = 86400  # 24 hours


class CORSMiddleware:
    """Cross-Origin Resource Sharing.

    Handles:
    - Preflight ``OPTIONS`` requests: answers 204 with the CORS headers
      and stops the pipeline.
    - Every other request: adds the origin (and credentials) headers,
      then lets the pipeline continue.

    Requests from origins outside ``allow_origins`` pass through
    untouched.
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _allowed_origin(self, origin: str | None) -> str | None:
        """The ``Access-Control-Allow-Origin`` value for *origin*, if any."""
        cfg = self.config
        if "*" in cfg.allow_origins:
            # "*" is not valid together with credentials; echo instead
            if cfg.allow_credentials and origin:
                return origin
            return "*"
        if origin is not None and origin in cfg.allow_origins:
            return origin
        return None

    def _add_origin_headers(self, response: ResponseWriter, allowed: str) -> None:
        response.set_header("Access-Control-Allow-Origin", allowed)
        if allowed != "*":
            response.set_header("Vary", "Origin")
        if self.config.allow_credentials:
            response.set_header("Access-Control-Allow-Credentials", "true")

    def __call__(self, request: Request, response: ResponseWriter) -> Flow:
        allowed = self._allowed_origin(request.headers.get("origin"))
        if allowed is None:
            return Flow.CONTINUE

        self._add_origin_headers(response, allowed)

        if request.method == "OPTIONS":
            cfg = self.config
            response.write_head(
                204,
                {
                    "Access-Control-Allow-Methods": ", ".join(cfg.allow_methods),
                    "Access-Control-Allow-Headers": ", ".join(cfg.allow_headers),
                    "Access-Control-Max-Age": cfg.max_age,
                },
            )
            response.end()
            return Flow.STOP

        return Flow.CONTINUE
