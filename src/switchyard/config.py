"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, no string-key
dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development only, requires debug=True)
    reload_dirs: tuple[str, ...] = ()

    # Production
    workers: int = 0  # 0 = auto-detect from CPU count
    keep_alive_timeout: float = 5.0
    request_timeout: float = 30.0

    # Logging (forwarded to the server)
    log_level: str = "info"
    log_format: str = "text"

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB

    # Dispatch: warn when a stopped pipeline left the response unfinished
    warn_unfinished: bool = True
