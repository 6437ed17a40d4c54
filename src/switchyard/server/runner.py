"""Serve an App with pounce.

The network listener (accept loop, TLS, keep-alive, timeouts) belongs to
pounce; switchyard hands it the live ASGI callable. pounce is an optional
dependency (``pip install switchyard[server]``) and is imported lazily.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from switchyard.errors import ConfigurationError

if TYPE_CHECKING:
    from switchyard.app import App


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    workers: int | None = None,
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start a pounce server for *app* and block until it exits.

    Args:
        app: The switchyard App (an ASGI callable).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count. ``None`` uses ``app.config.workers``;
            reload mode always runs a single worker.
        reload: Restart on file changes (development).
        app_path: Optional ``"module:attribute"`` import string so the
            reloader can reimport the app.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires pounce. Install it with: pip install switchyard[server]"
        raise ConfigurationError(msg) from exc

    cfg = app.config
    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else (cfg.workers if workers is None else workers),
        reload=reload,
        reload_dirs=cfg.reload_dirs,
        log_level=cfg.log_level,
        log_format=cfg.log_format,
        keep_alive_timeout=cfg.keep_alive_timeout,
        request_timeout=cfg.request_timeout,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
