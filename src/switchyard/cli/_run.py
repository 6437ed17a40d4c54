"""``switchyard run``: serve an app with pounce."""

import argparse
import sys

from switchyard.cli._resolve import resolve_app
from switchyard.errors import ConfigurationError
from switchyard.server.runner import run_server


def run_app(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it until interrupted.

    CLI flags override the app's config. ``--reload`` (or
    ``debug=True``) runs a single reloading worker.
    """
    try:
        app = resolve_app(args.app)
        app._ensure_frozen()
        run_server(
            app,
            app.config.host if args.host is None else args.host,
            app.config.port if args.port is None else args.port,
            workers=args.workers,
            reload=args.reload or app.config.debug,
            app_path=args.app,
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
