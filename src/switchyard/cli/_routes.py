"""``switchyard routes``: list registered routes."""

import argparse
import sys

from switchyard.cli._resolve import resolve_app
from switchyard.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / HANDLER table, in registration order."""
    try:
        app = resolve_app(args.app)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [
        (route.method, route.path, getattr(route.handler, "__name__", repr(route.handler)))
        for route in routes
    ]

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))
