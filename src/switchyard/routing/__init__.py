"""Routing — pattern compilation and an ordered route table.

Routes are compiled at registration time. The first route in
registration order that accepts a path wins; literal paths are found by
key lookup.
"""

from switchyard.routing.pattern import (
    Matcher,
    PathPattern,
    compile_pattern,
    extract_param_names,
    normalize_path,
    parse_pattern,
)
from switchyard.routing.route import MiddlewareEntry, Route, RouteMatch
from switchyard.routing.router import Router

__all__ = [
    "Matcher",
    "MiddlewareEntry",
    "PathPattern",
    "Route",
    "RouteMatch",
    "Router",
    "compile_pattern",
    "extract_param_names",
    "normalize_path",
    "parse_pattern",
]
