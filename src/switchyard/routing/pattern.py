"""Route pattern compilation.

Turns a declared route path like ``/users/:id/posts/:post_id`` into a
normalized path, the ordered parameter names, and an anchored matcher.

Examples::

    normalize_path("users/")        -> "/users"
    extract_param_names("/a/:x/b/:y") -> ("x", "y")
    compile_pattern("/a/:x/b/:y").match("/a/1/b/2") -> ("1", "2")

Both the names and the capturing groups come from the same segment walk,
so position ``i`` of the captures always belongs to ``param_names[i]``.
"""

import re
from dataclasses import dataclass

# One path segment, no slashes
PARAM_PATTERN = r"([^/]+)"

# Glob: any run of characters, slashes included. Not captured.
WILDCARD_PATTERN = r".*"


def normalize_path(path: str) -> str:
    """Return the canonical form of *path*.

    A leading ``/`` is added when missing and trailing slashes are
    removed, except for the root path itself. ``"/users//"`` becomes
    ``"/users"`` in one step, so normalizing twice changes nothing.
    """
    if not path.startswith("/"):
        path = "/" + path
    return path.rstrip("/") or "/"


def extract_param_names(path: str) -> tuple[str, ...]:
    """Return the ``:name`` parameter names of *path*, left to right.

    Names are not deduplicated. When the captures are bound into a
    mapping, a repeated name keeps the value of its last occurrence.
    """
    return tuple(segment[1:] for segment in path.split("/") if segment.startswith(":"))


@dataclass(frozen=True, slots=True)
class Matcher:
    """A compiled, fully anchored path recognizer."""

    regex: re.Pattern[str]

    @property
    def group_count(self) -> int:
        return self.regex.groups

    def match(self, path: str) -> tuple[str, ...] | None:
        """Return the captured values for *path*, or ``None`` if it doesn't match."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return m.groups()


def _compile_segment(segment: str) -> str:
    if segment.startswith(":"):
        return PARAM_PATTERN
    # Literal text is escaped; only the glob star keeps a meaning
    return WILDCARD_PATTERN.join(re.escape(part) for part in segment.split("*"))


def compile_pattern(path: str) -> Matcher:
    """Compile a normalized route path into a ``Matcher``.

    ``:name`` segments capture one segment each. A ``*`` matches any
    characters, including ``/``, and does not capture.
    """
    source = "/".join(_compile_segment(segment) for segment in path.split("/"))
    return Matcher(re.compile(source))


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A route path after normalization and compilation."""

    path: str
    param_names: tuple[str, ...]
    matcher: Matcher


def parse_pattern(path: str) -> PathPattern:
    """Normalize *path* and compile it in one step."""
    normalized = normalize_path(path)
    return PathPattern(
        path=normalized,
        param_names=extract_param_names(normalized),
        matcher=compile_pattern(normalized),
    )
