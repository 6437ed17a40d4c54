"""Shared type aliases used across switchyard modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: (request, response) -> None, sync or async
Handler: TypeAlias = Callable[..., Any]

# Middleware: (request, response) -> Flow | bool | None, sync or async
MiddlewareHandler: TypeAlias = Callable[..., Any]

# Param hook: (request, response, value, name) -> Flow | bool | None
ParamHook: TypeAlias = Callable[..., Any]

# Lifecycle and background callables
Hook: TypeAlias = Callable[..., Any]
