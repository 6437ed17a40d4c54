"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, response: ResponseWriter) -> Flow | bool | None

Built-in middleware:
    AccessLogMiddleware -- One log line per request
    BearerAuthMiddleware -- Require ``Authorization: Bearer <token>``
    CORSMiddleware -- Cross-Origin Resource Sharing, preflight included
    GzipMiddleware -- Compress large responses
    RateLimitMiddleware -- Sliding-window limit per client
    ValidationMiddleware -- Field rules for JSON bodies
"""

from switchyard.middleware.auth import BearerAuthMiddleware, TokenUser
from switchyard.middleware.builtin import AccessLogMiddleware, CORSConfig, CORSMiddleware
from switchyard.middleware.compression import GzipMiddleware
from switchyard.middleware.protocol import Flow, Middleware, ParamHook
from switchyard.middleware.rate_limit import RateLimitConfig, RateLimitMiddleware, RateLimitStore
from switchyard.middleware.validation import FieldRule, ValidationMiddleware

__all__ = [
    "AccessLogMiddleware",
    "BearerAuthMiddleware",
    "CORSConfig",
    "CORSMiddleware",
    "FieldRule",
    "Flow",
    "GzipMiddleware",
    "Middleware",
    "ParamHook",
    "RateLimitConfig",
    "RateLimitMiddleware",
    "RateLimitStore",
    "TokenUser",
    "ValidationMiddleware",
]
