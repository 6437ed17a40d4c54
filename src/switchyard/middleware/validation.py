"""JSON body validation middleware.

Checks the decoded JSON body against per-field rules and answers 400
with the list of problems, stopping the pipeline. The body is read with
``request.json()``, so the handler gets the cached value for free.

Usage::

    app.use("/users", ValidationMiddleware({
        "name": FieldRule(required=True, expected_type=str, min_length=2),
        "email": FieldRule(required=True, pattern=r"^[^@]+@[^@]+$"),
    }))
"""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from switchyard.http.request import Request
from switchyard.http.response import ResponseWriter
from switchyard.middleware.protocol import Flow


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Constraints for one body field."""

    required: bool = False
    expected_type: type | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def check_field(name: str, value: Any, rule: FieldRule) -> list[str]:
    """Return the problems with *value* under *rule*."""
    if _is_empty(value):
        return [f"{name} is required"] if rule.required else []

    errors: list[str] = []
    if rule.expected_type is not None and not isinstance(value, rule.expected_type):
        errors.append(f"{name} must be {rule.expected_type.__name__}")
    if hasattr(value, "__len__"):
        if rule.min_length is not None and len(value) < rule.min_length:
            errors.append(f"{name} must be at least {rule.min_length} characters")
        if rule.max_length is not None and len(value) > rule.max_length:
            errors.append(f"{name} must be at most {rule.max_length} characters")
    if rule.pattern is not None and (
        not isinstance(value, str) or re.search(rule.pattern, value) is None
    ):
        errors.append(f"{name} is invalid")
    return errors


class ValidationMiddleware:
    """Validate JSON bodies of write requests.

    Only ``methods`` are checked; other requests pass through.
    """

    __slots__ = ("methods", "schema")

    def __init__(
        self,
        schema: Mapping[str, FieldRule],
        *,
        methods: tuple[str, ...] = ("POST", "PUT", "PATCH"),
    ) -> None:
        self.schema = dict(schema)
        self.methods = methods

    async def __call__(self, request: Request, response: ResponseWriter) -> Flow:
        if request.method not in self.methods:
            return Flow.CONTINUE

        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            response.json({"error": "Invalid JSON body"}, status=400)
            return Flow.STOP

        if not isinstance(body, dict):
            response.json({"error": "Request body required"}, status=400)
            return Flow.STOP

        errors: list[str] = []
        for name, rule in self.schema.items():
            errors.extend(check_field(name, body.get(name), rule))

        if errors:
            response.json({"errors": errors}, status=400)
            return Flow.STOP
        return Flow.CONTINUE
