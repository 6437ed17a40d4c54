"""Find the App a CLI command acts on."""

import importlib

from switchyard.app import App
from switchyard.errors import ConfigurationError


def resolve_app(target: str) -> App:
    """Load the App named by *target*, ``"package.module[:attribute]"``.

    The attribute defaults to ``app``. A zero-argument factory that
    returns an App is called. Every failure is a ``ConfigurationError``
    whose message names *target*, ready to print as-is.
    """
    module_name, _, attribute = target.partition(":")
    if not module_name:
        msg = f"{target!r}: missing module name, expected 'module:attribute'"
        raise ConfigurationError(msg)
    attribute = attribute or "app"

    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        msg = f"{target!r}: cannot import {module_name!r} ({exc})"
        raise ConfigurationError(msg) from exc

    try:
        obj = getattr(module, attribute)
    except AttributeError:
        msg = f"{target!r}: module {module_name!r} has no attribute {attribute!r}"
        raise ConfigurationError(msg) from None

    if not isinstance(obj, App) and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"{target!r}: app factory failed: {exc}"
            raise ConfigurationError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{target!r} is a {type(obj).__name__}, not a switchyard App"
        raise ConfigurationError(msg)
    return obj
