"""Switchyard — a small async HTTP request dispatcher.

Routes are registered against (method, path-pattern) pairs; each request
runs through path-scoped middleware, per-parameter hooks and then the
matched handler.

Basic usage::

    from switchyard import App

    app = App()

    @app.get("/users/:id")
    async def show_user(request, response):
        response.json({"id": request.path_params["id"]})

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Dispatcher",
    "DuplicateRoute",
    "Flow",
    "HTTPError",
    "Middleware",
    "Request",
    "Response",
    "ResponseWriter",
    "SwitchyardError",
    "g",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import switchyard`` fast while providing a flat top-level API.
    """
    if name == "App":
        from switchyard.app import App

        return App

    if name == "AppConfig":
        from switchyard.config import AppConfig

        return AppConfig

    if name == "Dispatcher":
        from switchyard.dispatcher import Dispatcher

        return Dispatcher

    if name == "Request":
        from switchyard.http.request import Request

        return Request

    if name in ("Response", "ResponseWriter"):
        from switchyard.http import response as _resp

        return getattr(_resp, name)

    if name in ("Flow", "Middleware"):
        from switchyard.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("g", "get_request"):
        from switchyard import context as _ctx

        return getattr(_ctx, name)

    if name in ("SwitchyardError", "ConfigurationError", "DuplicateRoute", "HTTPError"):
        from switchyard import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
