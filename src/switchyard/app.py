"""Switchyard application class.

Mutable during setup (routes, middleware, param hooks, lifecycle hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

import anyio

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard._internal.invoke import invoke
from switchyard._internal.types import Handler, Hook, MiddlewareHandler, ParamHook
from switchyard.config import AppConfig
from switchyard.dispatcher import Dispatcher
from switchyard.routing.route import Route
from switchyard.server.handler import handle_request

logger = logging.getLogger("switchyard.server")


class App:
    """The switchyard application.

    Usage::

        app = App()
        app.use(logger_middleware())

        @app.param("id")
        async def load_user(request, response, value, name):
            ...

        @app.get("/users/:id")
        async def show_user(request, response):
            response.json({"id": request.path_params["id"]})

    Registration errors (e.g. ``DuplicateRoute``) are raised right away,
    at the decorator call.

    Thread safety:
        Setup is single-threaded (decorators at import time). The freeze
        transition uses a Lock + double-check so exactly one worker
        freezes the app, even when several call ``__call__()`` at once
        on the first request. After that, tables are only read.
    """

    __slots__ = (
        "_background_tasks",
        "_dispatcher",
        "_freeze_lock",
        "_frozen",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._dispatcher = Dispatcher()
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._background_tasks: list[Hook] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def routes(self) -> list[Route]:
        """Registered routes, in registration order."""
        return self._dispatcher.router.routes

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: Path pattern. Use ``:name`` for parameters and ``*``
                for a glob.
            methods: HTTP methods. Defaults to ``["GET"]``. Each method
                becomes its own route.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            for method in methods or ["GET"]:
                self._dispatcher.register(method, path, func)
            return func

        return decorator

    def get(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["GET"])

    def post(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["POST"])

    def put(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["PUT"])

    def patch(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["PATCH"])

    def delete(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["DELETE"])

    def head(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["HEAD"])

    def options(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=["OPTIONS"])

    # -- Middleware and param hooks --

    def use(self, pattern: str | MiddlewareHandler, *handlers: MiddlewareHandler) -> None:
        """Add middleware, optionally scoped to a path pattern.

        ``app.use(mw)`` runs *mw* on every request;
        ``app.use("/api/*", auth, limiter)`` runs both, in that order,
        on paths under ``/api/``.
        """
        self._check_not_frozen()
        self._dispatcher.use(pattern, *handlers)

    def param(self, name: str) -> Callable[[ParamHook], ParamHook]:
        """Register a hook for path parameter *name* via decorator.

        The hook runs as ``hook(request, response, value, name)`` after
        middleware and before the handler, whenever the matched route
        binds *name*. Only the last hook registered for a name is kept.
        """

        def decorator(func: ParamHook) -> ParamHook:
            self._check_not_frozen()
            self._dispatcher.param(name, func)
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Register a sync or async startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server accepts requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Register a sync or async shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    def background(self, func: Hook) -> Hook:
        """Run an async callable for the lifetime of the server.

        Started after the startup hooks and cancelled when lifespan
        shutdown begins, before the shutdown hooks run::

            store = RateLimitStore(RateLimitConfig())
            app.use(RateLimitMiddleware(store))
            app.background(store.run_sweeper)
        """
        self._check_not_frozen()
        self._background_tasks.append(func)
        return func

    # -- Server --

    def run(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        workers: int | None = None,
    ) -> None:
        """Freeze the app and serve it with pounce.

        Runs with reload in debug mode, multi-worker otherwise.
        """
        from switchyard.server.runner import run_server

        self._ensure_frozen()
        run_server(
            self,
            self.config.host if host is None else host,
            self.config.port if port is None else port,
            workers=workers,
            reload=self.config.debug,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(
            scope,
            receive,
            send,
            dispatcher=self._dispatcher,
            config=self.config,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Background tasks live in a task group that spans the lifespan;
        their cancel scope is cancelled at shutdown, and the shutdown hooks
        only run once they have all unwound.
        """
        self._ensure_frozen()
        background_scope = anyio.CancelScope()
        background_done = anyio.Event()

        async def guarded(task: Hook) -> None:
            # A failing task is logged and dropped; the lifespan keeps running
            try:
                await invoke(task)
            except Exception:
                logger.exception("Background task failed: %r", task)

        async def run_background() -> None:
            try:
                with background_scope:
                    async with anyio.create_task_group() as tasks:
                        for task in self._background_tasks:
                            tasks.start_soon(guarded, task)
            finally:
                background_done.set()

        async with anyio.create_task_group() as tg:
            while True:
                message = await receive()
                msg_type = message["type"]

                if msg_type == "lifespan.startup":
                    try:
                        for hook in self._startup_hooks:
                            await invoke(hook)
                    except Exception as exc:
                        logger.exception("Startup hook failed")
                        await send({"type": "lifespan.startup.failed", "message": str(exc)})
                        return
                    if self._background_tasks:
                        tg.start_soon(run_background)
                    await send({"type": "lifespan.startup.complete"})

                elif msg_type == "lifespan.shutdown":
                    if self._background_tasks:
                        background_scope.cancel()
                        await background_done.wait()
                    for hook in self._shutdown_hooks:
                        await invoke(hook)
                    await send({"type": "lifespan.shutdown.complete"})
                    return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Mark the tables read-only. MUST hold _freeze_lock."""
        self._frozen = True
        logger.debug(
            "Frozen with %d routes, %d middleware, %d param hooks",
            len(self._dispatcher.router),
            len(self._dispatcher.middleware),
            len(self._dispatcher.param_hooks),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and hooks before calling app.run()."
            )
            raise RuntimeError(msg)
