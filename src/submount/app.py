"""Submount application class.

An ``App`` is an ordered list of middleware. It can be served over ASGI,
or mounted inside another app, in which case its middleware list is
composed into the parent's pipeline.

Mutable during setup. Frozen when it first serves an ASGI request.
"""

from __future__ import annotations

import inspect
import re
import threading
from collections.abc import Callable
from typing import Any, TypeAlias

from submount._internal.asgi import Receive, Scope, Send
from submount.config import AppConfig
from submount.middleware.compose import compose
from submount.middleware.protocol import Composable, Middleware
from submount.routing.mount import mount as _mount
from submount.server.handler import handle_request

ErrorHandler: TypeAlias = Callable[..., Any]


class App:
    """The submount application.

    Usage::

        api = App(name="api")

        @api.use
        async def users(ctx, next):
            if ctx.path == "/users":
                ctx.body = "users"
            else:
                await next()

        app = App()
        app.mount("/api", api)

    Mounted apps are composed over their live middleware list, so
    middleware added to ``api`` after ``app.mount(...)`` still runs.

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock and a
        double check so exactly one thread composes the pipeline even if
        several ASGI workers deliver the first request at once.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_pipeline",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
        "name",
    )

    def __init__(self, config: AppConfig | None = None, *, name: str | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self.name = name
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._pipeline: Middleware | None = None

    # -- Middleware --

    def use(self, middleware: Middleware) -> Middleware:
        """Append *middleware* to the pipeline.

        Returns the middleware unchanged, so ``use`` also works as a
        decorator.
        """
        self._check_not_frozen()
        if not callable(middleware):
            msg = f"Middleware must be callable, got {middleware!r}."
            raise TypeError(msg)
        self._middleware_list.append(middleware)
        return middleware

    def mount(
        self,
        prefix: str | re.Pattern[str] | Middleware | Composable,
        target: Middleware | Composable | None = None,
        *,
        merge_params: bool | None = None,
    ) -> App:
        """Mount *target* at *prefix* and append it to the pipeline.

        ``merge_params`` defaults to ``AppConfig.merge_params``. Returns
        the app for chaining.
        """
        if merge_params is None:
            merge_params = self.config.merge_params
        self.use(_mount(prefix, target, merge_params=merge_params))
        return self

    @property
    def middleware(self) -> list[Middleware]:
        """The live middleware list, in registration order."""
        return self._middleware_list

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator.

        Handlers take ``()``, ``(ctx)`` or ``(ctx, exc)`` and return a
        ``Response``, a body, or nothing (after writing to ``ctx``).
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator.

        Hooks run in registration order during ASGI lifespan shutdown.
        """
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._pipeline is not None

        await handle_request(
            scope,
            receive,
            send,
            pipeline=self._pipeline,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, then runs the registered hooks and
        reports completion back to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self._run_hooks(self._startup_hooks)
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self._run_hooks(self._shutdown_hooks)
                await send({"type": "lifespan.shutdown.complete"})
                return

    @staticmethod
    async def _run_hooks(hooks: list[Callable[..., Any]]) -> None:
        for hook in hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compose the pipeline. MUST only be called while holding _freeze_lock."""
        self._pipeline = compose(tuple(self._middleware_list))
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register middleware, mounts, and hooks before serving."
            )
            raise RuntimeError(msg)

    def __repr__(self) -> str:
        label = self.name or "unnamed"
        return f"<App {label} middleware={len(self._middleware_list)}>"
