"""The glide ASGI application.

An ``App`` collects routes, middleware, error handlers and lifespan hooks
while the program imports. The first ASGI call compiles that setup into an
immutable runtime state; from then on registration is an error.
"""

import threading
from collections.abc import Callable

from kida import Environment

from glide._internal.asgi import Receive, Scope, Send
from glide._internal.invoke import invoke
from glide._internal.types import ErrorHandler, Handler, Hook
from glide.config import AppConfig
from glide.middleware.protocol import Middleware
from glide.routing import Route, RouteTable
from glide.server.handler import handle_request
from glide.templating.integration import create_environment


class App:
    """A glide application, callable as ASGI 3.0.

    Usage::

        inertia = Inertia(InertiaConfig(version="1"))
        app = App(AppConfig(template_dir="templates"))
        app.add_middleware(InertiaMiddleware(inertia))

        @app.route("/events/{id}")
        def show(id: int):
            return Render("Events/Show", event=load_event(id))

    Workers may hit ``__call__`` concurrently on their first request; the
    freeze runs under a lock so exactly one of them compiles the app.
    """

    __slots__ = (
        "_compiled_middleware",
        "_env",
        "_error_handlers",
        "_frozen",
        "_given_env",
        "_lock",
        "_middleware_list",
        "_pending_routes",
        "_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        kida_env: Environment | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._given_env = kida_env
        self._pending_routes: list[Route] = []
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []

        self._lock = threading.Lock()
        self._frozen = False
        self._routes: RouteTable | None = None
        self._compiled_middleware: tuple[Middleware, ...] = ()
        self._env: Environment | None = None

    # -- Setup --

    def route(self, path: str, *, methods: list[str] | None = None) -> Callable[[Handler], Handler]:
        """Decorator registering *func* for *path* (``GET`` unless *methods* says otherwise).

        ``{name}`` in the path captures one segment and is passed to the
        handler as the keyword argument ``name``.
        """

        def register(func: Handler) -> Handler:
            self._check_not_frozen()
            verbs = frozenset(m.upper() for m in methods or ("GET",))
            self._pending_routes.append(Route.create(path, func, verbs))
            return func

        return register

    def error(self, key: int | type[Exception]) -> Callable[[ErrorHandler], ErrorHandler]:
        """Decorator registering a handler for a status code or exception type."""

        def register(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[key] = func
            return func

        return register

    def add_middleware(self, middleware: Middleware) -> None:
        """Append *middleware*; the first one added sees the request first."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def on_startup(self, func: Hook) -> Hook:
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with pounce, blocking until the server stops."""
        self._ensure_frozen()

        from glide.server.run import run_server

        cfg = self.config
        run_server(
            self,
            host or cfg.host,
            port or cfg.port,
            reload=cfg.debug,
            reload_include=cfg.reload_include,
            reload_dirs=cfg.reload_dirs,
            workers=cfg.workers,
            log_level=cfg.log_level,
            request_timeout=cfg.request_timeout,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._routes is not None
        await handle_request(
            scope,
            receive,
            send,
            routes=self._routes,
            middleware=self._compiled_middleware,
            error_handlers=self._error_handlers,
            kida_env=self._env,
            debug=self.config.debug,
        )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        """Answer ``lifespan.startup`` and ``lifespan.shutdown`` from the server."""
        self._ensure_frozen()
        while True:
            event = (await receive())["type"]
            if event == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif event == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run the startup hooks in registration order."""
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run the shutdown hooks in registration order."""
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Freezing --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._lock:
            if not self._frozen:
                self._freeze()

    def _freeze(self) -> None:
        # Caller holds self._lock.
        self._routes = RouteTable(tuple(self._pending_routes))
        self._compiled_middleware = tuple(self._middleware_list)
        self._env = self._given_env or create_environment(self.config)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, hooks and error handlers before app.run()."
            )
            raise RuntimeError(msg)
