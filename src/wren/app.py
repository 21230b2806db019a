"""Wren application class.

Owns the route table, the authorizer, and the configuration. Mutable
during setup (route registration), frozen when the first request or the
ASGI lifespan startup arrives.
"""

import inspect
import logging
import threading
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.types import Authorizer, Handler, Hook
from wren.config import AppConfig
from wren.errors import ConfigurationError
from wren.http.request import Request
from wren.routing.route import Binding, Route
from wren.routing.table import RouteTable
from wren.server.dispatch import handle_request

logger = logging.getLogger("wren.app")

# Methods that can carry a registered handler. OPTIONS is always generated.
ROUTABLE_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})


class App:
    """The wren application.

    Usage::

        app = App()

        @app.authorizer
        def check_token(request, writer):
            if request.headers.get("authorization") != "Bearer X":
                return Forbidden
            return None

        @app.get("/items/:id")
        def show_item(request, writer):
            writer.write_json({"id": request.path_params["id"]})

        app.get("/health", health).mark_public()

    Thread safety:
        Setup is single-threaded (registration at import time). The
        freeze transition uses a Lock + double-check so exactly one
        worker flips the app to serving mode.
    """

    __slots__ = (
        "_authorizer",
        "_freeze_lock",
        "_frozen",
        "_shutdown_hooks",
        "_startup_hooks",
        "_table",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._table = RouteTable()
        self._authorizer: Authorizer | None = None
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Route registration --

    def route(
        self,
        method: str,
        template: str,
        handler: Handler | None = None,
        *,
        public: bool = False,
    ) -> Any:
        """Register *handler* for *method* on *template*.

        With a handler, returns the ``Binding`` so it can be marked
        public. Without one, returns a decorator that registers the
        decorated function and returns it unchanged::

            app.route("GET", "/", index).mark_public()

            @app.route("POST", "/items")
            async def create_item(request, writer): ...

        Raises ``ConfigurationError`` for methods outside GET, POST, PUT,
        PATCH and DELETE, and ``RouteTemplateError`` for malformed
        templates.
        """
        method = method.upper()
        if method not in ROUTABLE_METHODS:
            allowed = ", ".join(sorted(ROUTABLE_METHODS))
            msg = f"Cannot register {method} {template!r}; routable methods are {allowed}."
            raise ConfigurationError(msg)

        if handler is not None:
            return self._register(method, template, handler, public)

        def decorator(func: Handler) -> Handler:
            self._register(method, template, func, public)
            return func

        return decorator

    def get(self, template: str, handler: Handler | None = None, *, public: bool = False) -> Any:
        """Register a GET handler. See ``route()``."""
        return self.route("GET", template, handler, public=public)

    def post(self, template: str, handler: Handler | None = None, *, public: bool = False) -> Any:
        """Register a POST handler. See ``route()``."""
        return self.route("POST", template, handler, public=public)

    def put(self, template: str, handler: Handler | None = None, *, public: bool = False) -> Any:
        """Register a PUT handler. See ``route()``."""
        return self.route("PUT", template, handler, public=public)

    def patch(self, template: str, handler: Handler | None = None, *, public: bool = False) -> Any:
        """Register a PATCH handler. See ``route()``."""
        return self.route("PATCH", template, handler, public=public)

    def delete(self, template: str, handler: Handler | None = None, *, public: bool = False) -> Any:
        """Register a DELETE handler. See ``route()``."""
        return self.route("DELETE", template, handler, public=public)

    def _register(self, method: str, template: str, handler: Handler, public: bool) -> Binding:
        self._check_not_frozen()
        binding = self._table.register(method, template, handler)
        if public:
            binding.mark_public()
        name = getattr(handler, "__name__", repr(handler))
        logger.debug("Registered %s %s -> %s", method, template, name)
        return binding

    @staticmethod
    def mark_public(binding: Binding) -> Binding:
        """Exempt *binding* from authorization."""
        return RouteTable.mark_public(binding)

    # -- Authorization --

    def set_authorizer(self, authorizer: Authorizer | None) -> None:
        """Install the authorization callback for private routes.

        The last call wins. ``None`` removes it, after which every
        private route answers 403.
        """
        self._check_not_frozen()
        self._authorizer = authorizer

    def authorizer(self, func: Authorizer) -> Authorizer:
        """Decorator form of ``set_authorizer()``."""
        self.set_authorizer(func)
        return func

    # -- Introspection --

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in precedence order."""
        return self._table.routes

    def params(self, request: Request) -> dict[str, str]:
        """Path variables for *request*, re-derived from the route table."""
        return self._table.extract_params(request.path)

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Register a sync or async hook run at ASGI lifespan startup."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Register a sync or async hook run at ASGI lifespan shutdown."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with uvicorn (``pip install wren[server]``)."""
        from wren.server.dev import run_server

        self._ensure_frozen()
        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            log_level=self.config.log_level,
            reload=False,
            workers=self.config.workers,
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
            table=self._table,
            authorizer=self._authorizer,
            config=self.config,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, then runs the registered hooks and
        reports completion (or failure) back to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self._run_hooks(self._startup_hooks)
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    await self._run_hooks(self._shutdown_hooks)
                except Exception as exc:
                    logger.exception("Shutdown hook failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return

    @staticmethod
    async def _run_hooks(hooks: list[Hook]) -> None:
        for hook in hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Flip to serving mode exactly once, even across worker threads."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            if not len(self._table):
                logger.warning("Serving with an empty route table; every request is 404")
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, hooks and the authorizer before app.run()."
            )
            raise RuntimeError(msg)
