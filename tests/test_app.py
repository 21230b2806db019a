"""Tests for wren.app — registration, freezing, and the ASGI lifespan."""

import logging
from typing import Any

import pytest

from wren import App, ConfigurationError, Created, OK, RouteTemplateError
from wren.http.headers import Headers
from wren.http.request import Request
from wren.testing import TestClient


def index(request, writer):
    return OK


def create(request, writer):
    return Created


class TestRegistration:
    def test_direct_registration_returns_binding(self) -> None:
        app = App()
        binding = app.get("/", index)
        assert binding.handler is index
        assert binding.public is False

    def test_mark_public_chains(self) -> None:
        app = App()
        binding = app.get("/health", index).mark_public()
        assert binding.public is True

    def test_static_mark_public(self) -> None:
        app = App()
        binding = App.mark_public(app.get("/health", index))
        assert binding.public is True

    def test_decorator_returns_function(self) -> None:
        app = App()

        @app.post("/items", public=True)
        def create_item(request, writer):
            return Created

        assert callable(create_item)
        route = app.routes[0]
        assert route.template == "/items"
        assert route.binding_for("POST").handler is create_item
        assert route.binding_for("POST").public is True

    @pytest.mark.parametrize("verb", ["get", "post", "put", "patch", "delete"])
    def test_verb_helpers(self, verb: str) -> None:
        app = App()
        getattr(app, verb)("/things", index)
        assert app.routes[0].methods == (verb.upper(),)

    def test_route_lowercase_method(self) -> None:
        app = App()
        app.route("get", "/", index)
        assert app.routes[0].methods == ("GET",)

    def test_same_template_shares_route(self) -> None:
        app = App()
        app.get("/items", index)
        app.post("/items", create)
        assert len(app.routes) == 1
        assert app.routes[0].methods == ("GET", "POST")

    @pytest.mark.parametrize("method", ["OPTIONS", "HEAD", "TRACE", ""])
    def test_unroutable_methods(self, method: str) -> None:
        app = App()
        with pytest.raises(ConfigurationError):
            app.route(method, "/", index)

    def test_bad_template(self) -> None:
        app = App()
        with pytest.raises(RouteTemplateError):
            app.get("no-slash", index)

    def test_params(self) -> None:
        app = App()
        app.get("/users/:id", index)
        request = Request(method="GET", path="/users/9", headers=Headers())
        assert app.params(request) == {"id": "9"}
        assert app.params(Request(method="GET", path="/nope", headers=Headers())) == {}


class TestAuthorizer:
    def test_last_set_wins(self) -> None:
        app = App()
        first = lambda request, writer: None  # noqa: E731
        second = lambda request, writer: None  # noqa: E731
        app.set_authorizer(first)
        app.set_authorizer(second)
        assert app._authorizer is second

    def test_decorator(self) -> None:
        app = App()

        @app.authorizer
        def check(request, writer):
            return None

        assert app._authorizer is check


class TestFreeze:
    @pytest.mark.asyncio
    async def test_registration_after_first_request_fails(self) -> None:
        app = App()
        app.get("/", index, public=True)
        async with TestClient(app) as client:
            await client.get("/")

        with pytest.raises(RuntimeError, match="Cannot modify"):
            app.get("/late", index)
        with pytest.raises(RuntimeError):
            app.set_authorizer(None)
        with pytest.raises(RuntimeError):
            app.on_startup(lambda: None)

    @pytest.mark.asyncio
    async def test_empty_table_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App()
        with caplog.at_level(logging.WARNING, logger="wren.app"):
            async with TestClient(app) as client:
                response = await client.get("/")
        assert response.status == 404
        assert "empty route table" in caplog.text


class TestLifespan:
    @staticmethod
    async def _run(app: App, messages: list[dict[str, Any]]) -> list[dict[str, Any]]:
        incoming = iter(messages)
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return next(incoming)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        return sent

    @pytest.mark.asyncio
    async def test_hooks_run(self) -> None:
        app = App()
        events: list[str] = []

        @app.on_startup
        def start() -> None:
            events.append("sync start")

        @app.on_startup
        async def start_async() -> None:
            events.append("async start")

        @app.on_shutdown
        async def stop() -> None:
            events.append("stop")

        sent = await self._run(
            app, [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        )

        assert events == ["sync start", "async start", "stop"]
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    @pytest.mark.asyncio
    async def test_startup_failure_reported(self) -> None:
        app = App()

        @app.on_startup
        def start() -> None:
            raise RuntimeError("database unreachable")

        sent = await self._run(app, [{"type": "lifespan.startup"}])
        assert sent == [{"type": "lifespan.startup.failed", "message": "database unreachable"}]

    @pytest.mark.asyncio
    async def test_shutdown_failure_reported(self) -> None:
        app = App()

        @app.on_shutdown
        def stop() -> None:
            raise RuntimeError("flush failed")

        sent = await self._run(
            app, [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        )
        assert sent == [
            {"type": "lifespan.startup.complete"},
            {"type": "lifespan.shutdown.failed", "message": "flush failed"},
        ]

    @pytest.mark.asyncio
    async def test_lifespan_freezes(self) -> None:
        app = App()
        await self._run(app, [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        with pytest.raises(RuntimeError):
            app.get("/", index)

    @pytest.mark.asyncio
    async def test_test_client_runs_hooks(self) -> None:
        app = App()
        events: list[str] = []
        app.on_startup(lambda: events.append("start"))
        app.on_shutdown(lambda: events.append("stop"))
        app.get("/", index, public=True)

        async with TestClient(app) as client:
            assert events == ["start"]
            await client.get("/")
        assert events == ["start", "stop"]
