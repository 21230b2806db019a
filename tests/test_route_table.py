"""Tests for wren.routing.table — registration, precedence, params."""

import pytest

from wren.errors import ConfigurationError, RouteTemplateError
from wren.routing.route import Binding
from wren.routing.table import RouteTable


def _handler(request, writer) -> None:
    return None


def _other(request, writer) -> None:
    return None


class TestRegister:
    def test_returns_private_binding(self) -> None:
        table = RouteTable()
        binding = table.register("GET", "/", _handler)
        assert isinstance(binding, Binding)
        assert binding.handler is _handler
        assert binding.public is False

    def test_one_route_per_template(self) -> None:
        table = RouteTable()
        table.register("GET", "/users", _handler)
        table.register("POST", "/users", _other)

        assert len(table) == 1
        route = table.routes[0]
        assert route.methods == ("GET", "POST")
        assert route.bindings["POST"].handler is _other

    def test_same_method_overwrites(self) -> None:
        table = RouteTable()
        table.register("GET", "/users", _handler)
        table.register("GET", "/users", _other)

        assert len(table) == 1
        assert table.routes[0].bindings["GET"].handler is _other

    def test_method_is_upper_cased(self) -> None:
        table = RouteTable()
        table.register("get", "/", _handler)
        assert table.routes[0].methods == ("GET",)
        assert table.routes[0].binding_for("get") is not None

    def test_empty_method(self) -> None:
        with pytest.raises(ConfigurationError):
            RouteTable().register("  ", "/", _handler)

    def test_malformed_template_fails_at_registration(self) -> None:
        table = RouteTable()
        with pytest.raises(RouteTemplateError):
            table.register("GET", "/users/:", _handler)
        assert len(table) == 0

    def test_insertion_order(self) -> None:
        table = RouteTable()
        for template in ("/c", "/a", "/b"):
            table.register("GET", template, _handler)
        assert [route.template for route in table] == ["/c", "/a", "/b"]


class TestMarkPublic:
    def test_flips_flag(self) -> None:
        table = RouteTable()
        binding = table.register("GET", "/public", _handler)
        assert table.mark_public(binding) is binding
        assert binding.public is True

    def test_chainable_on_binding(self) -> None:
        binding = RouteTable().register("GET", "/public", _handler).mark_public()
        assert binding.public is True

    def test_only_affects_one_method(self) -> None:
        table = RouteTable()
        table.register("GET", "/items", _handler).mark_public()
        table.register("POST", "/items", _handler)
        route = table.routes[0]
        assert route.bindings["GET"].public is True
        assert route.bindings["POST"].public is False


class TestFindRoute:
    def test_no_match(self) -> None:
        table = RouteTable()
        table.register("GET", "/users", _handler)
        assert table.find_route("/posts") is None

    def test_empty_table(self) -> None:
        assert RouteTable().find_route("/") is None

    def test_first_match_wins(self) -> None:
        table = RouteTable()
        table.register("GET", "/users/:id", _handler)
        table.register("GET", "/users/me", _other)

        route = table.find_route("/users/me")
        assert route is not None
        assert route.template == "/users/:id"

    def test_reversed_registration_reverses_precedence(self) -> None:
        table = RouteTable()
        table.register("GET", "/users/me", _other)
        table.register("GET", "/users/:id", _handler)

        route = table.find_route("/users/me")
        assert route is not None
        assert route.template == "/users/me"

        fallback = table.find_route("/users/42")
        assert fallback is not None
        assert fallback.template == "/users/:id"

    def test_first_match_ignores_method(self) -> None:
        table = RouteTable()
        table.register("GET", "/items/:id", _handler)
        table.register("DELETE", "/items/:name", _other)

        route = table.find_route("/items/1")
        assert route is not None
        assert route.template == "/items/:id"
        assert route.binding_for("DELETE") is None


class TestExtractParams:
    def test_named_values(self) -> None:
        table = RouteTable()
        table.register("GET", "/foo/:foo_id/bar/:id", _handler)
        assert table.extract_params("/foo/1/bar/example-2") == {
            "foo_id": "1",
            "id": "example-2",
        }

    def test_static_route(self) -> None:
        table = RouteTable()
        table.register("GET", "/health", _handler)
        assert table.extract_params("/health") == {}

    def test_unmatched_path(self) -> None:
        table = RouteTable()
        table.register("GET", "/users/:id", _handler)
        assert table.extract_params("/nope") == {}

    def test_uses_first_matching_route(self) -> None:
        table = RouteTable()
        table.register("GET", "/users/:user_id", _handler)
        table.register("GET", "/users/:id", _other)
        assert table.extract_params("/users/7") == {"user_id": "7"}
