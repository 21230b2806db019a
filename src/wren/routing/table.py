"""The route table — ordered templates with first-match-wins lookup.

The table is append-only. Templates are compiled when they are
registered, so a malformed template fails at startup rather than on
the first request that would have reached it.

Precedence is registration order, not specificity::

    table.register("GET", "/users/:id", show_user)
    table.register("GET", "/users/me", show_me)   # never reached
"""

import logging
from collections.abc import Iterator

from wren._internal.types import Handler
from wren.errors import ConfigurationError
from wren.routing.route import Binding, Route
from wren.routing.template import PathTemplate

logger = logging.getLogger("wren.routing")


class RouteTable:
    """Append-only collection of routes.

    Usage::

        table = RouteTable()
        binding = table.register("GET", "/users/:id", show_user)
        route = table.find_route("/users/42")
        table.extract_params("/users/42")  # {"id": "42"}
    """

    __slots__ = ("_by_template", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._by_template: dict[str, Route] = {}

    def register(self, method: str, template: str, handler: Handler) -> Binding:
        """Bind *handler* to *method* on *template*.

        Reuses the route already registered for *template*, replacing any
        binding for the same method. Otherwise compiles a new route and
        appends it to the end of the table.

        Raises ``RouteTemplateError`` for a malformed template and
        ``ConfigurationError`` for an empty method name.
        """
        method = method.strip().upper()
        if not method:
            msg = f"Route {template!r} registered without an HTTP method."
            raise ConfigurationError(msg)

        route = self._by_template.get(template)
        if route is None:
            route = Route(path=PathTemplate.compile(template))
            self._routes.append(route)
            self._by_template[template] = route
        elif method in route.bindings:
            logger.debug("Replacing %s binding on %s", method, template)

        binding = Binding(handler=handler)
        route.bindings[method] = binding
        return binding

    @staticmethod
    def mark_public(binding: Binding) -> Binding:
        """Exempt *binding* from authorization."""
        return binding.mark_public()

    def find_route(self, path: str) -> Route | None:
        """Return the first registered route whose template matches *path*."""
        for route in self._routes:
            if route.path.matches(path):
                return route
        return None

    def extract_params(self, path: str) -> dict[str, str]:
        """Path variables of the route *path* resolves to, or ``{}``."""
        route = self.find_route(path)
        if route is None:
            return {}
        return route.path.match(path) or {}

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in precedence order."""
        return tuple(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
