"""Route and Binding — one template, one handler per method."""

from __future__ import annotations

from dataclasses import dataclass, field

from wren._internal.types import Handler
from wren.routing.template import PathTemplate


@dataclass(slots=True)
class Binding:
    """A method's handler on a route.

    Private by default: the app's authorizer runs before the handler.
    """

    handler: Handler
    public: bool = False

    def mark_public(self) -> Binding:
        """Exempt this binding from authorization. Returns ``self``."""
        self.public = True
        return self


@dataclass(slots=True)
class Route:
    """A distinct URI template and its per-method bindings.

    ``bindings`` keeps registration order, which is also the order
    methods are listed in ``Allow`` headers.
    """

    path: PathTemplate
    bindings: dict[str, Binding] = field(default_factory=dict)

    @property
    def template(self) -> str:
        return self.path.template

    @property
    def methods(self) -> tuple[str, ...]:
        """Bound methods in registration order."""
        return tuple(self.bindings)

    def binding_for(self, method: str) -> Binding | None:
        return self.bindings.get(method.upper())
