"""Routing — path templates and the append-only route table.

Routes are registered during setup, in precedence order: the first
registered template that matches a path wins.
"""

from wren.routing.route import Binding, Route
from wren.routing.table import RouteTable
from wren.routing.template import PathTemplate

__all__ = ["Binding", "PathTemplate", "Route", "RouteTable"]
