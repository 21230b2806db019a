"""Wren exception hierarchy.

Shared across the route table, App, and dispatcher so every module
raises and catches the same types. Client-facing failures are never
exceptions: they are ``Status`` values written through the response
writer.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when app setup is invalid.

    Surfaces at registration time, before the app serves a request.
    """


class RouteTemplateError(ConfigurationError):
    """A route template could not be compiled.

    Carries the offending template so startup logs point at the exact
    registration that failed.
    """

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Invalid route template {template!r}: {reason}")
