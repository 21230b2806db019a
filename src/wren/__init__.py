"""Wren — a small routing and authorization layer for JSON APIs.

Register method + path handlers, gate private routes behind one
authorization callback, and let wren answer ``OPTIONS``, 404, 405 and
400 with a uniform JSON envelope.

Basic usage::

    from wren import App, Forbidden

    app = App()

    @app.authorizer
    def check(request, writer):
        if request.headers.get("authorization") != "Bearer X":
            return Forbidden
        return None

    @app.get("/items/:id")
    def show_item(request, writer):
        writer.write_json({"id": request.path_params["id"]})

    app.get("/health", lambda request, writer: None).mark_public()

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "Accepted",
    "App",
    "AppConfig",
    "BadRequest",
    "Binding",
    "ConfigurationError",
    "Conflict",
    "Created",
    "Forbidden",
    "InternalServerError",
    "MethodNotAllowed",
    "MovedPermanently",
    "NoContent",
    "NotFound",
    "OK",
    "Request",
    "ResponseWriter",
    "Route",
    "RouteTemplateError",
    "ServiceUnavailable",
    "Status",
    "Unauthorized",
    "UnprocessableEntity",
    "WrenError",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "App": "wren.app",
    "AppConfig": "wren.config",
    "Request": "wren.http.request",
    "ResponseWriter": "wren.http.writer",
    "Binding": "wren.routing.route",
    "Route": "wren.routing.route",
    "WrenError": "wren.errors",
    "ConfigurationError": "wren.errors",
    "RouteTemplateError": "wren.errors",
    "Status": "wren.status",
    "OK": "wren.status",
    "Created": "wren.status",
    "Accepted": "wren.status",
    "NoContent": "wren.status",
    "MovedPermanently": "wren.status",
    "BadRequest": "wren.status",
    "Unauthorized": "wren.status",
    "Forbidden": "wren.status",
    "NotFound": "wren.status",
    "MethodNotAllowed": "wren.status",
    "Conflict": "wren.status",
    "UnprocessableEntity": "wren.status",
    "InternalServerError": "wren.status",
    "ServiceUnavailable": "wren.status",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import wren`` fast while providing a flat top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
