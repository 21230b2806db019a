"""Request dispatch — the only component that touches raw ASGI for HTTP.

Each request walks a fixed sequence and ends in exactly one response:

1. Secure headers; plain HTTP may be redirected to HTTPS.
2. A Content-Type other than JSON is rejected with 400.
3. The first matching route is selected, or 404.
4. ``OPTIONS`` is answered from the route's bindings, no auth, no body.
5. An unbound method gets 405.
6. Private bindings pass through the authorization gate.
7. The handler runs; its returned status goes through the write-once
   ``ResponseWriter.write_status()``.

A fault in the authorizer or handler becomes 500 for that request only.
"""

import logging

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren._internal.types import Authorizer
from wren.config import AppConfig
from wren.http.request import Request
from wren.http.writer import ResponseWriter
from wren.routing.route import Route
from wren.routing.table import RouteTable
from wren.server.gate import authorize
from wren.server.secure import apply_secure_headers, https_url, needs_redirect
from wren.status import (
    BadRequest,
    InternalServerError,
    MethodNotAllowed,
    MovedPermanently,
    NotFound,
    Status,
)

logger = logging.getLogger("wren.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: RouteTable,
    authorizer: Authorizer | None,
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    writer = ResponseWriter(send)
    _apply_default_headers(writer, request, config)
    writer.set_baseline()

    await dispatch(request, writer, table=table, authorizer=authorizer, config=config)
    await writer.finish()


async def dispatch(
    request: Request,
    writer: ResponseWriter,
    *,
    table: RouteTable,
    authorizer: Authorizer | None,
    config: AppConfig,
) -> None:
    """Route *request* and write its outcome into *writer*."""
    if needs_redirect(request, config):
        location = https_url(request)
        logger.debug("301 %s %s -> %s", request.method, request.path, location)
        writer.headers["Location"] = location
        writer.write_status(MovedPermanently)
        return

    if request.content_type and request.media_type != config.content_type:
        _reject(request, writer, BadRequest, f"unsupported content type {request.content_type!r}")
        return

    route = table.find_route(request.path)
    if route is None:
        _reject(request, writer, NotFound, "no route matches")
        return

    if request.method == "OPTIONS":
        _write_options(route, writer)
        return

    binding = route.binding_for(request.method)
    if binding is None:
        _reject(request, writer, MethodNotAllowed, f"allowed: {', '.join(route.methods)}")
        return

    request = request.with_path_params(route.path.match(request.path) or {})
    try:
        denied = await authorize(binding, authorizer, request, writer)
        if denied is not None:
            writer.write_status(denied)
            return
        result = await invoke(binding.handler, request, writer)
        if result is not None and not isinstance(result, Status):
            msg = (
                f"Handler {_name(binding.handler)} returned "
                f"{type(result).__name__}, expected Status or None"
            )
            raise TypeError(msg)
    except Exception as exc:
        logger.exception("500 %s %s", request.method, request.path)
        writer.discard()
        writer.write_status(_internal_error(exc, config))
        return

    writer.write_status(result)


def _apply_default_headers(writer: ResponseWriter, request: Request, config: AppConfig) -> None:
    """Headers every response carries: JSON content type, CORS, security."""
    writer.headers["Content-Type"] = config.content_type
    origin = request.headers.get("origin")
    if config.cors_mirror_origin and origin:
        writer.headers["Access-Control-Allow-Origin"] = origin
    writer.headers["Access-Control-Allow-Headers"] = config.cors_allow_headers
    apply_secure_headers(writer, request, config)


def _write_options(route: Route, writer: ResponseWriter) -> None:
    allow = ", ".join((*route.methods, "OPTIONS"))
    writer.headers["Allow"] = allow
    writer.headers["Access-Control-Allow-Methods"] = allow
    writer.headers["Content-Length"] = "0"
    writer.write_header(200)


def _reject(request: Request, writer: ResponseWriter, status: Status, reason: str) -> None:
    logger.debug("%d %s %s: %s", status.code, request.method, request.path, reason)
    writer.write_status(status)


def _name(handler: object) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


def _internal_error(exc: Exception, config: AppConfig) -> Status:
    if config.debug:
        return InternalServerError.with_errors(f"{type(exc).__name__}: {exc}")
    return InternalServerError
