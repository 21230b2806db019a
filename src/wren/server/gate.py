"""Authorization gate for private bindings."""

import logging

from wren._internal.invoke import invoke
from wren._internal.types import Authorizer
from wren.http.request import Request
from wren.http.writer import ResponseWriter
from wren.routing.route import Binding
from wren.status import Forbidden, Status

logger = logging.getLogger("wren.server")


async def authorize(
    binding: Binding,
    authorizer: Authorizer | None,
    request: Request,
    writer: ResponseWriter,
) -> Status | None:
    """Decide whether *binding* may run for *request*.

    Returns ``None`` to proceed, or the status to respond with:

    - public bindings always proceed, the authorizer is not consulted;
    - with no authorizer configured, private bindings get ``Forbidden``;
    - an authorizer result of ``None`` or any 2xx status proceeds;
    - any other status is returned unchanged.

    Exceptions raised by the authorizer propagate to the dispatcher.
    """
    if binding.public:
        return None
    if authorizer is None:
        logger.debug("403 %s %s: no authorizer configured", request.method, request.path)
        return Forbidden

    result: Status | None = await invoke(authorizer, request, writer)
    if result is None or result.is_success:
        return None
    logger.debug("%d %s %s: denied by authorizer", result.code, request.method, request.path)
    return result
