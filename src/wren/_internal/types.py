"""Shared type aliases used across wren modules."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from wren.http.request import Request
    from wren.http.writer import ResponseWriter
    from wren.status import Status

# Route handler: ``(request, writer) -> Status | None``, sync or async
Handler: TypeAlias = Callable[..., Any]

# Authorization callback: same shape as a handler; ``None`` or 2xx means proceed
Authorizer: TypeAlias = Callable[
    ["Request", "ResponseWriter"], "Status | None | Awaitable[Status | None]"
]

# Lifecycle hook: no arguments, sync or async
Hook: TypeAlias = Callable[[], Any]
