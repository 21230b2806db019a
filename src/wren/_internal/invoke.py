"""Invoke helpers — call sync or async callables uniformly.

Handlers and authorizers can be ``def`` or ``async def``. Coroutine
functions are awaited on the event loop. Plain functions run in a worker
thread through anyio so a blocking handler never stalls other requests.

Usage::

    from wren._internal.invoke import invoke

    result = await invoke(handler, request, writer)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


def _is_async_callable(obj: Any) -> bool:
    while isinstance(obj, functools.partial):
        obj = obj.func
    return inspect.iscoroutinefunction(obj) or inspect.iscoroutinefunction(
        getattr(obj, "__call__", None)
    )


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and return its result.

    Works with both sync and async callables::

        # sync: runs in a worker thread
        def show_user(request, writer):
            writer.write_json(load_user(request.path_params["id"]))

        # async: awaited directly
        async def create_user(request, writer):
            payload = await request.json()
            ...
            return Created
    """
    if _is_async_callable(func):
        return await func(*args, **kwargs)

    result = await anyio.to_thread.run_sync(functools.partial(func, *args, **kwargs))
    if inspect.isawaitable(result):
        result = await result
    return result
