"""Server runner — hands the live App to uvicorn.

uvicorn is an optional dependency (``pip install wren[server]``); any
ASGI server can host a wren App directly.
"""

import logging

logger = logging.getLogger("wren.server")


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    log_level: str = "info",
    reload: bool = False,
    workers: int = 1,
    app_path: str | None = None,
) -> None:
    """Start uvicorn with the given wren App.

    uvicorn needs an import string for reload and multi-worker modes;
    *app_path* (``"module:attribute"``) is used for those when given,
    otherwise the live object is served in a single process.

    Args:
        app: ASGI callable (wren App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: uvicorn log level name.
        reload: Restart on source changes (requires *app_path*).
        workers: Worker process count (requires *app_path* when > 1).
        app_path: Optional ``"module:attribute"`` import string.
    """
    try:
        import uvicorn
    except ImportError as exc:
        msg = "Serving requires uvicorn. Install it with: pip install wren[server]"
        raise RuntimeError(msg) from exc

    target: object = app
    if app_path is not None and (reload or workers > 1):
        target = app_path
    elif reload or workers > 1:
        logger.warning("reload/workers need an import string; serving a single process")
        reload, workers = False, 1

    logger.info("Serving on http://%s:%d", host, port)
    uvicorn.run(
        target,  # type: ignore[arg-type]
        host=host,
        port=port,
        log_level=log_level,
        reload=reload,
        workers=workers if workers > 1 else None,
        lifespan="on",
    )
