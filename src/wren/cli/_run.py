"""``wren run`` — serve an app with uvicorn."""

import argparse
import sys

from wren.cli._resolve import resolve_app


def run_command(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it.

    ``--host``/``--port``/``--workers`` override the app's config. The
    import string is forwarded so uvicorn can re-import on reload.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from wren.server.dev import run_server

    run_server(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        log_level=app.config.log_level,
        reload=args.reload,
        workers=args.workers if args.workers is not None else app.config.workers,
        app_path=args.app,
    )
