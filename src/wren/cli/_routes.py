"""``wren routes`` — list registered routes in precedence order."""

import argparse
import sys

from wren.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, HANDLER and ACCESS for ``args.app``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows: list[tuple[str, str, str, str]] = []
    for route in app.routes:
        for method, binding in route.bindings.items():
            handler_name = getattr(binding.handler, "__name__", repr(binding.handler))
            access = "public" if binding.public else "private"
            rows.append((method, route.template, handler_name, access))

    if not rows:
        print("No routes registered.")
        return

    width_method = max(6, *(len(r[0]) for r in rows))
    width_path = max(4, *(len(r[1]) for r in rows))
    width_handler = max(7, *(len(r[2]) for r in rows))

    fmt = f"{{:<{width_method}}}  {{:<{width_path}}}  {{:<{width_handler}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER", "ACCESS"))
    print("-" * min(width_method + width_path + width_handler + 14, 80))
    for row in rows:
        print(fmt.format(*row))
