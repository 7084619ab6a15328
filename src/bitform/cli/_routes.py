"""``bitform routes`` — list the routes an application registers.

Runs ``prepare()`` (storages, modules, pages) without starting the
provider, then prints METHOD / PATH / HANDLER rows.
"""

import argparse
import sys

from bitform.cli._resolve import resolve_application
from bitform.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    try:
        app = resolve_application(args.app)
        app.prepare()
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    assert app.provider is not None
    routes = app.provider.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        for method, callback in sorted(route.callbacks.items()):
            handler_name = getattr(callback, "__qualname__", repr(callback))
            rows.append((str(method), route.path, handler_name))

    max_method = max([6, *(len(r[0]) for r in rows)])
    max_path = max([4, *(len(r[1]) for r in rows)])

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_method + max_path + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))
