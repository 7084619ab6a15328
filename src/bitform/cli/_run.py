"""``bitform run`` — boot an application and serve it."""

import argparse
import sys

from bitform.cli._resolve import resolve_application
from bitform.errors import ConfigurationError


def run_application(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and call its ``run()``.

    Resolution and configuration problems exit with status 1. Failures
    raised while storages, modules, or pages boot propagate unchanged.
    """
    try:
        app = resolve_application(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        app.run()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
