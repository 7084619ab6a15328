"""Bitform CLI — run an application or list its routes.

Entry point registered as ``bitform`` in ``pyproject.toml``::

    [project.scripts]
    bitform = "bitform.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``bitform`` command."""
    parser = argparse.ArgumentParser(
        prog="bitform",
        description="Bitform — compose providers, modules, and storages into a web application.",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level for bitform loggers",
    )
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Prepare the application and start serving")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    routes_parser = subparsers.add_parser("routes", help="List the routes modules register")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    if args.command == "run":
        from bitform.cli._run import run_application

        run_application(args)
    elif args.command == "routes":
        from bitform.cli._routes import run_routes

        run_routes(args)
