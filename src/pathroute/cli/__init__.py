"""pathroute CLI — inspect the route table of a project directory.

Entry point registered as ``pathroute`` in ``pyproject.toml``::

    [project.scripts]
    pathroute = "pathroute.cli:main"
"""

import argparse
import sys


def _add_discovery_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", help="Project directory to scan")
    parser.add_argument(
        "--include",
        action="append",
        default=None,
        help="Glob selecting page sources (repeatable, default **/pages/**/*.py)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Pattern dropping page sources (repeatable)",
    )
    parser.add_argument("--page-root", default="pages", help="Container directory name")
    parser.add_argument(
        "--no-separator",
        action="store_true",
        help="Join camelCase words without a separator",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``pathroute`` command."""
    parser = argparse.ArgumentParser(
        prog="pathroute",
        description="pathroute — route tables from page files.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- pathroute routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List discovered routes")
    _add_discovery_args(routes_parser)

    # -- pathroute match --------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a request path")
    _add_discovery_args(match_parser)
    match_parser.add_argument("path", help="Request path, e.g. /topics/A")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from pathroute.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from pathroute.cli._routes import run_match

        run_match(args)
