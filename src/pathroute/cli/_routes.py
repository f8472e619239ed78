"""``pathroute routes`` and ``pathroute match`` — inspect a route table.

Scans a project directory, builds the route table, and prints either the
whole table or the outcome of matching one request path.
"""

import argparse
import sys

from pathroute.config import RouterConfig
from pathroute.discovery import DEFAULT_INCLUDE, discover_sources
from pathroute.errors import ConfigurationError
from pathroute.routing.route import Role
from pathroute.routing.table import RouteTable


def _load_table(args: argparse.Namespace) -> RouteTable:
    try:
        config = RouterConfig(
            page_root=args.page_root,
            separator=False if args.no_separator else "-",
        )
        sources = discover_sources(
            args.root,
            include=args.include or DEFAULT_INCLUDE,
            exclude=args.exclude,
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return RouteTable(sources, config).build()


def run_routes(args: argparse.Namespace) -> None:
    """Print PATTERN, PAGE and LAYOUT for every route, in match order."""
    table = _load_table(args)
    if not table:
        print("No routes discovered.")
        return

    # Build rows: (pattern, page, layout)
    rows: list[tuple[str, str, str]] = []
    for pattern, entry in table.items():
        layout = entry.roles[Role.LAYOUT]
        rows.append((pattern, entry.source, layout.source or "-"))

    max_pattern = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header
    max_page = max(max(len(r[1]) for r in rows), 4)  # "PAGE" header

    fmt = f"{{:<{max_pattern}}}  {{:<{max_page}}}  {{}}"
    print(fmt.format("PATTERN", "PAGE", "LAYOUT"))
    sep_len = max_pattern + max_page + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for pattern, page, layout in rows:
        print(fmt.format(pattern, page, layout))


def run_match(args: argparse.Namespace) -> None:
    """Print the route matching ``args.path``; exit 1 when none does."""
    table = _load_table(args)
    match = table.match(args.path)
    if match is None:
        print(f"No route matches {args.path!r}", file=sys.stderr)
        raise SystemExit(1)

    print(f"pattern: {match.pattern}")
    print(f"page:    {match.entry.source}")
    for name, value in sorted(match.params.items()):
        print(f"param:   {name}={value}")
    for role in Role:
        resolution = match.role(role)
        print(f"{role.value}: {resolution.source or '-'}")
