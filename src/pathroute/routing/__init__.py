"""Routing — discovered sources compiled into an immutable route table.

Patterns are compiled from file paths, roles cascade down the directory
tree, and requests are matched in processing order.
"""

from pathroute.routing.matcher import PathMatcher, interpolate, parse_pattern
from pathroute.routing.pattern import compile_pattern, normalize_casing, page_stem, route_pattern
from pathroute.routing.roles import RoleDirectory, resolve_role, role_of
from pathroute.routing.route import (
    Loader,
    Role,
    RoleMap,
    RoleResolution,
    RouteEntry,
    RouteMatch,
    SourceEntry,
)
from pathroute.routing.table import RouteTable

__all__ = [
    "Loader",
    "PathMatcher",
    "Role",
    "RoleDirectory",
    "RoleMap",
    "RoleResolution",
    "RouteEntry",
    "RouteMatch",
    "RouteTable",
    "SourceEntry",
    "compile_pattern",
    "interpolate",
    "normalize_casing",
    "page_stem",
    "parse_pattern",
    "resolve_role",
    "role_of",
    "route_pattern",
]
