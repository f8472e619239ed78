"""pathroute — route tables derived from page files.

Pages are addressed by where they live, not by registration: a collection
of discovered paths and lazy loaders becomes an immutable route table with
cascading layout / error / notFound / notAuthorized roles, and page render
functions resolve back to URLs for navigation.

Basic usage::

    from pathroute import Role, RouteTable

    table = RouteTable({
        "pages/index.tsx": load_index,
        "pages/layout.tsx": load_layout,
        "pages/topics/[topic].tsx": load_topic,
    })
    match = table.match("/topics/A")
    match.params                      # {"topic": "A"}
    match.role(Role.LAYOUT).source    # "pages/layout.tsx"

Reverse navigation::

    from pathroute import Navigator

    navigator = Navigator(history.push)
    await navigator.load_index(sources)
    await navigator.navigate(TopicPage, params={"topic": "A"})
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AccessDecision",
    "AccessResult",
    "ConfigurationError",
    "MissingParam",
    "NavigationIndex",
    "Navigator",
    "PathrouteError",
    "Role",
    "RoleResolution",
    "RouteEntry",
    "RouteMatch",
    "RouteTable",
    "RouterConfig",
    "SourceEntry",
    "UnresolvedPage",
    "build_index",
    "check_access",
    "compile_pattern",
    "discover_sources",
    "resolve_role",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import pathroute`` fast while providing a clean top-level API.
    """
    if name == "RouterConfig":
        from pathroute.config import RouterConfig

        return RouterConfig

    if name == "RouteTable":
        from pathroute.routing.table import RouteTable

        return RouteTable

    if name in ("Role", "RoleResolution", "RouteEntry", "RouteMatch", "SourceEntry"):
        from pathroute.routing import route as _route

        return getattr(_route, name)

    if name == "compile_pattern":
        from pathroute.routing.pattern import compile_pattern

        return compile_pattern

    if name == "resolve_role":
        from pathroute.routing.roles import resolve_role

        return resolve_role

    if name in ("NavigationIndex", "build_index"):
        from pathroute.navigation import index as _index

        return getattr(_index, name)

    if name == "Navigator":
        from pathroute.navigation.navigator import Navigator

        return Navigator

    if name in ("AccessDecision", "AccessResult", "check_access"):
        from pathroute import auth as _auth

        return getattr(_auth, name)

    if name == "discover_sources":
        from pathroute.discovery import discover_sources

        return discover_sources

    if name in ("ConfigurationError", "MissingParam", "PathrouteError", "UnresolvedPage"):
        from pathroute import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
