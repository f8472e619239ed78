"""Route table — discovered sources compiled into an immutable lookup.

The table is built at most once per instance.  Building compiles every page
path into a pattern, drops role files, keeps the first entry per pattern,
resolves the four roles by ancestor cascade, and records a matcher per
pattern in processing order.  Loaders are stored, never invoked.

Usage::

    table = RouteTable({"pages/index.tsx": load_index, "pages/about.tsx": load_about})
    match = table.match("/about")
    if match is not None:
        layout = await match.role(Role.LAYOUT).load()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from pathroute.config import RouterConfig
from pathroute.routing.matcher import PathMatcher
from pathroute.routing.pattern import route_pattern
from pathroute.routing.roles import RoleDirectory, role_of
from pathroute.routing.route import RoleMap, RouteEntry, RouteMatch, SourceEntry, Sources, as_entries

logger = logging.getLogger("pathroute.routing")


class RouteTable(Mapping[str, RouteEntry]):
    """Immutable mapping of route pattern to :class:`RouteEntry`.

    Read-only once built.  Safe to share across threads and tasks: the
    build is guarded so concurrent callers observe either nothing or the
    same completed table.
    """

    __slots__ = ("_build_lock", "_built", "_config", "_matchers", "_routes", "_sources")

    def __init__(self, sources: Sources, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._sources: tuple[SourceEntry, ...] = as_entries(sources)
        self._build_lock = threading.Lock()
        self._built = False
        self._routes: Mapping[str, RouteEntry] = MappingProxyType({})
        self._matchers: tuple[tuple[str, PathMatcher], ...] = ()

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def sources(self) -> tuple[SourceEntry, ...]:
        """The input collection, in processing order."""
        if self._config.sort_entries:
            return tuple(sorted(self._sources, key=lambda e: e.path))
        return self._sources

    @property
    def is_built(self) -> bool:
        return self._built

    def build(self) -> RouteTable:
        """Build the table once; later calls return it unchanged."""
        if self._built:
            return self
        with self._build_lock:
            if self._built:
                return self
            self._routes, self._matchers = self._compile()
            self._built = True
        return self

    def _compile(self) -> tuple[Mapping[str, RouteEntry], tuple[tuple[str, PathMatcher], ...]]:
        cfg = self._config
        sources = self.sources
        directory = RoleDirectory(sources, cfg.extensions)
        routes: dict[str, RouteEntry] = {}
        matchers: list[tuple[str, PathMatcher]] = []

        for source in sources:
            if role_of(source.path, cfg.extensions) is not None:
                continue
            pattern = route_pattern(source.path, cfg)
            if pattern in routes:
                logger.debug(
                    "Duplicate route %r: keeping %s, discarding %s",
                    pattern,
                    routes[pattern].source,
                    source.path,
                )
                continue
            routes[pattern] = RouteEntry(
                pattern=pattern,
                source=source.path,
                page_load=source.load,
                roles=directory.resolve_all(source.path),
            )
            matchers.append((pattern, PathMatcher(pattern, case_sensitive=cfg.case_sensitive)))

        return MappingProxyType(routes), tuple(matchers)

    # -- Mapping protocol ---------------------------------------------------

    def __getitem__(self, pattern: str) -> RouteEntry:
        return self.build()._routes[pattern]

    def __iter__(self) -> Iterator[str]:
        return iter(self.build()._routes)

    def __len__(self) -> int:
        return len(self.build()._routes)

    def __repr__(self) -> str:
        state = f"{len(self._routes)} routes" if self._built else "unbuilt"
        return f"<RouteTable {state}>"

    # -- Matching -----------------------------------------------------------

    @property
    def matchers(self) -> tuple[tuple[str, PathMatcher], ...]:
        """``(pattern, matcher)`` pairs in processing order."""
        return self.build()._matchers

    @property
    def root(self) -> RouteEntry | None:
        """The ``/`` route, whose roles back-fill matched routes."""
        return self.build()._routes.get("/")

    def match(self, request_path: str) -> RouteMatch | None:
        """Return the first route whose pattern accepts *request_path*.

        Returns ``None`` when nothing matches; the root route is never
        used as a page fallback.
        """
        for pattern, matcher in self.matchers:
            params = matcher.match(request_path)
            if params is not None:
                return RouteMatch(
                    entry=self._routes[pattern],
                    params=params,
                    fallback=self._fallback_roles(),
                )
        return None

    def _fallback_roles(self) -> RoleMap | None:
        if not self._config.root_role_fallback:
            return None
        root = self._routes.get("/")
        return root.roles if root is not None else None
