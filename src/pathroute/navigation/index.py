"""Reverse navigation index — page render function to route pattern.

Filled asynchronously by loading every page module and hashing its
``default`` export.  Each load is isolated: a failing loader is logged and
contributes nothing, a stalled one holds back only its own page.

Usage::

    index = await build_index(sources)
    index.url_for(TopicPage, params={"topic": "A"}, query={"tab": "intro"})
    # "/topics/A?tab=intro"
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

import anyio

from pathroute.config import RouterConfig
from pathroute.errors import UnresolvedPage
from pathroute.navigation.hashing import function_hash
from pathroute.routing.matcher import encode_component, interpolate
from pathroute.routing.pattern import route_pattern
from pathroute.routing.roles import role_of
from pathroute.routing.route import SourceEntry, Sources, as_entries, module_member

logger = logging.getLogger("pathroute.navigation")

type QueryValue = str | int | float | bool


def query_to_string(query: Mapping[str, QueryValue] | None) -> str:
    """Percent-encode *query* as ``key=value`` pairs joined by ``&``."""
    if not query:
        return ""
    pairs = []
    for key, value in query.items():
        if isinstance(value, bool):
            text = "true" if value else "false"
        else:
            text = str(value)
        pairs.append(f"{encode_component(key)}={encode_component(text)}")
    return "&".join(pairs)


class NavigationIndex(Mapping[int, str]):
    """Read-only mapping of page hash to route pattern.

    Filled by :func:`fill_index` one page at a time, as each page module
    finishes loading; readers see every page recorded so far.
    """

    __slots__ = ("_patterns", "_positions")

    def __init__(self, patterns: Mapping[int, str] | None = None) -> None:
        self._patterns: dict[int, str] = dict(patterns or {})
        self._positions: dict[int, int] = {}

    def __getitem__(self, page_hash: int) -> str:
        return self._patterns[page_hash]

    def __iter__(self) -> Iterator[int]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"<NavigationIndex {len(self._patterns)} pages>"

    def _record(self, page_hash: int, pattern: str, position: int) -> None:
        # A hash collision resolves to the later page in processing order,
        # whichever finished loading first
        if self._positions.get(page_hash, -1) > position:
            return
        self._patterns[page_hash] = pattern
        self._positions[page_hash] = position

    def pattern_for(self, page: Any) -> str | None:
        """Return the route pattern registered for *page*, or ``None``."""
        if not callable(page):
            return None
        return self._patterns.get(function_hash(page))

    def url_for(
        self,
        page: Any,
        params: Mapping[str, object] | None = None,
        query: Mapping[str, QueryValue] | None = None,
    ) -> str:
        """Build the URL for *page* with interpolated params and query.

        Raises:
            UnresolvedPage: If *page* is not in the index.
            MissingParam: If the pattern needs a param not in *params*.
        """
        pattern = self.pattern_for(page)
        if pattern is None:
            raise UnresolvedPage(getattr(page, "__name__", repr(page)))
        url = interpolate(pattern, params)
        qs = query_to_string(query)
        return f"{url}?{qs}" if qs else url


def _routable_pages(sources: Sources, cfg: RouterConfig) -> list[tuple[str, SourceEntry]]:
    entries = as_entries(sources)
    if cfg.sort_entries:
        entries = tuple(sorted(entries, key=lambda e: e.path))
    owners: dict[str, str] = {}
    pages: list[tuple[str, SourceEntry]] = []
    for entry in entries:
        if role_of(entry.path, cfg.extensions) is not None:
            continue
        pattern = route_pattern(entry.path, cfg)
        if pattern in owners:
            logger.debug(
                "Not indexing %s: route %r belongs to %s", entry.path, pattern, owners[pattern]
            )
            continue
        owners[pattern] = entry.path
        pages.append((pattern, entry))
    return pages


async def _load_page_hash(entry: SourceEntry) -> int | None:
    try:
        module = await entry.load()
    except Exception:
        logger.exception("Failed to load page %s", entry.path)
        return None
    page = module_member(module, "default")
    if not callable(page):
        logger.debug("Skipping %s: default export is not callable", entry.path)
        return None
    return function_hash(page)


async def fill_index(
    index: NavigationIndex,
    sources: Sources,
    config: RouterConfig | None = None,
) -> NavigationIndex:
    """Load every page in *sources* into *index*, recording each as it loads.

    Pages load concurrently.  A page is resolvable as soon as its own module
    has loaded, so a slow or stalled loader only holds back its own entry.
    Pages the route table would discard as duplicate routes are not indexed.
    """
    cfg = config or RouterConfig()
    pages = _routable_pages(sources, cfg)

    async def load(position: int, pattern: str, entry: SourceEntry) -> None:
        page_hash = await _load_page_hash(entry)
        if page_hash is not None:
            index._record(page_hash, pattern, position)

    async with anyio.create_task_group() as tg:
        for position, (pattern, entry) in enumerate(pages):
            tg.start_soon(load, position, pattern, entry)

    logger.debug("Indexed %d of %d pages", len(index), len(pages))
    return index


async def build_index(sources: Sources, config: RouterConfig | None = None) -> NavigationIndex:
    """Load every page in *sources* and return the completed index."""
    return await fill_index(NavigationIndex(), sources, config)
