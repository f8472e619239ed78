"""Navigation by page reference.

A :class:`Navigator` is handed to whatever needs to navigate — it is never
looked up from ambient state.  It resolves a page render function to a URL
through the :class:`NavigationIndex` and delegates the actual navigation to
the host callable it was built with.

Usage::

    navigator = Navigator(history.push)
    await navigator.load_index(sources)
    await navigator.navigate(TopicPage, params={"topic": "A"}, replace=True)
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pathroute.config import RouterConfig
from pathroute.errors import MissingParam, UnresolvedPage
from pathroute.navigation.index import NavigationIndex, QueryValue, fill_index
from pathroute.routing.route import Sources

logger = logging.getLogger("pathroute.navigation")

# Host navigation: receives the resolved URL plus host-specific options
type NavigateFn = Callable[..., Awaitable[Any] | Any]


class Navigator:
    """Resolves page references to URLs and delegates to the host.

    Until an index is installed, and for pages whose module has not
    loaded yet, navigation is an ordinary unresolved outcome: logged, not
    raised.
    """

    __slots__ = ("_index", "_navigate_fn")

    def __init__(self, navigate_fn: NavigateFn, index: NavigationIndex | None = None) -> None:
        self._navigate_fn = navigate_fn
        self._index = index

    @property
    def index(self) -> NavigationIndex | None:
        return self._index

    @property
    def ready(self) -> bool:
        return self._index is not None

    def set_index(self, index: NavigationIndex) -> None:
        """Swap in a (re)built index, e.g. after the page set changed."""
        self._index = index

    async def load_index(self, sources: Sources, config: RouterConfig | None = None) -> NavigationIndex:
        """Start using a new index for *sources* and fill it as pages load.

        The index is installed before any page loads, so pages become
        navigable one by one.  Run this in a task group to navigate while
        slow pages are still loading; it returns once every load has ended.
        """
        index = NavigationIndex()
        self._index = index
        return await fill_index(index, sources, config)

    def url_for(
        self,
        page: Any,
        params: Mapping[str, object] | None = None,
        query: Mapping[str, QueryValue] | None = None,
    ) -> str | None:
        """Resolve *page* to a URL, or ``None`` (logged) when it cannot be."""
        name = getattr(page, "__name__", repr(page))
        if self._index is None:
            logger.error("Cannot navigate to %s: navigation index is not built yet", name)
            return None
        try:
            return self._index.url_for(page, params, query)
        except (UnresolvedPage, MissingParam) as exc:
            logger.error("Cannot navigate to %s: %s", name, exc)
            return None

    async def navigate(
        self,
        page: Any,
        *,
        params: Mapping[str, object] | None = None,
        query: Mapping[str, QueryValue] | None = None,
        **host_options: Any,
    ) -> bool:
        """Navigate to *page*.

        Returns ``True`` once the host navigation was invoked, ``False``
        when the target could not be resolved (the host is not called).
        """
        url = self.url_for(page, params, query)
        if url is None:
            return False
        result = self._navigate_fn(url, **host_options)
        if inspect.isawaitable(result):
            await result
        return True
