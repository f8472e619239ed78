"""Route table data models.

Frozen dataclasses built once during table construction.  Loaders are
stored unevaluated; nothing here imports a page module.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import SimpleNamespace
from typing import Any

# Zero-argument callable returning an awaitable page/role module
type Loader = Callable[[], Awaitable[Any]]

# Input collection: ordered entries or a {path: loader} mapping
type Sources = Iterable[SourceEntry] | Mapping[str, Loader]


class Role(StrEnum):
    """Special-role file names resolved by directory cascade.

    The value is the literal file stem: ``layout.tsx``, ``notFound.py``.
    """

    LAYOUT = "layout"
    ERROR = "error"
    NOT_FOUND = "notFound"
    NOT_AUTHORIZED = "notAuthorized"

    @classmethod
    def from_stem(cls, stem: str) -> Role | None:
        """Return the role a file stem names, ignoring case."""
        return _ROLE_BY_FOLDED_STEM.get(stem.casefold())


_ROLE_BY_FOLDED_STEM: dict[str, Role] = {role.value.casefold(): role for role in Role}


@dataclass(frozen=True, slots=True)
class SourceEntry:
    """A discovered source file and its lazy loader.

    Attributes:
        path: Slash-delimited virtual path, e.g. ``./pages/about.tsx``.
        load: Zero-argument callable returning an awaitable module.
    """

    path: str
    load: Loader


def as_entries(sources: Sources) -> tuple[SourceEntry, ...]:
    """Normalise an input collection to a tuple of :class:`SourceEntry`."""
    if isinstance(sources, Mapping):
        return tuple(SourceEntry(path=path, load=load) for path, load in sources.items())
    return tuple(sources)


def module_member(module: Any, name: str) -> Any:
    """Read *name* from a loaded module object or mapping, or ``None``."""
    if isinstance(module, Mapping):
        return module.get(name)
    return getattr(module, name, None)


def _passthrough(children: Any = None, **_: Any) -> Any:
    return children


# Loaded in place of an absent role: renders its children unchanged
PASSTHROUGH_MODULE = SimpleNamespace(default=_passthrough)


@dataclass(frozen=True, slots=True)
class RoleResolution:
    """The outcome of resolving one role for one page.

    Present when ``source`` names the nearest ancestor role file; absent
    otherwise.  Absence is a value, never ``None``.
    """

    role: Role
    source: str | None = None
    loader: Loader | None = None

    @property
    def present(self) -> bool:
        return self.loader is not None

    async def load(self) -> Any:
        """Load the role module, or the pass-through module when absent."""
        if self.loader is None:
            return PASSTHROUGH_MODULE
        return await self.loader()


@dataclass(frozen=True, slots=True)
class RoleMap:
    """Fixed four-slot map from :class:`Role` to :class:`RoleResolution`."""

    layout: RoleResolution = field(default_factory=lambda: RoleResolution(Role.LAYOUT))
    error: RoleResolution = field(default_factory=lambda: RoleResolution(Role.ERROR))
    not_found: RoleResolution = field(default_factory=lambda: RoleResolution(Role.NOT_FOUND))
    not_authorized: RoleResolution = field(
        default_factory=lambda: RoleResolution(Role.NOT_AUTHORIZED)
    )

    @classmethod
    def from_resolutions(cls, resolutions: Iterable[RoleResolution]) -> RoleMap:
        return cls(**{_SLOT[r.role]: r for r in resolutions})

    def __getitem__(self, role: Role) -> RoleResolution:
        return getattr(self, _SLOT[role])

    def __iter__(self) -> Iterator[RoleResolution]:
        return (self[role] for role in Role)


_SLOT: dict[Role, str] = {
    Role.LAYOUT: "layout",
    Role.ERROR: "error",
    Role.NOT_FOUND: "not_found",
    Role.NOT_AUTHORIZED: "not_authorized",
}


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A page route with its cascaded role components.

    Attributes:
        pattern: Canonical route pattern (``/topics/:topic``).
        source: Path of the page file the route was compiled from.
        page_load: The page's lazy loader.
        roles: Resolved role components, one per :class:`Role`.
    """

    pattern: str
    source: str
    page_load: Loader
    roles: RoleMap = field(default_factory=RoleMap)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful request match.

    ``fallback`` holds the root route's roles, consulted by :meth:`role`
    when the matched route lacks one.
    """

    entry: RouteEntry
    params: dict[str, str]
    fallback: RoleMap | None = None

    @property
    def pattern(self) -> str:
        return self.entry.pattern

    def role(self, role: Role) -> RoleResolution:
        """Return the route's resolution for *role*, falling back to the root route."""
        resolution = self.entry.roles[role]
        if not resolution.present and self.fallback is not None:
            return self.fallback[role]
        return resolution
