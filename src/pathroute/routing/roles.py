"""Ancestor override resolution for special-role files.

A role (layout, error, notFound, notAuthorized) is never registered per
route.  It is resolved by walking from the page's own directory up to the
scan root: the nearest directory holding ``<role>.<ext>`` wins, so a deeper
override shadows a shallower one and omission inherits upward::

    pages/
      layout.tsx          # applies to /, /about
      about.tsx
      topics/
        layout.tsx        # shadows pages/layout.tsx for /topics/:topic
        [topic].tsx

When two files in one directory name the same role (``layout.ts`` and
``layout.tsx``), the first in lexical path order wins.
"""

import logging
from collections.abc import Iterable

from pathroute.config import DEFAULT_EXTENSIONS
from pathroute.routing.pattern import page_stem, parent_dir
from pathroute.routing.route import Role, RoleMap, RoleResolution, SourceEntry, Sources, as_entries

logger = logging.getLogger("pathroute.routing")


def _has_extension(path: str, extensions: tuple[str, ...]) -> bool:
    lowered = path.lower()
    return any(lowered.endswith(ext.lower()) for ext in extensions)


def role_of(path: str, extensions: tuple[str, ...] = DEFAULT_EXTENSIONS) -> Role | None:
    """Return the role *path* defines, or ``None`` for an ordinary page."""
    if not _has_extension(path, extensions):
        return None
    return Role.from_stem(page_stem(path))


class RoleDirectory:
    """Index of role files keyed by ``(directory, role)``.

    Built once from the full entry collection so each lookup walks only
    the page's ancestor directories instead of rescanning every entry.
    """

    __slots__ = ("_by_dir",)

    def __init__(
        self,
        entries: Iterable[SourceEntry],
        extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    ) -> None:
        self._by_dir: dict[tuple[str, Role], SourceEntry] = {}
        for entry in sorted(entries, key=lambda e: e.path):
            role = role_of(entry.path, extensions)
            if role is None:
                continue
            key = (parent_dir(entry.path), role)
            if key in self._by_dir:
                logger.debug(
                    "Ignoring %s: %s already defines %s",
                    entry.path,
                    self._by_dir[key].path,
                    role,
                )
                continue
            self._by_dir[key] = entry

    def resolve(self, path: str, role: Role) -> RoleResolution:
        """Resolve *role* for the page at *path* by ancestor cascade."""
        current = parent_dir(path)
        while True:
            found = self._by_dir.get((current, role))
            if found is not None:
                logger.debug("Match found for %s at %s", path, found.path)
                return RoleResolution(role=role, source=found.path, loader=found.load)
            if not current:
                return RoleResolution(role=role)
            current = parent_dir(current)

    def resolve_all(self, path: str) -> RoleMap:
        """Resolve every :class:`Role` for the page at *path*."""
        return RoleMap.from_resolutions(self.resolve(path, role) for role in Role)


def resolve_role(
    path: str,
    role: Role | str,
    entries: Sources,
    *,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> RoleResolution:
    """Resolve *role* for the page at *path* against *entries*.

    Convenience wrapper that builds a one-off :class:`RoleDirectory`.
    Callers resolving many pages should build the directory once.

    Returns:
        A present :class:`RoleResolution` carrying the nearest ancestor's
        loader, or an absent one when no ancestor defines the role.
    """
    return RoleDirectory(as_entries(entries), extensions).resolve(path, Role(role))
