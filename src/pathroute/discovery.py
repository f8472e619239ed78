"""Filesystem discovery — a directory scan turned into source entries.

Sits outside the routing core: the route table never touches the
filesystem, it only receives ``SourceEntry`` values.  This adapter globs a
project directory the way a bundler manifest would and hands back lazy
loaders that import each ``.py`` page on first use::

    sources = discover_sources("app")
    table = RouteTable(sources)

Paths are POSIX, relative to the scan root (``pages/topics/[topic].py``).
Loading runs the import in a worker thread; a loaded module is cached in
``sys.modules`` so every call returns the same module object.
"""

import hashlib
import importlib.util
import logging
import re
import sys
import threading
from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import Path
from types import ModuleType

import anyio

from pathroute.errors import ConfigurationError
from pathroute.routing.route import Loader, SourceEntry

logger = logging.getLogger("pathroute.discovery")

DEFAULT_INCLUDE: tuple[str, ...] = ("**/pages/**/*.py",)

_MODULE_PREFIX = "pathroute_pages"

_NON_IDENTIFIER_RE = re.compile(r"\W")

_import_lock = threading.Lock()


def discover_sources(
    root: str | Path,
    *,
    include: Iterable[str] = DEFAULT_INCLUDE,
    exclude: Iterable[str] = (),
) -> tuple[SourceEntry, ...]:
    """Glob *root* for page sources.

    Args:
        root: Directory to scan.
        include: Glob patterns, relative to *root*, selecting source files.
        exclude: ``fnmatch`` patterns, relative to *root*, dropping matches.

    Returns:
        Entries sorted by path.  Files under ``__pycache__`` or hidden
        directories are skipped.

    Raises:
        ConfigurationError: If *root* is not a directory.
    """
    base = Path(root).resolve()
    if not base.is_dir():
        msg = f"Source directory not found: {base}"
        raise ConfigurationError(msg)

    excluded = tuple(exclude)
    found: dict[str, Path] = {}
    for pattern in include:
        for file in base.glob(pattern):
            if not file.is_file():
                continue
            relative = file.relative_to(base).as_posix()
            if _is_hidden(relative) or any(fnmatch(relative, pat) for pat in excluded):
                continue
            found.setdefault(relative, file)

    logger.debug("Discovered %d sources under %s", len(found), base)
    namespace = hashlib.sha1(str(base).encode(), usedforsecurity=False).hexdigest()[:10]
    return tuple(
        SourceEntry(path=rel, load=_file_loader(namespace, rel, file))
        for rel, file in sorted(found.items())
    )


def _is_hidden(relative: str) -> bool:
    return any(part == "__pycache__" or part.startswith(".") for part in relative.split("/"))


def _module_name(namespace: str, relative: str) -> str:
    stem = relative.rsplit(".", 1)[0]
    parts = [_NON_IDENTIFIER_RE.sub("_", part) for part in stem.split("/")]
    return ".".join([f"{_MODULE_PREFIX}_{namespace}", *parts])


def _file_loader(namespace: str, relative: str, file: Path) -> Loader:
    module_name = _module_name(namespace, relative)

    async def load() -> ModuleType:
        return await anyio.to_thread.run_sync(import_file, module_name, file)

    load.__qualname__ = f"load[{relative}]"
    return load


def import_file(module_name: str, file: Path) -> ModuleType:
    """Import *file* as *module_name*, once.

    Raises:
        ImportError: If no import spec can be built for *file*.
    """
    with _import_lock:
        cached = sys.modules.get(module_name)
        if cached is not None:
            return cached
        spec = importlib.util.spec_from_file_location(module_name, file)
        if spec is None or spec.loader is None:
            msg = f"Cannot import page source {file}"
            raise ImportError(msg)
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            del sys.modules[module_name]
            raise
        return module
