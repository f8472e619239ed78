"""Pattern compiler — discovered file path to canonical route pattern.

Every step is a total string transform; the compiler never raises and is
idempotent: ``compile_pattern(compile_pattern(p)) == compile_pattern(p)``.

Examples::

    "pages/index.tsx"          -> "/"
    "./pages/about.py"         -> "/about"
    "pages/topics/[topic].tsx" -> "/topics/:topic"
    "pages/myPage.tsx"         -> "/my-page"
"""

import re
from functools import lru_cache

from pathroute.config import DEFAULT_EXTENSIONS, RouterConfig

# aBc -> a<sep>bc; the trailing lowercase is a lookahead so one pass is final
_CASE_RE = re.compile(r"([a-z])([A-Z])(?=[a-z])")

# [topic] -> :topic
_DYNAMIC_RE = re.compile(r"\[([A-Za-z_-]+)\]")

_TRAILING_SLASH_RE = re.compile(r"/+$")


def resolve_separator(separator: str | bool | None) -> str:
    """Return the string inserted at camelCase transitions.

    ``False`` joins with nothing; ``None``, ``True`` and ``""`` use ``-``.
    """
    if separator is False:
        return ""
    if isinstance(separator, str) and separator:
        return separator
    return "-"


def normalize_casing(value: str, separator: str | bool | None = "-") -> str:
    """Rewrite camelCase transitions into separated lowercase words."""
    sep = resolve_separator(separator)
    return _CASE_RE.sub(lambda m: f"{m.group(1)}{sep}{m.group(2).lower()}", value)


@lru_cache(maxsize=32)
def _extension_re(extensions: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(ext) for ext in extensions)
    return re.compile(f"(?:{alternatives})+$")


@lru_cache(maxsize=32)
def _index_re(extensions: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(ext) for ext in extensions)
    return re.compile(f"/index(?=/|$|(?:{alternatives})+$)")


@lru_cache(maxsize=32)
def _root_re(page_root: str) -> re.Pattern[str]:
    return re.compile(f"(?<![^/]){re.escape(page_root)}/")


def compile_pattern(
    path: str,
    *,
    separator: str | bool | None = "-",
    page_root: str = "pages",
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> str:
    """Compile a discovered file path into its canonical route pattern.

    Args:
        path: Slash-delimited virtual path, e.g. ``./pages/about.tsx``.
        separator: Inserted at camelCase transitions (``False`` for none).
        page_root: Container directory name stripped wherever it appears
            as a whole path segment.
        extensions: Recognised source extensions; every trailing one is
            stripped from the end (``x.tsx.tsx`` -> ``x``).

    Returns:
        A pattern with ``:name`` dynamic segments and no trailing slash.
        The empty path compiles to ``/``.
    """
    pattern = path.replace("\\", "/")
    root = page_root.strip("/")
    if root:
        pattern = _root_re(root).sub("", pattern)
    if pattern.startswith("./"):
        pattern = pattern[2:]
    if not pattern.startswith("/"):
        pattern = "/" + pattern
    pattern = _index_re(extensions).sub("", pattern)
    pattern = _extension_re(extensions).sub("", pattern)
    pattern = normalize_casing(pattern, separator)
    pattern = _DYNAMIC_RE.sub(r":\1", pattern)
    pattern = _TRAILING_SLASH_RE.sub("", pattern)
    return pattern or "/"


def route_pattern(path: str, config: RouterConfig) -> str:
    """Compile *path* under *config*, then apply its ``transform`` hook.

    The route table and the navigation index both compile through here, so
    a transformed pattern is the one that is matched and navigated to.
    """
    pattern = compile_pattern(
        path,
        separator=config.separator,
        page_root=config.page_root,
        extensions=config.extensions,
    )
    if config.transform is not None:
        pattern = config.transform(pattern)
    return pattern


def page_stem(path: str) -> str:
    """Return the file name of *path* without its extension.

    ``"pages/topics/layout.tsx"`` -> ``"layout"``
    """
    name = path.replace("\\", "/").rpartition("/")[2]
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name


def parent_dir(path: str) -> str:
    """Return the directory part of *path*; ``""`` for the scan root."""
    return path.replace("\\", "/").rpartition("/")[0]
