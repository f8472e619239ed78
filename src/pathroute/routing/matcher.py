"""Route pattern matching and interpolation.

A pattern is parsed into segments once; the matcher is a compiled regex
that accepts request paths and binds ``:name`` segments by name.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import quote, unquote

from pathroute.errors import MissingParam

# Characters encodeURIComponent leaves alone, beyond quote()'s own set
_COMPONENT_SAFE = "!~*'()"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:  ``/topics``  (is_param=False)
    Param:   ``/:topic``  (is_param=True, param_name="topic")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/"               -> []
        "/about"          -> [PathSegment("about")]
        "/topics/:topic"  -> [PathSegment("topics"), PathSegment(":topic", is_param=True, ...)]
    """
    segments: list[PathSegment] = []
    for part in pattern.strip("/").split("/"):
        if not part:
            continue
        if part.startswith(":") and len(part) > 1:
            segments.append(PathSegment(value=part, is_param=True, param_name=part[1:]))
        else:
            segments.append(PathSegment(value=part))
    return segments


def encode_component(value: object) -> str:
    """Percent-encode *value* the way encodeURIComponent does."""
    return quote(str(value), safe=_COMPONENT_SAFE)


def normalize_request_path(request_path: str) -> str:
    """Drop query string and fragment and anchor the path at ``/``."""
    path = request_path.split("#", 1)[0].split("?", 1)[0]
    if not path.startswith("/"):
        path = "/" + path
    return path


class PathMatcher:
    """Compiled matcher for one route pattern.

    Usage::

        matcher = PathMatcher("/topics/:topic")
        matcher.match("/topics/A")   # {"topic": "A"}
        matcher.match("/about")      # None
    """

    __slots__ = ("_names", "_regex", "pattern", "segments")

    def __init__(self, pattern: str, *, case_sensitive: bool = False) -> None:
        self.pattern = pattern
        self.segments = tuple(parse_pattern(pattern))
        names: list[str] = []
        parts: list[str] = []
        for seg in self.segments:
            if seg.is_param:
                names.append(seg.param_name or "")
                parts.append("/([^/]+)")
            else:
                parts.append("/" + re.escape(seg.value))
        flags = 0 if case_sensitive else re.IGNORECASE
        self._regex = re.compile("^" + "".join(parts) + "/?$", flags)
        self._names = tuple(names)

    def match(self, request_path: str) -> dict[str, str] | None:
        """Return the bound parameters if *request_path* matches, else ``None``."""
        m = self._regex.match(normalize_request_path(request_path))
        if m is None:
            return None
        return {name: unquote(value) for name, value in zip(self._names, m.groups(), strict=True)}

    def __repr__(self) -> str:
        return f"PathMatcher({self.pattern!r})"


def interpolate(pattern: str, params: Mapping[str, object] | None = None) -> str:
    """Substitute ``:name`` segments of *pattern* with percent-encoded values.

    Raises:
        MissingParam: If a dynamic segment has no value in *params*.
    """
    params = params or {}
    parts: list[str] = []
    for seg in parse_pattern(pattern):
        if not seg.is_param:
            parts.append(seg.value)
            continue
        name = seg.param_name or ""
        if name not in params or params[name] is None:
            raise MissingParam(pattern, name)
        parts.append(encode_component(params[name]))
    return "/" + "/".join(parts)
