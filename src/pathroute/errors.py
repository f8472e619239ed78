"""pathroute exception hierarchy.

Shared across the route table, navigation index, discovery adapter and CLI
so every module raises and catches the same types.  Nothing in the routing
core is fatal: the table builder and matcher never raise for data, and the
navigator catches the navigation errors below and logs them.
"""


class PathrouteError(Exception):
    """Base for all pathroute-specific errors."""


class ConfigurationError(PathrouteError):
    """Raised when router configuration is invalid.

    Typically raised by ``RouterConfig.__post_init__`` or by
    ``discover_sources()`` when the scan root does not exist.
    """


class UnresolvedPage(PathrouteError):  # noqa: N818 — reads as a lookup outcome
    """A page reference has no entry in the navigation index.

    Usually means the page was never part of the discovered set, or the
    index is still being built.
    """

    def __init__(self, page_name: str, detail: str = "") -> None:
        self.page_name = page_name
        super().__init__(detail or f"{page_name} is not a valid or registered route")


class MissingParam(PathrouteError):  # noqa: N818 — conventional name for a lookup miss
    """A ``:name`` segment of a route pattern has no value to interpolate."""

    def __init__(self, pattern: str, name: str) -> None:
        self.pattern = pattern
        self.name = name
        super().__init__(f"Missing value for parameter {name!r} in route {pattern!r}")
