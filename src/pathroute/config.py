"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Callable
from dataclasses import dataclass

from pathroute.errors import ConfigurationError

# Recognised page source extensions, checked in this order
DEFAULT_EXTENSIONS: tuple[str, ...] = (".py", ".js", ".jsx", ".ts", ".tsx")


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(page_root="views", separator="_")
    """

    # Pattern compilation
    page_root: str = "pages"  # Container directory stripped from every path
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    separator: str | bool | None = "-"  # camelCase -> kebab; False joins with no separator
    transform: Callable[[str], str] | None = None  # Rewrites every compiled pattern

    # Table construction — sort by path before first-wins deduplication
    sort_entries: bool = True

    # Matching
    case_sensitive: bool = False
    root_role_fallback: bool = True  # Missing roles inherit from the "/" route

    def __post_init__(self) -> None:
        if not self.extensions:
            msg = "RouterConfig.extensions must name at least one extension."
            raise ConfigurationError(msg)
        for ext in self.extensions:
            if not ext.startswith(".") or len(ext) < 2:
                msg = f"Invalid extension {ext!r}: expected a leading dot, e.g. '.py'."
                raise ConfigurationError(msg)
        if isinstance(self.separator, str) and "/" in self.separator:
            msg = f"Invalid separator {self.separator!r}: must not contain '/'."
            raise ConfigurationError(msg)
        if "/" in self.page_root.strip("/"):
            msg = f"Invalid page_root {self.page_root!r}: expected a single directory name."
            raise ConfigurationError(msg)
        if self.transform is not None and not callable(self.transform):
            msg = f"Invalid transform {self.transform!r}: expected a callable taking a pattern."
            raise ConfigurationError(msg)
