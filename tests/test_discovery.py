"""Tests for pathroute.discovery — directory scan to source entries."""

from pathlib import Path

import pytest

from pathroute.discovery import discover_sources
from pathroute.errors import ConfigurationError
from pathroute.routing.route import Role
from pathroute.routing.table import RouteTable

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a project with a pages/ tree."""
    _write(tmp_path, "pages/index.py", "def default(params):\n    return 'home'\n")
    _write(tmp_path, "pages/about.py", "def default(params):\n    return 'about'\n")
    _write(tmp_path, "pages/layout.py", "def default(children):\n    return children\n")
    _write(tmp_path, "pages/topics/[topic].py", "def default(params):\n    return params['topic']\n")
    _write(tmp_path, "pages/topics/layout.py", "def default(children):\n    return children\n")
    _write(tmp_path, "pages/__pycache__/stale.py", "")
    _write(tmp_path, "pages/notes.txt", "not a page")
    _write(tmp_path, "lib/helpers.py", "")
    return tmp_path


def _write(root: Path, name: str, content: str) -> Path:
    """Write a file under *root* and return its path."""
    p = root / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
    return p


# ---------------------------------------------------------------------------
# discover_sources
# ---------------------------------------------------------------------------


class TestDiscoverSources:
    def test_finds_page_files(self, project: Path) -> None:
        paths = [entry.path for entry in discover_sources(project)]
        assert paths == [
            "pages/about.py",
            "pages/index.py",
            "pages/layout.py",
            "pages/topics/[topic].py",
            "pages/topics/layout.py",
        ]

    def test_exclude(self, project: Path) -> None:
        paths = [e.path for e in discover_sources(project, exclude=["pages/topics/*"])]
        assert "pages/topics/[topic].py" not in paths
        assert "pages/about.py" in paths

    def test_custom_include(self, project: Path) -> None:
        paths = [e.path for e in discover_sources(project, include=["lib/*.py"])]
        assert paths == ["lib/helpers.py"]

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Source directory not found"):
            discover_sources(tmp_path / "missing")

    def test_feeds_route_table(self, project: Path) -> None:
        table = RouteTable(discover_sources(project))
        assert sorted(table) == ["/", "/about", "/topics/:topic"]
        assert table["/topics/:topic"].roles[Role.LAYOUT].source == "pages/topics/layout.py"


class TestLoaders:
    @pytest.mark.anyio
    async def test_loader_imports_module(self, project: Path) -> None:
        entries = {e.path: e for e in discover_sources(project)}
        module = await entries["pages/about.py"].load()
        assert module.default({}) == "about"

    @pytest.mark.anyio
    async def test_loader_returns_same_module(self, project: Path) -> None:
        entries = {e.path: e for e in discover_sources(project)}
        first = await entries["pages/topics/[topic].py"].load()
        second = await entries["pages/topics/[topic].py"].load()
        assert first is second
        assert first.default({"topic": "A"}) == "A"

    @pytest.mark.anyio
    async def test_broken_module_raises(self, tmp_path: Path) -> None:
        _write(tmp_path, "pages/broken.py", "raise RuntimeError('boom')\n")
        (entry,) = discover_sources(tmp_path)
        with pytest.raises(RuntimeError, match="boom"):
            await entry.load()
