"""Tests for pathroute.routing.roles — ancestor override resolution."""

import pytest

from pathroute.routing.roles import RoleDirectory, resolve_role, role_of
from pathroute.routing.route import PASSTHROUGH_MODULE, Role, SourceEntry


def _loader(name: str):
    async def load() -> dict[str, str]:
        return {"default": name}

    return load


def _entries(*paths: str) -> dict[str, object]:
    return {path: _loader(path) for path in paths}


class TestRoleOf:
    def test_roles(self) -> None:
        assert role_of("pages/layout.tsx") is Role.LAYOUT
        assert role_of("pages/error.py") is Role.ERROR
        assert role_of("pages/notFound.jsx") is Role.NOT_FOUND
        assert role_of("pages/notAuthorized.ts") is Role.NOT_AUTHORIZED

    def test_case_insensitive(self) -> None:
        assert role_of("pages/Layout.tsx") is Role.LAYOUT
        assert role_of("pages/NOTFOUND.py") is Role.NOT_FOUND

    def test_page(self) -> None:
        assert role_of("pages/about.tsx") is None
        assert role_of("pages/layouts.tsx") is None

    def test_unrecognised_extension(self) -> None:
        assert role_of("pages/layout.css") is None


class TestResolveRole:
    def test_nearest_ancestor_inherited(self) -> None:
        entries = _entries("a/layout.tsx", "a/b/page.tsx")
        resolution = resolve_role("a/b/page.tsx", Role.LAYOUT, entries)
        assert resolution.present
        assert resolution.source == "a/layout.tsx"
        assert resolution.loader is entries["a/layout.tsx"]

    def test_deeper_override_shadows(self) -> None:
        entries = _entries("a/layout.tsx", "a/b/layout.tsx", "a/b/page.tsx")
        resolution = resolve_role("a/b/page.tsx", "layout", entries)
        assert resolution.source == "a/b/layout.tsx"
        assert resolution.loader is entries["a/b/layout.tsx"]

    def test_own_directory_included(self) -> None:
        entries = _entries("pages/error.py", "pages/about.py")
        assert resolve_role("pages/about.py", Role.ERROR, entries).source == "pages/error.py"

    def test_scan_root_included(self) -> None:
        entries = _entries("notFound.tsx", "pages/deep/er/page.tsx")
        resolution = resolve_role("pages/deep/er/page.tsx", Role.NOT_FOUND, entries)
        assert resolution.source == "notFound.tsx"

    def test_sibling_directory_ignored(self) -> None:
        entries = _entries("pages/admin/layout.tsx", "pages/blog/post.tsx")
        resolution = resolve_role("pages/blog/post.tsx", Role.LAYOUT, entries)
        assert resolution.present is False
        assert resolution.source is None

    def test_absent(self) -> None:
        resolution = resolve_role("pages/about.tsx", Role.NOT_AUTHORIZED, _entries("pages/about.tsx"))
        assert resolution.present is False
        assert resolution.role is Role.NOT_AUTHORIZED

    def test_relative_marker_paths(self) -> None:
        entries = _entries("./pages/layout.tsx", "./pages/topics/[topic].tsx")
        resolution = resolve_role("./pages/topics/[topic].tsx", Role.LAYOUT, entries)
        assert resolution.source == "./pages/layout.tsx"

    def test_accepts_entry_sequence(self) -> None:
        load = _loader("x")
        entries = [SourceEntry("pages/layout.py", load), SourceEntry("pages/x.py", load)]
        assert resolve_role("pages/x.py", Role.LAYOUT, entries).loader is load

    def test_unknown_role_rejected(self) -> None:
        with pytest.raises(ValueError):
            resolve_role("pages/x.py", "footer", _entries("pages/x.py"))


class TestRoleDirectory:
    def test_lexical_precedence_within_directory(self) -> None:
        entries = _entries("pages/layout.tsx", "pages/layout.ts", "pages/about.tsx")
        directory = RoleDirectory(SourceEntry(p, l) for p, l in entries.items())
        assert directory.resolve("pages/about.tsx", Role.LAYOUT).source == "pages/layout.ts"

    def test_resolve_all_fills_every_role(self) -> None:
        entries = _entries("pages/layout.py", "pages/error.py", "pages/about.py")
        directory = RoleDirectory(SourceEntry(p, l) for p, l in entries.items())
        roles = directory.resolve_all("pages/about.py")
        assert roles[Role.LAYOUT].source == "pages/layout.py"
        assert roles[Role.ERROR].source == "pages/error.py"
        assert roles[Role.NOT_FOUND].present is False
        assert roles[Role.NOT_AUTHORIZED].present is False
        assert [r.role for r in roles] == list(Role)


class TestRoleResolutionLoad:
    @pytest.mark.anyio
    async def test_present_loads_module(self) -> None:
        entries = _entries("pages/layout.py", "pages/about.py")
        module = await resolve_role("pages/about.py", Role.LAYOUT, entries).load()
        assert module == {"default": "pages/layout.py"}

    @pytest.mark.anyio
    async def test_absent_loads_passthrough(self) -> None:
        module = await resolve_role("pages/about.py", Role.LAYOUT, _entries("pages/about.py")).load()
        assert module is PASSTHROUGH_MODULE
        assert module.default(children="content") == "content"
