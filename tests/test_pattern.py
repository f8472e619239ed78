"""Tests for pathroute.routing.pattern — path to route pattern compiler."""

import pytest

from pathroute.config import RouterConfig
from pathroute.routing.pattern import (
    compile_pattern,
    normalize_casing,
    page_stem,
    parent_dir,
    route_pattern,
)


class TestCompilePattern:
    def test_index_is_root(self) -> None:
        assert compile_pattern("pages/index.tsx") == "/"

    def test_dynamic_segment(self) -> None:
        assert compile_pattern("pages/topics/[topic].tsx") == "/topics/:topic"

    def test_camel_case_default_separator(self) -> None:
        assert compile_pattern("pages/myPage.tsx", separator="-") == "/my-page"

    def test_camel_case_no_separator(self) -> None:
        assert compile_pattern("pages/myPage.tsx", separator=False) == "/mypage"

    def test_camel_case_custom_separator(self) -> None:
        assert compile_pattern("pages/myLongPageName.py", separator="_") == "/my_long_page_name"

    def test_relative_marker(self) -> None:
        assert compile_pattern("./pages/about.tsx") == "/about"

    def test_absolute_prefix_kept(self) -> None:
        assert compile_pattern("/src/pages/about.tsx") == "/src/about"

    def test_nested_index(self) -> None:
        assert compile_pattern("pages/docs/index.py") == "/docs"

    def test_index_directory(self) -> None:
        assert compile_pattern("pages/index/about.py") == "/about"

    def test_index_prefix_is_not_index(self) -> None:
        assert compile_pattern("pages/indexes.py") == "/indexes"
        assert compile_pattern("pages/reindex.py") == "/reindex"

    def test_page_root_only_as_whole_segment(self) -> None:
        assert compile_pattern("subpages/about.py") == "/subpages/about"

    def test_namespaced_page_root(self) -> None:
        assert compile_pattern("./test-namespace/pages/layout.tsx") == "/test-namespace/layout"

    def test_custom_page_root(self) -> None:
        assert compile_pattern("views/about.py", page_root="views") == "/about"

    def test_empty_is_root(self) -> None:
        assert compile_pattern("") == "/"

    def test_trailing_slashes_stripped(self) -> None:
        assert compile_pattern("pages/docs//") == "/docs"

    def test_unrecognised_extension_kept(self) -> None:
        assert compile_pattern("pages/readme.md") == "/readme.md"

    def test_custom_extensions(self) -> None:
        assert compile_pattern("pages/about.html", extensions=(".html",)) == "/about"

    def test_dynamic_camel_case(self) -> None:
        assert compile_pattern("pages/users/[userId].py") == "/users/:user-id"

    def test_backslashes(self) -> None:
        assert compile_pattern("pages\\topics\\[topic].tsx") == "/topics/:topic"

    def test_repeated_extension_stripped(self) -> None:
        assert compile_pattern("pages/x.tsx.tsx") == "/x"
        assert compile_pattern("pages/docs/index.py.tsx") == "/docs"


class TestRoutePattern:
    def test_without_transform(self) -> None:
        assert route_pattern("pages/myPage.tsx", RouterConfig()) == "/my-page"

    def test_transform_runs_after_compile(self) -> None:
        seen: list[str] = []

        def transform(pattern: str) -> str:
            seen.append(pattern)
            return "/docs" + pattern

        cfg = RouterConfig(transform=transform)
        assert route_pattern("pages/topics/[topic].tsx", cfg) == "/docs/topics/:topic"
        assert seen == ["/topics/:topic"]

    def test_config_compile_options_apply(self) -> None:
        cfg = RouterConfig(page_root="views", separator=False)
        assert route_pattern("views/myPage.py", cfg) == "/mypage"


class TestIdempotence:
    @pytest.mark.parametrize(
        "path",
        [
            "pages/index.tsx",
            "./pages/about.tsx",
            "pages/topics/[topic].tsx",
            "pages/myPage.tsx",
            "pages/aBcDeFg.py",
            "pages/docs/index.py",
            "pages/pages/nested.py",
            "/src/pages/users/[userId]/settings.jsx",
            "pages/index/index.ts",
            "pages/x.tsx.tsx",
            "pages/docs/index.py.tsx",
            "",
        ],
    )
    def test_compile_twice_is_stable(self, path: str) -> None:
        once = compile_pattern(path)
        assert compile_pattern(once) == once

    def test_compiled_pattern_unchanged(self) -> None:
        assert compile_pattern("/topics/:topic") == "/topics/:topic"


class TestNormalizeCasing:
    def test_single_hump(self) -> None:
        assert normalize_casing("myPage") == "my-page"

    def test_every_hump(self) -> None:
        assert normalize_casing("aBcDe") == "a-bc-de"

    def test_acronym_untouched(self) -> None:
        assert normalize_casing("myURL") == "myURL"

    def test_none_separator_defaults(self) -> None:
        assert normalize_casing("myPage", None) == "my-page"


class TestPathHelpers:
    def test_page_stem(self) -> None:
        assert page_stem("pages/topics/layout.tsx") == "layout"
        assert page_stem("pages/topics/[topic].tsx") == "[topic]"
        assert page_stem("Makefile") == "Makefile"

    def test_parent_dir(self) -> None:
        assert parent_dir("pages/topics/layout.tsx") == "pages/topics"
        assert parent_dir("layout.tsx") == ""
