"""Tests for switchyard.routing.pattern — path normalization and compilation."""

import pytest

from switchyard.routing.pattern import (
    compile_pattern,
    extract_param_names,
    normalize_path,
    parse_pattern,
)


class TestNormalizePath:
    def test_adds_leading_slash(self) -> None:
        assert normalize_path("users") == "/users"

    def test_strips_single_trailing_slash(self) -> None:
        assert normalize_path("/users/") == "/users"

    def test_root_stays_root(self) -> None:
        assert normalize_path("/") == "/"

    def test_empty_becomes_root(self) -> None:
        assert normalize_path("") == "/"

    def test_repeated_trailing_slashes(self) -> None:
        assert normalize_path("/users//") == "/users"

    def test_only_slashes(self) -> None:
        assert normalize_path("///") == "/"

    @pytest.mark.parametrize("path", ["", "/", "users", "/users/", "a/b/", "/users//", "/:id"])
    def test_idempotent(self, path: str) -> None:
        once = normalize_path(path)
        assert normalize_path(once) == once


class TestExtractParamNames:
    def test_no_params(self) -> None:
        assert extract_param_names("/users") == ()

    def test_declared_order(self) -> None:
        assert extract_param_names("/a/:x/b/:y") == ("x", "y")

    def test_duplicates_kept(self) -> None:
        assert extract_param_names("/:id/child/:id") == ("id", "id")

    def test_colon_inside_segment_is_literal(self) -> None:
        assert extract_param_names("/time/12:30") == ()


class TestCompilePattern:
    def test_static_path(self) -> None:
        matcher = compile_pattern("/users")
        assert matcher.match("/users") == ()
        assert matcher.match("/users/1") is None

    def test_anchored_both_ends(self) -> None:
        matcher = compile_pattern("/users")
        assert matcher.match("/api/users") is None
        assert matcher.match("/usersx") is None

    def test_param_captures_one_segment(self) -> None:
        matcher = compile_pattern("/users/:id")
        assert matcher.match("/users/42") == ("42",)
        assert matcher.match("/users/42/posts") is None
        assert matcher.match("/users/") is None

    def test_two_params(self) -> None:
        matcher = compile_pattern("/a/:x/b/:y")
        assert matcher.match("/a/1/b/2") == ("1", "2")

    def test_group_count_equals_param_count(self) -> None:
        for path in ("/users", "/users/:id", "/a/:x/b/:y", "/files/*", "/:a/*/:b"):
            assert compile_pattern(path).group_count == len(extract_param_names(path))

    def test_wildcard_crosses_slashes(self) -> None:
        matcher = compile_pattern("/static/*")
        assert matcher.match("/static/css/site.css") == ()
        assert matcher.match("/static/") == ()

    def test_match_all(self) -> None:
        matcher = compile_pattern("/*")
        assert matcher.match("/") == ()
        assert matcher.match("/anything/at/all") == ()

    def test_wildcard_does_not_shift_params(self) -> None:
        matcher = compile_pattern("/:a/*/:b")
        assert matcher.match("/x/any/thing/y") == ("x", "y")

    def test_regex_metacharacters_are_literal(self) -> None:
        matcher = compile_pattern("/v1.0/items")
        assert matcher.match("/v1.0/items") == ()
        assert matcher.match("/v1x0/items") is None


class TestParsePattern:
    def test_normalizes_before_compiling(self) -> None:
        pattern = parse_pattern("users/:id/")
        assert pattern.path == "/users/:id"
        assert pattern.param_names == ("id",)
        assert pattern.matcher.match("/users/7") == ("7",)
