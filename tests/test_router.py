"""Tests for switchyard.routing.router — ordered route table."""

import pytest

from switchyard.errors import ConfigurationError, DuplicateRoute
from switchyard.routing.router import Router


def _handler(request, response) -> None:
    pass


def _other(request, response) -> None:
    pass


class TestRouterAdd:
    def test_returns_route(self) -> None:
        router = Router()
        route = router.add("get", "users/", _handler)
        assert route.method == "GET"
        assert route.path == "/users"
        assert route.key == "GET:/users"
        assert route.handler is _handler

    def test_records_param_names(self) -> None:
        route = Router().add("GET", "/a/:x/b/:y", _handler)
        assert route.param_names == ("x", "y")
        assert not route.is_static

    def test_static_route(self) -> None:
        assert Router().add("GET", "/health", _handler).is_static

    def test_duplicate_raises(self) -> None:
        router = Router()
        router.add("GET", "/users", _handler)
        with pytest.raises(DuplicateRoute, match="Route GET /users already exists"):
            router.add("GET", "/users", _other)

    def test_duplicate_after_normalization(self) -> None:
        router = Router()
        router.add("GET", "/users", _handler)
        with pytest.raises(DuplicateRoute):
            router.add("get", "users/", _other)

    def test_duplicate_keeps_original(self) -> None:
        router = Router()
        router.add("GET", "/users", _handler)
        with pytest.raises(ConfigurationError):
            router.add("GET", "/users", _other)
        assert len(router) == 1
        match = router.match("GET", "/users")
        assert match is not None
        assert match.handler is _handler

    def test_same_path_different_methods(self) -> None:
        router = Router()
        router.add("GET", "/users", _handler)
        router.add("POST", "/users", _other)
        assert len(router) == 2
        assert "GET:/users" in router
        assert "POST:/users" in router

    def test_routes_in_registration_order(self) -> None:
        router = Router()
        router.add("GET", "/b", _handler)
        router.add("GET", "/a", _handler)
        assert [r.path for r in router.routes] == ["/b", "/a"]


class TestRouterMatch:
    def test_exact(self) -> None:
        router = Router()
        router.add("GET", "/users", _handler)
        match = router.match("GET", "/users")
        assert match is not None
        assert match.path_params == {}

    def test_params_bound_by_name(self) -> None:
        router = Router()
        router.add("GET", "/a/:x/b/:y", _handler)
        match = router.match("GET", "/a/1/b/2")
        assert match is not None
        assert match.path_params == {"x": "1", "y": "2"}

    def test_trailing_slash_request(self) -> None:
        router = Router()
        router.add("GET", "/users/:id", _handler)
        match = router.match("GET", "/users/42/")
        assert match is not None
        assert match.path_params == {"id": "42"}

    def test_method_is_case_insensitive(self) -> None:
        router = Router()
        router.add("GET", "/users", _handler)
        assert router.match("get", "/users") is not None

    def test_wrong_method(self) -> None:
        router = Router()
        router.add("GET", "/users", _handler)
        assert router.match("POST", "/users") is None

    def test_no_match(self) -> None:
        router = Router()
        router.add("GET", "/users", _handler)
        assert router.match("GET", "/nope") is None

    def test_empty_router(self) -> None:
        assert Router().match("GET", "/") is None

    def test_duplicate_param_names_last_wins(self) -> None:
        router = Router()
        router.add("GET", "/:id/child/:id", _handler)
        match = router.match("GET", "/1/child/2")
        assert match is not None
        assert match.path_params == {"id": "2"}

    def test_earlier_pattern_beats_later_literal(self) -> None:
        router = Router()
        router.add("GET", "/users/:id", _handler)
        router.add("GET", "/users/me", _other)
        match = router.match("GET", "/users/me")
        assert match is not None
        assert match.handler is _handler
        assert match.path_params == {"id": "me"}

    def test_literal_registered_first_wins(self) -> None:
        router = Router()
        router.add("GET", "/users/me", _other)
        router.add("GET", "/users/:id", _handler)
        match = router.match("GET", "/users/me")
        assert match is not None
        assert match.handler is _other
        assert match.path_params == {}

    def test_literal_request_for_param_route_binds_nothing(self) -> None:
        router = Router()
        router.add("GET", "/users/:id", _handler)
        match = router.match("GET", "/users/:id")
        assert match is not None
        assert match.handler is _handler
        assert match.path_params == {}

    def test_glob_registered_first_beats_literal(self) -> None:
        router = Router()
        router.add("GET", "/*", _handler)
        router.add("GET", "/users", _other)
        match = router.match("GET", "/users")
        assert match is not None
        assert match.handler is _handler

    def test_earlier_pattern_for_other_method_ignored(self) -> None:
        router = Router()
        router.add("POST", "/*", _handler)
        router.add("GET", "/users", _other)
        match = router.match("GET", "/users")
        assert match is not None
        assert match.handler is _other

    def test_registration_order_breaks_ties(self) -> None:
        router = Router()
        router.add("GET", "/files/*", _handler)
        router.add("GET", "/files/:name", _other)
        match = router.match("GET", "/files/readme")
        assert match is not None
        assert match.handler is _handler

    def test_catch_all_registered_first_shadows_later_routes(self) -> None:
        router = Router()
        router.add("GET", "/*", _handler)
        router.add("GET", "/users/:id", _other)
        match = router.match("GET", "/users/42")
        assert match is not None
        assert match.handler is _handler

    def test_pattern_route_skips_other_methods(self) -> None:
        router = Router()
        router.add("POST", "/users/:id", _other)
        router.add("GET", "/users/:id", _handler)
        match = router.match("GET", "/users/1")
        assert match is not None
        assert match.handler is _handler
