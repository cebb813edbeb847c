"""Tests for trellis.routing.route — Route and RouteMatch."""

import pytest

from trellis.routing.route import Route, RouteMatch


def _route(**overrides: object) -> Route:
    fields: dict[str, object] = {
        "id": 1,
        "methods": "GET",
        "template": "users/<id>",
        "fragment": "users/([^/]+)",
        "param_names": ("id",),
        "handler": "show_user",
    }
    fields.update(overrides)
    return Route(**fields)  # type: ignore[arg-type]


class TestRoute:
    def test_width_counts_method_group(self) -> None:
        assert _route().width == 2
        assert _route(param_names=()).width == 1
        assert _route(param_names=("a", "b", "c")).width == 4

    def test_alternative(self) -> None:
        route = _route(methods="GET|POST")
        assert route.alternative == r"(GET|POST)\s(?:users/([^/]+))"

    def test_default_settings(self) -> None:
        assert _route().settings == {}

    def test_frozen(self) -> None:
        route = _route()
        with pytest.raises(AttributeError):
            route.id = 5  # type: ignore[misc]


class TestRouteMatch:
    def test_unpacks_as_triple(self) -> None:
        route = _route()
        match = RouteMatch(handler="h", params={"id": "1"}, settings={"a": 1}, route=route)

        handler, params, settings = match
        assert handler == "h"
        assert params == {"id": "1"}
        assert settings == {"a": 1}

    def test_keeps_route(self) -> None:
        route = _route()
        match = RouteMatch(handler="h", params={}, settings={}, route=route)
        assert match.route is route

    def test_frozen(self) -> None:
        match = RouteMatch(handler="h", params={}, settings={}, route=_route())
        with pytest.raises(AttributeError):
            match.handler = "other"  # type: ignore[misc]
