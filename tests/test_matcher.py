"""Tests for trellis.routing.matcher — combined alternation and decoding."""

import pytest

from trellis.errors import ConfigurationError
from trellis.routing.matcher import CombinedMatcher
from trellis.routing.params import compile_template
from trellis.routing.route import Route
from trellis.routing.table import RouteTable


def _table(*entries: tuple[str, str, str]) -> RouteTable:
    table = RouteTable()
    for methods, template, handler in entries:
        table.add(methods, compile_template(template), handler, {})
    return table


class TestBuild:
    def test_empty_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="no routes"):
            CombinedMatcher.build(RouteTable())

    def test_group_count_matches_reservations(self) -> None:
        table = _table(
            ("GET", "users/<id>", "a"),
            ("POST", "users/<id>/posts/<post>", "b"),
            ("GET", "about", "c"),
        )
        matcher = CombinedMatcher.build(table)

        assert matcher.pattern.groups == table.next_index - 1
        assert matcher.starts == (1, 3, 6)

    def test_method_group_at_route_id(self) -> None:
        table = _table(("GET", "a/<x>", "a"), ("PUT", "b/<y>/<z>", "b"))
        matcher = CombinedMatcher.build(table)

        m = matcher.pattern.fullmatch("PUT b/1/2")
        assert m is not None
        second = list(table)[1]
        assert m.group(second.id) == "PUT"
        assert m.group(second.id + 1) == "1"
        assert m.group(second.id + 2) == "2"
        assert m.group(1) is None

    def test_rejects_route_with_extra_groups(self) -> None:
        rogue = Route(
            id=1,
            methods="GET",
            template="x",
            fragment="(x)",
            param_names=(),
            handler="h",
        )
        with pytest.raises(ConfigurationError, match="capture groups"):
            CombinedMatcher.build([rogue])


class TestMatch:
    def test_static(self) -> None:
        matcher = CombinedMatcher.build(_table(("GET", "users", "list")))

        result = matcher.match("GET", "users")
        assert result is not None
        route, params = result
        assert route.handler == "list"
        assert params == {}

    def test_params(self) -> None:
        matcher = CombinedMatcher.build(
            _table(
                ("GET", "users", "list"),
                ("GET", r"users/<uid:\d+>/posts/<slug>", "post"),
            )
        )

        route, params = matcher.match("GET", "users/7/posts/hello-world")  # type: ignore[misc]
        assert route.handler == "post"
        assert params == {"uid": "7", "slug": "hello-world"}

    def test_picks_later_route(self) -> None:
        matcher = CombinedMatcher.build(
            _table(
                ("GET", "a/<x>/<y>", "first"),
                ("GET", "b", "second"),
                ("GET", "c/<z>", "third"),
            )
        )

        route, params = matcher.match("GET", "c/9")  # type: ignore[misc]
        assert route.handler == "third"
        assert params == {"z": "9"}

    def test_no_match(self) -> None:
        matcher = CombinedMatcher.build(_table(("GET", "users", "list")))
        assert matcher.match("GET", "posts") is None
        assert matcher.match("POST", "users") is None

    def test_anchored_at_both_ends(self) -> None:
        matcher = CombinedMatcher.build(_table(("GET", r"users/<id:\d+>", "show")))

        assert matcher.match("GET", "users/1/extra") is None
        assert matcher.match("GET", "users/1\n") is None
        assert matcher.match("XGET", "users/1") is None
        assert matcher.match("GETX", "users/1") is None

    def test_method_is_case_sensitive(self) -> None:
        matcher = CombinedMatcher.build(_table(("GET", "users", "list")))
        assert matcher.match("get", "users") is None

    def test_first_registered_wins(self) -> None:
        matcher = CombinedMatcher.build(
            _table(
                ("GET", "users/<id>", "by_id"),
                ("GET", r"users/<name:\w+>", "by_name"),
            )
        )

        route, params = matcher.match("GET", "users/42")  # type: ignore[misc]
        assert route.handler == "by_id"
        assert params == {"id": "42"}

    def test_empty_capture_is_attributed_correctly(self) -> None:
        matcher = CombinedMatcher.build(
            _table(
                ("GET", "users/<id>", "users"),
                ("GET", "files/<rest:.*>", "files"),
            )
        )

        route, params = matcher.match("GET", "files/")  # type: ignore[misc]
        assert route.handler == "files"
        assert params == {"rest": ""}

    def test_non_participating_placeholder_reported_empty(self) -> None:
        matcher = CombinedMatcher.build(
            _table(
                ("GET", "users", "users"),
                ("GET", r"posts/<id:\d+>?", "posts"),
            )
        )

        route, params = matcher.match("GET", "posts/")  # type: ignore[misc]
        assert route.handler == "posts"
        assert params == {"id": ""}
