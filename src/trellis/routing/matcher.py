"""Combined matcher: every route of a scope in one alternation.

Each route contributes ``(METHODS)\\s(?:FRAGMENT)`` and the branches are
joined in registration order and matched against ``"METHOD path"``.
``re`` tries branches left to right, so the earliest registered route that
matches wins.

The winner is recovered from capture offsets alone. Only the winning
branch's groups participate, and its method group always does, so
``Match.lastindex`` falls inside the winner's reserved index range.
Bisecting the sorted route ids with it finds the route without trying
templates one by one. Empty-string captures are reported as ``""`` and
never confused with non-participating groups.
"""

import bisect
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from trellis.errors import ConfigurationError, PatternCompilationError
from trellis.routing.route import Route, format_alternative

logger = logging.getLogger("trellis.routing")


def check_alternative(template: str, methods: str, fragment: str) -> None:
    """Compile one route's branch wrapped the way ``build`` wraps it.

    Inline global flags such as ``(?i)`` compile on their own but not
    inside the alternation.
    """
    source = format_alternative(methods, fragment)
    try:
        re.compile(f"(?:{source})")
    except re.error as exc:
        raise PatternCompilationError(template, source, str(exc)) from exc


@dataclass(frozen=True, slots=True)
class CombinedMatcher:
    """Compiled alternation over every route in one scope."""

    pattern: re.Pattern[str]
    routes: tuple[Route, ...]
    starts: tuple[int, ...]

    @classmethod
    def build(cls, routes: Iterable[Route]) -> "CombinedMatcher":
        """Compile *routes* (ascending id order) into a single matcher.

        Raises ``ConfigurationError`` if there are no routes.
        """
        ordered = tuple(routes)
        if not ordered:
            msg = "Cannot compile a router with no routes."
            raise ConfigurationError(msg)

        source = "|".join(route.alternative for route in ordered)
        try:
            pattern = re.compile(f"(?:{source})")
        except re.error as exc:
            raise PatternCompilationError("<combined>", source, str(exc)) from exc

        last = ordered[-1]
        if pattern.groups != last.id + last.width - 1:
            msg = (
                f"Combined matcher has {pattern.groups} capture groups, expected "
                f"{last.id + last.width - 1}. A method or template contains its own "
                "capturing groups."
            )
            raise ConfigurationError(msg)

        logger.debug(
            "Compiled %d routes into a matcher with %d capture groups",
            len(ordered),
            pattern.groups,
        )
        return cls(pattern=pattern, routes=ordered, starts=tuple(r.id for r in ordered))

    def match(self, method: str, path: str) -> tuple[Route, dict[str, str]] | None:
        """Match ``method`` and ``path`` against every route at once.

        Returns the winning route and its parameters, or ``None``.
        """
        m = self.pattern.fullmatch(f"{method} {path}")
        if m is None:
            return None

        # lastindex is never None here: the winning method group participated
        route = self.routes[bisect.bisect_right(self.starts, m.lastindex) - 1]
        params = {
            name: m.group(route.id + offset) or ""
            for offset, name in enumerate(route.param_names, start=1)
        }
        return route, params
