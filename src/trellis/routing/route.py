"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from trellis._internal.types import Handler
from trellis.settings import Settings


def format_alternative(methods: str, fragment: str) -> str:
    """One route's branch of the combined alternation."""
    return f"({methods})\\s(?:{fragment})"


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route. Immutable after registration.

    ``id`` is the absolute capture-group index of the route's method group
    in its scope's combined matcher. The route reserves ``width``
    consecutive indexes: the method group followed by one group per
    placeholder, so parameter ``k`` (1-based) sits at ``id + k``.
    """

    id: int
    methods: str
    template: str
    fragment: str
    param_names: tuple[str, ...]
    handler: Handler
    settings: Settings = field(default_factory=dict)

    @property
    def width(self) -> int:
        """Number of capture groups this route reserves."""
        return 1 + len(self.param_names)

    @property
    def alternative(self) -> str:
        """This route's branch of the combined alternation."""
        return format_alternative(self.methods, self.fragment)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful dispatch.

    Unpacks as ``handler, params, settings``.
    """

    handler: Handler
    params: dict[str, str]
    settings: dict[str, Any]
    route: Route

    def __iter__(self) -> Iterator[Any]:
        yield self.handler
        yield self.params
        yield self.settings
