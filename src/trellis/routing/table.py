"""Per-scope route table and capture-index allocation."""

import logging
from collections.abc import Iterator

from trellis._internal.types import Handler
from trellis.routing.params import CompiledTemplate
from trellis.routing.route import Route
from trellis.settings import Settings

logger = logging.getLogger("trellis.routing")


class RouteTable:
    """Ordered routes of one scope, keyed by their reserved capture index.

    Indexes start at 1 (group 0 is the whole match). Each route takes the
    next free index and reserves ``1 + len(param_names)`` of them, so the
    reservations tile the capture-group space with no gaps or overlaps.
    """

    __slots__ = ("_next_index", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._next_index = 1

    @property
    def next_index(self) -> int:
        return self._next_index

    def add(
        self,
        methods: str,
        compiled: CompiledTemplate,
        handler: Handler,
        settings: Settings,
    ) -> Route:
        """Allocate an index range for a compiled template and store the route."""
        route = Route(
            id=self._next_index,
            methods=methods,
            template=compiled.template,
            fragment=compiled.fragment,
            param_names=compiled.param_names,
            handler=handler,
            settings=settings,
        )
        self._routes.append(route)
        self._next_index += route.width
        logger.debug("Registered %s %r as route %d", methods, compiled.template, route.id)
        return route

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)
