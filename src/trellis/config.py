"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation and shared by
a router and every group scope created beneath it.
"""

from dataclasses import dataclass

from trellis.routing.params import DEFAULT_PATTERN

# Every method ``Router.any()`` registers for
HTTP_METHODS: tuple[str, ...] = ("GET", "DELETE", "HEAD", "OPTIONS", "PATCH", "POST", "PUT")


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    Only the sub-pattern of untyped ``<name>`` placeholders is configurable.
    The placeholder syntax itself (``<name>`` and ``<name:pattern>``) and the
    way typed patterns are wrapped in one capturing group are fixed.

    Override what you need::

        config = RouterConfig(default_pattern=r"[^/.]+")
        router = Router(config=config)
    """

    # Sub-pattern for untyped ``<name>`` placeholders
    default_pattern: str = DEFAULT_PATTERN

    # Method set used by ``Router.any()``
    methods: tuple[str, ...] = HTTP_METHODS
