"""Router scopes: registration, group tree, and dispatch.

A ``Router`` is one scope. It owns a route table, a lazily compiled
combined matcher, and a tree of child scopes keyed by literal path
segment. Dispatch consumes leading segments while they name a child
group, then matches the rest of the path in the scope it lands in.
"""

import logging
import re
import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from trellis._internal.types import GroupBuilder, Handler, Methods
from trellis.config import RouterConfig
from trellis.errors import ConfigurationError, PatternCompilationError
from trellis.routing.matcher import CombinedMatcher, check_alternative
from trellis.routing.params import SEPARATOR, compile_template
from trellis.routing.route import Route, RouteMatch
from trellis.routing.table import RouteTable
from trellis.settings import Settings, merge_settings

logger = logging.getLogger("trellis.routing")


def normalize_methods(methods: Methods) -> str:
    """Turn a method token, alternation string, or token sequence into ``A|B``.

    Tokens are matched case-sensitively against the request method.
    """
    alternation = methods if isinstance(methods, str) else "|".join(methods)
    if not alternation or "" in alternation.split("|"):
        msg = f"Empty method token in {methods!r}."
        raise ConfigurationError(msg)
    try:
        compiled = re.compile(alternation)
    except re.error as exc:
        raise PatternCompilationError("<methods>", alternation, str(exc)) from exc
    if compiled.groups:
        reason = "capturing groups are not allowed in a method alternation"
        raise PatternCompilationError("<methods>", alternation, reason)
    return alternation


class Router:
    """One routing scope, and the entry point for dispatch.

    Usage::

        router = Router()
        router.get("users/<id:\\d+>", show_user)

        def admin(group: Router) -> None:
            group.get("", dashboard)
            group.post("users", create_user, {"audit": True})

        router.group("admin", admin, {"auth": {"roles": ["admin"]}})

        match = router.dispatch("GET", "users/42")
        handler, params, settings = match

    Routes win in registration order. Overlapping templates are not
    detected or reordered: the first registered route that matches is
    returned, even when a later one is more specific.

    Thread safety:
        Registration is not synchronized and must finish before the scope
        is dispatched from several threads. The lazy matcher build uses a
        Lock + double-check so concurrent first dispatches compile once.
    """

    __slots__ = ("_compile_lock", "_groups", "_matcher", "_table", "config", "settings")

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        config: RouterConfig | None = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.settings: dict[str, Any] = merge_settings({}, settings or {})
        self._table = RouteTable()
        self._groups: dict[str, Router] = {}
        # None means stale: rebuilt on the next dispatch
        self._matcher: CombinedMatcher | None = None
        self._compile_lock = threading.Lock()

    # -- Route registration --

    def register(
        self,
        methods: Methods,
        path: str,
        handler: Handler,
        settings: Settings | None = None,
    ) -> Route:
        """Register *handler* for *methods* on the path template *path*.

        Args:
            methods: ``"GET"``, ``"GET|POST"`` or ``["GET", "POST"]``.
            path: Template without a leading ``/``. ``<name>`` matches one
                path segment, ``<name:regex>`` matches *regex*. Literal text
                is used as a regex as-is.
            handler: Any value; returned untouched on a match.
            settings: Route settings, merged over the scope's settings on
                every match.
        """
        alternation = normalize_methods(methods)
        compiled = compile_template(path, self.config.default_pattern)
        check_alternative(path, alternation, compiled.fragment)
        route_settings = merge_settings({}, settings or {})
        route = self._table.add(alternation, compiled, handler, route_settings)
        self._matcher = None
        return route

    def route(
        self,
        path: str,
        *,
        methods: Methods = "GET",
        settings: Settings | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        ::

            @router.route("posts/<slug>", methods=["GET", "HEAD"])
            def show_post(slug): ...
        """

        def decorator(func: Handler) -> Handler:
            self.register(methods, path, func, settings)
            return func

        return decorator

    def get(self, path: str, handler: Handler, settings: Settings | None = None) -> Route:
        return self.register("GET", path, handler, settings)

    def post(self, path: str, handler: Handler, settings: Settings | None = None) -> Route:
        return self.register("POST", path, handler, settings)

    def put(self, path: str, handler: Handler, settings: Settings | None = None) -> Route:
        return self.register("PUT", path, handler, settings)

    def patch(self, path: str, handler: Handler, settings: Settings | None = None) -> Route:
        return self.register("PATCH", path, handler, settings)

    def delete(self, path: str, handler: Handler, settings: Settings | None = None) -> Route:
        return self.register("DELETE", path, handler, settings)

    def head(self, path: str, handler: Handler, settings: Settings | None = None) -> Route:
        return self.register("HEAD", path, handler, settings)

    def options(self, path: str, handler: Handler, settings: Settings | None = None) -> Route:
        return self.register("OPTIONS", path, handler, settings)

    def any(self, path: str, handler: Handler, settings: Settings | None = None) -> Route:
        """Register *handler* for every method in ``config.methods``."""
        return self.register(self.config.methods, path, handler, settings)

    # -- Groups --

    def group(
        self,
        prefix: str,
        builder: GroupBuilder,
        settings: Settings | None = None,
    ) -> "Router":
        """Create a child scope mounted under the path segment *prefix*.

        The child's settings are this scope's settings merged with
        *settings*, fixed now. *builder* is called once with the child so it
        can register routes and nested groups, then the child is attached.
        Registering the same prefix twice replaces the earlier group.
        """
        if not prefix or SEPARATOR in prefix:
            msg = f"Group prefix {prefix!r} must be a single non-empty path segment."
            raise ConfigurationError(msg)

        child = Router(config=self.config)
        child.settings = merge_settings(self.settings, settings or {})
        builder(child)

        if prefix in self._groups:
            logger.warning("Group %r replaced an existing group with the same prefix", prefix)
        self._groups[prefix] = child
        return child

    # -- Introspection --

    @property
    def routes(self) -> tuple[Route, ...]:
        """Routes registered directly on this scope, in registration order."""
        return tuple(self._table)

    @property
    def groups(self) -> Mapping[str, "Router"]:
        """Child scopes keyed by prefix (read-only view)."""
        return MappingProxyType(self._groups)

    # -- Dispatch --

    def compile(self) -> CombinedMatcher:
        """Return this scope's combined matcher, building it if stale.

        Raises ``ConfigurationError`` if the scope has no routes.
        """
        matcher = self._matcher
        if matcher is not None:
            return matcher
        with self._compile_lock:
            if self._matcher is None:
                self._matcher = CombinedMatcher.build(self._table)
            return self._matcher

    def dispatch(self, method: str, path: str) -> RouteMatch | None:
        """Find the route for *method* and *path*.

        *path* is the request path without its leading ``/`` and already
        normalized. Returns ``None`` when nothing matches.
        Raises ``ConfigurationError`` if the scope that ends up handling the
        path has no routes.
        """
        if self._groups:
            prefix, _, rest = path.partition(SEPARATOR)
            group = self._groups.get(prefix)
            if group is not None:
                return group.dispatch(method, rest)
        return self.match_local(method, path)

    def match_local(self, method: str, path: str) -> RouteMatch | None:
        """Match against this scope's own routes, ignoring child groups."""
        result = self.compile().match(method, path)
        if result is None:
            return None
        route, params = result
        return RouteMatch(
            handler=route.handler,
            params=params,
            settings=merge_settings(self.settings, route.settings),
            route=route,
        )

    def __repr__(self) -> str:
        return f"Router(routes={len(self._table)}, groups={sorted(self._groups)})"
