"""Trellis: a grouped regex router.

Matches a ``(method, path)`` pair against registered path templates and
returns the route's handler, its path parameters, and its settings merged
with those of every enclosing group.

Basic usage::

    from trellis import Router

    router = Router()
    router.get("", "home")
    router.get("posts/<post_id:\\d+>", "show_post")

    def api(group):
        group.any("users/<name>", "user", {"cache": 60})

    router.group("api", api, {"auth": True})

    handler, params, settings = router.dispatch("GET", "api/users/alice")
    # "user", {"name": "alice"}, {"auth": True, "cache": 60}
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "PatternCompilationError",
    "Route",
    "RouteMatch",
    "Router",
    "RouterConfig",
    "TrellisError",
    "merge_settings",
]

# Public name -> defining module, resolved on first attribute access
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "trellis.errors",
    "PatternCompilationError": "trellis.errors",
    "Route": "trellis.routing.route",
    "RouteMatch": "trellis.routing.route",
    "Router": "trellis.routing.router",
    "RouterConfig": "trellis.config",
    "TrellisError": "trellis.errors",
    "merge_settings": "trellis.settings",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trellis`` cheap while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
