"""Route and group settings.

Settings are a tree of plain values: string keys mapping to scalars, lists
or nested mappings. Groups cascade their settings to child scopes, and each
route's own settings are layered on top at dispatch time.
"""

from collections.abc import Mapping
from typing import Any, TypeAlias

Settings: TypeAlias = Mapping[str, Any]


def merge_settings(parent: Settings, child: Settings) -> dict[str, Any]:
    """Recursively merge *child* over *parent* into a new dict.

    - Both values are mappings: merged recursively.
    - Both values are lists: child entries are appended to the parent's.
    - Otherwise the child value replaces the parent value.

    Neither input is mutated, and the result shares no dicts or lists
    with them.

    Example::

        merge_settings({"auth": {"roles": ["admin"]}, "cache": 60},
                       {"auth": {"roles": ["editor"]}, "cache": 0})
        # {"auth": {"roles": ["admin", "editor"]}, "cache": 0}
    """
    merged = {key: _clone(value) for key, value in parent.items()}
    for key, value in child.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_settings(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = current + _clone(value)
        else:
            merged[key] = _clone(value)
    return merged


def _clone(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _clone(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_clone(item) for item in value]
    return value
