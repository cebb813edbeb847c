"""Shared type aliases used across trellis modules."""

from collections.abc import Callable, Sequence
from typing import Any, TypeAlias

# Route handler: opaque to the router, returned as-is on a match
Handler: TypeAlias = Any

# A single method token, a ``|``-joined alternation, or a sequence of tokens
Methods: TypeAlias = str | Sequence[str]

# Callback that populates a freshly created group scope
GroupBuilder: TypeAlias = Callable[[Any], object]
