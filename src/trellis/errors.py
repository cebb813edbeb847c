"""Trellis exception hierarchy.

Shared across the template compiler, route table, matcher and router so
every module raises and catches the same types.
"""


class TrellisError(Exception):
    """Base for all trellis-specific errors."""


class ConfigurationError(TrellisError):
    """Raised when routes or groups are registered incorrectly.

    Always a caller defect. Surfaces at registration time, or on the first
    compile of a scope that has no routes at all.
    """


class PatternCompilationError(ConfigurationError):
    """A placeholder pattern or route fragment that cannot be used.

    Raised at registration time when ``re`` rejects the pattern, or when
    the pattern carries capturing groups of its own (they would shift the
    capture offsets of every route registered after it).
    """

    def __init__(self, template: str, pattern: str, reason: str) -> None:
        self.template = template
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r} in route {template!r}: {reason}")
