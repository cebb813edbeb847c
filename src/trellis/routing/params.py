"""Path template compilation.

Turns a route template such as ``users/<id:\\d+>/posts/<slug>`` into a
regex fragment plus the ordered placeholder names::

    users/(\\d+)/posts/([^/]+)    ("id", "slug")

Literal text is copied into the fragment verbatim, so callers escape any
regex metacharacters themselves.
"""

import re
from dataclasses import dataclass

from trellis.errors import ConfigurationError, PatternCompilationError

SEPARATOR = "/"

DEFAULT_PATTERN = r"[^/]+"

# <name> or <name:pattern>
PLACEHOLDER = re.compile(r"<(?P<name>[^:>]+)(?::(?P<pattern>[^>]+))?>")

# Numbered backreferences and conditionals: group numbers shift once routes
# are combined, so they would point at another route's groups
GROUP_REFERENCE = re.compile(r"(?<!\\)(?:\\\\)*(?:\\[1-9]|\(\?\(\d)")


@dataclass(frozen=True, slots=True)
class CompiledTemplate:
    """A route template reduced to its regex fragment and parameter names."""

    template: str
    fragment: str
    param_names: tuple[str, ...]


def compile_template(template: str, default_pattern: str = DEFAULT_PATTERN) -> CompiledTemplate:
    """Compile a path template into a regex fragment.

    Each placeholder becomes exactly one capturing group: ``<name>`` uses
    *default_pattern*, ``<name:pattern>`` uses *pattern* as written.

    Raises ``ConfigurationError`` if the template starts with ``/`` or
    repeats a placeholder name.
    Raises ``PatternCompilationError`` if a pattern does not compile or
    brings capturing groups of its own.
    """
    if template.startswith(SEPARATOR):
        msg = f"Route template {template!r} must not start with {SEPARATOR!r}."
        raise ConfigurationError(msg)

    names: list[str] = []
    parts: list[str] = []
    position = 0
    for placeholder in PLACEHOLDER.finditer(template):
        name = placeholder.group("name")
        if name in names:
            msg = f"Placeholder <{name}> appears more than once in route {template!r}."
            raise ConfigurationError(msg)
        pattern = placeholder.group("pattern") or default_pattern
        _check_pattern(template, pattern)

        parts.append(template[position : placeholder.start()])
        parts.append(f"({pattern})")
        names.append(name)
        position = placeholder.end()
    parts.append(template[position:])

    fragment = "".join(parts)
    _check_fragment(template, fragment, len(names))
    return CompiledTemplate(template=template, fragment=fragment, param_names=tuple(names))


def _check_pattern(template: str, pattern: str) -> None:
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise PatternCompilationError(template, pattern, str(exc)) from exc
    if compiled.groups:
        reason = "capturing groups are not allowed, use (?:...) instead"
        raise PatternCompilationError(template, pattern, reason)


def _check_fragment(template: str, fragment: str, expected_groups: int) -> None:
    """Ensure literal text did not break or add to the capture groups."""
    try:
        compiled = re.compile(fragment)
    except re.error as exc:
        raise PatternCompilationError(template, fragment, str(exc)) from exc
    if compiled.groups != expected_groups:
        reason = "literal text must not contain capturing groups"
        raise PatternCompilationError(template, fragment, reason)
    if GROUP_REFERENCE.search(fragment):
        reason = "numbered group references are not supported"
        raise PatternCompilationError(template, fragment, reason)
