"""Force-rule patterns for ``force_public`` / ``force_protected``.

Pattern formats::

    /api/users           exact path, any method
    /api/admin/*         strict descendants of /api/admin, any method
    POST /api/users      exact path, POST only
    DELETE /api/admin/*  descendants, DELETE only

Patterns may omit the configured prefix: with prefix ``/api`` the pattern
``/users`` also matches ``/api/users``.
"""

from dataclasses import dataclass

from autoroute.routes.filename import HTTP_METHODS

_METHODS_UPPER: frozenset[str] = frozenset(m.upper() for m in HTTP_METHODS)

WILDCARD = "/*"


@dataclass(frozen=True, slots=True)
class ForceRule:
    """A parsed force pattern.

    Attributes:
        pattern: The pattern text as configured (used in diagnostics).
        path: Base path without the wildcard marker.
        method: Uppercase method constraint, or *None* for any method.
        wildcard: True when only descendants of *path* match.

    """

    pattern: str
    path: str
    method: str | None = None
    wildcard: bool = False

    def matches(self, route_path: str, route_method: str, prefix: str = "") -> bool:
        """Return True when the route is covered by this rule."""
        if self.method is not None and self.method != route_method.upper():
            return False

        for candidate in _candidate_paths(route_path, prefix):
            if self.wildcard:
                # The base path itself never matches
                if candidate.startswith(self.path + "/"):
                    return True
            elif candidate == self.path:
                return True
        return False


def parse_rule(pattern: str) -> ForceRule:
    """Parse a pattern string into a :class:`ForceRule`.

    A leading token is treated as a method only when it names a known HTTP
    method (case-insensitive); otherwise the whole text is the path.
    """
    method: str | None = None
    path = pattern

    head, sep, rest = pattern.partition(" ")
    if sep and head.upper() in _METHODS_UPPER:
        method = head.upper()
        path = rest

    wildcard = path.endswith(WILDCARD)
    if wildcard:
        path = path[: -len(WILDCARD)]

    return ForceRule(pattern=pattern, path=path, method=method, wildcard=wildcard)


def parse_rules(patterns: tuple[str, ...] | None) -> tuple[ForceRule, ...]:
    return tuple(parse_rule(p) for p in patterns or ())


def matches_pattern(
    route_path: str,
    route_method: str,
    pattern: str | ForceRule,
    prefix: str = "",
) -> bool:
    """Match a route against a force pattern (string or pre-parsed rule)."""
    rule = pattern if isinstance(pattern, ForceRule) else parse_rule(pattern)
    return rule.matches(route_path, route_method, prefix)


def _candidate_paths(route_path: str, prefix: str) -> tuple[str, ...]:
    if prefix and route_path.startswith(prefix):
        return (route_path, route_path[len(prefix):] or "/")
    return (route_path,)
