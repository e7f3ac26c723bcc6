"""Route authorization — force-rule patterns and the per-job resolver.

Public API::

    from autoroute.auth import AuthorizationResolver, parse_rules

    resolver = AuthorizationResolver(
        default_requires_auth=True,
        force_public=parse_rules(("/api/auth/login",)),
        prefix="/api",
    )
    resolver.resolve("/api/auth/login", "POST").requires_auth  # False
"""

from autoroute.auth.patterns import ForceRule, matches_pattern, parse_rule, parse_rules
from autoroute.auth.resolver import (
    AuthDiagnostic,
    AuthorizationDecision,
    AuthorizationResolver,
    PatternConflict,
    PatternOverridden,
    UnusedPattern,
)

__all__ = [
    "AuthDiagnostic",
    "AuthorizationDecision",
    "AuthorizationResolver",
    "ForceRule",
    "PatternConflict",
    "PatternOverridden",
    "UnusedPattern",
    "matches_pattern",
    "parse_rule",
    "parse_rules",
]
