"""Authorization resolver — decide ``requires_auth`` for each route.

Precedence, highest first:

1. Explicit ``requires_auth`` in the route's handler meta.
2. ``force_protected`` and ``force_public`` both match: protected.
3. A ``force_protected`` match: protected.
4. A ``force_public`` match: public.
5. The configured ``default_requires_auth``.

The resolver lives for one job (one directory + prefix).  While routes are
resolved it records which patterns were used, which routes matched both
lists, and which matches were made moot by explicit meta.  After the job,
:meth:`AuthorizationResolver.diagnostics` turns those records into
warnings.
"""

from dataclasses import dataclass
from typing import Literal, TypeAlias

from autoroute.auth.patterns import ForceRule

RuleKind: TypeAlias = Literal["force_public", "force_protected"]

DecisionSource: TypeAlias = Literal["explicit", "conflict", "force_protected", "force_public", "default"]


@dataclass(frozen=True, slots=True)
class AuthorizationDecision:
    """The outcome of resolving one route.

    Attributes:
        requires_auth: Final flag registered for the route.
        source: Which input decided the flag.
        explicit: ``requires_auth`` from handler meta, if any.
        public_rule: First ``force_public`` rule that matched, if any.
        protected_rule: First ``force_protected`` rule that matched, if any.

    """

    requires_auth: bool
    source: DecisionSource
    explicit: bool | None = None
    public_rule: ForceRule | None = None
    protected_rule: ForceRule | None = None


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PatternConflict:
    """A route matched both a force_public and a force_protected pattern."""

    route: str
    public_pattern: str
    protected_pattern: str

    @property
    def message(self) -> str:
        return (
            f'Route "{self.route}" matched both force_public ("{self.public_pattern}") '
            f'and force_protected ("{self.protected_pattern}"), force_protected wins'
        )


@dataclass(frozen=True, slots=True)
class PatternOverridden:
    """A pattern matched a route whose handler meta sets ``requires_auth``."""

    route: str
    pattern: str
    kind: RuleKind

    @property
    def message(self) -> str:
        return (
            f'{self.kind} pattern "{self.pattern}" matched "{self.route}" but has no effect, '
            "the route sets requires_auth explicitly"
        )


@dataclass(frozen=True, slots=True)
class UnusedPattern:
    """A configured pattern matched no route in the job."""

    pattern: str
    kind: RuleKind

    @property
    def message(self) -> str:
        return (
            f'{self.kind} pattern "{self.pattern}" did not match any registered route '
            "(check for typos or outdated config)"
        )


AuthDiagnostic: TypeAlias = PatternConflict | PatternOverridden | UnusedPattern


class AuthorizationResolver:
    """Per-job resolver combining explicit meta, force rules and the default.

    Args:
        default_requires_auth: Flag used when nothing else applies.
        force_public: Rules that make matching routes public.
        force_protected: Rules that make matching routes protected.
        prefix: The job's route prefix, so rules may omit it.

    """

    __slots__ = (
        "_conflicts",
        "_default",
        "_force_protected",
        "_force_public",
        "_overrides",
        "_prefix",
        "_used_protected",
        "_used_public",
    )

    def __init__(
        self,
        *,
        default_requires_auth: bool = False,
        force_public: tuple[ForceRule, ...] = (),
        force_protected: tuple[ForceRule, ...] = (),
        prefix: str = "",
    ) -> None:
        self._default = default_requires_auth
        self._force_public = force_public
        self._force_protected = force_protected
        self._prefix = prefix
        self._used_public: set[str] = set()
        self._used_protected: set[str] = set()
        self._conflicts: list[PatternConflict] = []
        self._overrides: list[PatternOverridden] = []

    def resolve(
        self,
        route_path: str,
        method: str,
        explicit: bool | None = None,
    ) -> AuthorizationDecision:
        """Resolve ``requires_auth`` for one route and record diagnostics."""
        decision = self.decide(route_path, method, explicit)
        self.record(route_path, decision)
        return decision

    def decide(
        self,
        route_path: str,
        method: str,
        explicit: bool | None = None,
    ) -> AuthorizationDecision:
        """Resolve ``requires_auth`` for one route without touching diagnostics."""
        public_rule = self._first_match(self._force_public, route_path, method)
        protected_rule = self._first_match(self._force_protected, route_path, method)

        if explicit is not None:
            requires_auth, source = explicit, "explicit"
        elif public_rule is not None and protected_rule is not None:
            requires_auth, source = True, "conflict"
        elif protected_rule is not None:
            requires_auth, source = True, "force_protected"
        elif public_rule is not None:
            requires_auth, source = False, "force_public"
        else:
            requires_auth, source = self._default, "default"

        return AuthorizationDecision(
            requires_auth=requires_auth,
            source=source,
            explicit=explicit,
            public_rule=public_rule,
            protected_rule=protected_rule,
        )

    def record(self, route_path: str, decision: AuthorizationDecision) -> None:
        """Count *decision* towards conflicts, overrides and pattern usage.

        Call once the route is actually registered; a route the host rejected
        must not mark its patterns as used.
        """
        public_rule = decision.public_rule
        protected_rule = decision.protected_rule
        if public_rule is not None and protected_rule is not None:
            self._conflicts.append(
                PatternConflict(route_path, public_rule.pattern, protected_rule.pattern)
            )
        if public_rule is not None:
            self._used_public.add(public_rule.pattern)
        if protected_rule is not None:
            self._used_protected.add(protected_rule.pattern)

        if decision.explicit is not None:
            # Attribute to the rule that would have applied without the meta
            if protected_rule is not None:
                self._overrides.append(
                    PatternOverridden(route_path, protected_rule.pattern, "force_protected")
                )
            elif public_rule is not None:
                self._overrides.append(
                    PatternOverridden(route_path, public_rule.pattern, "force_public")
                )

    def diagnostics(self) -> list[AuthDiagnostic]:
        """Return conflicts, overrides and unused patterns, in that order."""
        result: list[AuthDiagnostic] = [*self._conflicts, *self._overrides]
        result.extend(_unused(self._force_public, self._used_public, "force_public"))
        result.extend(_unused(self._force_protected, self._used_protected, "force_protected"))
        return result

    def _first_match(
        self,
        rules: tuple[ForceRule, ...],
        route_path: str,
        method: str,
    ) -> ForceRule | None:
        for rule in rules:
            if rule.matches(route_path, method, self._prefix):
                return rule
        return None


def _unused(
    rules: tuple[ForceRule, ...],
    used: set[str],
    kind: RuleKind,
) -> list[UnusedPattern]:
    return [UnusedPattern(rule.pattern, kind) for rule in rules if rule.pattern not in used]
