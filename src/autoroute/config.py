"""Autoroute configuration.

RouterConfig is what callers write, frozen after creation.  RouteJob is
what the orchestrator runs: one per (directory, prefix) pair, produced by
:func:`expand_configs`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeAlias

from autoroute._errors import ConfigError
from autoroute._types import LogSink
from autoroute.auth.patterns import ForceRule, parse_rules

DEFAULT_DIR = "controllers"
DEFAULT_PREFIX = "/api"


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Configuration for one controller directory.

    Attributes:
        dir: Controller directory, relative to the working directory or absolute.
        prefix: Route prefix, or several prefixes to mount the same files
            under each (``("/api", "/v1")``).  *None* means ``/api``.
        default_requires_auth: Authorization flag for routes nothing else
            decides.  False is blacklist mode, True is whitelist mode.
        force_public: Patterns that are always public.
        force_protected: Patterns that are always protected (wins over
            ``force_public``).
        strict: Only accept plain functions and ``create_handler`` results.
        logging: Print diagnostics to stderr.  Ignored when ``on_log`` is set.
        on_log: Custom ``(level, message)`` sink replacing console output.

    """

    dir: str | Path = DEFAULT_DIR
    prefix: str | tuple[str, ...] | None = None
    default_requires_auth: bool = False
    force_public: tuple[str, ...] | None = None
    force_protected: tuple[str, ...] | None = None
    strict: bool = True
    logging: bool = True
    on_log: LogSink | None = None

    def __post_init__(self) -> None:
        # Lists from YAML/TOML or callers become tuples so the config stays hashable.
        if self.prefix is not None and not isinstance(self.prefix, str):
            object.__setattr__(self, "prefix", tuple(self.prefix))
        for name in ("force_public", "force_protected"):
            value = getattr(self, name)
            if isinstance(value, str):
                msg = f"{name} must be a list of patterns, not a string"
                raise ConfigError(msg)
            if value is not None:
                object.__setattr__(self, name, tuple(value))

    @property
    def prefixes(self) -> tuple[str, ...]:
        """Normalized prefixes, defaulting to ``/api``."""
        if self.prefix is None:
            return (DEFAULT_PREFIX,)
        raw = (self.prefix,) if isinstance(self.prefix, str) else self.prefix
        return tuple(normalize_prefix(p) for p in raw)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RouterConfig:
        """Build a config from a plain mapping (e.g., a YAML section).

        Raises:
            ConfigError: On unknown keys.

        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown router option(s): {', '.join(unknown)}"
            raise ConfigError(msg)
        return cls(**data)


@dataclass(frozen=True, slots=True)
class RouteJob:
    """One fully resolved (directory, prefix) unit of work."""

    directory: Path
    prefix: str
    default_requires_auth: bool = False
    force_public: tuple[ForceRule, ...] = ()
    force_protected: tuple[ForceRule, ...] = ()
    strict: bool = True
    logging: bool = True
    on_log: LogSink | None = None


ConfigInput: TypeAlias = RouterConfig | Mapping[str, Any] | Sequence[RouterConfig | Mapping[str, Any]]


def normalize_prefix(prefix: str) -> str:
    """Drop one trailing ``/`` unless the prefix is the bare root."""
    if len(prefix) > 1 and prefix.endswith("/"):
        return prefix[:-1]
    return prefix


def as_configs(config: ConfigInput | None) -> list[RouterConfig]:
    """Coerce a single config, a mapping or a sequence of either to a list."""
    if config is None:
        return [RouterConfig()]
    if isinstance(config, RouterConfig | Mapping):
        config = [config]
    return [c if isinstance(c, RouterConfig) else RouterConfig.from_mapping(c) for c in config]


def expand_configs(config: ConfigInput | None) -> list[RouteJob]:
    """Flatten configs into one job per (directory, prefix), in order.

    Force patterns are parsed once here, not per match.
    """
    jobs: list[RouteJob] = []
    for cfg in as_configs(config):
        directory = Path(cfg.dir or DEFAULT_DIR)
        if not directory.is_absolute():
            directory = directory.resolve()
        force_public = parse_rules(cfg.force_public)
        force_protected = parse_rules(cfg.force_protected)
        for prefix in cfg.prefixes:
            jobs.append(RouteJob(
                directory=directory,
                prefix=prefix,
                default_requires_auth=cfg.default_requires_auth,
                force_public=force_public,
                force_protected=force_protected,
                strict=cfg.strict,
                logging=cfg.logging,
                on_log=cfg.on_log,
            ))
    return jobs
