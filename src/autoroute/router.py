"""Route registration — discover, authorize and register routes on a host.

Entry points::

    from autoroute import RouterConfig, auto_router, register_routes

    # One call
    registry = await register_routes(app, RouterConfig(dir="controllers"))

    # Plugin style, several routers and prefixes
    install = auto_router([
        RouterConfig(dir="controllers/admin", prefix="/api/admin"),
        RouterConfig(dir="controllers/client", prefix=("/api", "/v1"),
                     default_requires_auth=True, force_public=("/api/auth/login",)),
    ])
    registry = await install(app)

Each configuration expands into one job per (directory, prefix).  Jobs run
one after another.  Inside a job the directory walk finishes first, then
every route file is loaded concurrently, and the job's diagnostics are
reported only after all loads have settled.  Nothing is raised for bad
route files; they are logged and left out of the registry.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import TYPE_CHECKING

from autoroute._errors import ConfigError, RouteFileError, ScanError
from autoroute.auth.resolver import AuthorizationResolver
from autoroute.config import expand_configs
from autoroute.console import RouteLogger
from autoroute.registry import RouteRecord, RouteRegistry, registry_for
from autoroute.routes.exports import (
    LegacyExport,
    RouteHandler,
    UnsupportedExport,
    WrappedExport,
    classify_export,
    explicit_requires_auth,
)
from autoroute.routes.loader import MISSING, import_route_module
from autoroute.routes.walker import RouteCandidate, walk_routes

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping
    from typing import Any

    from autoroute._types import HandlerFunc, ModuleLoader
    from autoroute.config import ConfigInput, RouteJob
    from autoroute.hosts import RouteHost
    from autoroute.routes.loader import RouteModule

_ALLOWED_EXPORTS = (
    "Allowed exports:\n"
    "    async def handler(request): ...\n"
    "    handler = create_handler(_endpoint, {'requires_auth': True})"
)


def _strict_help(type_name: str) -> str:
    return (
        "In strict mode only functions or create_handler() results are allowed "
        f"(current export type: {type_name}).\n"
        f"{_ALLOWED_EXPORTS}\n"
        "Not supported: handler = {'handler': ..., 'meta': ...}\n"
        "Tip: set strict=False to accept plain objects with a warning"
    )


def auto_router(
    config: ConfigInput | None = None,
    *,
    loader: ModuleLoader | None = None,
) -> Callable[[RouteHost], Awaitable[RouteRegistry]]:
    """Build an installer that registers routes for *config* on a host.

    *config* may be a :class:`RouterConfig`, a mapping of its fields, or a
    sequence of either.  Configurations are expanded immediately, so bad
    options fail here rather than at install time.

    Raises:
        ConfigError: On invalid configuration.

    """
    jobs = expand_configs(config)
    load = loader or import_route_module

    async def install(host: RouteHost) -> RouteRegistry:
        if host is None:
            msg = "autoroute requires a host application instance"
            raise ConfigError(msg)
        registry = registry_for(host)
        for job in jobs:
            await JobRunner(host, job, registry, load).run()
        return registry

    return install


async def register_routes(
    host: RouteHost,
    config: ConfigInput | None = None,
    *,
    loader: ModuleLoader | None = None,
) -> RouteRegistry:
    """Discover routes for *config* and register them on *host*.

    Returns the host's registry, which accumulates across calls.

    Raises:
        ConfigError: If *host* is None or the configuration is invalid.

    """
    return await auto_router(config, loader=loader)(host)


class JobRunner:
    """Runs one (directory, prefix) job against a host."""

    __slots__ = ("host", "job", "loader", "logger", "registry", "resolver")

    def __init__(
        self,
        host: RouteHost,
        job: RouteJob,
        registry: RouteRegistry,
        loader: ModuleLoader,
    ) -> None:
        self.host = host
        self.job = job
        self.registry = registry
        self.loader = loader
        self.logger = RouteLogger(enabled=job.logging, sink=job.on_log)
        self.resolver = AuthorizationResolver(
            default_requires_auth=job.default_requires_auth,
            force_public=job.force_public,
            force_protected=job.force_protected,
            prefix=job.prefix,
        )

    async def run(self) -> None:
        log = self.logger
        log.info(f"Scanning controller directory: {self.job.directory}")

        try:
            candidates = walk_routes(self.job.directory, self.job.prefix, log)
        except ScanError as exc:
            log.error(str(exc))
            return

        loads = []
        for candidate in candidates:
            if not self.registry.reserve(candidate.key):
                log.error(f"Skip file {candidate.source}: duplicate route {candidate.key}")
                continue
            loads.append(self.register(candidate))

        await asyncio.gather(*loads)

        for diagnostic in self.resolver.diagnostics():
            log.warn(diagnostic.message)
        self._log_summary()

    async def register(self, candidate: RouteCandidate) -> RouteRecord | None:
        """Load one route file and register its handler.

        Every failure is logged against the file; None means skipped.
        """
        try:
            module = await self.loader(candidate.source)
            resolved = self._resolve_export(module)
            if resolved is None:
                return None
            handler, meta = resolved
            decision = self.resolver.decide(
                candidate.route_path,
                candidate.method,
                explicit_requires_auth(meta),
            )
            add_route = getattr(self.host, candidate.template.method, None)
            if not callable(add_route):
                msg = f"{type(self.host).__name__} has no {candidate.template.method}() method"
                raise RouteFileError(msg)
            add_route(candidate.route_path, handler)
            self.resolver.record(candidate.route_path, decision)
        except Exception as exc:
            self.logger.error(f"Failed to load route {candidate.source}: {exc}")
            return None

        record = RouteRecord(
            method=candidate.method,
            path=candidate.route_path,
            requires_auth=decision.requires_auth,
            source=candidate.source,
        )
        self.registry.add(record)
        if not inspect.iscoroutinefunction(handler):
            self.logger.warn(f"Route handler in {candidate.source} should be an async function")
        auth_mark = " [auth]" if record.requires_auth else ""
        self.logger.info(f"{record.method:<7} {record.path}{auth_mark}")
        return record

    def _resolve_export(
        self,
        module: RouteModule,
    ) -> tuple[HandlerFunc, Mapping[str, Any] | None] | None:
        """Turn a module's ``handler`` export into (handler, meta).

        Returns None for files that deliberately export nothing.

        Raises:
            RouteFileError: For any export that cannot be registered.

        """
        value = module.default
        if value is MISSING or value is None:
            return None

        if not value:
            msg = (
                f"handler is a falsy value ({value!r}), "
                "expected a function or a create_handler() result"
            )
            raise RouteFileError(msg)

        if self.job.strict and not callable(value) and not isinstance(value, RouteHandler):
            raise RouteFileError(_strict_help(type(value).__name__))

        if module.named_exports:
            msg = (
                "Route files may only export 'handler', found: "
                f"{', '.join(module.named_exports)} (prefix helpers with an underscore)"
            )
            raise RouteFileError(msg)

        export = classify_export(value)
        if isinstance(export, UnsupportedExport):
            raise RouteFileError(f"{export.reason}.\n{_ALLOWED_EXPORTS}")
        if isinstance(export, LegacyExport):
            self.logger.warn(
                f"Non-recommended export style in {module.path} (non-strict mode), "
                "use create_handler() instead"
            )
            return export.handler, export.meta
        if isinstance(export, WrappedExport):
            return export.handler, export.meta
        return export.handler, None

    def _log_summary(self) -> None:
        stats = self.registry.stats()
        if not stats["total"]:
            self.logger.warn("No routes registered")
            return
        self.logger.info(
            f"Registered routes: total {stats['total']}, "
            f"public {stats['public']}, protected {stats['protected']}"
        )
