"""Chirp integration — register discovered routes on a chirp ``App``.

Chirp registers routes through ``app.route(path, methods=[...])`` and
spells parameters ``{name}``.  :class:`ChirpHost` adapts that to the
per-method ``get(path, handler)`` contract and converts ``:name`` to
``{name}``.  The registry is kept in the app's template globals, so
templates can render route tables with ``{{ route_registry.all }}``.

Usage::

    from chirp import App
    from autoroute.integrations.chirp import mount_routes

    app = App()
    await mount_routes(app, RouterConfig(dir="controllers"))

Requires: pip install autoroute[chirp]
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from autoroute.registry import REGISTRY_ATTR, RouteRegistry
from autoroute.router import register_routes

if TYPE_CHECKING:
    from chirp import App

    from autoroute._types import HandlerFunc, ModuleLoader
    from autoroute.config import ConfigInput

_PARAM_RE = re.compile(r":(\w+)")


def to_chirp_path(path: str) -> str:
    """``/api/users/:id`` -> ``/api/users/{id}``."""
    return _PARAM_RE.sub(r"{\1}", path)


class ChirpHost:
    """Per-method registration facade over a chirp App.

    Several ChirpHost instances wrapping the same app share one registry,
    because the registry lives on the app.
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    @property
    def route_registry(self) -> RouteRegistry | None:
        return self.app._template_globals.get(REGISTRY_ATTR)

    @route_registry.setter
    def route_registry(self, registry: RouteRegistry) -> None:
        self.app._template_globals[REGISTRY_ATTR] = registry

    def _add(self, method: str, path: str, handler: HandlerFunc) -> None:
        self.app.route(
            to_chirp_path(path),
            methods=[method],
            name=f"{method} {path}",
        )(handler)

    def get(self, path: str, handler: HandlerFunc) -> None:
        self._add("GET", path, handler)

    def post(self, path: str, handler: HandlerFunc) -> None:
        self._add("POST", path, handler)

    def put(self, path: str, handler: HandlerFunc) -> None:
        self._add("PUT", path, handler)

    def delete(self, path: str, handler: HandlerFunc) -> None:
        self._add("DELETE", path, handler)

    def patch(self, path: str, handler: HandlerFunc) -> None:
        self._add("PATCH", path, handler)

    def head(self, path: str, handler: HandlerFunc) -> None:
        self._add("HEAD", path, handler)

    def options(self, path: str, handler: HandlerFunc) -> None:
        self._add("OPTIONS", path, handler)


async def mount_routes(
    app: App,
    config: ConfigInput | None = None,
    *,
    loader: ModuleLoader | None = None,
) -> RouteRegistry:
    """Discover routes for *config* and register them on a chirp *app*."""
    return await register_routes(ChirpHost(app), config, loader=loader)
