"""Shared type definitions for autoroute."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Literal, TypeAlias

if TYPE_CHECKING:
    from pathlib import Path

    from autoroute.routes.loader import RouteModule

# Lowercase HTTP method as it appears in a filename (e.g., "get")
HttpMethod: TypeAlias = Literal["get", "post", "put", "delete", "patch", "head", "options"]

# Route URL path (e.g., "/api/users/:id")
RoutePath: TypeAlias = str

# Registry key, "METHOD /path" (e.g., "GET /api/users")
RouteKey: TypeAlias = str

# Handler callable registered with the host framework
HandlerFunc: TypeAlias = Callable[..., Any]

# Log level accepted by a custom sink
LogLevel: TypeAlias = Literal["info", "warn", "error"]

# Caller-supplied log sink: (level, message) -> None
LogSink: TypeAlias = Callable[[LogLevel, str], None]

# Loads a route file and yields its exports
ModuleLoader: TypeAlias = Callable[["Path"], Awaitable["RouteModule"]]
