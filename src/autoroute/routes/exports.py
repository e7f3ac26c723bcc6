"""Route file exports — the ``handler`` convention and its accepted shapes.

A route file exposes exactly one public name, ``handler``::

    # get-users.py: plain function, global auth defaults apply
    async def handler(request):
        ...

    # post-login.py: wrapped with explicit meta
    from autoroute import create_handler

    async def _login(request):
        ...

    handler = create_handler(_login, {"requires_auth": False})

With ``strict=False`` a legacy mapping ``{"handler": fn, "meta": {...}}``
(or any object with a callable ``handler`` attribute) is also accepted.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from autoroute._errors import RouteFileError
from autoroute._types import HandlerFunc

REQUIRES_AUTH = "requires_auth"

_SCALAR_TYPES = (str, bytes, int, float, complex, bool)


@dataclass(frozen=True, slots=True)
class RouteHandler:
    """A handler wrapped with route meta by :func:`create_handler`.

    Attributes:
        handler: The callable registered with the host framework.
        meta: Route meta (``requires_auth``), or *None* when empty.

    """

    handler: HandlerFunc
    meta: Mapping[str, Any] | None = None


def create_handler(
    handler: HandlerFunc,
    meta: Mapping[str, Any] | None = None,
) -> RouteHandler:
    """Wrap *handler* with route meta.

    An empty *meta* is stored as *None*, exactly as if it were omitted.

    Raises:
        TypeError: If *handler* is not callable.

    """
    if not callable(handler):
        msg = f"create_handler() expects a callable, got {type(handler).__name__}"
        raise TypeError(msg)
    return RouteHandler(handler=handler, meta=dict(meta) if meta else None)


# ---------------------------------------------------------------------------
# Export classification
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FunctionExport:
    """A plain callable export."""

    handler: HandlerFunc


@dataclass(frozen=True, slots=True)
class WrappedExport:
    """A :class:`RouteHandler` export."""

    handler: HandlerFunc
    meta: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class LegacyExport:
    """A plain mapping/object carrying a ``handler`` (non-strict mode only)."""

    handler: HandlerFunc
    meta: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class UnsupportedExport:
    """Anything else; *reason* explains the rejection."""

    type_name: str
    reason: str


ResolvedExport: TypeAlias = FunctionExport | WrappedExport | LegacyExport | UnsupportedExport


def classify_export(value: object) -> ResolvedExport:
    """Classify a route file's ``handler`` export.

    Order: wrapped handler, callable, object carrying a handler, other.
    """
    if isinstance(value, RouteHandler):
        return WrappedExport(handler=value.handler, meta=value.meta)

    if callable(value):
        return FunctionExport(handler=value)

    type_name = type(value).__name__
    if isinstance(value, _SCALAR_TYPES):
        return UnsupportedExport(type_name, f"Unsupported export type: {type_name}")

    if isinstance(value, Mapping):
        inner, meta = value.get("handler"), value.get("meta")
    else:
        inner, meta = getattr(value, "handler", None), getattr(value, "meta", None)

    if not callable(inner):
        return UnsupportedExport(type_name, "Exported object must contain a handler function")
    return LegacyExport(handler=inner, meta=meta or None)


def explicit_requires_auth(meta: object) -> bool | None:
    """Return ``meta["requires_auth"]`` when set, else *None*.

    Raises:
        RouteFileError: If meta is not a mapping or the flag is not a bool.

    """
    if meta is None:
        return None
    if not isinstance(meta, Mapping):
        msg = f"Route meta must be a mapping, got {type(meta).__name__}"
        raise RouteFileError(msg)

    value = meta.get(REQUIRES_AUTH)
    if value is None:
        return None
    if not isinstance(value, bool):
        msg = f"'{REQUIRES_AUTH}' must be a bool, got {type(value).__name__}"
        raise RouteFileError(msg)
    return value
