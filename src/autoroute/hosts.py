"""Host framework contract and an in-memory host.

Any application object with one registration method per HTTP method
satisfies :class:`RouteHost`::

    app.get("/api/users", handler)
    app.post("/api/auth/login", handler)
"""

from typing import Protocol, runtime_checkable

from autoroute._types import HandlerFunc
from autoroute.registry import RouteRegistry


@runtime_checkable
class RouteHost(Protocol):
    """The registration surface autoroute needs from a web framework."""

    def get(self, path: str, handler: HandlerFunc) -> object: ...
    def post(self, path: str, handler: HandlerFunc) -> object: ...
    def put(self, path: str, handler: HandlerFunc) -> object: ...
    def delete(self, path: str, handler: HandlerFunc) -> object: ...
    def patch(self, path: str, handler: HandlerFunc) -> object: ...
    def head(self, path: str, handler: HandlerFunc) -> object: ...
    def options(self, path: str, handler: HandlerFunc) -> object: ...


class RecordingHost:
    """Host that records registrations instead of serving them.

    Used by ``autoroute routes`` for dry runs, and handy in tests.

    Attributes:
        registrations: ``(METHOD, path, handler)`` in registration order.
        route_registry: Set by autoroute on first use.

    """

    def __init__(self) -> None:
        self.registrations: list[tuple[str, str, HandlerFunc]] = []
        self.route_registry: RouteRegistry | None = None

    def _record(self, method: str, path: str, handler: HandlerFunc) -> None:
        self.registrations.append((method, path, handler))

    def get(self, path: str, handler: HandlerFunc) -> None:
        self._record("GET", path, handler)

    def post(self, path: str, handler: HandlerFunc) -> None:
        self._record("POST", path, handler)

    def put(self, path: str, handler: HandlerFunc) -> None:
        self._record("PUT", path, handler)

    def delete(self, path: str, handler: HandlerFunc) -> None:
        self._record("DELETE", path, handler)

    def patch(self, path: str, handler: HandlerFunc) -> None:
        self._record("PATCH", path, handler)

    def head(self, path: str, handler: HandlerFunc) -> None:
        self._record("HEAD", path, handler)

    def options(self, path: str, handler: HandlerFunc) -> None:
        self._record("OPTIONS", path, handler)

    def paths(self, method: str | None = None) -> list[str]:
        """Registered paths, optionally for one method."""
        return [p for m, p, _ in self.registrations if method is None or m == method.upper()]
