"""Route registry — every route registered against one host.

The registry outlives a single ``register_routes()`` call: it is stored on
the host the first time routes are registered and reused by every later
call, so duplicates are detected across calls.  Keys are append-only.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Lazy creation in
    :func:`registry_for` is guarded by a module-level lock so a host gets
    exactly one registry.

"""

import threading
from dataclasses import dataclass
from pathlib import Path

from autoroute._errors import ConfigError
from autoroute._types import RouteKey, RoutePath

# Host attribute holding the registry
REGISTRY_ATTR = "route_registry"

_init_lock = threading.Lock()


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """Method and path of a registered route."""

    method: str
    path: RoutePath


@dataclass(frozen=True, slots=True)
class RouteRecord:
    """A successfully registered route.

    Attributes:
        method: Uppercase HTTP method.
        path: Full route path including the prefix.
        requires_auth: Resolved authorization flag.
        source: Route file the handler was loaded from.

    """

    method: str
    path: RoutePath
    requires_auth: bool
    source: Path | None = None

    @property
    def key(self) -> RouteKey:
        return f"{self.method} {self.path}"

    def entry(self) -> RouteEntry:
        return RouteEntry(self.method, self.path)


class RouteRegistry:
    """Append-only record of registered routes and reserved route keys."""

    __slots__ = ("_keys", "_lock", "_records")

    def __init__(self) -> None:
        self._keys: set[RouteKey] = set()
        self._records: list[RouteRecord] = []
        self._lock = threading.Lock()

    def reserve(self, key: RouteKey) -> bool:
        """Claim *key* (``GET /api/users``); False if it is already taken."""
        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def add(self, record: RouteRecord) -> None:
        """Record a registered route, reserving its key if needed."""
        with self._lock:
            self._keys.add(record.key)
            self._records.append(record)

    @property
    def all(self) -> tuple[RouteRecord, ...]:
        with self._lock:
            return tuple(self._records)

    @property
    def public_routes(self) -> tuple[RouteEntry, ...]:
        with self._lock:
            return tuple(r.entry() for r in self._records if not r.requires_auth)

    @property
    def protected_routes(self) -> tuple[RouteEntry, ...]:
        with self._lock:
            return tuple(r.entry() for r in self._records if r.requires_auth)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def stats(self) -> dict[str, int]:
        """Return total / public / protected counts."""
        with self._lock:
            protected = sum(1 for r in self._records if r.requires_auth)
            return {
                "total": len(self._records),
                "public": len(self._records) - protected,
                "protected": protected,
            }


def registry_for(host: object) -> RouteRegistry:
    """Return the registry stored on *host*, creating it exactly once.

    Raises:
        ConfigError: If *host* cannot hold a ``route_registry`` attribute.

    """
    with _init_lock:
        registry = getattr(host, REGISTRY_ATTR, None)
        if registry is None:
            registry = RouteRegistry()
            try:
                setattr(host, REGISTRY_ATTR, registry)
            except AttributeError as exc:
                msg = (
                    f"{type(host).__name__} cannot store a {REGISTRY_ATTR!r} attribute; "
                    "wrap the application in an adapter such as ChirpHost"
                )
                raise ConfigError(msg) from exc
        elif not isinstance(registry, RouteRegistry):
            msg = f"host.{REGISTRY_ATTR} is a {type(registry).__name__}, not a RouteRegistry"
            raise ConfigError(msg)
        return registry
