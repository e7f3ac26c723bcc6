"""Autoroute — file-convention route discovery with layered authorization.

Route files named after HTTP methods become routes; each route gets a
``requires_auth`` flag from explicit handler meta, force patterns, or a
global default.

Quick start::

    from autoroute import RouterConfig, register_routes

    registry = await register_routes(app, RouterConfig(dir="controllers"))
    registry.protected_routes   # (RouteEntry(method="GET", path="/api/users"), ...)

File conventions::

    controllers/get-users.py              GET    /api/users
    controllers/get-[id].py               GET    /api/:id
    controllers/users/put-[id]-profile.py PUT    /api/users/:id/profile
    controllers/health/get.py             GET    /api/health

Authorization precedence::

    create_handler(fn, {"requires_auth": ...})   explicit meta always wins
    force_protected / force_public patterns      protected wins a tie
    default_requires_auth                        everything else

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "AuthorizationResolver",
    "RouteHandler",
    "RouteRegistry",
    "RouterConfig",
    "__version__",
    "auto_router",
    "create_handler",
    "load_configs",
    "matches_pattern",
    "parse_filename",
    "parse_rule",
    "register_routes",
    "registry_for",
]

_LAZY: dict[str, str] = {
    "AuthorizationResolver": "autoroute.auth.resolver",
    "RouteHandler": "autoroute.routes.exports",
    "RouteRegistry": "autoroute.registry",
    "RouterConfig": "autoroute.config",
    "auto_router": "autoroute.router",
    "create_handler": "autoroute.routes.exports",
    "load_configs": "autoroute.config_loader",
    "matches_pattern": "autoroute.auth.patterns",
    "parse_filename": "autoroute.routes.filename",
    "parse_rule": "autoroute.auth.patterns",
    "register_routes": "autoroute.router",
    "registry_for": "autoroute.registry",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import autoroute`` fast; route files importing
    ``create_handler`` do not pull in the orchestrator.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
