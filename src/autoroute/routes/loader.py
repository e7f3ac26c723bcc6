"""Route module loader — import a route file and report its exports.

The primary export is the module attribute ``handler``.  Every other
public name the module binds is a secondary export; route files must not
have any.  Imported modules, functions and classes are not counted; values
built from them (a second ``create_handler(...)``) are.
"""

import hashlib
import importlib.util
import inspect
import re
import sys
import types
from dataclasses import dataclass
from pathlib import Path

HANDLER_NAME = "handler"

# Package prefix for synthetic module names
_MODULE_PREFIX = "autoroute_routes"

_UNSAFE_RE = re.compile(r"\W")


class _Missing:
    """Marker for a route file that defines no ``handler``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


@dataclass(frozen=True, slots=True)
class RouteModule:
    """What a route file exports.

    Attributes:
        path: Filesystem path of the route file.
        default: Value of ``handler``, or :data:`MISSING`.
        named_exports: Other public names defined by the module.

    """

    path: Path
    default: object = MISSING
    named_exports: tuple[str, ...] = ()


async def import_route_module(path: Path) -> RouteModule:
    """Default module loader: import *path* and collect its exports.

    Exceptions raised while executing the module propagate to the caller.
    """
    module = _exec_module(path)
    return RouteModule(
        path=path,
        default=getattr(module, HANDLER_NAME, MISSING),
        named_exports=secondary_exports(module),
    )


def module_name_for(path: Path) -> str:
    """Build a unique module name: ``users/get-[id].py`` -> ``autoroute_routes.get__id__1a2b3c4d``.

    The digest of the absolute path keeps same-named files in different
    directories apart.
    """
    resolved = path.resolve()
    digest = hashlib.sha1(str(resolved).encode(), usedforsecurity=False).hexdigest()[:8]
    stem = _UNSAFE_RE.sub("_", resolved.stem)
    return f"{_MODULE_PREFIX}.{stem}_{digest}"


def secondary_exports(module: types.ModuleType) -> tuple[str, ...]:
    """Public names bound by *module* other than ``handler``.

    Imported names are skipped: modules, classes and functions defined
    elsewhere, and objects re-bound under their own name (``from typing
    import Optional``).  Every other public binding counts, including values
    built from imported code (``create_handler(...)``, ``re.compile(...)``).
    """
    names: list[str] = []
    for name, value in vars(module).items():
        if name.startswith("_") or name == HANDLER_NAME:
            continue
        if _is_import(name, value, module.__name__):
            continue
        names.append(name)
    return tuple(sorted(names))


def _is_import(name: str, value: object, module_name: str) -> bool:
    if inspect.ismodule(value):
        return True
    origin = getattr(value, "__module__", None)
    if origin is None or origin == module_name:
        return False
    if inspect.isclass(value) or inspect.isroutine(value):
        return True
    # from __future__ import annotations, from typing import Optional
    return getattr(sys.modules.get(origin), name, None) is value


def _exec_module(path: Path) -> types.ModuleType:
    """Import a Python file as a module without touching ``sys.path``."""
    module_name = module_name_for(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot create an import spec for {path}"
        raise ImportError(msg)

    module = importlib.util.module_from_spec(spec)
    # Registered while executing so dataclasses and pickling can find it
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module
