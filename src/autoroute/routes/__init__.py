"""Filesystem route discovery.

Scans a controller directory for route files named after HTTP methods,
parses their names into route templates, and loads their ``handler``
export.

Public API::

    from autoroute.routes import create_handler, parse_filename, walk_routes

    parse_filename("get-[userId]-posts.py").template.path  # ":userId/posts"
"""

from autoroute.routes.exports import (
    FunctionExport,
    LegacyExport,
    ResolvedExport,
    RouteHandler,
    UnsupportedExport,
    WrappedExport,
    classify_export,
    create_handler,
    explicit_requires_auth,
)
from autoroute.routes.filename import (
    HTTP_METHODS,
    FilenameParse,
    PathSegment,
    RouteTemplate,
    parse_filename,
)
from autoroute.routes.loader import MISSING, RouteModule, import_route_module
from autoroute.routes.walker import RouteCandidate, build_route_path, walk_routes

__all__ = [
    "HTTP_METHODS",
    "MISSING",
    "FilenameParse",
    "FunctionExport",
    "LegacyExport",
    "PathSegment",
    "ResolvedExport",
    "RouteCandidate",
    "RouteHandler",
    "RouteModule",
    "RouteTemplate",
    "UnsupportedExport",
    "WrappedExport",
    "build_route_path",
    "classify_export",
    "create_handler",
    "explicit_requires_auth",
    "import_route_module",
    "parse_filename",
    "walk_routes",
]
