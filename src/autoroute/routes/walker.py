"""Directory walker — recursive scan of a controller directory.

Walks the tree below a controller directory and turns every route file
into a :class:`RouteCandidate` carrying its fully resolved path:

    controllers/get-users.py               -> GET /api/users
    controllers/users/posts/get-[id].py    -> GET /api/users/posts/:id
    controllers/health/get.py              -> GET /api/health

Fault isolation: an entry that cannot be stat'ed, or a subdirectory that
cannot be listed, is skipped with a warning while its siblings are still
processed.  Only an unreadable root aborts the walk (:class:`ScanError`).
"""

from __future__ import annotations

import re
import stat
from dataclasses import dataclass
from typing import TYPE_CHECKING

from autoroute._errors import ScanError
from autoroute.routes.filename import HTTP_METHODS, RouteTemplate, is_route_file, parse_filename

if TYPE_CHECKING:
    from pathlib import Path

    from autoroute._types import RouteKey, RoutePath
    from autoroute.console import RouteLogger

_SLASHES_RE = re.compile(r"/+")


@dataclass(frozen=True, slots=True)
class RouteCandidate:
    """A route file ready for loading.

    Attributes:
        source: Filesystem path to the route file.
        template: Method and path template parsed from the file name.
        base_path: URL path of the containing directory (``/users/posts``).
        route_path: Full URL path including the prefix (``/api/users/posts/:id``).

    """

    source: Path
    template: RouteTemplate
    base_path: str
    route_path: RoutePath

    @property
    def method(self) -> str:
        """Uppercase HTTP method."""
        return self.template.method.upper()

    @property
    def key(self) -> RouteKey:
        """Registry key (``GET /api/users``)."""
        return f"{self.method} {self.route_path}"


def collapse_slashes(path: str) -> str:
    return _SLASHES_RE.sub("/", path)


def build_route_path(prefix: str, base_path: str, template: RouteTemplate) -> RoutePath:
    """Join *prefix*, the directory path and the file's route segment.

    Method-only files resolve to the directory path itself.  A path that
    would be empty is the root ``/``.
    """
    segment = template.path
    if segment:
        path = f"{base_path}/{segment}" if base_path else f"/{segment}"
    else:
        path = base_path
    full = collapse_slashes(f"{prefix}{path}") if prefix else collapse_slashes(path)
    return full or "/"


def is_private(name: str) -> bool:
    """Names starting with ``_`` or ``.`` are never routes (``__init__.py``, ``__pycache__``)."""
    return name.startswith(("_", "."))


def walk_routes(root: Path, prefix: str, logger: RouteLogger) -> list[RouteCandidate]:
    """Recursively collect route candidates below *root*.

    Invalid file names are reported as errors and skipped.  Directory
    names that collide with an HTTP method produce an advisory warning.

    Raises:
        ScanError: If *root* itself cannot be listed.

    """
    try:
        entries = sorted(root.iterdir())
    except OSError as exc:
        msg = f"Failed to scan directory {root}: {exc}"
        raise ScanError(msg) from exc

    candidates: list[RouteCandidate] = []
    _scan_entries(entries, base_path="", prefix=prefix, logger=logger, out=candidates)
    return candidates


def _scan_entries(
    entries: list[Path],
    *,
    base_path: str,
    prefix: str,
    logger: RouteLogger,
    out: list[RouteCandidate],
) -> None:
    for entry in entries:
        if is_private(entry.name):
            continue

        try:
            mode = entry.stat().st_mode
        except OSError as exc:
            # Broken symlink, entry removed mid-scan, permission denied
            logger.warn(f"Skip entry (stat failed): {entry}: {exc}")
            continue

        if stat.S_ISDIR(mode):
            _check_directory_name(entry.name, logger)
            try:
                children = sorted(entry.iterdir())
            except OSError as exc:
                logger.warn(f"Skip directory (scan failed): {entry}: {exc}")
                continue
            _scan_entries(
                children,
                base_path=f"{base_path}/{entry.name}",
                prefix=prefix,
                logger=logger,
                out=out,
            )
        elif is_route_file(entry.name):
            candidate = _candidate_for(entry, base_path, prefix, logger)
            if candidate is not None:
                out.append(candidate)


def _candidate_for(
    file: Path,
    base_path: str,
    prefix: str,
    logger: RouteLogger,
) -> RouteCandidate | None:
    parsed = parse_filename(file.name)
    if not parsed.valid or parsed.template is None:
        logger.error(f"Skip file {file}: {parsed.error}")
        return None

    return RouteCandidate(
        source=file,
        template=parsed.template,
        base_path=base_path,
        route_path=build_route_path(prefix, base_path, parsed.template),
    )


def _check_directory_name(name: str, logger: RouteLogger) -> None:
    if name.lower() in HTTP_METHODS:
        logger.warn(f'Directory name "{name}" is an HTTP method keyword, consider renaming')
