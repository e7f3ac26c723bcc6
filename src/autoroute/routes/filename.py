"""Filename parser — derive an HTTP method and path template from a file name.

Naming convention (``[name]`` marks a path parameter)::

    get.py                     -> GET  <directory path>
    get-users.py               -> GET  users
    post-login.py              -> POST login
    get-[id].py                -> GET  :id
    get-[userId]-posts.py      -> GET  :userId/posts
    get-[userId]-[postId].py   -> GET  :userId/:postId

Only lowercase method names are recognised.  A hyphen next to a parameter
becomes a path boundary; any other hyphen stays part of the literal
(``get-user-profile.py`` -> ``user-profile``).  Without a hyphen a parameter
stays in the same path segment (``get-users[id].py`` -> ``users:id``).
"""

import re
from dataclasses import dataclass

from autoroute._types import HttpMethod

# Filename methods, in lookup order
HTTP_METHODS: tuple[str, ...] = ("get", "post", "put", "delete", "patch", "head", "options")

SOURCE_SUFFIXES: tuple[str, ...] = (".py",)

# Stub files never define routes
STUB_SUFFIXES: tuple[str, ...] = (".pyi",)

SEPARATOR = "-"

_PARAM_RE = re.compile(r"\[(\w+)\]")
_EMPTY_PARAM = "[]"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One piece of a route template.

    Attributes:
        value: Literal text, or the parameter name for parameters.
        is_param: True when the piece is a path parameter.
        attached: Joined to the previous piece without a ``/``
            (``users[id]`` renders ``users:id``).

    """

    value: str
    is_param: bool = False
    attached: bool = False

    def render(self) -> str:
        return f":{self.value}" if self.is_param else self.value


@dataclass(frozen=True, slots=True)
class RouteTemplate:
    """HTTP method plus ordered path segments derived from one route file."""

    method: HttpMethod
    segments: tuple[PathSegment, ...] = ()

    @property
    def path(self) -> str:
        """Relative route path (``users/:id``); empty for method-only files."""
        pieces: list[str] = []
        for segment in self.segments:
            if segment.attached and pieces:
                pieces[-1] += segment.render()
            else:
                pieces.append(segment.render())
        return "/".join(pieces)

    @property
    def params(self) -> tuple[str, ...]:
        return tuple(s.value for s in self.segments if s.is_param)


@dataclass(frozen=True, slots=True)
class FilenameParse:
    """Outcome of :func:`parse_filename`.

    Attributes:
        valid: True when the name follows the convention.
        method: Lowercase HTTP method (set when valid).
        route_segment: Raw text after ``method-`` (empty for ``get.py``).
        template: Parsed template (set when valid).
        error: Human-readable reason (set when invalid).

    """

    valid: bool
    method: HttpMethod | None = None
    route_segment: str = ""
    template: RouteTemplate | None = None
    error: str | None = None


def is_route_file(filename: str) -> bool:
    """Return True when *filename* carries a recognised source extension."""
    if filename.endswith(STUB_SUFFIXES):
        return False
    return filename.endswith(SOURCE_SUFFIXES)


def strip_suffix(filename: str) -> str:
    for suffix in SOURCE_SUFFIXES:
        if filename.endswith(suffix):
            return filename[: -len(suffix)]
    return filename


def parse_filename(filename: str) -> FilenameParse:
    """Parse a route file name into a method and route template.

    Accepts names with or without the ``.py`` extension.  Never raises;
    invalid names come back with ``valid=False`` and an ``error``.
    """
    name = strip_suffix(filename)

    if name in HTTP_METHODS:
        return FilenameParse(
            valid=True,
            method=name,
            template=RouteTemplate(method=name),
        )

    method = next((m for m in HTTP_METHODS if name.startswith(m + SEPARATOR)), None)
    if method is None:
        return FilenameParse(
            valid=False,
            error=(
                "File name must be a valid HTTP method or start with method- "
                f"({'|'.join(HTTP_METHODS)})"
            ),
        )

    if _EMPTY_PARAM in name:
        return FilenameParse(
            valid=False,
            method=method,
            error="Empty parameters not allowed [], use [id] instead of []",
        )

    route_segment = name[len(method) + 1 :]
    return FilenameParse(
        valid=True,
        method=method,
        route_segment=route_segment,
        template=RouteTemplate(method=method, segments=parse_route_segment(route_segment)),
    )


def parse_route_segment(route_segment: str) -> tuple[PathSegment, ...]:
    """Split a hyphen-joined route segment into path segments.

    ``[userId]-[postId]-comments`` -> ``(:userId, :postId, comments)``.
    Only a hyphen touching a parameter is a boundary; ``users[id]`` and
    ``[a][b]`` stay in one path segment (``users:id``, ``:a:b``).
    """
    # re.split with one group alternates literal, param, literal, ...
    parts = _PARAM_RE.split(route_segment)
    segments: list[PathSegment] = []
    attach = False

    for index, part in enumerate(parts):
        if index % 2 == 1:
            segments.append(PathSegment(part, is_param=True, attached=attach and bool(segments)))
            attach = True
            continue

        literal = part
        if index > 0 and literal.startswith(SEPARATOR):
            literal = literal[1:]
            attach = False
        attach_next = True
        if index < len(parts) - 1 and literal.endswith(SEPARATOR):
            literal = literal[:-1]
            attach_next = False

        if literal:
            segments.append(PathSegment(literal, attached=attach and bool(segments)))
            attach = attach_next
        else:
            attach = attach and attach_next

    return tuple(segments)
