"""Console output — the route logger and its default stderr sink.

Every diagnostic produced while discovering routes flows through a
:class:`RouteLogger`.  A caller-supplied sink replaces console output
entirely; otherwise messages go to stderr, colored per level.  Detects
``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from autoroute._types import LogLevel, LogSink


# ---------------------------------------------------------------------------
# ANSI helpers: respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""

_LEVEL_STYLES: dict[str, tuple[str, str]] = {
    "info": ("", "  "),
    "warn": (_YELLOW, "! "),
    "error": (_RED, "x "),
}

LOG_LEVELS: frozenset[str] = frozenset(_LEVEL_STYLES)


def write_console(level: LogLevel, message: str) -> None:
    """Default sink: print *message* to stderr with a level marker."""
    color, marker = _LEVEL_STYLES.get(level, (_DIM, "  "))
    print(f"{color}{marker}{message}{_RESET}", file=sys.stderr)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class RouteLogger:
    """Level-aware logger honouring the ``logging`` / ``on_log`` options.

    Args:
        enabled: Toggle for default console output (all levels at once).
        sink: Custom ``(level, message)`` callable.  When given it receives
            every message and console output is skipped, even when
            *enabled* is False.

    """

    __slots__ = ("_enabled", "_sink")

    def __init__(self, *, enabled: bool = True, sink: LogSink | None = None) -> None:
        self._enabled = enabled
        self._sink = sink

    def log(self, level: LogLevel, message: str) -> None:
        if self._sink is not None:
            self._sink(level, message)
            return
        if not self._enabled:
            return
        write_console(level, message)

    def info(self, message: str) -> None:
        self.log("info", message)

    def warn(self, message: str) -> None:
        self.log("warn", message)

    def error(self, message: str) -> None:
        self.log("error", message)
