"""Shared test fixtures for autoroute."""

from __future__ import annotations

from pathlib import Path

import pytest

HANDLER_SOURCE = "async def handler(request):\n    return 'ok'\n"


@pytest.fixture
def controllers(tmp_path: Path) -> Path:
    """Create an empty controllers/ directory."""
    d = tmp_path / "controllers"
    d.mkdir()
    return d


class LogCollector:
    """Sink that records ``(level, message)`` pairs."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def __call__(self, level: str, message: str) -> None:
        self.records.append((level, message))

    def messages(self, level: str | None = None) -> list[str]:
        return [m for lvl, m in self.records if level is None or lvl == level]

    def find(self, needle: str, level: str | None = None) -> list[str]:
        return [m for m in self.messages(level) if needle in m]


@pytest.fixture
def logs() -> LogCollector:
    """A fresh log sink for one test."""
    return LogCollector()


def write_route(directory: Path, name: str, content: str = HANDLER_SOURCE) -> Path:
    """Write a route file (``name`` may contain subdirectories) and return its path."""
    p = directory / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
    return p
