"""Load RouterConfig objects from autoroute.yaml / autoroute.toml / pyproject.toml.

Merges file config with keyword overrides.  Overrides win.

File layout (YAML)::

    autoroute:
      dir: controllers
      prefix: [/api, /v1]
      default_requires_auth: true
      force_public:
        - /api/auth/login

A list under ``autoroute`` declares several routers (merged configuration)::

    autoroute:
      - dir: controllers/admin
        prefix: /api/admin
      - dir: controllers/client
        prefix: /api/client
        default_requires_auth: true

TOML uses the same keys under ``[autoroute]`` (or ``[[autoroute]]``), and
``pyproject.toml`` under ``[tool.autoroute]``.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from autoroute._errors import ConfigError
from autoroute.config import DEFAULT_DIR, RouterConfig

_SECTION = "autoroute"


def load_configs(root: Path, **overrides: Any) -> list[RouterConfig]:
    """Load router configs for *root*, optionally from a config file.

    Looks for autoroute.yaml, autoroute.yml, autoroute.toml, then
    ``[tool.autoroute]`` in pyproject.toml.  Without a file, returns one
    default config whose directory is ``root/controllers``.

    Raises:
        ConfigError: If a config file is unreadable or malformed.

    """
    sections = _read_sections(root)
    if not sections:
        sections = [{}]

    configs: list[RouterConfig] = []
    for section in sections:
        merged = {**section, **overrides}
        directory = Path(str(merged.get("dir") or DEFAULT_DIR))
        if not directory.is_absolute():
            directory = root / directory
        merged["dir"] = directory
        configs.append(RouterConfig.from_mapping(merged))
    return configs


def _read_sections(root: Path) -> list[dict[str, Any]]:
    """Return the router sections from the first config file found."""
    for name in ("autoroute.yaml", "autoroute.yml"):
        path = root / name
        if path.is_file():
            return _sections(_parse_yaml(path).get(_SECTION), path)
    toml_path = root / "autoroute.toml"
    if toml_path.is_file():
        return _sections(_parse_toml(toml_path).get(_SECTION), toml_path)
    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        tool = _parse_toml(pyproject).get("tool")
        if isinstance(tool, Mapping) and _SECTION in tool:
            return _sections(tool[_SECTION], pyproject)
    return []


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping at the top level"
        raise ConfigError(msg)
    return data


def _parse_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc


def _sections(raw: object, path: Path) -> list[dict[str, Any]]:
    """Normalize an ``autoroute`` section (table or list of tables)."""
    if raw is None:
        return []
    if isinstance(raw, Mapping):
        return [dict(raw)]
    if isinstance(raw, list) and all(isinstance(item, Mapping) for item in raw):
        return [dict(item) for item in raw]
    msg = f"{path}: '{_SECTION}' must be a table or a list of tables"
    raise ConfigError(msg)
