"""Builder configuration with precedence resolution.

Settings come from four layers, highest precedence first:

1. CLI flags (``--skip-deprecated`` / ``--keep-deprecated``).
2. Environment variables (``SPECFIELDS_SKIP_DEPRECATED``,
   ``SPECFIELDS_DEFAULT_TAG``).
3. A JSON config file: ``--config PATH``, else ``./specfields.json`` if
   present.
4. :class:`~specfields.models.BuilderConfig` defaults.

Field ``overrides`` are only read from the config file.

Configuration is read-only; nothing here writes to disk.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specfields.exceptions import ConfigError
from specfields.models import BuilderConfig

_PROJECT_CONFIG_FILENAME = "specfields.json"
_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


def load_config_file(path: Optional[str] = None) -> dict[str, Any]:
    """Read the JSON config file.

    Args:
        path: Explicit file path.  When ``None``, ``./specfields.json`` is
            used if it exists.

    Returns:
        The parsed mapping, or an empty dict when no project file exists.

    Raises:
        ConfigError: If an explicit *path* is missing, or the file is not a
            JSON object.
    """
    if path is not None:
        file_path = Path(path).expanduser()
        if not file_path.is_file():
            raise ConfigError(f"Config file not found: {file_path}")
    else:
        file_path = Path.cwd() / _PROJECT_CONFIG_FILENAME
        if not file_path.is_file():
            return {}

    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid config at {file_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config at {file_path}: expected a JSON object")
    return data


def _env_flag(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean, got '{raw}'")


def resolve_config(
    cli_config_path: Optional[str] = None,
    cli_skip_deprecated: Optional[bool] = None,
) -> BuilderConfig:
    """Merge every configuration layer into one :class:`~specfields.models.BuilderConfig`.

    Raises:
        ConfigError: If any layer is unreadable or fails validation.
    """
    data = load_config_file(cli_config_path)

    env_skip = _env_flag("SPECFIELDS_SKIP_DEPRECATED")
    if env_skip is not None:
        data["skip_deprecated"] = env_skip
    env_tag = os.environ.get("SPECFIELDS_DEFAULT_TAG")
    if env_tag:
        data["default_tag"] = env_tag

    if cli_skip_deprecated is not None:
        data["skip_deprecated"] = cli_skip_deprecated

    try:
        return BuilderConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
