"""pagegate configuration — load / save / merge.

Layers, later wins:
    1. Model defaults
    2. pagegate.config.yaml (explicit path, or found in cwd / parents / .pagegate/)
    3. PAGEGATE_* environment variables (``__`` separates nested keys)
    4. Overrides dict (CLI flags)
"""

from __future__ import annotations

import os
from functools import reduce
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import SettingsError

from pagegate.core.exceptions import ConfigError
from pagegate.core.models import Config

DEFAULT_CONFIG_FILENAME = "pagegate.config.yaml"
CONFIG_DIRNAME = ".pagegate"
ENV_PREFIX = "PAGEGATE_"
ENV_NESTED_DELIMITER = "__"

_HEADER = "# pagegate configuration (PAGEGATE_* env vars and CLI flags win)\n"


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Config:
    """Build a Config from YAML, environment and overrides.

    Args:
        config_path: YAML config to read. When None the file is searched for;
            a path that does not exist falls back to defaults.
        overrides: Highest-priority values, usually from CLI flags.

    Raises:
        ConfigError: Unreadable YAML or values that fail validation.
    """
    source = config_path if config_path is not None else find_config_file()
    layers = [
        read_config_file(source) if source is not None and source.exists() else {},
        # Env vars are merged by hand so they beat YAML values passed as init kwargs.
        _collect_env_vars(),
        overrides or {},
    ]
    try:
        return Config(**reduce(_deep_merge, layers, {}))
    except (ValidationError, SettingsError) as e:
        msg = f"Config validation failed: {e}"
        raise ConfigError(msg) from e


def save_config(config: Config, path: Path, overwrite: bool = False) -> None:
    """Write config to path as YAML, creating parent directories.

    Raises:
        ConfigError: path exists and ``overwrite`` is False, or it cannot be written.
    """
    if path.exists() and not overwrite:
        msg = f"Config file already exists: {path}"
        raise ConfigError(msg)
    body = yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(_HEADER + body, encoding="utf-8")
    except OSError as e:
        msg = f"Failed to write config: {path}: {e}"
        raise ConfigError(msg) from e


def find_config_file(start: Path | None = None) -> Path | None:
    """First config file at or above start (default: cwd), plain or under .pagegate/."""
    origin = start or Path.cwd()
    candidates = (
        candidate
        for directory in (origin, *origin.parents)
        for candidate in (
            directory / DEFAULT_CONFIG_FILENAME,
            directory / CONFIG_DIRNAME / DEFAULT_CONFIG_FILENAME,
        )
    )
    return next((c for c in candidates if c.exists()), None)


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a config file into a mapping. An empty file is an empty mapping."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        msg = f"Failed to parse YAML: {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Failed to read config: {path}: {e}"
        raise ConfigError(msg) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config file must be a YAML mapping, got {type(data).__name__}: {path}"
        raise ConfigError(msg)
    return data


def _collect_env_vars() -> dict[str, Any]:
    """PAGEGATE_WAIT__TIMEOUT_MS=2000 -> {"wait": {"timeout_ms": "2000"}}."""
    collected: dict[str, Any] = {}
    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX):
            path = key.removeprefix(ENV_PREFIX).lower().split(ENV_NESTED_DELIMITER)
            collected = _deep_merge(collected, _nest(path, value))
    return collected


def _nest(path: list[str], value: Any) -> dict[str, Any]:
    """["wait", "timeout_ms"], 5 -> {"wait": {"timeout_ms": 5}}."""
    return reduce(lambda inner, key: {key: inner}, reversed(path), value)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; nested dicts merge, everything else is replaced."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged
