# -*- coding: utf-8 -*-
"""Settings persistence and validation."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Any

from picdiff.constants import COMPARE_MODES, DEFAULT_SETTINGS_FILE
from picdiff.models.comparison import CompareOptions
from picdiff.models.position import ORIGIN, Position
from picdiff.utils.file_utils import read_json_file, write_json_file


DEFAULT_CONFIG: dict[str, Any] = {
    "comparison": {
        "mode": "exact",
        "threshold": 0.0,
        "allowed_differences": 0,
        "strict_geometry": True,
    },
    "decoding": {"strict_buffer": False},
    "logging": {"session_log": False, "level": "INFO"},
}

ENV_OVERRIDES = {
    "PICDIFF_MODE": ("mode", str),
    "PICDIFF_THRESHOLD": ("threshold", float),
    "PICDIFF_ALLOWED_DIFFERENCES": ("allowed_differences", int),
}


class ConfigError(ValueError):
    """Raised when settings are invalid."""


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default config."""
    return deepcopy(DEFAULT_CONFIG)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load a simple .env file (KEY=VALUE)."""
    values: dict[str, str] = {}
    if not env_path.exists():
        return values

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]
        values[key] = value
    return values


def _apply_env_overrides(config: dict[str, Any], env_values: dict[str, str]) -> dict[str, Any]:
    """Apply environment-based overrides to the comparison section."""
    merged = deepcopy(config)
    for env_name, (key, cast) in ENV_OVERRIDES.items():
        raw = env_values.get(env_name, "").strip()
        if not raw:
            continue
        try:
            merged.setdefault("comparison", {})[key] = cast(raw)
        except ValueError as e:
            raise ConfigError(f"{env_name} has an invalid value: {raw!r}") from e
    return merged


def validate_config(config: dict[str, Any]) -> None:
    """Validate the comparison settings."""
    comparison = config.get("comparison", {})
    if comparison.get("mode") not in COMPARE_MODES:
        raise ConfigError(f"comparison.mode must be one of {', '.join(COMPARE_MODES)}")

    threshold = comparison.get("threshold")
    if isinstance(threshold, bool) or not isinstance(threshold, (float, int)) or not (0 <= float(threshold) <= 1):
        raise ConfigError("comparison.threshold must be in range 0..1")

    allowed = comparison.get("allowed_differences")
    if isinstance(allowed, bool) or not isinstance(allowed, int) or allowed < 0:
        raise ConfigError("comparison.allowed_differences must be an int >= 0")

    if not isinstance(comparison.get("strict_geometry"), bool):
        raise ConfigError("comparison.strict_geometry must be a boolean")

    if not isinstance(config.get("decoding", {}).get("strict_buffer"), bool):
        raise ConfigError("decoding.strict_buffer must be a boolean")


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load config from JSON, merge into defaults and apply env overrides.

    Values from the process environment win over a ``.env`` file placed
    next to the settings file.
    """
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    env_values = _load_env_file(config_path.parent / ".env")
    env_values.update({key: value for key, value in os.environ.items() if key in ENV_OVERRIDES})

    merged = get_default_config()
    if config_path.exists():
        merged = _deep_merge(merged, read_json_file(config_path))
    merged = _apply_env_overrides(merged, env_values)
    validate_config(merged)
    return merged


def save_config(config: dict[str, Any], path: str | Path | None = None) -> Path:
    """Validate and save config as JSON."""
    validate_config(config)
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    write_json_file(config_path, config)
    return config_path


def options_from_config(config: dict[str, Any], offset: Position = ORIGIN) -> CompareOptions:
    """Build the comparison options record described by a config."""
    comparison = config.get("comparison", {})
    return CompareOptions(
        offset=offset,
        mode=comparison.get("mode", "exact"),
        threshold=float(comparison.get("threshold", 0.0)),
        allowed_differences=int(comparison.get("allowed_differences", 0)),
    )
