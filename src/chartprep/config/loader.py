"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
Every section is optional; an empty file yields the defaults.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from chartprep.config.settings import (
    ChartPrepConfig,
    CutoffConfig,
    LoggingConfig,
    SeriesConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _parse_bool(value: Any) -> bool:
    """Parse booleans that may arrive as strings after env interpolation."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off", ""}:
            return False
    msg = f"Cannot parse boolean from {type(value)}: {value}"
    raise ValueError(msg)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def default_config() -> ChartPrepConfig:
    """Return the configuration used when no file is given."""
    return ChartPrepConfig()


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> ChartPrepConfig:
    """
    Load configuration from YAML file(s).

    Recognised sections: ``series`` (merge_key, datetime_key,
    validate_order), ``cutoff`` (default, month_days, all_days) and
    ``logging`` (level, json_output).

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated ChartPrepConfig instance.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
    """
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        # Try to find base.yaml in same directory
        potential_base = config_path.parent / "base.yaml"
        use_base = potential_base.exists() and potential_base != config_path
        base_data = load_yaml(potential_base) if use_base else {}

    main_data = load_yaml(config_path)
    merged = _deep_merge(base_data, main_data)

    series_data = merged.get("series", {})
    series = SeriesConfig(
        merge_key=series_data.get("merge_key", "datetime"),
        datetime_key=series_data.get("datetime_key", "datetime"),
        validate_order=_parse_bool(series_data.get("validate_order", True)),
    )

    cutoff_data = merged.get("cutoff", {})
    cutoff = CutoffConfig(
        default=str(cutoff_data.get("default", "1y")),
        month_days=cutoff_data.get("month_days", 30),
        all_days=cutoff_data.get("all_days", 720),
    )

    logging_data = merged.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        json_output=_parse_bool(logging_data.get("json_output", False)),
    )

    return ChartPrepConfig(series=series, cutoff=cutoff, logging=logging_config)
