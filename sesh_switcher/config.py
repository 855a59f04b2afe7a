"""Config loading/saving and paths.

The configuration is a single JSON object mapped onto ``SwitcherConfig``.
Command line flags are merged over the file with ``merge_configs``.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path

import dacite

from .exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    record_error,
)
from .models import SwitcherConfig, model_to_dict

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "sesh-switcher"
CONFIG_PATH = CONFIG_DIR / "config.json"


def merge_configs(base: dict, overrides: dict) -> dict:
    """
    Merge ``overrides`` into ``base``.

    Rules:
    - Scalars and lists: override replaces base
    - Dicts: recursive merge
    - None in overrides: leaves the base value untouched

    Args:
        base: The base configuration dictionary
        overrides: The override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = copy.deepcopy(base)

    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        logger.debug("No config found at %s, using defaults", path)
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        logger.debug("Loaded config from %s", path)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in config file: %s", e)
        record_error(e)
        raise ConfigLoadError(
            f"Invalid JSON in config file at line {e.lineno}",
            file_path=str(path),
            context={"line": e.lineno, "column": e.colno},
            cause=e,
        ) from e
    except OSError as e:
        logger.error("Failed to read config file: %s", e)
        record_error(e)
        raise ConfigLoadError(
            "Failed to read config file",
            file_path=str(path),
            cause=e,
        ) from e

    if not isinstance(data, dict):
        raise ConfigValidationError(
            "Config file must contain a JSON object",
            value=data,
            context={"file_path": str(path)},
        )
    return data


def load_config(
    path: str | Path | None = None, overrides: dict | None = None
) -> SwitcherConfig:
    """
    Load the switcher configuration.

    Args:
        path: Config file to read (default ~/.config/sesh-switcher/config.json)
        overrides: Values (e.g. from the command line) merged over the file

    Returns:
        SwitcherConfig, with defaults for anything not set

    Raises:
        ConfigLoadError: If the config file exists but cannot be read or parsed.
        ConfigValidationError: If the config does not match the schema.
    """
    config_path = Path(path) if path is not None else CONFIG_PATH
    data = merge_configs(_read_config_file(config_path), overrides or {})

    try:
        return dacite.from_dict(
            data_class=SwitcherConfig,
            data=data,
            config=dacite.Config(strict=True),
        )
    except dacite.DaciteError as e:
        logger.error("Config schema validation failed: %s", e)
        record_error(e)
        raise ConfigValidationError(
            f"Config schema validation failed: {e}",
            context={"file_path": str(config_path)},
            cause=e,
        ) from e


def save_config(config: SwitcherConfig, path: str | Path | None = None) -> None:
    """Write ``config`` as JSON, creating the config directory if needed."""
    config_path = Path(path) if path is not None else CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(model_to_dict(config), f, indent=2)
    logger.debug("Saved config to %s", config_path)


def get_config_path() -> Path:
    """Return the path to the config file."""
    return CONFIG_PATH


def get_config_dir() -> Path:
    """Return the path to the config directory."""
    return CONFIG_DIR
