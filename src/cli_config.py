"""Configuration file loading and CLI precedence for runtime-locator.

Precedence for every tunable: CLI flag, then config file, then environment,
then built-in defaults. The environment layer is consulted later by the
resolution engine itself (DOTNET_ROLL_FORWARD, DOTNET_ROOT, ...), so this
module only merges the first two.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from constants import Constants
from resolution.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class LocatorSettings:
    """Effective settings after merging the CLI with the config file."""

    dotnet: Optional[str] = None
    hostfxr: Optional[str] = None
    roll_forward: Optional[str] = None
    environment: Optional[str] = None
    log_level: Optional[str] = None


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML or JSON config file.

    Args:
        path: Path to the file; None or empty means no file.

    Returns:
        Mapping of recognised keys to values.

    Raises:
        ConfigError: If the file is missing, unreadable, or not a mapping.
    """
    if not path:
        return {}
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load config {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping at the top level")

    config: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in Constants.CONFIG_KEYS:
            logger.warning("Ignoring unknown config key '%s' in %s", key, path)
            continue
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"Config key '{key}' in {path} must be a string")
        config[key] = value
    return config


def build_settings(args: Any) -> LocatorSettings:
    """Merge parsed CLI arguments over the config file they point to."""
    config = load_config_file(getattr(args, "CONFIG", None))

    def _pick(attr: str, key: str) -> Optional[str]:
        value = getattr(args, attr, None)
        if value is not None:
            return value
        return config.get(key)

    settings = LocatorSettings(
        dotnet=_pick("DOTNET", "dotnet"),
        hostfxr=_pick("HOSTFXR", "hostfxr"),
        roll_forward=_pick("ROLL_FORWARD", "roll_forward"),
        environment=_pick("ENVIRONMENT", "environment"),
        log_level=_pick("LOG_LEVEL", "log_level"),
    )
    if settings.log_level is not None:
        level = settings.log_level.upper()
        if level not in Constants.LOG_LEVELS:
            raise ConfigError(f"Invalid log level {settings.log_level!r}")
        settings.log_level = level
    return settings
