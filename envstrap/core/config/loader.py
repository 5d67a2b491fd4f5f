"""
Configuration loader — reads the envstrap settings YAML.

The settings file is optional. Resolution order:

    --config PATH  >  $ENVSTRAP_CONFIG  >  ~/.config/envstrap/config.yml  >  defaults
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from envstrap.core.errors import ConfigError
from envstrap.core.models.settings import BootstrapSettings

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ENVSTRAP_CONFIG"
DEFAULT_CONFIG_FILE = "~/.config/envstrap/config.yml"

__all__ = ["ConfigError", "find_config_file", "load_settings"]


def find_config_file() -> Path | None:
    """Locate the settings file from the environment or the default path.

    Returns:
        Path to the settings file, or None when neither is set/present.
    """
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()

    default = Path(DEFAULT_CONFIG_FILE).expanduser()
    if default.is_file():
        return default
    return None


def load_settings(path: Path | None = None) -> BootstrapSettings:
    """Load and validate envstrap settings.

    Args:
        path: Explicit settings file. If None, searched via
            ``find_config_file()``; no file at all means defaults.

    Returns:
        Validated BootstrapSettings.

    Raises:
        ConfigError: If an explicit/env file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No settings file — using defaults")
        return BootstrapSettings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is a valid "all defaults" file
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under an "envstrap" key or be flat
    settings_data = data["envstrap"] if "envstrap" in data else data
    if settings_data is None:
        settings_data = {}
    if not isinstance(settings_data, dict):
        raise ConfigError(f"Expected a mapping under 'envstrap' in {path}")

    try:
        settings = BootstrapSettings.model_validate(settings_data)
    except Exception as e:
        raise ConfigError(f"Invalid envstrap configuration: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
