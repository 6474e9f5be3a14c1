from __future__ import annotations

"""
Configuration Domain Management.

Defines the default synchronization settings and persists project-level
overrides in a JSON file (``locsync.json`` in the working directory unless
another path is given). Missing or corrupted files fall back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "locsync.json"
CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_REFERENCE_LOCALE = "en"
DEFAULT_POLICY = "unconditional"


def default_config_path() -> str:
    """Return the project configuration file path for the current directory."""
    return os.path.join(os.getcwd(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Locations
        "locales_dir": os.path.join(os.getcwd(), "locales"),
        "reference_locale": DEFAULT_REFERENCE_LOCALE,

        # Merge behavior
        "policy": DEFAULT_POLICY,
        "fill_missing": False,
        "scope_patches": False,

        # Output format
        "indent": 2,
        "sort_keys": False,

        # Safety
        "dry_run": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration file merged over the defaults.

    Unknown keys in the file are ignored.

    Args:
        path: Config file path. Defaults to ./locsync.json.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()
    config_path = path or default_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    for key in config:
        if key in data:
            config[key] = data[key]

    # Relative directories are resolved against the config file location
    locales_dir = config.get("locales_dir")
    if isinstance(locales_dir, str) and locales_dir and not os.path.isabs(locales_dir):
        config["locales_dir"] = os.path.join(
            os.path.dirname(os.path.abspath(config_path)), locales_dir
        )

    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist the configuration to disk.

    Args:
        config: The configuration dictionary to save.
        path: Target file. Defaults to ./locsync.json.
    """
    config_path = path or default_config_path()
    state = dict(config)
    state["version"] = CURRENT_CONFIG_VERSION
    try:
        parent = os.path.dirname(os.path.abspath(config_path))
        os.makedirs(parent, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
