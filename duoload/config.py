"""Configuration management for duoload.

Settings live in a JSON file in the platform-specific configuration
directory. Missing keys fall back to ``DEFAULT_CONFIG``.
"""

import json
import logging
import os
import platform
from functools import lru_cache
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

API_URL_ENV_VAR = "DUOLOAD_API_URL"

# Default configuration settings
DEFAULT_CONFIG = {
    "log_level": "INFO",
    "api_url": "https://api.duocards.com/graphql",
    "page_size": 100,
    "page_delay": 1.0,
    "request_timeout": 30.0,
    "deck_name": "Duocards Vocabulary",
}

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_config_dir() -> Path:
    """Get the platform-specific configuration directory."""
    system = platform.system()
    home = Path.home()

    if system == "Darwin":  # macOS
        config_dir = home / "Library" / "Application Support" / "duoload"
    elif system == "Windows":
        config_dir = Path(os.getenv("APPDATA", str(home / "AppData" / "Roaming"))) / "duoload"
    else:  # Linux and others
        config_dir = home / ".config" / "duoload"

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


@lru_cache(maxsize=1)
def get_config_file_path() -> Path:
    """Get the path to the configuration file."""
    return get_config_dir() / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration from file, falling back to defaults."""
    config_file = get_config_file_path()

    if not config_file.exists():
        logger.debug("No configuration file at %s, using defaults", config_file)
        return DEFAULT_CONFIG.copy()

    try:
        with open(config_file, encoding="utf-8") as f:
            config = json.load(f)
        logger.debug("Loaded configuration from %s", config_file)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Error loading configuration: %s", e)
        logger.info("Using default configuration instead")
        return DEFAULT_CONFIG.copy()

    if not isinstance(config, dict):
        logger.error("Configuration file %s does not contain an object, ignoring it", config_file)
        return DEFAULT_CONFIG.copy()

    # Merge with defaults to ensure all keys exist
    merged_config = DEFAULT_CONFIG.copy()
    merged_config.update(config)
    return merged_config


def save_config(config: dict[str, Any]) -> bool:
    """Save configuration to file.

    Args:
        config: Configuration dictionary to save

    Returns:
        bool: True if successful, False otherwise
    """
    config_file = get_config_file_path()
    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        logger.debug("Saved configuration to %s", config_file)
        return True
    except OSError as e:
        logger.error("Error saving configuration: %s", e)
        return False


def get_config_value(key: str, default: Any = None) -> Any:
    """Get a configuration value by key.

    The API URL can be overridden with the DUOLOAD_API_URL environment variable.
    """
    if key == "api_url" and os.environ.get(API_URL_ENV_VAR):
        return os.environ[API_URL_ENV_VAR]
    config = load_config()
    return config.get(key, default)


def set_config_value(key: str, value: Any) -> bool:
    """Set a configuration value and persist it."""
    config = load_config()
    config[key] = value
    return save_config(config)


def coerce_config_value(key: str, raw_value: str) -> Any:
    """Convert a value given on the command line to the type of the setting.

    Raises:
        KeyError: If the key is not a known setting.
        ValueError: If the value cannot be converted or is out of range.
    """
    if key not in DEFAULT_CONFIG:
        raise KeyError(key)

    if key == "log_level":
        level = raw_value.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level. Valid values are: {', '.join(VALID_LOG_LEVELS)}")
        return level
    if key == "page_size":
        value = int(raw_value)
        if value < 1:
            raise ValueError("page_size must be a positive integer")
        return value
    if key in ("page_delay", "request_timeout"):
        value = float(raw_value)
        if value < 0:
            raise ValueError(f"{key} must not be negative")
        return value
    if not raw_value:
        raise ValueError(f"{key} must not be empty")
    return raw_value


def list_config() -> dict[str, Any]:
    """Get a dictionary of all effective configuration values for display."""
    config = load_config()
    config["api_url"] = get_config_value("api_url")
    return config
