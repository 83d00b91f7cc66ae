"""Configuration management for Comp Calc.

Configuration lives in a single file:

settings.json - Machine-specific settings
   - rate_table: path to a custom rate table YAML (optional)
   - default_output_format: tool behavior preferences

Config directory resolution:
1. COMP_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/comp-calc/ (XDG_CONFIG_HOME fallback)

Rate table resolution:
1. settings.json "rate_table" key (if set via CLI)
2. Bundled table shipped with the package (sdk/rates/sc_rates.yaml)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional


APP_NAME = "comp-calc"
SETTINGS_FILENAME = "settings.json"
BUNDLED_RATE_TABLE = Path(__file__).parent / "rates" / "sc_rates.yaml"

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)


class ConfigNotFoundError(Exception):
    """Raised when a configured file cannot be found."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. COMP_CALC_CONFIG_PATH environment variable
    2. ~/.config/comp-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("COMP_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "rate_table", "default_output_format")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def clear_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_rate_table_path(require_exists: bool = False) -> Path:
    """Get the path to the rate table YAML.

    Resolution order:
    1. settings.json "rate_table" key (if set)
    2. Bundled South Carolina rate table

    Args:
        require_exists: If True, raises ConfigNotFoundError when a custom
            path is configured but missing

    Returns:
        Path to the rate table file
    """
    custom_table: Optional[str] = get_setting("rate_table")
    if custom_table:
        table_path = Path(custom_table)
        if require_exists and not table_path.exists():
            raise ConfigNotFoundError(
                f"Rate table not found at configured path: {table_path}\n\n"
                f"Update with: comp-calc settings rate-table /path/to/rates.yaml\n"
                f"Or revert to the bundled table: comp-calc settings rate-table --clear"
            )
        logger.debug(f"using custom rate table {table_path}")
        return table_path

    return BUNDLED_RATE_TABLE
