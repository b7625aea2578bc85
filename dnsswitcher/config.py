"""
Configuration management for DNS Switcher.

This module holds the application constants and loads the user's
preferences file. The DNS profiles themselves live in a separate JSON
document handled by the ``profiles`` package.
"""

import copy

import toml
from pathlib import Path

# --- App Constants ---
APP_NAME = "dnsswitcher"
APP_TITLE = "DNS Switcher"
APP_IDENTIFIER = f"com.user.{APP_NAME}"
LOG_DIR = Path.home() / "Library" / "Logs"
LOG_FILE = LOG_DIR / "dnsswitcher.log"

# --- Logging Constants ---
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# --- Profiles File Constants ---
PROFILES_FILENAME = ".dnsswitcher.json"
DEFAULT_PROFILES_RESOURCE = "dnsswitcher.default.json"
DEFAULT_INTERFACE = "Wi-Fi"

# --- Network Constants ---
DEFAULT_NETWORKSETUP_PATH = "/usr/sbin/networksetup"
DEFAULT_REFRESH_SECONDS = 5
DEFAULT_DEBUG = False
DEFAULT_USE_SUDO = False

# Default preferences for the application
DEFAULT_PREFERENCES = {
    "settings": {
        "debug": DEFAULT_DEBUG,
        "refresh_seconds": DEFAULT_REFRESH_SECONDS,
        "use_sudo": DEFAULT_USE_SUDO,
        "networksetup_path": DEFAULT_NETWORKSETUP_PATH,
        # Empty means ~/.dnsswitcher.json
        "config_file": "",
    },
}


def get_preferences_path():
    """Gets the path to the preferences file."""
    return Path.home() / ".config" / APP_NAME / "preferences.toml"


def load_preferences():
    """
    Loads the preferences from the TOML file.

    A missing file is created with the defaults. Keys the user left out are
    filled in from ``DEFAULT_PREFERENCES``, and a file that cannot be parsed
    is reported and ignored.
    """
    # Import logging from our centralized module
    from .logging_config import get_logger

    logger = get_logger(__name__)

    path = get_preferences_path()
    if not path.exists():
        # Create a default preferences file if one doesn't exist
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w") as f:
                toml.dump(DEFAULT_PREFERENCES, f)
        except OSError as e:
            logger.warning(f"Could not create preferences file {path}: {e}")
        return copy.deepcopy(DEFAULT_PREFERENCES)

    try:
        with open(path, "r") as f:
            loaded = toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Ignoring unreadable preferences file {path}: {e}")
        return copy.deepcopy(DEFAULT_PREFERENCES)

    preferences = copy.deepcopy(DEFAULT_PREFERENCES)
    preferences["settings"].update(loaded.get("settings", {}))
    logger.debug(f"Loaded preferences: {preferences['settings']}")
    return preferences


def get_setting(preferences, key):
    """Return a single value from the [settings] table, falling back to the default."""
    settings = (preferences or {}).get("settings", {})
    return settings.get(key, DEFAULT_PREFERENCES["settings"][key])

