"""
Configuration management for NetMenu.

This module handles loading, validation, and default configuration values
for the NetMenu application.
"""

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

import toml

from .errors import ConfigError

# --- App Constants ---
APP_NAME = "netmenu"
CONFIG_FILENAME = "config.toml"
LOG_DIR = Path(os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state") / APP_NAME
LOG_FILE = LOG_DIR / "netmenu.log"

# --- Logging Constants ---
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_LOG_FORMAT = "netmenu: %(levelname)s: %(message)s"
LOG_MAX_BYTES = 512 * 1024  # per file, before rotation
LOG_BACKUP_COUNT = 2

# --- Defaults ---
DEFAULT_DMENU_CMD = "dmenu"
DEFAULT_DMENU_ARGS = ""
DEFAULT_WIFI_INTERFACE = "wlan0"
DEFAULT_BACKEND_TIMEOUT = 5  # seconds, per backend query
DEFAULT_PINENTRY_CMD = "pinentry-gnome3"
DEFAULT_DEBUG = False

# --- External Service Constants ---
MULLVAD_CHECK_URL = "https://am.i.mullvad.net/connected"
MULLVAD_CHECK_TIMEOUT = 10  # seconds

# Default configuration written when no config file exists
DEFAULT_CONFIG = {
    "dmenu_cmd": DEFAULT_DMENU_CMD,
    "dmenu_args": DEFAULT_DMENU_ARGS,
    "settings": {
        "debug": DEFAULT_DEBUG,
        "wifi_interface": DEFAULT_WIFI_INTERFACE,
        "backend_timeout": DEFAULT_BACKEND_TIMEOUT,
        "pinentry_cmd": DEFAULT_PINENTRY_CMD,
        "notifications": True,
        "check_mullvad": True,
    },
    "actions": [
        {
            "display": "🛡️ Example",
            "cmd": "notify-send 'hello' 'world'",
        },
    ],
}


@dataclass(frozen=True)
class StaticActionConfig:
    """A user-defined action: a label and the shell command it runs."""

    display: str
    cmd: str


@dataclass(frozen=True)
class Configuration:
    """Parsed, validated configuration. Immutable for the process lifetime."""

    actions: Tuple[StaticActionConfig, ...] = ()
    dmenu_cmd: str = DEFAULT_DMENU_CMD
    dmenu_args: str = DEFAULT_DMENU_ARGS
    debug: bool = DEFAULT_DEBUG
    wifi_interface: str = DEFAULT_WIFI_INTERFACE
    backend_timeout: float = DEFAULT_BACKEND_TIMEOUT
    pinentry_cmd: str = DEFAULT_PINENTRY_CMD
    notifications: bool = True
    check_mullvad: bool = True
    path: Optional[Path] = field(default=None, compare=False)


def get_config_path():
    """Gets the path to the configuration file."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / APP_NAME / CONFIG_FILENAME


def _expect(value, expected_type, key):
    if expected_type is float:
        # bool is an int subclass, reject it explicitly
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"'{key}' must be a number, got {value!r}")
        return float(value)
    if not isinstance(value, expected_type):
        raise ConfigError(
            f"'{key}' must be of type {expected_type.__name__}, got {value!r}"
        )
    return value


def _parse_actions(raw_actions):
    if not isinstance(raw_actions, list):
        raise ConfigError("'actions' must be an array of tables")

    actions = []
    for index, entry in enumerate(raw_actions):
        if not isinstance(entry, dict):
            raise ConfigError(f"actions[{index}] must be a table with 'display' and 'cmd'")
        for key in ("display", "cmd"):
            if key not in entry:
                raise ConfigError(f"actions[{index}] is missing '{key}'")
            _expect(entry[key], str, f"actions[{index}].{key}")
        if any(ch in entry["display"] for ch in "\r\n"):
            # The picker shows one entry per line
            raise ConfigError(f"actions[{index}].display must be a single line")
        if "\0" in entry["cmd"]:
            raise ConfigError(f"actions[{index}].cmd contains a NUL character")
        actions.append(StaticActionConfig(display=entry["display"], cmd=entry["cmd"]))
    return tuple(actions)


def parse_config(data, path=None):
    """
    Validate a raw configuration mapping and build a Configuration.

    Args:
        data: Mapping as produced by toml.load()
        path: Optional path the data was read from, kept for diagnostics

    Returns:
        Configuration instance

    Raises:
        ConfigError: If any value has the wrong shape or type
    """
    if not isinstance(data, dict):
        raise ConfigError("configuration root must be a table")

    settings = data.get("settings", {})
    if not isinstance(settings, dict):
        raise ConfigError("'settings' must be a table")

    timeout = _expect(
        settings.get("backend_timeout", DEFAULT_BACKEND_TIMEOUT),
        float,
        "settings.backend_timeout",
    )
    if timeout <= 0:
        raise ConfigError("'settings.backend_timeout' must be positive")

    dmenu_args = _expect(data.get("dmenu_args", DEFAULT_DMENU_ARGS), str, "dmenu_args")
    try:
        shlex.split(dmenu_args)
    except ValueError as e:
        raise ConfigError(f"'dmenu_args' cannot be split into arguments: {e}") from e

    return Configuration(
        actions=_parse_actions(data.get("actions", [])),
        dmenu_cmd=_expect(data.get("dmenu_cmd", DEFAULT_DMENU_CMD), str, "dmenu_cmd"),
        dmenu_args=dmenu_args,
        debug=_expect(settings.get("debug", DEFAULT_DEBUG), bool, "settings.debug"),
        wifi_interface=_expect(
            settings.get("wifi_interface", DEFAULT_WIFI_INTERFACE),
            str,
            "settings.wifi_interface",
        ),
        backend_timeout=timeout,
        pinentry_cmd=_expect(
            settings.get("pinentry_cmd", DEFAULT_PINENTRY_CMD),
            str,
            "settings.pinentry_cmd",
        ),
        notifications=_expect(
            settings.get("notifications", True), bool, "settings.notifications"
        ),
        check_mullvad=_expect(
            settings.get("check_mullvad", True), bool, "settings.check_mullvad"
        ),
        path=path,
    )


def write_default_config(path):
    """Writes the default configuration to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        toml.dump(DEFAULT_CONFIG, f)


def load_config(path=None):
    """
    Loads the configuration from the TOML file.

    A missing file is created from DEFAULT_CONFIG. A file that cannot be
    read or parsed raises ConfigError.
    """
    # Imported here so loading config never triggers logging setup first
    from .logging_config import get_logger

    logger = get_logger(__name__)

    path = Path(path) if path else get_config_path()
    if not path.exists():
        logger.info(f"No configuration at {path}, writing defaults")
        try:
            write_default_config(path)
        except OSError as e:
            raise ConfigError(f"Could not create default config at {path}: {e}") from e

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = toml.load(f)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"Malformed configuration file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read configuration file {path}: {e}") from e

    cfg = parse_config(data, path=path)
    logger.debug(f"Loaded {len(cfg.actions)} configured actions from {path}")
    return cfg


if __name__ == "__main__":
    cfg = load_config()
    import json

    print(json.dumps([a.__dict__ for a in cfg.actions], indent=4, ensure_ascii=False))
