"""Emitter settings with config file persistence."""

from __future__ import annotations

import configparser
import logging
import os
from typing import Any

from eventemitter.lib.errors import ConfigError

SECTION = "EVENTEMITTER"


class EmitterPreferences:
    """Settings for an EventEmitter, stored in an ini file.

    Stores settings under the [EVENTEMITTER] section. Values are converted
    back to bool/int/float when read.
    """

    # Default values for all settings (single source of truth)
    DEFAULTS = {
        "max_listeners": 10,
        "log_level": "INFO",
    }

    def __init__(self, config_file_path: str = "eventemitter.ini", target: Any = None) -> None:
        """Initialize with config path and optional emitter to keep in sync.

        Args:
            config_file_path: Path to the ini file. Missing files read as empty.
            target: Optional EventEmitter updated when settings change
        """
        self._config_obj = configparser.ConfigParser()
        self._target = target
        self.config_file_path = os.path.abspath(config_file_path)
        logging.debug(f"Using config file: {self.config_file_path}")

    def get(self, preference: str, default_value: Any = None) -> Any:
        """Get a setting, auto-converting to bool/int/float."""
        # Missing files read as empty
        self._config_obj.read(self.config_file_path, encoding="utf-8")
        raw = self._config_obj.get(SECTION, preference, fallback=None)
        return default_value if raw is None else coerce_value(raw)

    def get_or_default(self, preference: str) -> Any:
        """Get a setting, falling back to DEFAULTS if not set."""
        return self.get(preference, self.DEFAULTS.get(preference))

    def set(self, preference: str, val: Any) -> tuple[bool, str]:
        """Update a setting, sync the target emitter and persist to config.

        The value is validated and applied first so an invalid value is never written.

        Returns (success, message) tuple.
        """
        logging.debug(f"Changing setting << {preference} >> to {val}")
        try:
            self._apply(preference, coerce_value(val))

            # Read existing config to preserve other settings
            self._config_obj.read(self.config_file_path, encoding="utf-8")
            if SECTION not in self._config_obj:
                self._config_obj.add_section(SECTION)
            self._config_obj[SECTION][preference] = str(val)

            with open(self.config_file_path, "w", encoding="utf-8") as conf:
                self._config_obj.write(conf)

            return (True, "Settings were changed successfully")
        except (ConfigError, OSError) as e:
            logging.warning(f"Failed to change setting << {preference} >>: {e}")
            return (False, f"Settings were not changed: {e}")

    def clear(self) -> tuple[bool, str]:
        """Remove all settings by deleting the config file. Returns (success, message)."""
        try:
            if os.path.exists(self.config_file_path):
                os.remove(self.config_file_path)
                logging.info(f"Cleared settings: deleted {self.config_file_path}")
            # Drop cached values so they are not written back later
            self._config_obj.clear()
            return (True, "Settings were cleared successfully")
        except OSError as e:
            logging.error(f"Failed to clear settings: {e}")
            return (False, "Settings were not cleared")

    def _apply(self, preference: str, value: Any) -> None:
        """Validate a single setting and push it onto the target emitter or logging.

        Raises:
            ConfigError: If the value is not valid for the setting.
        """
        if preference == "log_level":
            logging.getLogger().setLevel(parse_log_level(value))
        elif preference == "max_listeners":
            limit = parse_max_listeners(value)
            if self._target is not None:
                self._target.set_max_listeners(limit)

    def apply_all(self, **overrides: Any) -> None:
        """Hydrate the target emitter and logging level from config/defaults.

        Priority: explicit override > config file > DEFAULTS

        Overrides are not persisted.

        Raises:
            ConfigError: If a resolved value is invalid.
        """
        for pref, default in self.DEFAULTS.items():
            value = overrides.get(pref)
            if value is None:
                value = self.get(pref, default)
            self._apply(pref, value)

    def reset_all(self) -> tuple[bool, str]:
        """Clear config file and reset the target to defaults.

        Returns (success, message) tuple.
        """
        success, message = self.clear()
        if success:
            for pref, default in self.DEFAULTS.items():
                self._apply(pref, default)
        return success, message


_TRUE_STRINGS = frozenset({"true", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "no", "off"})


def coerce_value(val: Any) -> Any:
    """Turn ini strings into bool, int or float where they look like one."""
    if not isinstance(val, str):
        return val
    lowered = val.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    for cast in (int, float):
        try:
            return cast(val)
        except ValueError:
            continue
    return val


def parse_max_listeners(value: Any) -> int:
    """Check that a max listeners setting is a positive integer."""
    value = coerce_value(value)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"max_listeners must be a positive integer, got {value!r}")
    return value


def parse_log_level(value: Any) -> int:
    """Turn a level name ("debug", "INFO") or number into a logging level."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    level = getattr(logging, str(value).upper(), None)
    if not isinstance(level, int):
        raise ConfigError(f"Unknown log level: {value!r}")
    return level
