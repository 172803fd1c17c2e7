"""
Configuration management for mnemokey.

Holds user preferences for the command line tool and the account facade.
Key material is never written here: accounts are recovered from their
mnemonic, and symmetric secrets are provisioned by the caller.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from .crypto.mnemonic import DEFAULT_STRENGTH, VALID_STRENGTHS

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"
HOME_ENV_VAR = "MNEMOKEY_HOME"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULTS: Dict[str, Any] = {
    "mnemonic_strength": DEFAULT_STRENGTH,
    "log_level": "WARNING",
}


class ConfigError(Exception):
    """Raised when configuration operations fail."""
    pass


class MnemokeyConfig:
    """
    Simple settings manager for mnemokey.

    Settings live in ``settings.json`` inside the config directory. A missing
    file means defaults.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_dir: Directory for configuration files. Defaults to
                $MNEMOKEY_HOME, then ~/.mnemokey/
        """
        if config_dir is None:
            config_dir = os.environ.get(HOME_ENV_VAR) or os.path.expanduser("~/.mnemokey")

        self.config_dir = config_dir
        self.settings_path = os.path.join(config_dir, SETTINGS_FILE)
        self._settings: Dict[str, Any] = dict(DEFAULTS)

    @property
    def mnemonic_strength(self) -> int:
        return self._settings["mnemonic_strength"]

    @property
    def log_level(self) -> str:
        return self._settings["log_level"]

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._settings)

    def load(self) -> 'MnemokeyConfig':
        """
        Load settings from disk, keeping defaults for absent keys.

        Returns:
            self, for chaining

        Raises:
            ConfigError: If the file is unreadable or holds invalid values
        """
        if not os.path.exists(self.settings_path):
            logger.debug("No settings file at %s, using defaults", self.settings_path)
            return self

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                stored = json.load(f)
        except OSError as e:
            raise ConfigError(f"Failed to read settings: {e}") from e
        except ValueError as e:
            raise ConfigError(f"Invalid settings file {self.settings_path}: {e}") from e

        if not isinstance(stored, dict):
            raise ConfigError(f"Settings file must hold a JSON object: {self.settings_path}")

        for key, value in stored.items():
            self.set(key, value)

        return self

    def set(self, key: str, value: Any) -> None:
        """
        Validate and set a single setting.

        Raises:
            ConfigError: If the key is unknown or the value is invalid
        """
        if key == "mnemonic_strength":
            try:
                value = int(value)
            except (TypeError, ValueError):
                raise ConfigError(f"mnemonic_strength must be an integer, got {value!r}")
            if value not in VALID_STRENGTHS:
                raise ConfigError(f"mnemonic_strength must be one of {VALID_STRENGTHS}")
        elif key == "log_level":
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                raise ConfigError(f"log_level must be one of {LOG_LEVELS}")
            value = value.upper()
        else:
            raise ConfigError(f"Unknown setting: {key}")

        self._settings[key] = value

    def save(self) -> None:
        """
        Write current settings to disk, creating the directory if needed.

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(self._settings, f, indent=2, sort_keys=True)
        except OSError as e:
            raise ConfigError(f"Failed to save settings: {e}") from e

        logger.debug("Saved settings to %s", self.settings_path)

    def settings_exist(self) -> bool:
        """Check if a settings file exists."""
        return os.path.exists(self.settings_path)
