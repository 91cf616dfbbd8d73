"""
Settings manager for unified configuration access.

Provides a single source of truth for all settings with priority:
1. CLI arguments (highest priority)
2. Environment variables
3. Constants (default values)

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import os
import logging
from typing import Any, Optional, Dict, FrozenSet

from .constants import (
    DEFAULT_DIALECTS,
    DEFAULT_GLOB,
    DEFAULT_LOG_LEVEL,
    ENV_PREFIX,
    IGNORE_FILENAME,
    LINES_ABOVE,
    LINES_BELOW,
    LOG_LEVELS,
)

logger = logging.getLogger(__name__)

# Settings holding comma-separated sets in the environment
_SET_SETTINGS = ("dialects",)


class SettingsManager:
    """
    Unified settings manager with priority: CLI > ENV > Constants.

    This class provides a single source of truth for all configuration values.
    Settings can be overridden via CLI arguments or environment variables.
    """

    _instance: Optional["SettingsManager"] = None
    _cli_overrides: Dict[str, Any] = {}
    _initialized: bool = False

    def __new__(cls) -> "SettingsManager":
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize settings manager."""
        if self._initialized:
            return

        self._cli_overrides = {}
        self._load_from_env()
        self._initialized = True
        logger.debug("SettingsManager initialized")

    def _load_from_env(self) -> None:
        """Load settings from environment variables."""
        env_mappings: Dict[str, tuple[str, type]] = {
            "ignore_filename": (f"{ENV_PREFIX}IGNORE_FILENAME", str),
            "default_glob": (f"{ENV_PREFIX}DEFAULT_GLOB", str),
            "lines_above": (f"{ENV_PREFIX}LINES_ABOVE", int),
            "lines_below": (f"{ENV_PREFIX}LINES_BELOW", int),
            "dialects": (f"{ENV_PREFIX}DIALECTS", str),
            "log_level": (f"{ENV_PREFIX}LOG_LEVEL", str),
        }

        for setting_name, (env_var, converter) in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue
            try:
                if setting_name in _SET_SETTINGS:
                    value = frozenset(
                        v.strip().lower() for v in env_value.split(",") if v.strip()
                    )
                elif setting_name == "log_level":
                    value = env_value.strip().upper()
                    if value not in LOG_LEVELS:
                        raise ValueError(f"unknown log level {env_value!r}")
                elif converter == int:
                    value = int(env_value)
                    if value < 0:
                        raise ValueError("must not be negative")
                else:
                    value = env_value
                self._cli_overrides[setting_name] = value
                logger.debug(f"Loaded {setting_name} from environment: {value}")
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {env_var}={env_value}: {e}")

    def set_cli_overrides(self, overrides: Dict[str, Any]) -> None:
        """
        Set CLI argument overrides (highest priority).

        None values are skipped so that unset CLI options fall through to
        environment and constants.

        Args:
            overrides: Dictionary of setting names to values
        """
        applied = {k: v for k, v in overrides.items() if v is not None}
        self._cli_overrides.update(applied)
        logger.debug(f"CLI overrides set: {list(applied.keys())}")

    def get(self, setting_name: str, default: Any = None) -> Any:
        """
        Get setting value with priority: CLI > ENV > Constants.

        Args:
            setting_name: Name of the setting
            default: Default value if not found (optional)

        Returns:
            Setting value
        """
        if setting_name in self._cli_overrides:
            return self._cli_overrides[setting_name]

        constants_map = {
            "ignore_filename": IGNORE_FILENAME,
            "default_glob": DEFAULT_GLOB,
            "lines_above": LINES_ABOVE,
            "lines_below": LINES_BELOW,
            "dialects": DEFAULT_DIALECTS,
            "log_level": DEFAULT_LOG_LEVEL,
        }

        if setting_name in constants_map:
            return constants_map[setting_name]

        if default is not None:
            return default

        raise KeyError(f"Setting '{setting_name}' not found and no default provided")

    # Convenience properties for common settings
    @property
    def ignore_filename(self) -> str:
        """Get ignore filename."""
        return self.get("ignore_filename")

    @property
    def default_glob(self) -> str:
        """Get default glob pattern."""
        return self.get("default_glob")

    @property
    def lines_above(self) -> int:
        """Get code frame lines above a match."""
        return self.get("lines_above")

    @property
    def lines_below(self) -> int:
        """Get code frame lines below a match."""
        return self.get("lines_below")

    @property
    def dialects(self) -> FrozenSet[str]:
        """Get enabled syntax dialects."""
        return self.get("dialects")

    @property
    def log_level(self) -> str:
        """Get log level name."""
        return self.get("log_level")


def get_settings() -> SettingsManager:
    """
    Get the global settings manager instance.

    Returns:
        SettingsManager instance
    """
    return SettingsManager()


# Convenience function for quick access
def get_setting(setting_name: str, default: Any = None) -> Any:
    """
    Get a setting value quickly.

    Args:
        setting_name: Name of the setting
        default: Default value if not found

    Returns:
        Setting value
    """
    return get_settings().get(setting_name, default)
