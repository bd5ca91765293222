"""
Core settings management for krelay-gamedata.
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QSettings

from .types import ValidationResult
from .validation import SettingsValidator
from .paths import PathSettings
from .network import NetworkSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(
        self, profile: str = "default", settings_file: Optional[str | Path] = None
    ):
        """Initialize settings for a profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Explicit INI file to use instead of the
                platform's native settings store
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("krelay", "krelay_gamedata")
        self.profile = profile

        # Use profile as a group to create hierarchy: krelay/krelay_gamedata/default/...
        self.settings.beginGroup(profile)

        # Initialize subsystems
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._network = NetworkSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def network(self) -> NetworkSettings:
        """Access network settings subsystem."""
        return self._network

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def resources_dir(self) -> Path:
        """Get directory with operator-provided game data files."""
        return self._paths.resources_dir

    @resources_dir.setter
    def resources_dir(self, value: str | Path) -> None:
        self._paths.resources_dir = value

    @property
    def char_list_cache(self) -> Path:
        """Get server list cache file path."""
        return self._paths.char_list_cache

    @char_list_cache.setter
    def char_list_cache(self, value: str | Path) -> None:
        self._paths.char_list_cache = value

    # === NETWORK SETTINGS (DELEGATED) ===

    @property
    def char_list_url(self) -> str:
        """Get server list endpoint."""
        return self._network.char_list_url

    @char_list_url.setter
    def char_list_url(self, value: str) -> None:
        self._network.char_list_url = value

    @property
    def fetch_timeout(self) -> float:
        """Get server list request timeout in seconds."""
        return self._network.fetch_timeout

    @fetch_timeout.setter
    def fetch_timeout(self, value: float) -> None:
        self._network.fetch_timeout = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        return self._logging.log_file_path

    @log_file_path.setter
    def log_file_path(self, value: str | Path) -> None:
        self._logging.log_file_path = value

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    def get_settings_file_path(self) -> str:
        """Get path to the settings storage."""
        return self.settings.fileName()

    def reset_to_defaults(self) -> None:
        """Remove every stored value of this profile."""
        self.settings.remove("")
        self.settings.sync()
        logger.info(f"Settings for profile '{self.profile}' reset to defaults")
