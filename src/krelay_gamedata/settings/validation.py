"""
Settings validation system for krelay-gamedata.
"""

import logging
from typing import List, TYPE_CHECKING
from urllib.parse import urlparse

from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # Resources directory is optional, embedded copies cover it
        resources_dir = self.settings.resources_dir
        if not resources_dir.exists():
            warnings.append(
                f"Resources directory not found, embedded game data will be used: {resources_dir}"
            )
        elif not resources_dir.is_dir():
            errors.append(f"Resources path is not a directory: {resources_dir}")

        # Server list endpoint
        url = urlparse(self.settings.char_list_url)
        if url.scheme not in ("http", "https") or not url.netloc:
            errors.append(f"Server list URL must be http(s): {self.settings.char_list_url}")

        if self.settings.fetch_timeout <= 0:
            errors.append(f"Fetch timeout must be positive: {self.settings.fetch_timeout}")

        cache_dir = self.settings.char_list_cache.parent
        if str(cache_dir) not in ("", ".") and not cache_dir.exists():
            warnings.append(f"Server list cache directory will be created: {cache_dir}")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
