"""
Path-related settings for krelay-gamedata.
"""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

DEFAULT_RESOURCES_DIR = "Resources"
DEFAULT_CHAR_LIST_CACHE = "char_list.xml"


class PathSettings:
    """Manages where game data documents are read from and cached."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value else default

    @property
    def resources_dir(self) -> Path:
        """Directory holding operator overrides (Objects.xml, Tiles.xml, Packets.xml)."""
        return Path(self._get_str("paths/resources_dir", DEFAULT_RESOURCES_DIR))

    @resources_dir.setter
    def resources_dir(self, value: str | Path) -> None:
        self.settings.setValue("paths/resources_dir", str(value))
        self.settings.sync()

    @property
    def char_list_cache(self) -> Path:
        """File the last downloaded server list is kept in."""
        return Path(self._get_str("paths/char_list_cache", DEFAULT_CHAR_LIST_CACHE))

    @char_list_cache.setter
    def char_list_cache(self, value: str | Path) -> None:
        self.settings.setValue("paths/char_list_cache", str(value))
        self.settings.sync()
