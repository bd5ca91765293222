"""
Network settings for the server list download.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_CHAR_LIST_URL = "http://realmofthemadgodhrd.appspot.com/char/list"
DEFAULT_FETCH_TIMEOUT = 10.0


class NetworkSettings:
    """Manages the server list endpoint and its request timeout."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    @property
    def char_list_url(self) -> str:
        """URL the server list is downloaded from."""
        value = self.settings.value("network/char_list_url", DEFAULT_CHAR_LIST_URL)
        return str(value) if value else DEFAULT_CHAR_LIST_URL

    @char_list_url.setter
    def char_list_url(self, value: str) -> None:
        self.settings.setValue("network/char_list_url", value)
        self.settings.sync()

    @property
    def fetch_timeout(self) -> float:
        """Total timeout in seconds for the server list request."""
        value = self.settings.value("network/fetch_timeout", DEFAULT_FETCH_TIMEOUT)
        try:
            return float(str(value)) if value is not None else DEFAULT_FETCH_TIMEOUT
        except (ValueError, TypeError):
            return DEFAULT_FETCH_TIMEOUT

    @fetch_timeout.setter
    def fetch_timeout(self, value: float) -> None:
        if value > 0:
            self.settings.setValue("network/fetch_timeout", float(value))
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid fetch timeout: {value}, keeping current: {self.fetch_timeout}"
            )
