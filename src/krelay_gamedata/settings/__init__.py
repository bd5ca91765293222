"""
Settings package for krelay-gamedata.

This package provides a modular, type-safe configuration management system
using Qt's QSettings for cross-platform storage.

Usage:
    from krelay_gamedata.settings import AppSettings, ValidationResult

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ValidationResult
from .paths import PathSettings
from .network import NetworkSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "ValidationResult",
    "PathSettings",
    "NetworkSettings",
    "LoggingSettings",
]
