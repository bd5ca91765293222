"""
krelay-gamedata: game definition data for K Relay

Loads items, tiles, objects, packets and the live server list at startup
into immutable lookup tables.
"""

__version__ = "0.1.0"
__author__ = "K Relay Contributors"

# Core service imports
from .game_data import (
    GameDataService,
    GameDataRegistry,
    GameDataMap,
    KeyNotFoundError,
    LoadReport,
    LoadError,
)
from .utils.logging_config import setup_logging

__all__ = [
    # Services
    'GameDataService',
    'GameDataRegistry',
    'GameDataMap',
    'KeyNotFoundError',
    'LoadReport',
    'LoadError',

    # Logging
    'setup_logging',
]
