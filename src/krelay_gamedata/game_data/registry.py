"""
Registry holding the loaded lookup tables.

One slot per dataset. A slot is `None` until its loader pipeline publishes
a table, and stays `None` when that dataset failed to load. Readers should
only look at the registry after `GameDataService.load()` has returned.
"""

from typing import Any, Dict, List, Optional

from .models import (
    DATASET_NAMES,
    ITEMS,
    OBJECTS,
    PACKETS,
    SERVERS,
    TILES,
    ItemStructure,
    ObjectStructure,
    PacketStructure,
    ServerStructure,
    TileStructure,
)
from .store import GameDataMap


class GameDataRegistry:
    """Named slots for the Items, Tiles, Objects, Packets and Servers tables.

    Each slot is written by exactly one pipeline per load, so writes need
    no locking. The registry is owned by whoever created it; there is no
    process-wide instance.
    """

    def __init__(self):
        self._slots: Dict[str, Optional[GameDataMap[Any, Any]]] = {
            name: None for name in DATASET_NAMES
        }

    def publish(self, dataset: str, store: GameDataMap[Any, Any]) -> None:
        """Populate a slot with a completed table."""
        if dataset not in self._slots:
            raise KeyError(f"Unknown dataset slot: {dataset}")
        self._slots[dataset] = store

    def get(self, dataset: str) -> Optional[GameDataMap[Any, Any]]:
        """Return the table of a dataset, or None if it is not loaded."""
        if dataset not in self._slots:
            raise KeyError(f"Unknown dataset slot: {dataset}")
        return self._slots[dataset]

    def is_loaded(self, dataset: str) -> bool:
        return self.get(dataset) is not None

    @property
    def loaded(self) -> List[str]:
        """Names of populated slots, in slot order."""
        return [name for name, store in self._slots.items() if store is not None]

    def clear(self) -> None:
        """Empty every slot."""
        for name in self._slots:
            self._slots[name] = None

    # === TYPED SLOT ACCESS ===

    @property
    def items(self) -> Optional[GameDataMap[int, ItemStructure]]:
        """Item type -> item structure."""
        return self._slots[ITEMS]

    @property
    def tiles(self) -> Optional[GameDataMap[int, TileStructure]]:
        """Tile type -> tile structure."""
        return self._slots[TILES]

    @property
    def objects(self) -> Optional[GameDataMap[int, ObjectStructure]]:
        """Object type -> object structure."""
        return self._slots[OBJECTS]

    @property
    def packets(self) -> Optional[GameDataMap[int, PacketStructure]]:
        """Packet id -> packet structure."""
        return self._slots[PACKETS]

    @property
    def servers(self) -> Optional[GameDataMap[str, ServerStructure]]:
        """Server abbreviation -> server structure (e.g. USW -> USWest)."""
        return self._slots[SERVERS]
