"""
Data models for game definition records.

Every record is an immutable dataclass exposing a short identifier (`id`)
and a display name (`name`), which is all the lookup tables rely on.
Models carry no parsing or I/O logic; see `loaders` for that.
"""

from dataclasses import dataclass
from typing import Hashable, Protocol, Tuple, TypeVar

K_co = TypeVar("K_co", bound=Hashable, covariant=True)


class DataStructure(Protocol[K_co]):
    """Capability required from any value stored in a GameDataMap."""

    @property
    def id(self) -> K_co: ...

    @property
    def name(self) -> str: ...


# Dataset names, also used as registry slot names
ITEMS = "Items"
TILES = "Tiles"
OBJECTS = "Objects"
PACKETS = "Packets"
SERVERS = "Servers"

DATASET_NAMES: Tuple[str, ...] = (ITEMS, TILES, OBJECTS, PACKETS, SERVERS)


@dataclass(frozen=True)
class ProjectileStructure:
    """Projectile fired by an item or an object."""

    id: int
    name: str
    speed: float = 0.0
    min_damage: int = 0
    max_damage: int = 0
    lifetime: int = 0
    multi_hit: bool = False
    passes_cover: bool = False
    armor_piercing: bool = False


@dataclass(frozen=True)
class ItemStructure:
    """Item definition (an `<Object>` that carries an `<Item/>` marker)."""

    id: int
    name: str
    slot_type: int = 0
    tier: int = -1
    description: str = ""
    rate_of_fire: float = 1.0
    usable: bool = False
    bag_type: int = 0
    mp_cost: int = 0
    fame_bonus: int = 0
    num_projectiles: int = 1
    arc_gap: float = 11.25
    consumable: bool = False
    potion: bool = False
    display_id: str = ""
    doses: int = 0
    soulbound: bool = False
    cooldown: float = 0.5
    projectiles: Tuple[ProjectileStructure, ...] = ()

    def __str__(self) -> str:
        return f"Item: {self.name} (0x{self.id:x})"


@dataclass(frozen=True)
class ObjectStructure:
    """Object definition: enemies, players, walls, portals, containers..."""

    id: int
    name: str
    object_class: str = ""
    max_hp: int = 0
    xp_mult: float = 0.0
    static: bool = False
    occupy_square: bool = False
    enemy_occupy_square: bool = False
    full_occupy: bool = False
    blocks_sight: bool = False
    enemy: bool = False
    player: bool = False
    god: bool = False
    flying: bool = False
    show_name: bool = False
    defense: int = 0
    size: int = 100
    projectiles: Tuple[ProjectileStructure, ...] = ()

    def __str__(self) -> str:
        return f"Object: {self.name} (0x{self.id:x})"


@dataclass(frozen=True)
class TileStructure:
    """Ground tile definition."""

    id: int
    name: str
    no_walk: bool = False
    min_damage: int = 0
    max_damage: int = 0
    speed: float = 1.0
    sink: bool = False
    push: bool = False

    def __str__(self) -> str:
        return f"Tile: {self.name} (0x{self.id:x})"


@dataclass(frozen=True)
class PacketStructure:
    """Network packet descriptor (wire id -> packet name)."""

    id: int
    name: str

    def __str__(self) -> str:
        return f"Packet: {self.name} ({self.id})"


@dataclass(frozen=True)
class ServerStructure:
    """Game server entry from the remote server list, keyed by abbreviation."""

    id: str
    name: str
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    usage: float = 0.0
    admin_only: bool = False

    def __str__(self) -> str:
        return f"Server: {self.name}/{self.id}"
