"""
Module for loading game definition data.

Loads items, tiles, objects, packets and the server list concurrently,
each through its own chain of fallback sources, into immutable lookup
tables published on a registry.
"""

from .service import GameDataService, DatasetSpec, LoadError, LoadReport, default_datasets
from .registry import GameDataRegistry
from .store import GameDataMap, KeyNotFoundError
from .sources import (
    DocumentSource,
    LocalFileSource,
    CachedFileSource,
    EmbeddedSource,
    RemoteSource,
    SourceResolver,
    ResolvedDocument,
    SourceError,
    ExhaustedChainError,
)
from .loaders import (
    DecodeError,
    load_items,
    load_tiles,
    load_objects,
    load_packets,
    load_servers,
)
from .models import (
    DataStructure,
    ItemStructure,
    ObjectStructure,
    TileStructure,
    PacketStructure,
    ServerStructure,
    ProjectileStructure,
    DATASET_NAMES,
    ITEMS,
    TILES,
    OBJECTS,
    PACKETS,
    SERVERS,
)

# Public exports
__all__ = [
    # Main service
    "GameDataService",
    "DatasetSpec",
    "LoadError",
    "LoadReport",
    "default_datasets",
    # Lookup tables
    "GameDataRegistry",
    "GameDataMap",
    "KeyNotFoundError",
    # Sources
    "DocumentSource",
    "LocalFileSource",
    "CachedFileSource",
    "EmbeddedSource",
    "RemoteSource",
    "SourceResolver",
    "ResolvedDocument",
    "SourceError",
    "ExhaustedChainError",
    # Decoders
    "DecodeError",
    "load_items",
    "load_tiles",
    "load_objects",
    "load_packets",
    "load_servers",
    # Models
    "DataStructure",
    "ItemStructure",
    "ObjectStructure",
    "TileStructure",
    "PacketStructure",
    "ServerStructure",
    "ProjectileStructure",
    # Constants
    "DATASET_NAMES",
    "ITEMS",
    "TILES",
    "OBJECTS",
    "PACKETS",
    "SERVERS",
]
