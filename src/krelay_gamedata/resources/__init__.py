"""
Resources for krelay-gamedata.

Provides access to the game data documents bundled with the package. They
are the last-resort source for every dataset that ships with the program.
"""

from functools import lru_cache
from importlib import resources as importlib_resources
from typing import Tuple

EMBEDDED_DOCUMENTS: Tuple[str, ...] = ("Objects.xml", "Tiles.xml", "Packets.xml")


@lru_cache(maxsize=None)
def get_embedded_document(name: str) -> bytes:
    """Return the raw bytes of a bundled document.

    Payloads are read once and cached, datasets sharing a document (items
    and objects both come from Objects.xml) reuse the same bytes.

    Raises:
        FileNotFoundError: If no such document is bundled
    """
    if name not in EMBEDDED_DOCUMENTS:
        raise FileNotFoundError(f"No embedded document named {name!r}")
    return importlib_resources.files(__name__).joinpath(name).read_bytes()
