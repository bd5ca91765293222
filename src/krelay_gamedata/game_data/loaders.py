"""
Decoders that turn parsed XML documents into keyed record dictionaries.

Each `load_*` function is pure: it takes the root element of an already
parsed document and returns a dict of short identifier -> record, in
document order. Missing optional elements fall back to the model defaults.
Duplicate identifiers keep the later record.
"""

import re
from typing import Callable, Dict, Optional, Tuple, TypeVar
from xml.etree.ElementTree import Element

from .models import (
    ItemStructure,
    ObjectStructure,
    PacketStructure,
    ProjectileStructure,
    ServerStructure,
    TileStructure,
)

T = TypeVar("T")


class DecodeError(ValueError):
    """Raised when a document does not have the expected shape."""


# =============================================================================
# Element helpers
# =============================================================================


def _expect_root(document: Element, tag: str) -> None:
    if document.tag != tag:
        raise DecodeError(f"Expected <{tag}> root element, got <{document.tag}>")


def _convert(element: Element, field: str, raw: str, convert: Callable[[str], T]) -> T:
    try:
        return convert(raw.strip())
    except ValueError as e:
        ident = element.get("id") or element.findtext("Name") or element.tag
        raise DecodeError(f"Invalid {field} {raw!r} in {ident}: {e}") from e


def _parse_int(raw: str) -> int:
    """Parse decimal or 0x-prefixed hexadecimal integers."""
    return int(raw, 0) if raw.lower().startswith(("0x", "-0x")) else int(raw)


def _parse_bool(raw: str) -> bool:
    value = raw.lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no", ""):
        return False
    raise ValueError("not a boolean")


def _hex_attr(element: Element, name: str) -> int:
    """Unsigned 16-bit hex attribute, e.g. `type="0x0a16"`."""
    raw = element.get(name)
    if raw is None:
        raise DecodeError(f"<{element.tag} id={element.get('id')!r}> has no '{name}' attribute")
    value = _convert(element, name, raw, lambda s: int(s, 16))
    if not 0 <= value <= 0xFFFF:
        raise DecodeError(
            f"<{element.tag} id={element.get('id')!r}> has {name} {raw!r} outside 0x0000-0xffff"
        )
    return value


def _text(element: Element, tag: str, default: str = "") -> str:
    value = element.findtext(tag)
    return value.strip() if value is not None else default


def _int(element: Element, tag: str, default: int) -> int:
    raw = element.findtext(tag)
    if raw is None or not raw.strip():
        return default
    return _convert(element, tag, raw, _parse_int)


def _float(element: Element, tag: str, default: float) -> float:
    raw = element.findtext(tag)
    if raw is None or not raw.strip():
        return default
    return _convert(element, tag, raw, float)


def _flag(element: Element, tag: str) -> bool:
    """Presence flags such as `<NoWalk/>`."""
    return element.find(tag) is not None


def _projectiles(element: Element) -> Tuple[ProjectileStructure, ...]:
    projectiles = []
    for proj in element.iterfind("Projectile"):
        raw_id = proj.get("id", "0")
        projectiles.append(
            ProjectileStructure(
                id=_convert(proj, "id", raw_id, _parse_int),
                name=_text(proj, "ObjectId"),
                speed=_float(proj, "Speed", 0.0),
                min_damage=_int(proj, "MinDamage", _int(proj, "Damage", 0)),
                max_damage=_int(proj, "MaxDamage", _int(proj, "Damage", 0)),
                lifetime=_int(proj, "LifetimeMS", 0),
                multi_hit=_flag(proj, "MultiHit"),
                passes_cover=_flag(proj, "PassesCover"),
                armor_piercing=_flag(proj, "ArmorPiercing"),
            )
        )
    return tuple(projectiles)


# =============================================================================
# Dataset decoders
# =============================================================================


def load_items(document: Element) -> Dict[int, ItemStructure]:
    """Decode items: every `<Object>` of Objects.xml marked with `<Item/>`."""
    _expect_root(document, "Objects")

    items: Dict[int, ItemStructure] = {}
    for obj in document.iterfind("Object"):
        if not _flag(obj, "Item"):
            continue
        item = ItemStructure(
            id=_hex_attr(obj, "type"),
            name=obj.get("id", ""),
            slot_type=_int(obj, "SlotType", 0),
            tier=_int(obj, "Tier", -1),
            description=_text(obj, "Description"),
            rate_of_fire=_float(obj, "RateOfFire", 1.0),
            usable=_flag(obj, "Usable"),
            bag_type=_int(obj, "BagType", 0),
            mp_cost=_int(obj, "MpCost", 0),
            fame_bonus=_int(obj, "FameBonus", 0),
            num_projectiles=_int(obj, "NumProjectiles", 1),
            arc_gap=_float(obj, "ArcGap", 11.25),
            consumable=_flag(obj, "Consumable"),
            potion=_flag(obj, "Potion"),
            display_id=_text(obj, "DisplayId", obj.get("id", "")),
            doses=_int(obj, "Doses", 0),
            soulbound=_flag(obj, "Soulbound"),
            cooldown=_float(obj, "Cooldown", 0.5),
            projectiles=_projectiles(obj),
        )
        items[item.id] = item
    return items


def load_objects(document: Element) -> Dict[int, ObjectStructure]:
    """Decode every `<Object>` of Objects.xml (items included)."""
    _expect_root(document, "Objects")

    objects: Dict[int, ObjectStructure] = {}
    for obj in document.iterfind("Object"):
        structure = ObjectStructure(
            id=_hex_attr(obj, "type"),
            name=obj.get("id", ""),
            object_class=_text(obj, "Class"),
            max_hp=_int(obj, "MaxHitPoints", 0),
            xp_mult=_float(obj, "XpMult", 0.0),
            static=_flag(obj, "Static"),
            occupy_square=_flag(obj, "OccupySquare"),
            enemy_occupy_square=_flag(obj, "EnemyOccupySquare"),
            full_occupy=_flag(obj, "FullOccupy"),
            blocks_sight=_flag(obj, "BlocksSight"),
            enemy=_flag(obj, "Enemy"),
            player=_flag(obj, "Player"),
            god=_flag(obj, "God"),
            flying=_flag(obj, "Flying"),
            show_name=_flag(obj, "ShowName"),
            defense=_int(obj, "Defense", 0),
            size=_int(obj, "Size", 100),
            projectiles=_projectiles(obj),
        )
        objects[structure.id] = structure
    return objects


def load_tiles(document: Element) -> Dict[int, TileStructure]:
    """Decode `<Ground>` entries of Tiles.xml."""
    _expect_root(document, "GroundTypes")

    tiles: Dict[int, TileStructure] = {}
    for ground in document.iterfind("Ground"):
        tile = TileStructure(
            id=_hex_attr(ground, "type"),
            name=ground.get("id", ""),
            no_walk=_flag(ground, "NoWalk"),
            min_damage=_int(ground, "MinDamage", 0),
            max_damage=_int(ground, "MaxDamage", 0),
            speed=_float(ground, "Speed", 1.0),
            sink=_flag(ground, "Sink"),
            push=_flag(ground, "Push"),
        )
        tiles[tile.id] = tile
    return tiles


def load_packets(document: Element) -> Dict[int, PacketStructure]:
    """Decode `<Packet>` entries of Packets.xml."""
    _expect_root(document, "Packets")

    packets: Dict[int, PacketStructure] = {}
    for element in document.iterfind("Packet"):
        packet_id = _int(element, "PacketID", -1)
        if not 0 <= packet_id <= 255:
            raise DecodeError(
                f"Packet {_text(element, 'PacketName')!r} has id {packet_id} outside 0-255"
            )
        packet = PacketStructure(id=packet_id, name=_text(element, "PacketName"))
        packets[packet.id] = packet
    return packets


def server_abbreviation(name: str) -> str:
    """Short server name: USWest -> USW, EUSouthWest -> EUSW, Australia -> AUS."""
    abbreviation = "".join(re.findall(r"[A-Z0-9]", name))
    if len(abbreviation) < 2:
        return name[:3].upper()
    return abbreviation


def load_servers(document: Element) -> Dict[str, ServerStructure]:
    """Decode the `<Servers>` block of a char list document."""
    _expect_root(document, "Chars")

    servers_element: Optional[Element] = document.find("Servers")
    if servers_element is None:
        raise DecodeError("Char list has no <Servers> element")

    servers: Dict[str, ServerStructure] = {}
    for element in servers_element.iterfind("Server"):
        name = _text(element, "Name")
        server = ServerStructure(
            id=server_abbreviation(name),
            name=name,
            address=_text(element, "DNS"),
            latitude=_float(element, "Lat", 0.0),
            longitude=_float(element, "Long", 0.0),
            usage=_float(element, "Usage", 0.0),
            admin_only=_convert(element, "AdminOnly", _text(element, "AdminOnly"), _parse_bool),
        )
        servers[server.id] = server
    return servers
