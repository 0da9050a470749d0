"""Serialization helpers for dungeon and character persistence."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from delve.core.types import DIRECTIONS
from delve.domain.dungeon import (
    ALLOWED_SIZES,
    OPPOSITE_DIRECTIONS,
    Dungeon,
    Hallways,
    Position,
    Room,
    RoomType,
)
from delve.domain.entities import Character, Enemy, Stats
from delve.domain.items import Item
from delve.services.errors import SaveLoadError

SAVE_VERSION = 1

SavePayload = Dict[str, Any]
_ITEM_KINDS = ("consumable", "equipment")


def serialize_dungeon(dungeon: Dungeon) -> SavePayload:
    """Return a JSON-serializable payload for the dungeon."""
    return {
        "save_version": SAVE_VERSION,
        "size": dungeon.size,
        "player": {"x": dungeon.player.x, "y": dungeon.player.y},
        "rooms": [[_serialize_room(room) for room in row] for row in dungeon.rooms],
    }


def deserialize_dungeon(payload: Mapping[str, Any]) -> Dungeon:
    """Rebuild a dungeon from a payload produced by ``serialize_dungeon``."""
    _require_version(payload)
    size = _require_int(payload.get("size"), "dungeon.size")
    if size not in ALLOWED_SIZES:
        raise SaveLoadError(f"dungeon.size {size} is not an allowed dungeon size.")
    raw_rows = _require_list(payload.get("rooms"), "dungeon.rooms")
    if len(raw_rows) != size:
        raise SaveLoadError("dungeon.rooms must contain one row per grid line.")
    rooms: List[List[Room]] = []
    for y, raw_row in enumerate(raw_rows):
        row = _require_list(raw_row, f"dungeon.rooms[{y}]")
        if len(row) != size:
            raise SaveLoadError(f"dungeon.rooms[{y}] must contain {size} rooms.")
        rooms.append([_deserialize_room(raw, Position(x, y)) for x, raw in enumerate(row)])
    player_payload = _require_dict(payload.get("player"), "dungeon.player")
    player = Position(
        _require_int(player_payload.get("x"), "dungeon.player.x"),
        _require_int(player_payload.get("y"), "dungeon.player.y"),
    )
    dungeon = Dungeon(size=size, rooms=rooms, player=player)
    if not dungeon.in_bounds(player):
        raise SaveLoadError("dungeon.player lies outside the grid.")
    _validate_layout(dungeon)
    return dungeon


def _validate_layout(dungeon: Dungeon) -> None:
    """Reject saves whose grid no longer matches what the generator builds."""
    start = Position(0, 0)
    bosses = [room.position for room in dungeon.rooms_of_type(RoomType.BOSS)]
    if bosses != [dungeon.center]:
        raise SaveLoadError("dungeon must have exactly one boss room at its center.")
    starts = [room.position for room in dungeon.rooms_of_type(RoomType.START)]
    if starts != [start]:
        raise SaveLoadError("dungeon must have exactly one start room at (0, 0).")
    for room in dungeon.iter_rooms():
        for direction in room.hallways.open_directions():
            neighbor = dungeon.neighbor_position(room.position, direction)
            if neighbor is None:
                raise SaveLoadError(
                    f"room({room.position.x}, {room.position.y}) has a hallway leading off the grid."
                )
            if not dungeon.room_at(neighbor).hallways.is_open(OPPOSITE_DIRECTIONS[direction]):
                raise SaveLoadError(
                    f"room({room.position.x}, {room.position.y}) hallway {direction} is one-sided."
                )
    if dungeon.hallway_edge_count() != dungeon.size * dungeon.size - 1 or not _all_reachable(dungeon, start):
        raise SaveLoadError("dungeon hallways must connect every room without loops.")


def _all_reachable(dungeon: Dungeon, origin: Position) -> bool:
    seen = {origin}
    frontier = [origin]
    while frontier:
        position = frontier.pop()
        for direction in dungeon.room_at(position).hallways.open_directions():
            neighbor = position.step(direction)
            if neighbor not in seen:
                seen.add(neighbor)
                frontier.append(neighbor)
    return len(seen) == dungeon.size * dungeon.size


def serialize_character(character: Character) -> SavePayload:
    """Return a JSON-serializable payload for the character."""
    return {
        "save_version": SAVE_VERSION,
        "name": character.name,
        "level": character.level,
        "xp": character.xp,
        "stats": _serialize_stats(character.stats),
        "inventory": [_serialize_item(item) for item in character.inventory],
    }


def deserialize_character(payload: Mapping[str, Any]) -> Character:
    """Rebuild a character from a payload produced by ``serialize_character``."""
    _require_version(payload)
    inventory = [
        _deserialize_item(_require_dict(raw, "character.inventory[]"))
        for raw in _require_list(payload.get("inventory", []), "character.inventory")
    ]
    level = _require_int(payload.get("level"), "character.level")
    if level < 1:
        raise SaveLoadError("character.level must be at least 1.")
    return Character(
        name=_require_str(payload.get("name"), "character.name"),
        level=level,
        xp=_require_int(payload.get("xp", 0), "character.xp"),
        stats=_deserialize_stats(_require_dict(payload.get("stats"), "character.stats")),
        inventory=inventory,
    )


def _serialize_room(room: Room) -> SavePayload:
    return {
        "type": room.type.value,
        "cleared": room.cleared,
        "discovered": room.discovered,
        "resolved": room.resolved,
        "hallways": {direction: room.hallways.is_open(direction) for direction in DIRECTIONS},
        "enemies": [
            {"name": enemy.name, "xp_reward": enemy.xp_reward, "stats": _serialize_stats(enemy.stats)}
            for enemy in room.enemies
        ],
    }


def _deserialize_room(raw: Any, position: Position) -> Room:
    context = f"room({position.x}, {position.y})"
    payload = _require_dict(raw, context)
    try:
        room_type = RoomType(payload.get("type"))
    except ValueError as exc:
        raise SaveLoadError(f"{context}.type is not a known room type.") from exc
    hallway_payload = _require_dict(payload.get("hallways"), f"{context}.hallways")
    hallways = Hallways(
        **{direction: _require_bool(hallway_payload.get(direction, False), f"{context}.hallways.{direction}")
           for direction in DIRECTIONS}
    )
    enemies = [
        Enemy(
            name=_require_str(enemy.get("name"), f"{context}.enemies[].name"),
            xp_reward=_require_int(enemy.get("xp_reward"), f"{context}.enemies[].xp_reward"),
            stats=_deserialize_stats(_require_dict(enemy.get("stats"), f"{context}.enemies[].stats")),
        )
        for enemy in (
            _require_dict(item, f"{context}.enemies[]")
            for item in _require_list(payload.get("enemies", []), f"{context}.enemies")
        )
    ]
    cleared = _require_bool(payload.get("cleared"), f"{context}.cleared")
    if cleared and enemies:
        raise SaveLoadError(f"{context} is cleared but still has enemies.")
    return Room(
        type=room_type,
        position=position,
        hallways=hallways,
        enemies=enemies,
        cleared=cleared,
        discovered=_require_bool(payload.get("discovered"), f"{context}.discovered"),
        resolved=_require_bool(payload.get("resolved", False), f"{context}.resolved"),
    )


def _serialize_stats(stats: Stats) -> SavePayload:
    return {"max_hp": stats.max_hp, "hp": stats.hp, "attack": stats.attack, "defense": stats.defense}


def _deserialize_stats(payload: Mapping[str, Any]) -> Stats:
    return Stats(
        max_hp=_require_int(payload.get("max_hp"), "stats.max_hp"),
        hp=_require_int(payload.get("hp"), "stats.hp"),
        attack=_require_int(payload.get("attack"), "stats.attack"),
        defense=_require_int(payload.get("defense"), "stats.defense"),
    )


def _serialize_item(item: Item) -> SavePayload:
    return {
        "name": item.name,
        "kind": item.kind,
        "rarity": item.rarity,
        "effect": item.effect,
        "potency": item.potency,
        "level": item.level,
        "description": item.description,
    }


def _deserialize_item(payload: Mapping[str, Any]) -> Item:
    kind = payload.get("kind")
    if kind not in _ITEM_KINDS:
        raise SaveLoadError(f"Invalid item kind: {kind}")
    return Item(
        name=_require_str(payload.get("name"), "item.name"),
        kind=kind,
        rarity=_require_str(payload.get("rarity"), "item.rarity"),
        effect=_require_str(payload.get("effect"), "item.effect"),
        potency=_require_int(payload.get("potency"), "item.potency"),
        level=_require_int(payload.get("level"), "item.level"),
        description=_require_str(payload.get("description", ""), "item.description"),
    )


def _require_version(payload: Any) -> None:
    if not isinstance(payload, Mapping):
        raise SaveLoadError("Save data must be a JSON object.")
    if payload.get("save_version") != SAVE_VERSION:
        raise SaveLoadError("Save format changed. Please start a new run.")


def _require_str(value: Any, context: str) -> str:
    if not isinstance(value, str):
        raise SaveLoadError(f"{context} must be a string.")
    return value


def _require_int(value: Any, context: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise SaveLoadError(f"{context} must be an integer.")
    return value


def _require_bool(value: Any, context: str) -> bool:
    if not isinstance(value, bool):
        raise SaveLoadError(f"{context} must be a boolean.")
    return value


def _require_list(value: Any, context: str) -> List[Any]:
    if not isinstance(value, list):
        raise SaveLoadError(f"{context} must be a list.")
    return value


def _require_dict(value: Any, context: str) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise SaveLoadError(f"{context} must be an object.")
    return dict(value)
