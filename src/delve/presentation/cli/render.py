"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
from typing import Dict, Iterable, List, Sequence

from delve.domain.dungeon import Dungeon, Position, Room, RoomType

PLAYER_GLYPH = "@"
SEEN_GLYPH = "#"
FOG_GLYPH = " "
RESOLVED_GLYPH = "."

ROOM_GLYPHS: Dict[RoomType, str] = {
    RoomType.START: "S",
    RoomType.EMPTY: ".",
    RoomType.TRAP: "T",
    RoomType.ENEMY: "E",
    RoomType.CHEST: "C",
    RoomType.BOSS: "B",
}

LEGEND: Sequence[tuple[str, str]] = (
    (PLAYER_GLYPH, "You"),
    ("S", "Entrance"),
    ("E", "Enemy"),
    ("C", "Chest"),
    ("B", "Boss"),
    (SEEN_GLYPH, "Unexplored"),
)


def debug_enabled() -> bool:
    """Return True only when DELVE_DEBUG is explicitly set to '1'."""
    return os.getenv("DELVE_DEBUG") == "1"


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_bullet_lines(lines: Iterable[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        print(f"- {line}")


def is_visible(dungeon: Dungeon, position: Position) -> bool:
    """A room is visible once discovered or when a hallway leads to it from a discovered room."""
    room = dungeon.room_at(position)
    if room.discovered:
        return True
    for direction in room.hallways.open_directions():
        neighbor = dungeon.neighbor_position(position, direction)
        if neighbor is not None and dungeon.room_at(neighbor).discovered:
            return True
    return False


def room_glyph(dungeon: Dungeon, room: Room, *, reveal_all: bool = False) -> str:
    if room.position == dungeon.player:
        return PLAYER_GLYPH
    if reveal_all:
        return ROOM_GLYPHS[room.type]
    if not room.discovered:
        return SEEN_GLYPH if is_visible(dungeon, room.position) else FOG_GLYPH
    if room.type is RoomType.START:
        return ROOM_GLYPHS[RoomType.START]
    if room.type is RoomType.TRAP or room.resolved:
        return RESOLVED_GLYPH
    return ROOM_GLYPHS[room.type]


def render_dungeon_map(dungeon: Dungeon, *, reveal_all: bool = False) -> str:
    """Draw the dungeon as text, one glyph per room with hallway connectors.

    Hallways are drawn only when at least one of their rooms is discovered, so
    the fog hides the shape of unexplored branches.
    """
    width = dungeon.size * 2 - 1
    lines: List[str] = ["+" + "-" * (width + 2) + "+"]
    for y, row in enumerate(dungeon.rooms):
        cells: List[str] = []
        below: List[str] = []
        for x, room in enumerate(row):
            cells.append(room_glyph(dungeon, room, reveal_all=reveal_all))
            if x < dungeon.size - 1:
                east = dungeon.rooms[y][x + 1]
                cells.append("-" if _hallway_visible(room, east, "east", reveal_all) else " ")
            if y < dungeon.size - 1:
                south = dungeon.rooms[y + 1][x]
                below.append("|" if _hallway_visible(room, south, "south", reveal_all) else " ")
                if x < dungeon.size - 1:
                    below.append(" ")
        lines.append("| " + "".join(cells) + " |")
        if below:
            lines.append("| " + "".join(below) + " |")
    lines.append("+" + "-" * (width + 2) + "+")
    return "\n".join(lines)


def render_dungeon(dungeon: Dungeon) -> None:
    """Print the map, the player's coordinates and a legend."""
    render_heading("Dungeon")
    print(render_dungeon_map(dungeon, reveal_all=debug_enabled()))
    print(f"Position: ({dungeon.player.x}, {dungeon.player.y})")
    print("  ".join(f"{glyph} {label}" for glyph, label in LEGEND))


def _hallway_visible(room: Room, neighbor: Room, direction: str, reveal_all: bool) -> bool:
    if not room.hallways.is_open(direction):
        return False
    return reveal_all or room.discovered or neighbor.discovered
