"""Dungeon grid models."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Tuple

from delve.core.types import DIRECTIONS, Direction
from delve.domain.entities import Enemy

ALLOWED_SIZES: Tuple[int, ...] = (3, 5, 7, 9, 11)

# (dx, dy) per direction; north is towards row 0.
DIRECTION_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    "north": (0, -1),
    "east": (1, 0),
    "south": (0, 1),
    "west": (-1, 0),
}

OPPOSITE_DIRECTIONS: Dict[Direction, Direction] = {
    "north": "south",
    "east": "west",
    "south": "north",
    "west": "east",
}


class RoomType(str, Enum):
    START = "start"
    EMPTY = "empty"
    TRAP = "trap"
    ENEMY = "enemy"
    CHEST = "chest"
    BOSS = "boss"


@dataclass(frozen=True, slots=True)
class Position:
    """Grid coordinate, 0-indexed from the north-west corner."""

    x: int
    y: int

    def step(self, direction: Direction) -> Position:
        dx, dy = DIRECTION_OFFSETS[direction]
        return Position(self.x + dx, self.y + dy)


@dataclass(slots=True)
class Hallways:
    """Open connections leading out of a room."""

    north: bool = False
    east: bool = False
    south: bool = False
    west: bool = False

    def is_open(self, direction: Direction) -> bool:
        return bool(getattr(self, direction))

    def open(self, direction: Direction) -> None:
        setattr(self, direction, True)

    def open_directions(self) -> Tuple[Direction, ...]:
        return tuple(direction for direction in DIRECTIONS if self.is_open(direction))


@dataclass(slots=True)
class Room:
    """One cell of the dungeon grid."""

    type: RoomType
    position: Position
    hallways: Hallways = field(default_factory=Hallways)
    enemies: List[Enemy] = field(default_factory=list)
    cleared: bool = False
    discovered: bool = False
    # One-time interaction (search, chest, fight) has been played out.
    resolved: bool = False

    def discover(self) -> None:
        self.discovered = True

    def clear(self) -> None:
        self.enemies = []
        self.cleared = True
        self.resolved = True


@dataclass(slots=True)
class Dungeon:
    """A generated level. Rooms are indexed as ``rooms[y][x]``."""

    size: int
    rooms: List[List[Room]]
    player: Position = field(default_factory=lambda: Position(0, 0))

    @property
    def center(self) -> Position:
        return Position(self.size // 2, self.size // 2)

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.x < self.size and 0 <= position.y < self.size

    def room_at(self, position: Position) -> Room:
        if not self.in_bounds(position):
            raise IndexError(f"Position ({position.x}, {position.y}) is outside the dungeon.")
        return self.rooms[position.y][position.x]

    def current_room(self) -> Room:
        return self.room_at(self.player)

    def neighbor_position(self, position: Position, direction: Direction) -> Position | None:
        target = position.step(direction)
        return target if self.in_bounds(target) else None

    def open_directions(self, position: Position | None = None) -> Tuple[Direction, ...]:
        room = self.room_at(position or self.player)
        return room.hallways.open_directions()

    def iter_rooms(self) -> Iterator[Room]:
        for row in self.rooms:
            yield from row

    def hallway_edge_count(self) -> int:
        """Count undirected hallway edges (east and south flags only)."""
        return sum(
            int(room.hallways.east) + int(room.hallways.south) for room in self.iter_rooms()
        )

    def rooms_of_type(self, room_type: RoomType) -> List[Room]:
        return [room for room in self.iter_rooms() if room.type is room_type]
