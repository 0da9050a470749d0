"""Procedural dungeon generation.

A dungeon is a square grid whose hallways form a spanning tree: every room is
reachable from the entrance and there are no loops. The tree is carved with a
randomized depth-first search rooted at the boss room in the middle of the
grid, so the boss always sits at the end of some branch the player must find.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Set, Tuple

from delve.core.rng import RNG
from delve.core.types import DIRECTIONS, Direction
from delve.domain.dungeon import (
    ALLOWED_SIZES,
    OPPOSITE_DIRECTIONS,
    Dungeon,
    Position,
    Room,
    RoomType,
)
from delve.domain.entities import Enemy
from delve.services.errors import DungeonConfigError
from delve.services.factories import create_enemy

logger = logging.getLogger(__name__)

BOSS_DIFFICULTY_OFFSET = 10
# Room kinds handed out to ordinary cells. Extend to add new room types.
RANDOM_ROOM_TYPES: Tuple[RoomType, ...] = (RoomType.ENEMY, RoomType.TRAP, RoomType.CHEST)

EnemyFactory = Callable[[int, RNG], Enemy]


def generate_dungeon(
    size: int,
    difficulty: int,
    rng: RNG,
    *,
    enemy_factory: EnemyFactory = create_enemy,
) -> Dungeon:
    """Build a fully connected, populated dungeon."""
    validate_generation_params(size, difficulty)
    dungeon = _allocate(size)
    _carve_hallways(dungeon, rng)
    _assign_room_types(dungeon, rng)
    _populate_enemies(dungeon, difficulty, rng, enemy_factory)
    for room in dungeon.iter_rooms():
        room.cleared = not room.enemies
    logger.info("Generated %sx%s dungeon at difficulty %s", size, size, difficulty)
    return dungeon


def validate_generation_params(size: int, difficulty: int) -> None:
    if isinstance(size, bool) or size not in ALLOWED_SIZES:
        allowed = ", ".join(str(value) for value in ALLOWED_SIZES)
        raise DungeonConfigError(f"Dungeon size must be one of {allowed}; got {size!r}.")
    if difficulty < 0:
        raise DungeonConfigError(f"Difficulty must not be negative; got {difficulty}.")


class MazeGenerator:
    """Binds a random source so callers only pass size and difficulty."""

    def __init__(self, rng: RNG, *, enemy_factory: EnemyFactory = create_enemy) -> None:
        self._rng = rng
        self._enemy_factory = enemy_factory

    def generate(self, size: int, difficulty: int) -> Dungeon:
        return generate_dungeon(size, difficulty, self._rng, enemy_factory=self._enemy_factory)


def _allocate(size: int) -> Dungeon:
    rooms = [
        [Room(type=RoomType.EMPTY, position=Position(x, y)) for x in range(size)]
        for y in range(size)
    ]
    dungeon = Dungeon(size=size, rooms=rooms, player=Position(0, 0))
    dungeon.room_at(dungeon.center).type = RoomType.BOSS
    start = dungeon.room_at(Position(0, 0))
    start.type = RoomType.START
    start.resolved = True
    start.discover()
    return dungeon


def _carve_hallways(dungeon: Dungeon, rng: RNG) -> None:
    """Randomized depth-first carve starting from the boss room.

    Uses an explicit stack of (cell, remaining directions) frames; the visiting
    order matches the recursive formulation exactly.
    """
    visited: Set[Position] = set()
    stack: List[Tuple[Position, Iterator[Direction]]] = []

    def visit(position: Position) -> None:
        visited.add(position)
        directions = list(DIRECTIONS)
        rng.shuffle(directions)
        stack.append((position, iter(directions)))

    visit(dungeon.center)
    while stack:
        position, directions = stack[-1]
        direction = next(directions, None)
        if direction is None:
            stack.pop()
            continue
        neighbor = dungeon.neighbor_position(position, direction)
        if neighbor is None or neighbor in visited:
            continue
        dungeon.room_at(position).hallways.open(direction)
        dungeon.room_at(neighbor).hallways.open(OPPOSITE_DIRECTIONS[direction])
        visit(neighbor)


def _assign_room_types(dungeon: Dungeon, rng: RNG) -> None:
    for room in dungeon.iter_rooms():
        if room.type is RoomType.EMPTY:
            room.type = rng.choice(RANDOM_ROOM_TYPES)


def _populate_enemies(dungeon: Dungeon, difficulty: int, rng: RNG, enemy_factory: EnemyFactory) -> None:
    for room in dungeon.iter_rooms():
        if room.type is RoomType.ENEMY:
            room.enemies = [enemy_factory(difficulty, rng)]
        elif room.type is RoomType.BOSS:
            room.enemies = [enemy_factory(difficulty + BOSS_DIFFICULTY_OFFSET, rng)]
        else:
            room.enemies = []
