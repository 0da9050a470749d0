"""Owns the active dungeon and the player's position in it."""
from __future__ import annotations

import logging
from typing import Callable

from delve.core.types import DIRECTIONS, Direction
from delve.domain.dungeon import Dungeon, Position
from delve.services.errors import InvalidMoveError
from delve.services.interfaces import DungeonStore

logger = logging.getLogger(__name__)

DungeonFactory = Callable[[int], Dungeon]


class DungeonSession:
    """Session-scoped handle around a single cached dungeon.

    The dungeon is generated lazily on first use and reused until ``renew`` is
    called. When a store is attached every mutation is written through so an
    interrupted run resumes where it stopped.
    """

    def __init__(self, factory: DungeonFactory, *, store: DungeonStore | None = None) -> None:
        self._factory = factory
        self._store = store
        self._dungeon: Dungeon | None = None

    @property
    def dungeon(self) -> Dungeon | None:
        return self._dungeon

    @property
    def has_dungeon(self) -> bool:
        return self._dungeon is not None

    def get_or_create(self, difficulty: int) -> Dungeon:
        """Return the in-progress dungeon, generating one if needed."""
        if self._dungeon is not None:
            return self._dungeon
        if self._store is not None:
            restored = self._store.load()
            if restored is not None:
                logger.info("Resumed saved dungeon (size %s)", restored.size)
                self._dungeon = restored
                return restored
        dungeon = self._factory(difficulty)
        self._dungeon = dungeon
        self._persist()
        return dungeon

    def move_player(self, direction: Direction) -> Position:
        """Walk one room through an open hallway and reveal the destination."""
        dungeon = self._require_dungeon()
        if direction not in DIRECTIONS:
            logger.error("Rejected move in unknown direction %r", direction)
            raise InvalidMoveError(f"Unknown direction: {direction!r}.")
        if not dungeon.current_room().hallways.is_open(direction):
            logger.error(
                "Rejected move %s from (%s, %s): no hallway",
                direction,
                dungeon.player.x,
                dungeon.player.y,
            )
            raise InvalidMoveError(f"There is no hallway leading {direction}.")
        destination = dungeon.player.step(direction)
        room = dungeon.room_at(destination)
        dungeon.player = destination
        room.discover()
        self._persist()
        return destination

    def renew(self) -> None:
        """Forget the current dungeon so the next run generates a new one."""
        self._dungeon = None
        if self._store is not None:
            self._store.clear()
        logger.info("Dungeon renewed")

    def save(self) -> None:
        """Write the current dungeon to the attached store, if any."""
        self._persist()

    def _persist(self) -> None:
        if self._store is not None and self._dungeon is not None:
            self._store.save(self._dungeon)

    def _require_dungeon(self) -> Dungeon:
        if self._dungeon is None:
            raise InvalidMoveError("No dungeon is active; call get_or_create first.")
        return self._dungeon
