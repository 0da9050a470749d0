"""Service layer exports."""

from .dungeon_session import DungeonSession
from .errors import DelveError, DungeonConfigError, InvalidMoveError, SaveLoadError
from .exploration_loop import ExplorationLoop
from .interfaces import BACK_OUT, CombatResult
from .maze_generator import MazeGenerator, generate_dungeon
from .room_resolver import (
    BossDefeatedEvent,
    CombatResolvedEvent,
    ItemFoundEvent,
    NothingFoundEvent,
    RoomEvent,
    RoomResolution,
    RoomResolver,
    RoomView,
    TrapTriggeredEvent,
)

__all__ = [
    "BACK_OUT",
    "BossDefeatedEvent",
    "CombatResolvedEvent",
    "CombatResult",
    "DelveError",
    "DungeonConfigError",
    "DungeonSession",
    "ExplorationLoop",
    "InvalidMoveError",
    "ItemFoundEvent",
    "MazeGenerator",
    "NothingFoundEvent",
    "RoomEvent",
    "RoomResolution",
    "RoomResolver",
    "RoomView",
    "SaveLoadError",
    "TrapTriggeredEvent",
    "generate_dungeon",
]
