"""Collaborator protocols consumed by the dungeon engine.

The engine never prints or reads input itself. Presentation layers implement
these protocols; tests substitute small fakes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol, Sequence

from delve.core.types import Direction
from delve.domain.dungeon import Dungeon
from delve.domain.entities import Character, Enemy
from delve.domain.items import Item

if TYPE_CHECKING:
    from delve.services.room_resolver import RoomEvent, RoomView

BackOut = Literal["back_out"]
BACK_OUT: BackOut = "back_out"


@dataclass(slots=True)
class CombatResult:
    """Outcome of one fight. Neither flag set means the character was defeated."""

    success: bool
    fled: bool = False


class CombatResolver(Protocol):
    def __call__(self, character: Character, enemy: Enemy) -> CombatResult: ...


class ItemGenerator(Protocol):
    def __call__(self, level: int) -> Item: ...


class DungeonRenderer(Protocol):
    def __call__(self, dungeon: Dungeon) -> None: ...


class MovementPrompter(Protocol):
    def prompt_movement(
        self, available: Sequence[Direction], allow_back_out: bool
    ) -> Direction | BackOut: ...

    def confirm_back_out(self) -> bool: ...

    def show_events(self, events: Sequence["RoomEvent"]) -> None: ...


class RoomPrompter(Protocol):
    def ask_inspect(self, view: "RoomView") -> bool: ...

    def confirm_fight(self, view: "RoomView") -> None: ...

    def reveal_chest(self, view: "RoomView", item: Item | None) -> None: ...


class CharacterStore(Protocol):
    def load(self) -> Character | None: ...

    def save(self, character: Character) -> None: ...


class DungeonStore(Protocol):
    def load(self) -> Dungeon | None: ...

    def save(self, dungeon: Dungeon) -> None: ...

    def clear(self) -> None: ...
