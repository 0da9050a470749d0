"""Resolves what happens when the player walks into a room."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from delve.core.rng import RNG
from delve.core.types import RoomOutcome
from delve.domain.dungeon import Position, Room, RoomType
from delve.domain.entities import Character
from delve.domain.items import Item
from delve.services.dungeon_session import DungeonSession
from delve.services.interfaces import (
    CharacterStore,
    CombatResolver,
    CombatResult,
    ItemGenerator,
    RoomPrompter,
)

logger = logging.getLogger(__name__)

EMPTY_ROOM_FIND_CHANCE = 0.25
EMPTY_ROOM_ITEM_LEVEL = 1
TRAP_SAFE_CHANCE = 0.25
COMBAT_ROOM_TYPES = (RoomType.ENEMY, RoomType.BOSS)


@dataclass(slots=True)
class RoomView:
    """What the player is allowed to know about the room they entered.

    Traps masquerade as empty rooms until they spring.
    """

    apparent_type: RoomType
    position: Position
    enemy_name: str | None = None
    enemy_hp: int | None = None


@dataclass(slots=True)
class RoomEvent:
    """Base class for room resolution events."""


@dataclass(slots=True)
class NothingFoundEvent(RoomEvent):
    pass


@dataclass(slots=True)
class ItemFoundEvent(RoomEvent):
    item: Item
    source: str


@dataclass(slots=True)
class TrapTriggeredEvent(RoomEvent):
    position: Position


@dataclass(slots=True)
class CombatResolvedEvent(RoomEvent):
    enemy_name: str
    success: bool
    fled: bool


@dataclass(slots=True)
class BossDefeatedEvent(RoomEvent):
    enemy_name: str


@dataclass(slots=True)
class RoomResolution:
    """Return payload from entering a room."""

    outcome: RoomOutcome
    events: List[RoomEvent] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.outcome != "cleared"


class RoomResolver:
    """State machine keyed by room type.

    A room is only marked cleared after its interaction finished, so an
    exception raised by a collaborator leaves the room untouched.
    """

    def __init__(
        self,
        *,
        session: DungeonSession,
        combat: CombatResolver,
        item_generator: ItemGenerator,
        prompter: RoomPrompter,
        rng: RNG,
        character_store: CharacterStore | None = None,
    ) -> None:
        self._session = session
        self._combat = combat
        self._item_generator = item_generator
        self._prompter = prompter
        self._rng = rng
        self._character_store = character_store

    def resolve(self, room: Room, character: Character) -> RoomResolution:
        if _already_resolved(room):
            return RoomResolution(outcome="cleared")
        logger.debug(
            "Entering %s room at (%s, %s)", room.type.value, room.position.x, room.position.y
        )
        if room.type is RoomType.EMPTY:
            return self._resolve_empty(room, character)
        if room.type is RoomType.TRAP:
            return self._resolve_trap(room)
        if room.type is RoomType.CHEST:
            return self._resolve_chest(room, character)
        if room.type is RoomType.ENEMY:
            return self._resolve_enemy(room, character)
        if room.type is RoomType.BOSS:
            return self._resolve_boss(room, character)
        raise ValueError(f"Unsupported room type: {room.type!r}")

    def _resolve_empty(self, room: Room, character: Character) -> RoomResolution:
        events: List[RoomEvent] = []
        if self._prompter.ask_inspect(self._build_view(room)):
            if self._rng.chance(EMPTY_ROOM_FIND_CHANCE):
                item = self._grant_item(character, EMPTY_ROOM_ITEM_LEVEL)
                events.append(ItemFoundEvent(item=item, source="search"))
            else:
                events.append(NothingFoundEvent())
        room.clear()
        return RoomResolution(outcome="cleared", events=events)

    def _resolve_trap(self, room: Room) -> RoomResolution:
        events: List[RoomEvent] = []
        if self._prompter.ask_inspect(self._build_view(room)):
            if self._rng.chance(TRAP_SAFE_CHANCE):
                events.append(NothingFoundEvent())
            else:
                logger.info("Trap sprung at (%s, %s)", room.position.x, room.position.y)
                self._session.renew()
                return RoomResolution(outcome="fled", events=[TrapTriggeredEvent(position=room.position)])
        room.clear()
        return RoomResolution(outcome="cleared", events=events)

    def _resolve_chest(self, room: Room, character: Character) -> RoomResolution:
        view = self._build_view(room)
        self._prompter.reveal_chest(view, None)
        item = self._grant_item(character, character.level)
        self._prompter.reveal_chest(view, item)
        room.clear()
        return RoomResolution(outcome="cleared", events=[ItemFoundEvent(item=item, source="chest")])

    def _resolve_enemy(self, room: Room, character: Character) -> RoomResolution:
        result, event = self._fight(room, character)
        if result.success:
            room.clear()
            return RoomResolution(outcome="cleared", events=[event])
        return RoomResolution(outcome="fled" if result.fled else "died", events=[event])

    def _resolve_boss(self, room: Room, character: Character) -> RoomResolution:
        result, event = self._fight(room, character)
        if result.success:
            room.clear()
            logger.info("Boss %s defeated", event.enemy_name)
            self._session.renew()
            return RoomResolution(
                outcome="completed",
                events=[event, BossDefeatedEvent(enemy_name=event.enemy_name)],
            )
        return RoomResolution(outcome="fled" if result.fled else "died", events=[event])

    def _fight(self, room: Room, character: Character) -> tuple[CombatResult, CombatResolvedEvent]:
        if not room.enemies:
            raise ValueError(
                f"{room.type.value.title()} room at ({room.position.x}, {room.position.y}) has no enemy."
            )
        enemy = room.enemies[0]
        self._prompter.confirm_fight(self._build_view(room))
        result = self._combat(character, enemy)
        if self._character_store is not None:
            self._character_store.save(character)
        event = CombatResolvedEvent(enemy_name=enemy.name, success=result.success, fled=result.fled)
        return result, event

    def _grant_item(self, character: Character, level: int) -> Item:
        item = self._item_generator(level)
        character.add_item(item)
        if self._character_store is not None:
            self._character_store.save(character)
        return item

    @staticmethod
    def _build_view(room: Room) -> RoomView:
        apparent = RoomType.EMPTY if room.type is RoomType.TRAP else room.type
        enemy = room.enemies[0] if room.enemies else None
        return RoomView(
            apparent_type=apparent,
            position=room.position,
            enemy_name=enemy.name if enemy else None,
            enemy_hp=enemy.stats.hp if enemy else None,
        )


def _already_resolved(room: Room) -> bool:
    """Combat rooms are done once cleared; other rooms once their interaction ran."""
    if room.resolved or room.type is RoomType.START:
        return True
    if room.type in COMBAT_ROOM_TYPES:
        return room.cleared
    return False
