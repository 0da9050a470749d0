"""Turn-by-turn dungeon exploration."""
from __future__ import annotations

import logging

from delve.core.types import SessionResult
from delve.domain.entities import Character
from delve.services.dungeon_session import DungeonSession
from delve.services.interfaces import BACK_OUT, DungeonRenderer, MovementPrompter
from delve.services.room_resolver import RoomResolver

logger = logging.getLogger(__name__)


class ExplorationLoop:
    """Moves the character room by room until the run ends.

    Each turn renders the map, asks where to go, walks there and resolves the
    room. The run ends when the player backs out, flees a fight, falls into a
    trap, dies, or defeats the boss. The dungeon is discarded whenever a run
    ends so the next one starts fresh.
    """

    def __init__(
        self,
        *,
        session: DungeonSession,
        resolver: RoomResolver,
        renderer: DungeonRenderer,
        prompter: MovementPrompter,
    ) -> None:
        self._session = session
        self._resolver = resolver
        self._renderer = renderer
        self._prompter = prompter

    def run(self, character: Character) -> SessionResult:
        while True:
            dungeon = self._session.get_or_create(character.level)
            self._renderer(dungeon)
            available = dungeon.open_directions()
            choice = self._prompter.prompt_movement(available, True)
            if choice == BACK_OUT:
                if not self._prompter.confirm_back_out():
                    continue
                return self._finish("fled")
            self._session.move_player(choice)
            room = dungeon.current_room()
            resolution = self._resolver.resolve(room, character)
            self._prompter.show_events(resolution.events)
            if resolution.outcome == "cleared":
                self._session.save()
                continue
            return self._finish(resolution.outcome)

    def _finish(self, result: SessionResult) -> SessionResult:
        # Boss and trap resolutions already renewed the dungeon.
        if self._session.has_dungeon:
            self._session.renew()
        logger.info("Exploration ended: %s", result)
        return result
