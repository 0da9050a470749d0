"""Dice-based one-on-one combat used as the default combat resolver."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Literal

from delve.core.rng import RNG
from delve.domain.entities import Character, Enemy
from delve.services.interfaces import CombatResult

logger = logging.getLogger(__name__)

CombatAction = Literal["attack", "defend", "item", "run"]

# Escape needs a roll strictly above this.
ESCAPE_ROLL_THRESHOLD = 3
HEAL_EFFECT = "restore_hp"


@dataclass(slots=True)
class CombatView:
    """Presentation view for one combat round."""

    character_name: str
    character_hp: int
    character_max_hp: int
    enemy_name: str
    enemy_hp: int
    enemy_max_hp: int
    can_heal: bool


@dataclass(slots=True)
class CombatEvent:
    """Base combat event."""


@dataclass(slots=True)
class AttackResolvedEvent(CombatEvent):
    attacker_name: str
    target_name: str
    damage: int
    target_hp: int


@dataclass(slots=True)
class GuardAppliedEvent(CombatEvent):
    combatant_name: str


@dataclass(slots=True)
class HealedEvent(CombatEvent):
    item_name: str
    amount: int
    hp: int


@dataclass(slots=True)
class NoHealingItemEvent(CombatEvent):
    pass


@dataclass(slots=True)
class EscapeAttemptEvent(CombatEvent):
    success: bool


@dataclass(slots=True)
class CombatEndedEvent(CombatEvent):
    victor: Literal["character", "enemy"] | None
    xp_gained: int = 0
    levels_gained: int = 0


ActionChooser = Callable[[CombatView], CombatAction]
EventSink = Callable[[List[CombatEvent]], None]


class CombatService:
    """Runs a fight to completion and reports it as a ``CombatResult``.

    The character strikes for ``attack + d6``. The enemy answers with
    ``attack + d6`` minus the character's defense, halved while the character
    defends; armour can absorb a blow entirely. Escaping needs a d6 above 3.
    """

    def __init__(self, rng: RNG, choose_action: ActionChooser, on_events: EventSink | None = None) -> None:
        self._rng = rng
        self._choose_action = choose_action
        self._on_events = on_events

    def __call__(self, character: Character, enemy: Enemy) -> CombatResult:
        return self.fight(character, enemy)

    def fight(self, character: Character, enemy: Enemy) -> CombatResult:
        logger.debug("Combat started: %s vs %s", character.name, enemy.name)
        while character.stats.is_alive and enemy.stats.is_alive:
            events: List[CombatEvent] = []
            action = self._choose_action(self._build_view(character, enemy))
            defending = False
            if action == "attack":
                events.append(self._character_attack(character, enemy))
            elif action == "defend":
                defending = True
                events.append(GuardAppliedEvent(combatant_name=character.name))
            elif action == "item":
                events.append(self._use_healing_item(character))
            elif action == "run":
                escaped = self._rng.randint(1, 6) > ESCAPE_ROLL_THRESHOLD
                events.append(EscapeAttemptEvent(success=escaped))
                if escaped:
                    events.append(CombatEndedEvent(victor=None))
                    self._emit(events)
                    return CombatResult(success=False, fled=True)
            else:
                raise ValueError(f"Unknown combat action: {action!r}")

            if enemy.stats.is_alive:
                events.append(self._enemy_attack(enemy, character, defending))
            self._emit(events)

        if character.stats.is_alive:
            levels = character.gain_xp(enemy.xp_reward)
            self._emit([CombatEndedEvent(victor="character", xp_gained=enemy.xp_reward, levels_gained=levels)])
            return CombatResult(success=True)
        self._emit([CombatEndedEvent(victor="enemy")])
        return CombatResult(success=False)

    def _character_attack(self, character: Character, enemy: Enemy) -> AttackResolvedEvent:
        roll = self._rng.randint(1, 6)
        damage = character.stats.attack + roll
        enemy.stats.hp = max(0, enemy.stats.hp - damage)
        return AttackResolvedEvent(
            attacker_name=character.name,
            target_name=enemy.name,
            damage=damage,
            target_hp=enemy.stats.hp,
        )

    def _enemy_attack(self, enemy: Enemy, character: Character, defending: bool) -> AttackResolvedEvent:
        roll = self._rng.randint(1, 6)
        damage = max(0, enemy.stats.attack + roll - character.stats.defense)
        if defending:
            damage //= 2
        character.stats.hp = max(0, character.stats.hp - damage)
        return AttackResolvedEvent(
            attacker_name=enemy.name,
            target_name=character.name,
            damage=damage,
            target_hp=character.stats.hp,
        )

    @staticmethod
    def _use_healing_item(character: Character) -> CombatEvent:
        potion = next((item for item in character.inventory if item.effect == HEAL_EFFECT), None)
        if potion is None:
            return NoHealingItemEvent()
        character.remove_item(potion)
        before = character.stats.hp
        character.stats.hp = min(character.stats.max_hp, before + potion.potency)
        return HealedEvent(item_name=potion.name, amount=character.stats.hp - before, hp=character.stats.hp)

    @staticmethod
    def _build_view(character: Character, enemy: Enemy) -> CombatView:
        return CombatView(
            character_name=character.name,
            character_hp=character.stats.hp,
            character_max_hp=character.stats.max_hp,
            enemy_name=enemy.name,
            enemy_hp=enemy.stats.hp,
            enemy_max_hp=enemy.stats.max_hp,
            can_heal=any(item.effect == HEAL_EFFECT for item in character.inventory),
        )

    def _emit(self, events: List[CombatEvent]) -> None:
        if self._on_events is not None and events:
            self._on_events(events)
