"""Player character model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from delve.domain.items import Item

from .stats import Stats

XP_PER_LEVEL = 100
# Stat growth applied on every level gained.
LEVEL_HP_GAIN = 5
LEVEL_ATTACK_GAIN = 1
LEVEL_DEFENSE_GAIN = 1


@dataclass(slots=True)
class Character:
    """The adventurer walking the dungeon.

    Level doubles as the dungeon difficulty and as the item level for chest
    rewards.
    """

    name: str
    level: int
    stats: Stats
    xp: int = 0
    inventory: List[Item] = field(default_factory=list)

    def add_item(self, item: Item) -> None:
        self.inventory.append(item)

    def remove_item(self, item: Item) -> bool:
        try:
            self.inventory.remove(item)
        except ValueError:
            return False
        return True

    def gain_xp(self, amount: int) -> int:
        """Add experience, growing stats per level, and return how many levels were gained."""
        if amount <= 0:
            return 0
        self.xp += amount
        gained = 0
        while self.xp >= self.level * XP_PER_LEVEL:
            self.xp -= self.level * XP_PER_LEVEL
            self.level += 1
            gained += 1
            self._grow()
        return gained

    def _grow(self) -> None:
        self.stats.max_hp += LEVEL_HP_GAIN
        self.stats.hp += LEVEL_HP_GAIN
        self.stats.attack += LEVEL_ATTACK_GAIN
        self.stats.defense += LEVEL_DEFENSE_GAIN
