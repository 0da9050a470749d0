"""Factory for rolling difficulty-scaled enemies."""
from __future__ import annotations

from typing import Tuple

from delve.core.rng import RNG
from delve.domain.entities import Enemy, Stats

EASY_ENEMIES: Tuple[str, ...] = (
    "Goblin Scout",
    "Kobold",
    "Giant Rat",
    "Skeleton",
    "Sprite",
    "Giant Ant",
    "Bandit",
    "Swarm of Bats",
    "Slime",
    "Shadow Imp",
)
MEDIUM_ENEMIES: Tuple[str, ...] = (
    "Orc Warrior",
    "Zombie",
    "Wolf",
    "Ghoul",
    "Hobgoblin",
    "Bugbear",
    "Gnoll",
    "Warg",
    "Lizardman",
    "Gargoyle",
)
HARD_ENEMIES: Tuple[str, ...] = (
    "Troll",
    "Werewolf",
    "Wraith",
    "Ogre",
    "Wyvern",
    "Minotaur",
    "Manticore",
    "Vampire Spawn",
    "Dread Knight",
    "Frost Giant",
)
BOSS_ENEMIES: Tuple[str, ...] = (
    "Dragon",
    "Lich King",
    "Vampire Lord",
    "Beholder",
    "Demon Prince",
    "Kraken",
    "Archlich",
    "Void Dragon",
)
ENEMY_TIERS: Tuple[Tuple[str, ...], ...] = (EASY_ENEMIES, MEDIUM_ENEMIES, HARD_ENEMIES, BOSS_ENEMIES)

# Each name tier spans this many difficulty points.
DIFFICULTY_PER_TIER = 25
# Below this difficulty every enemy starts from the flat base HP.
FLAT_HP_DIFFICULTY = 10
BASE_MAX_HP = 10
XP_MULTIPLIER = 10


def create_enemy(difficulty: int, rng: RNG) -> Enemy:
    """Roll a single enemy whose stats scale linearly with ``difficulty``."""
    difficulty = max(0, difficulty)
    if difficulty > FLAT_HP_DIFFICULTY:
        max_hp = int(difficulty * _spread(rng))
    else:
        max_hp = BASE_MAX_HP
    hp = max(1, int(rng.uniform(max_hp * 0.5, max_hp)))
    stats = Stats(
        max_hp=max_hp,
        hp=hp,
        attack=max(1, int(difficulty * _spread(rng))),
        defense=int(difficulty * _spread(rng)),
    )
    return Enemy(
        name=_pick_name(difficulty, rng),
        stats=stats,
        xp_reward=int(difficulty * _spread(rng) * XP_MULTIPLIER),
    )


def _pick_name(difficulty: int, rng: RNG) -> str:
    tier = int(difficulty * rng.uniform(0.95, 1.05)) // DIFFICULTY_PER_TIER
    tier = min(max(tier, 0), len(ENEMY_TIERS) - 1)
    return rng.choice(ENEMY_TIERS[tier])


def _spread(rng: RNG) -> float:
    return rng.uniform(0.75, 1.25)
