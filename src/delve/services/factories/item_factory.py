"""Procedural item generation for room and chest rewards.

Items come in two flavours: consumables (potions, elixirs) and equipment.
Rarity is rolled from a weighted table and multiplies the item's potency,
which otherwise grows linearly with the requested level.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from delve.core.rng import RNG
from delve.domain.items import Item

CONSUMABLE_CHANCE = 0.7


@dataclass(frozen=True, slots=True)
class RarityTier:
    name: str
    chance: float
    multiplier: float
    adjectives: Tuple[str, ...]


RARITIES: Tuple[RarityTier, ...] = (
    RarityTier("Common", 0.60, 1.0, ("Basic", "Simple", "Crude")),
    RarityTier("Uncommon", 0.25, 1.5, ("Fine", "Sturdy", "Polished")),
    RarityTier("Rare", 0.10, 2.0, ("Superior", "Gleaming", "Enchanted")),
    RarityTier("Epic", 0.04, 3.0, ("Heroic", "Arcane", "Runed")),
    RarityTier("Legendary", 0.01, 5.0, ("Mythic", "Ancient", "Godforged")),
)

# effect, base name, description
CONSUMABLES: Tuple[Tuple[str, str, str], ...] = (
    ("restore_hp", "Healing Potion", "Restores health"),
    ("restore_mana", "Mana Potion", "Restores mana"),
    ("boost_strength", "Strength Elixir", "Temporarily increases strength"),
    ("boost_dexterity", "Agility Potion", "Temporarily increases dexterity"),
    ("remove_curse", "Holy Water", "Removes negative effects"),
    ("revive", "Revival Herb", "Brings someone back from unconsciousness"),
)

# equipment type, stats it improves
EQUIPMENT: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Weapon", ("strength",)),
    ("Shield", ("max_hp",)),
    ("Armor", ("max_hp", "dexterity")),
    ("Amulet", ("mana", "luck")),
    ("Ring", ("charisma", "luck")),
)


def generate_item(level: int, rng: RNG) -> Item:
    """Return a random consumable or piece of equipment scaled to ``level``."""
    level = max(1, level)
    if rng.chance(CONSUMABLE_CHANCE):
        return _generate_consumable(level, rng)
    return _generate_equipment(level, rng)


def roll_rarity(rng: RNG) -> RarityTier:
    roll = rng.random()
    cumulative = 0.0
    for tier in RARITIES:
        cumulative += tier.chance
        if roll < cumulative:
            return tier
    return RARITIES[0]


def _potency(level: int, tier: RarityTier) -> int:
    return int(level * tier.multiplier) + 2


def _generate_consumable(level: int, rng: RNG) -> Item:
    tier = roll_rarity(rng)
    effect, base_name, description = rng.choice(CONSUMABLES)
    return Item(
        name=f"{rng.choice(tier.adjectives)} {base_name}",
        kind="consumable",
        rarity=tier.name,
        effect=effect,
        potency=_potency(level, tier),
        level=level,
        description=description,
    )


def _generate_equipment(level: int, rng: RNG) -> Item:
    tier = roll_rarity(rng)
    equipment_type, stat_focus = rng.choice(EQUIPMENT)
    stat = rng.choice(stat_focus)
    return Item(
        name=f"{rng.choice(tier.adjectives)} {equipment_type}",
        kind="equipment",
        rarity=tier.name,
        effect=f"boost_{stat}",
        potency=_potency(level, tier),
        level=level,
        description=f"Improves {stat.replace('_', ' ')}",
    )
