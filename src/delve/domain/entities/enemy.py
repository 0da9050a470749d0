"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass

from .stats import Stats


@dataclass(slots=True)
class Enemy:
    """Represents a spawned enemy waiting in a dungeon room."""

    name: str
    stats: Stats
    xp_reward: int
