"""Runtime entity exports."""

from .character import Character
from .enemy import Enemy
from .stats import Stats

__all__ = [
    "Character",
    "Enemy",
    "Stats",
]
