"""Factory exports."""

from .enemy_factory import create_enemy
from .item_factory import generate_item

__all__ = [
    "create_enemy",
    "generate_item",
]
