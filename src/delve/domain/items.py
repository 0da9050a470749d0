"""Item models handed out by rooms and chests."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ItemKind = Literal["consumable", "equipment"]


@dataclass(slots=True)
class Item:
    """A generated item. Effects are interpreted by whoever consumes them."""

    name: str
    kind: ItemKind
    rarity: str
    effect: str
    potency: int
    level: int
    description: str = ""
