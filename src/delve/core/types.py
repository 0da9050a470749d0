"""Shared type aliases for the core and domain layers."""
from typing import Literal, Tuple

Direction = Literal["north", "east", "south", "west"]
SessionResult = Literal["completed", "fled", "died"]
RoomOutcome = Literal["cleared", "completed", "fled", "died"]

DIRECTIONS: Tuple[Direction, ...] = ("north", "east", "south", "west")

__all__ = ["DIRECTIONS", "Direction", "RoomOutcome", "SessionResult"]
