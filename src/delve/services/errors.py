"""Service-layer exceptions."""


class DelveError(Exception):
    """Base exception for the dungeon engine."""


class DungeonConfigError(DelveError):
    """Raised when a dungeon cannot be generated from the given parameters."""


class InvalidMoveError(DelveError):
    """Raised when the player tries to walk through a wall."""


class SaveLoadError(DelveError):
    """Raised when save or load operations fail."""
