"""File-system stores for the in-progress dungeon and the character."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Generic, TypeVar

from delve.domain.dungeon import Dungeon
from delve.domain.entities import Character
from delve.presentation.cli import config
from delve.services.errors import SaveLoadError
from delve.services.save_service import (
    deserialize_character,
    deserialize_dungeon,
    serialize_character,
    serialize_dungeon,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DUNGEON_FILENAME = "dungeon.json"
CHARACTER_FILENAME = "character.json"


class _JsonStore(Generic[T]):
    """Reads and writes a single JSON document."""

    def __init__(
        self,
        filename: str,
        serialize: Callable[[T], Dict[str, Any]],
        deserialize: Callable[[Dict[str, Any]], T],
        base_dir: Path | str | None = None,
    ) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else config.get_user_data_dir()
        self._path = self._base_dir / filename
        self._serialize = serialize
        self._deserialize = deserialize

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> T | None:
        """Return the stored value, or None when nothing has been saved yet."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise SaveLoadError(f"Unable to read {self._path}: {exc}") from exc
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SaveLoadError(f"Invalid JSON in {self._path}: {exc}") from exc
        return self._deserialize(payload)

    def save(self, value: T) -> None:
        self._base_dir.mkdir(parents=True, exist_ok=True)
        payload = self._serialize(value)
        self._path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

    def clear(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            return


class JsonDungeonStore(_JsonStore[Dungeon]):
    def __init__(self, base_dir: Path | str | None = None) -> None:
        super().__init__(DUNGEON_FILENAME, serialize_dungeon, deserialize_dungeon, base_dir)


class JsonCharacterStore(_JsonStore[Character]):
    def __init__(self, base_dir: Path | str | None = None) -> None:
        super().__init__(CHARACTER_FILENAME, serialize_character, deserialize_character, base_dir)


def load_or_discard(store: _JsonStore[T]) -> T | None:
    """Load from ``store``; a corrupt file is logged, removed and treated as empty."""
    try:
        return store.load()
    except SaveLoadError as exc:
        logger.warning("Discarding unreadable save %s: %s", store.path, exc)
        store.clear()
        return None
