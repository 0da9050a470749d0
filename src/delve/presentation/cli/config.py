"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from delve.domain.dungeon import ALLOWED_SIZES

logger = logging.getLogger(__name__)

_DEFAULT_DUNGEON_SIZE = 5


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Delve"
        return Path.home() / "Delve"
    return Path.home() / ".config" / "delve"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def default_config() -> Dict[str, Any]:
    return {"dungeon_size": _DEFAULT_DUNGEON_SIZE}


def _normalize_dungeon_size(value: object) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value in ALLOWED_SIZES:
        return value
    return _DEFAULT_DUNGEON_SIZE


def normalize_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "dungeon_size": _normalize_dungeon_size(raw.get("dungeon_size")),
    }


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return normalize_config(raw)


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = normalize_config(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
