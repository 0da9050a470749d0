"""Logging setup for the command-line entry point."""
from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "DELVE_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def configure_logging(default_level: int = logging.WARNING) -> None:
    """Configure the root logger, honouring DELVE_LOG_LEVEL when set."""
    level = default_level
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
