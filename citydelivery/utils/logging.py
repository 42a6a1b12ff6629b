"""Root logger setup for the delivery page.

``CITYDELIVERY_LOG_LEVEL`` (level name or number) wins over everything else.
Without it, a truthy ``CITYDELIVERY_DEBUG``, the ``--debug`` flag or the
persisted ``debug_logging`` setting selects DEBUG; the default is INFO.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "CITYDELIVERY_LOG_LEVEL"
DEBUG_ENV = "CITYDELIVERY_DEBUG"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
_TRUTHY = {"1", "true", "yes", "on"}


def _parse_level(text: str) -> Optional[int]:
    text = text.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def env_level() -> Optional[int]:
    """Level forced by the environment, or None when nothing is forced."""
    level = _parse_level(os.getenv(LOG_LEVEL_ENV, ""))
    if level is not None:
        return level
    if os.getenv(DEBUG_ENV, "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def env_forces_debug() -> bool:
    level = env_level()
    return level is not None and level <= logging.DEBUG


def configure_root(debug: bool = False) -> int:
    """Install the compact console format and return the effective level."""
    level = env_level()
    if level is None:
        level = logging.DEBUG if debug else logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(level)
    return level


__all__ = ["DEBUG_ENV", "LOG_LEVEL_ENV", "configure_root", "env_forces_debug", "env_level"]
