"""Root-logger setup for the tracker window.

``SLEEPTRACKER_LOG_LEVEL`` pins the level (name such as ``debug`` or a number);
otherwise a truthy ``SLEEPTRACKER_DEBUG`` selects DEBUG. Either one outranks
the ``debug_logging`` flag from the saved settings.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "SLEEPTRACKER_LOG_LEVEL"
DEBUG_ENV = "SLEEPTRACKER_DEBUG"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
_TRUTHY = {"1", "true", "yes", "on"}


def parse_level(text: Optional[str]) -> Optional[int]:
    """Return the logging level named by ``text``, or None if it names none."""
    token = (text or "").strip()
    if not token:
        return None
    if token.isdigit():
        # isdigit() also accepts digits int() rejects, e.g. superscripts
        try:
            return int(token)
        except ValueError:
            return None
    level = logging.getLevelName(token.upper())
    return level if isinstance(level, int) else None


def env_level() -> Optional[int]:
    """Level forced by the environment, or None when it leaves the choice open."""
    raw = os.getenv(LOG_LEVEL_ENV)
    if raw and raw.strip():
        level = parse_level(raw)
        return level if level is not None else logging.INFO
    if (os.getenv(DEBUG_ENV) or "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def configure_root(default_level: int | str = logging.INFO) -> int:
    """Install the compact console format once and set the root level."""
    if isinstance(default_level, str):
        fallback = parse_level(default_level) or logging.INFO
    else:
        fallback = int(default_level)
    forced = env_level()
    effective = forced if forced is not None else fallback

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(effective)
    return effective


def apply_preferences(debug_enabled: bool) -> int:
    """Apply the saved ``debug_logging`` flag unless the environment forces a level."""
    forced = env_level()
    level = forced if forced is not None else (logging.DEBUG if debug_enabled else logging.INFO)
    logging.getLogger().setLevel(level)
    return level


def env_requests_debug() -> bool:
    forced = env_level()
    return forced is not None and forced <= logging.DEBUG
