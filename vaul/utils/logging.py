"""Root logger setup for the desktop app.

Environment overrides win over the saved ``debug_logging`` preference:

  - ``VAUL_LOG_LEVEL``: level name or number
  - ``VAUL_DEBUG``: truthy value selects DEBUG
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LEVEL_ENV = "VAUL_LOG_LEVEL"
DEBUG_ENV = "VAUL_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_level(value: Union[int, str], fallback: int = logging.INFO) -> int:
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else fallback


def env_level(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    env = os.environ if environ is None else environ
    explicit = (env.get(LEVEL_ENV) or "").strip()
    if explicit:
        return parse_level(explicit)
    if (env.get(DEBUG_ENV) or "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    level = env_level()
    if level is None:
        level = parse_level(default_level)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATEFMT))
        root.addHandler(handler)
    root.setLevel(level)
    # urllib3 connection chatter only at DEBUG
    logging.getLogger("urllib3").setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
    return level


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Apply the saved preference unless the environment overrides it."""
    level = env_level()
    if level is None:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level


def level_name(level: int) -> str:
    return logging.getLevelName(level)


def env_requests_debug() -> bool:
    level = env_level()
    return level is not None and level <= logging.DEBUG


__all__ = [
    "DEBUG_ENV",
    "LEVEL_ENV",
    "apply_gui_preferences",
    "configure_root",
    "env_level",
    "env_requests_debug",
    "level_name",
    "parse_level",
]
