"""Root logger setup shared by the GUI entry point and the settings dialog.

Environment variables win over the GUI toggle:

* ``SALESDESK_LOG_LEVEL``: level name or number (``debug``, ``20``...)
* ``SALESDESK_DEBUG``: any truthy value means DEBUG
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"
LEVEL_ENV = "SALESDESK_LOG_LEVEL"
DEBUG_ENV = "SALESDESK_DEBUG"

# urllib3 logs every connection at DEBUG; only useful when debugging the API
_TRANSPORT_LOGGER = "urllib3"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_level(value: int | str | None, fallback: int = logging.INFO) -> int:
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper()) if text else None
    return level if isinstance(level, int) else fallback


def env_level() -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    explicit = os.getenv(LEVEL_ENV)
    if explicit and explicit.strip():
        return parse_level(explicit)
    if (os.getenv(DEBUG_ENV) or "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def _apply(level: int) -> int:
    logging.getLogger().setLevel(level)
    logging.getLogger(_TRANSPORT_LOGGER).setLevel(
        logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    )
    return level


def configure_root(default_level: int | str = logging.INFO) -> int:
    """Install one stderr handler on the root logger and set its level.

    Calling it again only changes the level. Returns the effective level.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
    forced = env_level()
    return _apply(forced if forced is not None else parse_level(default_level))


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Apply the settings "Debug logging" toggle unless the environment decides."""
    forced = env_level()
    if forced is not None:
        return _apply(forced)
    return _apply(logging.DEBUG if debug_enabled else logging.INFO)


def env_requests_debug() -> bool:
    forced = env_level()
    return forced is not None and forced <= logging.DEBUG


__all__ = [
    "DATE_FORMAT",
    "LOG_FORMAT",
    "apply_gui_preferences",
    "configure_root",
    "env_level",
    "env_requests_debug",
    "parse_level",
]
