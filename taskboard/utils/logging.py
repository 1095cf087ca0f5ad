"""Root logger setup for the taskboard client.

The effective level comes from, in order: ``TASKBOARD_LOG_LEVEL`` (level name
or number), a truthy ``TASKBOARD_DEBUG``, and finally the ``debug_logging``
flag of ``SettingsVM``. ``main`` configures the root logger once at import and
reapplies the level after settings are resolved.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LEVEL_ENV = "TASKBOARD_LOG_LEVEL"
DEBUG_ENV = "TASKBOARD_DEBUG"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def env_level(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Level forced by the environment, or ``None`` when settings decide."""
    env = os.environ if environ is None else environ
    raw = env.get(LEVEL_ENV, "").strip()
    if raw:
        if raw.isdigit():
            return int(raw)
        # getLevelName maps known names to ints and anything else to "Level x"
        level = logging.getLevelName(raw.upper())
        return level if isinstance(level, int) else logging.INFO
    if env.get(DEBUG_ENV, "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def env_requests_debug(environ: Optional[Mapping[str, str]] = None) -> bool:
    level = env_level(environ)
    return level is not None and level <= logging.DEBUG


def resolve_level(debug_logging: bool = False, environ: Optional[Mapping[str, str]] = None) -> int:
    level = env_level(environ)
    if level is not None:
        return level
    return logging.DEBUG if debug_logging else logging.INFO


def configure_root(debug_logging: bool = False) -> int:
    """Install the taskboard format on the root logger and set its level."""
    level = resolve_level(debug_logging)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(level)
    return level


def apply_settings(settings: Any) -> int:
    """Reapply the root level from a ``SettingsVM``; env overrides still win."""
    level = resolve_level(bool(getattr(settings, "debug_logging", False)))
    logging.getLogger().setLevel(level)
    return level


__all__ = [
    "LOG_FORMAT",
    "apply_settings",
    "configure_root",
    "env_level",
    "env_requests_debug",
    "resolve_level",
]
