"""Mini README: Application-wide logging helpers for SkyAvoid.

Structure:
    * get_logger - factory returning module loggers with baseline config.
    * configure_root_logger - one-shot root handler setup.
    * set_log_level - adjust verbosity after the handler is installed.

Usage:
    Modules create a module level ``LOGGER = get_logger(__name__)``. Searches
    may run on worker threads, so the formatter includes the thread name to
    keep interleaved planner output readable.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(threadName)s] %(name)s - %(message)s"


def _coerce_level(level: Union[int, str]) -> int:
    """Translate level names such as ``"debug"`` into logging constants."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Install the SkyAvoid handler on the root logger exactly once."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.setLevel(_coerce_level(level))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def set_log_level(level: Union[int, str]) -> None:
    """Change the root level, configuring the handler first if needed."""

    configure_root_logger(level)
    logging.getLogger().setLevel(_coerce_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
