"""Process-wide logging setup."""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "SHIFTHELPER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGER_INITIALIZED = False


def configure_logging(level: Optional[str] = None, force: bool = False) -> None:
    """Configure process-wide logging once.

    Args:
        level: Log level name. Falls back to $SHIFTHELPER_LOG_LEVEL, then WARNING.
        force: Reconfigure even if logging was already set up (used by the CLI
            when --log-level is passed).
    """
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED and not force:
        return

    resolved_level = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()

    logging.basicConfig(
        level=resolved_level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=force,
    )
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the requested module."""
    return logging.getLogger(name)
