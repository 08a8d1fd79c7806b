"""Logging setup for indiepub entry points."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "INDIEPUB_LOG_LEVEL"

# chatty at INFO: one line per request
_NOISY_LOGGERS = ("httpx", "httpcore", "hishel")


def resolve_log_level(default: int = logging.INFO) -> int:
    """Return the level named by ``$INDIEPUB_LOG_LEVEL``, or ``default``."""

    name = os.getenv(LOG_LEVEL_ENV)
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger with a terse CLI format.

    ``level`` falls back to ``$INDIEPUB_LOG_LEVEL`` and then INFO. Pass
    ``force=True`` to reconfigure during tests.
    """

    effective = level if level is not None else resolve_log_level()
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective, logging.WARNING))
