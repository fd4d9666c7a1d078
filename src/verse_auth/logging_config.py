"""Logging setup for processes that embed verse_auth."""

import logging
import sys
from functools import lru_cache

from verse_config import get_settings


@lru_cache(maxsize=1)
def configure_logging() -> None:
    """Configure application logging.

    Sets up console output with timestamps and module names, the
    configured level for verse loggers and WARNING for noisy libraries.
    Runs once per process.
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("verse_auth").setLevel(log_level)
    logging.getLogger("verse_config").setLevel(log_level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
