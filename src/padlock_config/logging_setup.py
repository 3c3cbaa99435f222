"""Logging setup shared by every Padlock entry point."""

from __future__ import annotations

import logging
import sys

from padlock_config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio")


def configure_logging(settings: Settings | None = None) -> int:
    """Configure application logging.

    Sets up console logging with timestamps and module names, applies the
    configured level to the padlock packages and quiets noisy third-party
    loggers.

    Returns
    -------
    The numeric log level that was applied
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("padlock_identity").setLevel(log_level)
    logging.getLogger("padlock_config").setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_level
