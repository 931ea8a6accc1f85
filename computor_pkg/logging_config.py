"""Logging setup for Computor.

Solutions go to stdout and ``Error:`` lines to stderr. Log records join them
on stderr only when no log file is given, so ``--log-file`` keeps both
streams exactly as the user sees them without logging.
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "computor"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _level_from_name(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(
    level: str = "WARNING", log_file: Optional[str] = None
) -> logging.Logger:
    """Attach a single handler to the ``computor`` logger.

    Records go to *log_file* when one is given and to stderr otherwise.
    Unknown level names fall back to WARNING. A second call replaces and
    closes the handler left by the first.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_name(level))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger below ``computor``, e.g. ``computor.parser``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
