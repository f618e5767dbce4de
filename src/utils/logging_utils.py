"""Logger setup shared by the solver modules."""

from __future__ import annotations

import logging
from typing import Optional

from src.utils.config import DEFAULT_LOG_LEVEL

LOGGER_NAME = "zebra"


def get_logger(level: Optional[str] = None) -> logging.Logger:
    """
    Return the package logger.

    The first call attaches a console handler; later calls only adjust the
    level when one is given.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(DEFAULT_LOG_LEVEL.upper())

    if level:
        logger.setLevel(level.upper())

    return logger
