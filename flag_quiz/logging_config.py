from __future__ import annotations

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logger(
    name: str = "flag_quiz", level: Union[int, str] = logging.INFO
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling this more than once only updates the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
