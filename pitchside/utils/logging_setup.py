"""Logging bootstrap for the Pitchside match recorder."""

import logging
from typing import Union

from .constants import DEFAULT_LOG_LEVEL, LOG_FORMAT

_HANDLER_NAME = "pitchside"


def configure_logging(level: Union[str, int] = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """
    Attach a single stream handler to the ``pitchside`` logger.

    Calling this more than once only updates the level.

    Args:
        level: Level name (``"DEBUG"``) or numeric logging level

    Returns:
        The package logger
    """
    logger = logging.getLogger("pitchside")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
