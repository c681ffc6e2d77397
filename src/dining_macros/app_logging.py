"""Logging configuration helpers."""

import logging

_LOGGER_NAME = "dining_macros"
_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the package logger and set its level.

    Repeated calls only adjust the level, so app factories and tests can call
    this freely.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.getLevelName(level.upper()))
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
