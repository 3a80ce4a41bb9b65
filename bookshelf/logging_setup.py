"""Logging setup for the bookshelf package.

Every module logs through ``logging.getLogger(__name__)``; those loggers are
children of ``bookshelf`` and inherit the handler configured here. Calling
:func:`configure_logging` again (e.g. from a second ``create_app`` in tests)
only updates the level and never stacks handlers.
"""

from __future__ import annotations

import logging
import threading

LOGGER_NAME = "bookshelf"
FORMAT = "[bookshelf] %(asctime)s %(levelname)s %(name)s %(message)s"

_LOCK = threading.Lock()


def configure_logging(level_name: str = "INFO") -> logging.Logger:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    with _LOCK:
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(level)
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(FORMAT))
            logger.addHandler(handler)
        logger.propagate = False
    return logger


__all__ = ["configure_logging", "LOGGER_NAME"]
