"""Logging helpers for the calorie tracker service.

`get_logger` hands out loggers that share one stream handler and one
rotating file handler, so every module writes the same line format to the
console and to ``logs/calorie_tracker.log``.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from core import config

os.makedirs(config.LOG_DIR, exist_ok=True)

LOG_FILE = os.path.join(config.LOG_DIR, "calorie_tracker.log")

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
_file_handler.setFormatter(_formatter)


def get_logger(name: str = __name__, level: str = None) -> logging.Logger:
    """Return a logger wired to the shared handlers.

    The level defaults to ``LOG_LEVEL`` from the environment. Handlers are
    attached only once per logger name.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level or config.LOG_LEVEL)
        logger.addHandler(_stream_handler)
        logger.addHandler(_file_handler)
    return logger
