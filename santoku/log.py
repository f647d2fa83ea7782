"""Logging setup for the command-line entry point.

Library modules only create `logging.getLogger(__name__)` loggers; handlers
are attached here, once, by the CLI.
"""

from __future__ import annotations

import logging
import sys

from santoku.config import get_log_level

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the `santoku` logger and set its level."""
    logger = logging.getLogger("santoku")
    level = logging.DEBUG if verbose else logging.getLevelName(get_log_level())
    if not isinstance(level, int):
        level = logging.WARNING
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
