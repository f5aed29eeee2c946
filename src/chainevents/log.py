"""Logging setup: stdlib loggers rendered by rich on stderr.

Event output goes to stdout; diagnostics never mix with it.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "chainevents"


def level_for(verbosity: int) -> int:
    """0 → WARNING, 1 → INFO, 2+ → DEBUG."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbosity: int = 0) -> logging.Logger:
    """Attach a single RichHandler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_for(verbosity))
    logger.handlers = [
        RichHandler(
            console=Console(stderr=True),
            show_path=verbosity >= 2,
            rich_tracebacks=True,
        )
    ]
    logger.propagate = False
    return logger
