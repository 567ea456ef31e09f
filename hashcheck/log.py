"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """
    Configure the ``hashcheck`` logger with a single stderr handler.

    Safe to call more than once; earlier handlers are replaced.

    Args:
        level: Log level name.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("hashcheck")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
