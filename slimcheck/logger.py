"""Logging setup. Diagnostics go to stderr; stdout is reserved for the report."""

import logging
import sys

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING", format_string: str | None = None) -> logging.Logger:
    """Configure the package logger with a single stderr handler.

    Args:
        level: log level name (DEBUG, INFO, WARNING, ERROR).
        format_string: optional custom format.

    Returns:
        The ``slimcheck`` logger.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    logger = logging.getLogger("slimcheck")
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger
