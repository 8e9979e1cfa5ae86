"""Console logging setup."""

import logging

from rich.logging import RichHandler


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a rich console handler to the package logger.

    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger("newsbot")
    logger.setLevel(_level_from_string(level))
    logger.handlers = []
    logger.propagate = False

    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def _level_from_string(level: str) -> int:
    value = logging.getLevelName(level.upper())
    if isinstance(value, int):
        return value
    return logging.INFO
