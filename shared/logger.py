"""Logging setup shared by all tools."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_FORMAT = "%(message)s"


def setup_logger(
    name: str, level: str = "INFO", console: Optional[Console] = None
) -> logging.Logger:
    """
    Configure a logger that writes through rich.

    Records go to stderr so they never mix with a tool's regular output.

    Args:
        name: Logger name (child loggers propagate to it)
        level: Log level name, e.g. "DEBUG" or "INFO"
        console: Console to render to (defaults to a stderr console)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())

    # Calling setup twice must not duplicate output
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=level.upper() == "DEBUG",
        markup=False,
    )
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)
