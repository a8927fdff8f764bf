"""Logging setup for the ``cats_tree`` logger namespace."""

import logging
import sys
from typing import Optional

LOGGER_NAME = "cats_tree"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    name: str = LOGGER_NAME
) -> logging.Logger:
    """Attach console and optional file handlers to a package logger.

    Handlers go on ``name`` (the package namespace by default), not on the
    root logger, so an application embedding the package keeps its own
    logging configuration. Calling again replaces the handlers installed
    by the previous call.

    Args:
        level: Logging level
        log_file: Optional log file path
        name: Logger namespace to configure

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
