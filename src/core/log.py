"""Logging setup shared by all layers. Modules only ever call logging.getLogger(__name__)."""

import logging
import sys

ROOT_LOGGER_NAME = "src"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single console handler to the package logger. Calling it again only changes the level."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(console_handler)

    return logger
