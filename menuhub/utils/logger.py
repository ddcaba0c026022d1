"""
Logging setup for the menuhub package.

Modules log through logging.getLogger(__name__); only the "menuhub" package
logger carries a handler, so every module logger inherits its format.
"""
import logging
import sys

from menuhub.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "menuhub"


def _level() -> int:
    settings = get_settings()
    if settings.DEBUG:
        return logging.DEBUG
    return getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Logger with one stdout handler in the package format"""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(_level())
    return logger


def configure_package_logging() -> logging.Logger:
    return get_logger(PACKAGE_LOGGER)
