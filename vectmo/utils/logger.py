"""
Logging helpers shared by the app entry point and scripts
"""

import logging
import sys
from typing import Optional

from vectmo.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

_root_configured = False


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Configure root logging once and return a named logger.

    Args:
        name: Logger name (usually __name__)
        level: Log level name; defaults to settings.LOG_LEVEL
    """
    global _root_configured
    level_name = (level or settings.LOG_LEVEL).upper()

    if not _root_configured:
        logging.basicConfig(level=level_name, format=LOG_FORMAT, stream=sys.stderr)
        _root_configured = True

    logging.getLogger("vectmo").setLevel(level_name)
    logger = logging.getLogger(name)
    logger.setLevel(level_name)
    return logger


def log_info(message: str, name: str = "vectmo"):
    logging.getLogger(name).info(message)


def log_warning(message: str, name: str = "vectmo"):
    logging.getLogger(name).warning(message)


def log_error(message: str, name: str = "vectmo", exc_info: bool = False):
    logging.getLogger(name).error(message, exc_info=exc_info)
