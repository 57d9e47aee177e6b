# pump_launch/utils/logger.py

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER_NAME = "pump_launch"

_configured = False


def _configure_package_logger() -> None:
    """Attaches a single console handler to the package logger."""
    global _configured
    if _configured:
        return
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        package_logger.addHandler(handler)
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger that writes through the package console handler.

    Module loggers (``__name__`` under ``pump_launch``) propagate to the package
    logger; any other name is nested under it so it shares the same handler.
    """
    _configure_package_logger()
    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
