"""
Logging setup for form_state.

Library modules only create loggers under the ``form-state`` name; handlers
are installed by applications through :func:`setup_logging`.
"""

import logging

from form_state.config import get_config

LOGGER_NAME = "form-state"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get the package logger, or a child of it."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)


def setup_logging(level: str | int | None = None) -> logging.Logger:
    """
    Configure logging for applications using form_state.

    Args:
        level: Log level name or number. If None, uses config.log_level.

    Returns:
        The package logger.
    """
    config = get_config()
    level = level or config.log_level
    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger = get_logger()
    logger.setLevel(level)
    return logger
