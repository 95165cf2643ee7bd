# quickchat/utils/logger.py

import logging

from quickchat.core.config import LOG_LEVEL

LOGGER_NAME = "quickchat"


def setup_logger(level: str = LOG_LEVEL) -> logging.Logger:
    """
    Configure the `quickchat` logger hierarchy.
    Every module logs through logging.getLogger(__name__), so one console
    handler on the package logger covers the whole app. Safe to call twice.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(console_handler)
    logger.propagate = False
    return logger
