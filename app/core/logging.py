"""
Logging setup - one stdout handler for the whole "chronos" logger tree.

Every module logs through a namespaced logger, e.g.:

    logger = logging.getLogger("chronos.services.calendar_manager")

so a single handler attached to "chronos" formats all application logs.
Context (task_id, user_id, event_id) is passed through ``extra=``.
"""

import logging
import sys

ROOT_LOGGER_NAME = "chronos"

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Configure the "chronos" logger.

    Safe to call more than once: the handler is only attached the first time.

    Args:
        level: Logging level name ("INFO") or number (logging.INFO)

    Returns:
        The configured root application logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
