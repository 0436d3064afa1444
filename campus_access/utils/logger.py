# =======================================================================================
# campus_access/utils/logger.py - Logging Setup
# =======================================================================================
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from ..config import config

LOGGER_NAME = "campus_access"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger once: console handler always,
    rotating file handler (5MB x 3) when a log file is configured.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if config.API_DEBUG:
        level = "DEBUG"
    logger.setLevel(level or config.LOG_LEVEL)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = log_file or config.LOG_FILE
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger under the package logger, e.g. get_logger("access")."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
