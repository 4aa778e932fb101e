"""
Logging Configuration
Sets up the logger of the symbolic_schemes namespace.
"""
import logging
import sys
from typing import Optional, Union

from . import config


def setup_logging(level: Optional[Union[int, str]] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'symbolic_schemes' logger.

    Args:
        level: Logging level (e.g. logging.DEBUG or "INFO"); defaults to config.LOG_LEVEL.
        log_file: Optional path to save logs to a file.
    """
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger("symbolic_schemes")
    logger.setLevel(level)

    # Avoid duplicate records when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger

# End of logging_config.py
