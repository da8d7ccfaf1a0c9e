"""
Logging configuration for dirkit.

Library modules only call ``logging.getLogger(__name__)``; nothing is
configured at import time. Applications that want dirkit's log output call
``setup_logging()`` once.
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "dirkit"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure the "dirkit" logger.

    Existing handlers on the logger are replaced, so calling this again
    reconfigures instead of duplicating output.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
        log_file: Optional log file path; console only if not provided
        format_string: Optional log format string

    Returns:
        The configured logger
    """
    if format_string is None:
        format_string = (
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
