"""
Logging setup for the clinic app.

Console logging with a standard format, plus an optional log file.
"""

import logging
import os
import sys
from typing import Optional

from core.config import DATA_DIR, LOG_FILE, LOG_LEVEL

DEFAULT_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(message)s"
)


def setup_logging(
    log_level: str = LOG_LEVEL,
    log_file: Optional[str] = LOG_FILE,
    format_string: Optional[str] = None,
) -> None:
    """
    Configure the root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: optional file name, written under the data directory
        format_string: optional custom format
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Streamlit re-runs the entry script on every interaction
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        os.makedirs(DATA_DIR, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(DATA_DIR, log_file))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module (usually ``__name__``)."""
    return logging.getLogger(name)
