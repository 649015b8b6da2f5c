"""Universal debug/logging utility for commonfs.

Provides get_logger() for components that take an injected logger, plus
debug() for internal tracing.
Debug output is controlled by the COMMONFS_DEBUG environment variable.
Logs to console; can be extended to log to file if needed.
"""

import logging
import os
from typing import Optional

DEBUG_ON = os.getenv("COMMONFS_DEBUG", "0") == "1"

LOGGER_NAME = "commonfs"

_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if DEBUG_ON else logging.INFO)
    _logger = logger
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a child of it when *name* is given."""
    logger = setup_logger()
    return logger.getChild(name) if name else logger


def debug(msg: str) -> None:
    """Log a debug message if debugging is enabled."""
    if DEBUG_ON:
        setup_logger().debug(msg)
