"""Utility modules for commonfs."""

from commonfs.utils.config import load_filesystem_options, resolve_setting
from commonfs.utils.debug import get_logger

__all__ = [
    "get_logger",
    "load_filesystem_options",
    "resolve_setting",
]
