"""Data models for commonfs."""

from commonfs.models.core import (
    MIN_TIMESTAMP,
    EntryKind,
    FileSystemEntry,
    FileSystemOptions,
    InvalidCharsPolicy,
)

__all__ = [
    "MIN_TIMESTAMP",
    "EntryKind",
    "FileSystemEntry",
    "FileSystemOptions",
    "InvalidCharsPolicy",
]
