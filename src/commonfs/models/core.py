"""Core domain models for commonfs.

This module defines the data structures shared by the filesystem facade and its
helpers.
- InvalidCharsPolicy selects which invalid-filename table is active.
- EntryKind tags a FileSystemEntry as a file or a directory.
- FileSystemEntry describes one filesystem entry with lazily-resolved
  timestamps.
- FileSystemOptions holds the immutable capability flags fixed at startup.

Design:
- The file/directory distinction is a tagged variant (``kind``) on a single
  model rather than a class hierarchy, so callers branch on the tag.
- Timestamps are read from the host on every call; entries never cache stat
  results, so a descriptor created before a write reports the new time.
"""

import os
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from commonfs.fs.paths import get_extension, get_file_name

MIN_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)
"""Sentinel returned when a timestamp cannot be determined."""


class InvalidCharsPolicy(str, Enum):
    """Which invalid-filename character table to enforce.

    NATIVE uses the host's own restrictions. PRESET uses a fixed table that
    mimics the most restrictive convention so names created on one host remain
    valid on another.
    """

    NATIVE = "native"
    PRESET = "preset"


class EntryKind(str, Enum):
    """Discriminant for FileSystemEntry."""

    FILE = "file"
    DIRECTORY = "directory"


class FileSystemEntry(BaseModel):
    """Describes a single file or directory.

    Produced by ``CommonFileSystem.get_file_system_info`` and the enumeration
    methods. The entry may describe a path that does not exist.
    """

    model_config = ConfigDict(frozen=True)

    full_path: str
    """Path of the entry as given by the caller or the enumerating walk."""

    kind: EntryKind
    """Whether the entry is a file or a directory."""

    exists: bool = False
    """Whether an entry of this kind existed when the descriptor was built."""

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def name(self) -> str:
        """Final component of the path, ignoring trailing separators."""
        return get_file_name(self.full_path.rstrip("/\\") or self.full_path)

    @property
    def extension(self) -> str:
        """Final ``.`` suffix of the name including the dot, or an empty string."""
        return get_extension(self.name)

    def creation_time_utc(self) -> datetime:
        """Return the creation time of the entry in UTC.

        Uses the birth time where the host records one and falls back to
        ``st_ctime`` (which is the creation time on Windows).

        Raises:
            OSError: If the entry cannot be stat'ed.
            OverflowError, ValueError: If the stored time is out of range.
        """
        st = os.stat(self.full_path)
        timestamp = getattr(st, "st_birthtime", None)
        if timestamp is None:
            timestamp = st.st_ctime
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)

    def last_write_time_utc(self) -> datetime:
        """Return the last modification time of the entry in UTC.

        Raises:
            OSError: If the entry cannot be stat'ed.
            OverflowError, ValueError: If the stored time is out of range.
        """
        return datetime.fromtimestamp(
            os.stat(self.full_path).st_mtime, tz=timezone.utc
        )


class FileSystemOptions(BaseModel):
    """Capability flags supplied once by the embedding application.

    Never changes at runtime; ``CommonFileSystem`` keeps a reference to a
    single instance.
    """

    model_config = ConfigDict(frozen=True)

    supports_async_file_streams: bool = False
    """Whether the host supports true asynchronous file handles."""

    invalid_chars_policy: InvalidCharsPolicy = InvalidCharsPolicy.NATIVE
    """Which invalid-filename table ``get_valid_filename`` enforces."""

    directory_separator: str = Field(default=os.sep)
    """Separator used for normalization and sub-path checks."""

    @field_validator("directory_separator")
    @classmethod
    def validate_separator(cls, value: str) -> str:
        """Only ``/`` and ``\\`` are recognised separators."""
        if value not in ("/", "\\"):
            raise ValueError(f"Unsupported directory separator: {value!r}")
        return value
