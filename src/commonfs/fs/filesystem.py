"""CommonFileSystem: the filesystem facade used by application code.

Application code never calls ``os``/``shutil`` directly; it goes through one
``CommonFileSystem`` instance so that path syntax, filename restrictions and
shortcut files behave the same on every host.

Design:
- The only state is the immutable ``FileSystemOptions`` and the invalid
  filename table derived from it at construction. No locking is needed;
  instances are safe to share between threads.
- Pass-through operations add argument validation only. ``OSError`` from the
  host propagates unmodified and nothing is retried.
- Timestamp lookups are the one exception: failures are logged and degrade to
  ``MIN_TIMESTAMP`` so that a library scan never aborts on one bad entry.
- Enumeration methods are generators. Nothing touches the disk until the first
  item is requested, and the walk is not stable if the tree changes during
  iteration.
"""

import logging
import os
import shutil
from datetime import datetime
from typing import BinaryIO, Iterator, Optional, Tuple, Union

from commonfs.errors import require_non_empty
from commonfs.fs import filenames, operations, paths, shortcuts, streams
from commonfs.fs.streams import AsyncFileStream, FileAccess, FileMode, FileShare
from commonfs.models.core import (
    MIN_TIMESTAMP,
    EntryKind,
    FileSystemEntry,
    FileSystemOptions,
    InvalidCharsPolicy,
)
from commonfs.utils.debug import get_logger

DEFAULT_ENCODING = "utf-8"
# Tolerates a byte order mark written by other tools.
DEFAULT_READ_ENCODING = "utf-8-sig"


def _raise_walk_error(error: OSError) -> None:
    raise error


class CommonFileSystem:
    """Uniform file and directory primitives over the host filesystem."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        supports_async_file_streams: bool = False,
        use_preset_invalid_file_name_chars: bool = False,
        *,
        options: Optional[FileSystemOptions] = None,
    ) -> None:
        """Initialize the facade.

        Args:
            logger: Logger for degraded timestamp lookups. Defaults to the
                ``commonfs`` package logger.
            supports_async_file_streams: Whether the host supports async file
                handles. Ignored when *options* is given.
            use_preset_invalid_file_name_chars: Enforce the strict preset
                invalid-character table instead of the host's. Ignored when
                *options* is given.
            options: Complete capability flags, e.g. from
                ``load_filesystem_options()``.
        """
        self.logger = logger or get_logger()
        if options is None:
            options = FileSystemOptions(
                supports_async_file_streams=supports_async_file_streams,
                invalid_chars_policy=(
                    InvalidCharsPolicy.PRESET
                    if use_preset_invalid_file_name_chars
                    else InvalidCharsPolicy.NATIVE
                ),
            )
        self.options = options
        self._invalid_file_name_chars = filenames.invalid_filename_chars(
            options.invalid_chars_policy
        )

    @classmethod
    def from_config(
        cls,
        logger: Optional[logging.Logger] = None,
        **overrides: Optional[bool],
    ) -> "CommonFileSystem":
        """Build an instance from config.toml / ``COMMONFS_*`` environment."""
        from commonfs.utils.config import load_filesystem_options

        return cls(logger, options=load_filesystem_options(**overrides))

    @property
    def separator(self) -> str:
        return self.options.directory_separator

    @property
    def invalid_file_name_chars(self) -> Tuple[str, ...]:
        """The active invalid filename characters."""
        return self._invalid_file_name_chars

    # ------------------------------------------------------------------
    # Shortcuts
    # ------------------------------------------------------------------
    def is_shortcut(self, filename: Optional[str]) -> bool:
        """Return True if *filename* is a ``.mblink`` shortcut."""
        return shortcuts.is_shortcut(filename)

    def resolve_shortcut(self, filename: Optional[str]) -> Optional[str]:
        """Return the normalized target of a shortcut file.

        Returns None when *filename* is not a shortcut or the shortcut is
        empty.

        Raises:
            InvalidArgumentError: If *filename* is None or empty.
            OSError: If the shortcut file cannot be read.
        """
        if not shortcuts.is_shortcut(filename):
            return None

        target = shortcuts.parse_shortcut_target(self.read_all_text(filename))
        if target is None:
            return None
        return self.normalize_path(target)

    def create_shortcut(
        self, shortcut_path: Optional[str], target: Optional[str]
    ) -> None:
        """Write *target* as the content of *shortcut_path*, replacing it.

        Raises:
            InvalidArgumentError: If either argument is None or empty.
        """
        shortcut_path = require_non_empty(shortcut_path, "shortcut_path")
        target = require_non_empty(target, "target")

        self.write_all_text(shortcut_path, target)

    # ------------------------------------------------------------------
    # Entry resolution
    # ------------------------------------------------------------------
    def get_file_system_info(self, path: Optional[str]) -> FileSystemEntry:
        """Describe *path* as a file or directory, guessing from its name.

        An extension-bearing path is probed as a file and otherwise reported
        as a directory; an extension-less path is probed as a directory and
        otherwise reported as a file. Never raises for a missing path; check
        ``exists`` on the result.

        Raises:
            InvalidArgumentError: If *path* is None or empty.
        """
        path = require_non_empty(path, "path")

        # Take a guess to try and avoid two file system hits
        if paths.has_extension(path):
            if os.path.isfile(path):
                return FileSystemEntry(full_path=path, kind=EntryKind.FILE, exists=True)
            return FileSystemEntry(
                full_path=path, kind=EntryKind.DIRECTORY, exists=os.path.isdir(path)
            )

        if os.path.isdir(path):
            return FileSystemEntry(
                full_path=path, kind=EntryKind.DIRECTORY, exists=True
            )
        return FileSystemEntry(
            full_path=path, kind=EntryKind.FILE, exists=os.path.isfile(path)
        )

    def get_creation_time_utc(self, info: FileSystemEntry) -> datetime:
        """Return the creation time of *info*, or MIN_TIMESTAMP on failure."""
        # This could throw an error on some file systems that have dates out of range
        try:
            return info.creation_time_utc()
        except (OSError, OverflowError, ValueError):
            self.logger.error(
                "Error determining CreationTimeUtc for %s", info.full_path, exc_info=True
            )
            return MIN_TIMESTAMP

    def get_last_write_time_utc(self, info: Union[FileSystemEntry, str]) -> datetime:
        """Return the last write time of *info*, or MIN_TIMESTAMP on failure.

        *info* may also be a path, which is resolved with
        ``get_file_system_info`` first.
        """
        if isinstance(info, str):
            info = self.get_file_system_info(info)

        try:
            return info.last_write_time_utc()
        except (OSError, OverflowError, ValueError):
            self.logger.error(
                "Error determining LastWriteTimeUtc for %s", info.full_path, exc_info=True
            )
            return MIN_TIMESTAMP

    def get_file_name_without_extension(
        self, info: Union[FileSystemEntry, str]
    ) -> str:
        """Return the name of *info* without its extension.

        Directories have no extension semantics, so a directory entry returns
        its full name.
        """
        if isinstance(info, FileSystemEntry):
            if info.is_directory:
                return info.name
            return paths.get_file_name_without_extension(info.full_path)
        return paths.get_file_name_without_extension(info)

    # ------------------------------------------------------------------
    # Path strings
    # ------------------------------------------------------------------
    def get_valid_filename(self, filename: Optional[str]) -> str:
        """Replace every active invalid character in *filename* with a space."""
        return filenames.get_valid_filename(filename, self._invalid_file_name_chars)

    def normalize_path(self, path: Optional[str]) -> str:
        return paths.normalize_path(path, self.separator)

    def substitute_path(
        self, path: Optional[str], from_: Optional[str], to: Optional[str]
    ) -> str:
        return paths.substitute_path(path, from_, to)

    def contains_sub_path(
        self, parent_path: Optional[str], path: Optional[str]
    ) -> bool:
        return paths.contains_sub_path(parent_path, path, self.separator)

    def is_root_path(self, path: Optional[str]) -> bool:
        return paths.is_root_path(path, self.separator)

    def is_path_file(self, path: Optional[str]) -> bool:
        return paths.is_path_file(path)

    # ------------------------------------------------------------------
    # Compound operations
    # ------------------------------------------------------------------
    def swap_files(self, file1: Optional[str], file2: Optional[str]) -> None:
        """Exchange the contents of two files. Not atomic; see operations.swap_files."""
        operations.swap_files(file1, file2)

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------
    def _iter_paths(
        self, path: str, recursive: bool, directories: bool
    ) -> Iterator[str]:
        if recursive:
            for root, dirs, files in os.walk(path, onerror=_raise_walk_error):
                for name in dirs if directories else files:
                    yield os.path.join(root, name)
            return

        with os.scandir(path) as it:
            for entry in it:
                if entry.is_dir() == directories:
                    yield entry.path

    def get_directory_paths(self, path: str, recursive: bool = False) -> Iterator[str]:
        return self._iter_paths(path, recursive, directories=True)

    def get_file_paths(self, path: str, recursive: bool = False) -> Iterator[str]:
        return self._iter_paths(path, recursive, directories=False)

    def get_file_system_entry_paths(
        self, path: str, recursive: bool = False
    ) -> Iterator[str]:
        """Yield every directory path under *path*, then every file path."""
        yield from self.get_directory_paths(path, recursive)
        yield from self.get_file_paths(path, recursive)

    def get_directories(
        self, path: str, recursive: bool = False
    ) -> Iterator[FileSystemEntry]:
        for full_path in self.get_directory_paths(path, recursive):
            yield FileSystemEntry(
                full_path=full_path, kind=EntryKind.DIRECTORY, exists=True
            )

    def get_files(self, path: str, recursive: bool = False) -> Iterator[FileSystemEntry]:
        for full_path in self.get_file_paths(path, recursive):
            yield FileSystemEntry(full_path=full_path, kind=EntryKind.FILE, exists=True)

    def get_file_system_entries(
        self, path: str, recursive: bool = False
    ) -> Iterator[FileSystemEntry]:
        """Yield every directory under *path*, then every file."""
        yield from self.get_directories(path, recursive)
        yield from self.get_files(path, recursive)

    # ------------------------------------------------------------------
    # Pass-through operations
    # ------------------------------------------------------------------
    def delete_file(self, path: str) -> None:
        os.remove(require_non_empty(path, "path"))

    def delete_directory(self, path: str, recursive: bool) -> None:
        path = require_non_empty(path, "path")
        if recursive:
            shutil.rmtree(path)
        else:
            os.rmdir(path)

    def create_directory(self, path: str) -> None:
        os.makedirs(require_non_empty(path, "path"), exist_ok=True)

    def copy_file(self, source: str, target: str, overwrite: bool) -> None:
        operations.copy_file(
            require_non_empty(source, "source"),
            require_non_empty(target, "target"),
            overwrite,
        )

    def move_file(self, source: str, target: str) -> None:
        operations.move_file(
            require_non_empty(source, "source"), require_non_empty(target, "target")
        )

    def move_directory(self, source: str, target: str) -> None:
        operations.move_directory(
            require_non_empty(source, "source"), require_non_empty(target, "target")
        )

    def directory_exists(self, path: Optional[str]) -> bool:
        return bool(path) and os.path.isdir(path)

    def file_exists(self, path: Optional[str]) -> bool:
        return bool(path) and os.path.isfile(path)

    def open_read(self, path: str) -> BinaryIO:
        return open(require_non_empty(path, "path"), "rb")

    def read_all_text(self, path: str, encoding: Optional[str] = None) -> str:
        path = require_non_empty(path, "path")
        with open(path, "r", encoding=encoding or DEFAULT_READ_ENCODING, newline="") as f:
            return f.read()

    def write_all_text(
        self, path: str, text: str, encoding: Optional[str] = None
    ) -> None:
        path = require_non_empty(path, "path")
        with open(path, "w", encoding=encoding or DEFAULT_ENCODING, newline="") as f:
            f.write(text)

    def get_file_stream(
        self,
        path: str,
        mode: FileMode,
        access: FileAccess,
        share: FileShare,
        is_async: bool = False,
    ) -> Union[BinaryIO, AsyncFileStream]:
        """Open *path* as a buffered binary stream.

        The stream is asynchronous only when the host supports async file
        handles *and* the caller asks for one; otherwise a synchronous stream
        is returned regardless of *is_async*.
        """
        stream = streams.open_file_stream(path, mode, access, share)
        if self.options.supports_async_file_streams and is_async:
            return streams.wrap_async(stream)
        return stream
