"""File stream access for commonfs.

Maps the mode/access/share vocabulary used by media-server callers onto
``os.open`` flags and returns buffered binary streams. When asynchronous file
handles are both supported and requested, the stream is wrapped with
``aiofiles`` so its ``read``/``write``/``close`` calls are awaitables that run
on a worker thread.
"""

import os
from enum import Enum
from typing import BinaryIO, Union

from aiofiles.threadpool import wrap as aiofiles_wrap
from aiofiles.threadpool.binary import AsyncBufferedIOBase, AsyncBufferedReader

from commonfs.errors import InvalidArgumentError, require_non_empty

DEFAULT_FILE_STREAM_BUFFER_SIZE = 81920

AsyncFileStream = Union[AsyncBufferedIOBase, AsyncBufferedReader]


class FileMode(str, Enum):
    """How the host should open or create the file."""

    CREATE_NEW = "create_new"
    CREATE = "create"
    OPEN = "open"
    OPEN_OR_CREATE = "open_or_create"
    TRUNCATE = "truncate"
    APPEND = "append"


class FileAccess(str, Enum):
    """Read/write access requested on the stream."""

    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"


class FileShare(str, Enum):
    """Access other handles may have concurrently.

    Accepted for interface parity; share modes are not enforced by the POSIX
    or CPython file APIs.
    """

    NONE = "none"
    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"
    DELETE = "delete"


_MODE_FLAGS = {
    FileMode.CREATE_NEW: os.O_CREAT | os.O_EXCL,
    FileMode.CREATE: os.O_CREAT | os.O_TRUNC,
    FileMode.OPEN: 0,
    FileMode.OPEN_OR_CREATE: os.O_CREAT,
    FileMode.TRUNCATE: os.O_TRUNC,
    FileMode.APPEND: os.O_CREAT | os.O_APPEND,
}

_ACCESS_FLAGS = {
    FileAccess.READ: os.O_RDONLY,
    FileAccess.WRITE: os.O_WRONLY,
    FileAccess.READ_WRITE: os.O_RDWR,
}

_WRITE_MODES = {FileMode.CREATE_NEW, FileMode.CREATE, FileMode.TRUNCATE}


def _validate(mode: FileMode, access: FileAccess) -> None:
    if mode is FileMode.APPEND and access is not FileAccess.WRITE:
        raise InvalidArgumentError(
            "access", "Append mode can only be combined with write access"
        )
    if mode in _WRITE_MODES and access is FileAccess.READ:
        raise InvalidArgumentError(
            "access", f"Mode {mode.value} requires write access"
        )


def _python_mode(mode: FileMode, access: FileAccess) -> str:
    if mode is FileMode.APPEND:
        return "ab"
    if access is FileAccess.READ:
        return "rb"
    if access is FileAccess.WRITE:
        return "wb"
    return "r+b"


def open_file_stream(
    path: str,
    mode: FileMode,
    access: FileAccess,
    share: FileShare = FileShare.READ,
    buffer_size: int = DEFAULT_FILE_STREAM_BUFFER_SIZE,
) -> BinaryIO:
    """Open *path* as a buffered binary stream.

    Args:
        path: File to open.
        mode: Open/create behaviour.
        access: Requested access.
        share: Requested share mode (not enforced by the host).
        buffer_size: Buffer size of the returned stream.

    Returns:
        A buffered binary file object positioned at the start of the file (or
        the end, for APPEND).

    Raises:
        InvalidArgumentError: If *path* is empty or *mode* and *access* conflict.
        FileExistsError: For CREATE_NEW when the file exists.
        FileNotFoundError: For OPEN and TRUNCATE when the file is missing.
    """
    path = require_non_empty(path, "path")
    mode = FileMode(mode)
    access = FileAccess(access)
    _validate(mode, access)

    flags = _MODE_FLAGS[mode] | _ACCESS_FLAGS[access] | getattr(os, "O_BINARY", 0)
    fd = os.open(path, flags, 0o666)
    try:
        return os.fdopen(fd, _python_mode(mode, access), buffering=buffer_size)
    except BaseException:
        os.close(fd)
        raise


def wrap_async(stream: BinaryIO) -> AsyncFileStream:
    """Wrap a buffered stream so its I/O methods are awaitables."""
    return aiofiles_wrap(stream)
