"""Copy, move, and swap helpers for commonfs.

Provides the compound file operations behind ``CommonFileSystem``. Handles
cross-device moves, Windows long paths, hidden-attribute clearing, and the
two-temp-file swap.

Swapping is NOT atomic. ``swap_files`` performs four sequential copies with no
rollback; a failure part-way leaves both targets and one or two temp files on
disk. The temp file names are logged at debug level so they can be recovered
by hand.
"""

import errno
import os
import shutil
import stat
import sys
import tempfile
from typing import Optional

from commonfs.errors import require_non_empty
from commonfs.utils.debug import debug

WIN_MAX_PATH = 259  # Windows MAX_PATH limit for NTFS long paths


def get_win_long_path_prefix() -> str:
    """Return the Windows NTFS long path prefix (avoids static backslash pattern).

    This avoids static string patterns for Windows compatibility checks.
    """
    bslash = chr(92)
    return bslash + bslash + "?" + bslash


def _win_long_path(path: str) -> str:
    prefix = get_win_long_path_prefix()
    if sys.platform == "win32" and len(path) > WIN_MAX_PATH and not path.startswith(prefix):
        return prefix + os.path.abspath(path)
    return path


def files_identical(path1: str, path2: str, chunk_size: int = 8192) -> bool:
    """Return True if both files have the same bytes."""
    if os.stat(path1).st_size != os.stat(path2).st_size:
        return False
    with open(path1, "rb") as f1, open(path2, "rb") as f2:
        while True:
            b1 = f1.read(chunk_size)
            b2 = f2.read(chunk_size)
            if b1 != b2:
                return False
            if not b1:
                return True


def copy_file(source: str, target: str, overwrite: bool) -> None:
    """Copy *source* to *target*, data and metadata.

    Raises:
        FileExistsError: If *target* exists and *overwrite* is False.
        OSError: For any other filesystem failure.
    """
    if not overwrite and os.path.exists(target):
        raise FileExistsError(errno.EEXIST, "Destination exists", target)
    shutil.copy2(_win_long_path(source), _win_long_path(target))


def move_file(source: str, target: str) -> None:
    """Move *source* to *target*, falling back to copy + unlink across devices.

    Raises:
        FileExistsError: If *target* already exists.
        FileNotFoundError: If *source* is missing.
        OSError: For non-recoverable FS errors.
    """
    if os.path.lexists(target):
        raise FileExistsError(errno.EEXIST, "Destination exists", target)
    src_path = _win_long_path(source)
    dst_path = _win_long_path(target)
    try:
        os.rename(src_path, dst_path)
    except OSError as e:
        if e.errno == errno.EXDEV:
            shutil.copy2(src_path, dst_path)
            os.unlink(src_path)
        else:
            raise


def move_directory(source: str, target: str) -> None:
    """Move the directory *source* to *target*.

    Raises:
        FileExistsError: If *target* already exists.
        OSError: For non-recoverable FS errors.
    """
    if os.path.lexists(target):
        raise FileExistsError(errno.EEXIST, "Destination exists", target)
    src_path = _win_long_path(source)
    dst_path = _win_long_path(target)
    try:
        os.rename(src_path, dst_path)
    except OSError as e:
        if e.errno == errno.EXDEV:
            shutil.copytree(src_path, dst_path, symlinks=True)
            shutil.rmtree(src_path)
        else:
            raise


def _set_windows_file_attributes(path: str, attributes: int) -> None:
    import ctypes

    if not ctypes.windll.kernel32.SetFileAttributesW(path, attributes):  # type: ignore[attr-defined]
        raise ctypes.WinError()  # type: ignore[attr-defined]


def remove_hidden_attribute(path: Optional[str]) -> None:
    """Clear the hidden attribute of *path* if the file exists and has one.

    Windows uses ``FILE_ATTRIBUTE_HIDDEN``; macOS and the BSDs use the
    ``UF_HIDDEN`` file flag. Elsewhere hiding is only a naming convention and
    there is nothing to clear.

    Raises:
        InvalidArgumentError: If *path* is None or empty.
    """
    path = require_non_empty(path, "path")

    if not os.path.isfile(path):
        return

    st = os.stat(path)
    win_attributes = getattr(st, "st_file_attributes", None)
    if win_attributes is not None:
        if win_attributes & stat.FILE_ATTRIBUTE_HIDDEN:
            _set_windows_file_attributes(
                path, win_attributes & ~stat.FILE_ATTRIBUTE_HIDDEN
            )
        return

    flags = getattr(st, "st_flags", None)
    if flags is not None and hasattr(os, "chflags") and flags & stat.UF_HIDDEN:
        os.chflags(path, flags & ~stat.UF_HIDDEN)


def _make_temp_file() -> str:
    fd, temp_path = tempfile.mkstemp(prefix="commonfs-swap-", suffix=".tmp")
    os.close(fd)
    return temp_path


def swap_files(file1: Optional[str], file2: Optional[str]) -> None:
    """Exchange the contents of *file1* and *file2*.

    Each file is copied to its own temp file, then each temp file is copied
    over the other target, then both temp files are deleted. Not atomic and
    without rollback: if a step fails, the exception propagates and any temp
    files already written are left in place.

    Raises:
        InvalidArgumentError: If either path is None or empty.
        OSError: If any copy or delete fails.
    """
    file1 = require_non_empty(file1, "file1")
    file2 = require_non_empty(file2, "file2")

    temp1 = _make_temp_file()
    temp2 = _make_temp_file()
    debug(f"Swapping {file1} <-> {file2} via {temp1}, {temp2}")

    # Copying over will fail against hidden files
    remove_hidden_attribute(file1)
    remove_hidden_attribute(file2)

    copy_file(file1, temp1, True)
    copy_file(file2, temp2, True)

    copy_file(temp1, file2, True)
    copy_file(temp2, file1, True)

    os.remove(temp1)
    os.remove(temp2)
