"""Invalid filename characters and filename sanitization.

Two tables are available:
- The native table reflects what the running host actually forbids. Windows
  forbids control characters and ``"<>|:*?\\/``; POSIX hosts only forbid NUL
  and ``/``.
- The preset table is the Windows table applied everywhere, so that names
  created on a permissive host stay usable when the library is later served
  from, or copied to, a stricter one.

The active table is chosen once from ``InvalidCharsPolicy`` and then passed
around as an immutable tuple.
"""

import sys
from typing import Optional, Tuple

from commonfs.errors import require_non_empty
from commonfs.models.core import InvalidCharsPolicy

SPACE_CHAR = " "

PRESET_INVALID_FILENAME_CHARS: Tuple[str, ...] = tuple(
    chr(code) for code in range(0x20)
) + ('"', "<", ">", "|", ":", "*", "?", "\\", "/")

_POSIX_INVALID_FILENAME_CHARS: Tuple[str, ...] = ("\x00", "/")


def native_invalid_filename_chars(platform: Optional[str] = None) -> Tuple[str, ...]:
    """Return the characters the host forbids in filenames.

    Args:
        platform: Override for ``sys.platform`` (used by tests).
    """
    platform = platform or sys.platform
    if platform == "win32":
        return PRESET_INVALID_FILENAME_CHARS
    return _POSIX_INVALID_FILENAME_CHARS


def invalid_filename_chars(
    policy: InvalidCharsPolicy, platform: Optional[str] = None
) -> Tuple[str, ...]:
    """Return the de-duplicated invalid-character table for *policy*."""
    if policy is InvalidCharsPolicy.PRESET:
        chars = PRESET_INVALID_FILENAME_CHARS
    else:
        chars = native_invalid_filename_chars(platform)
    return tuple(dict.fromkeys(chars))


def get_valid_filename(filename: Optional[str], invalid_chars: Tuple[str, ...]) -> str:
    """Replace every character of *invalid_chars* in *filename* with a space.

    The result has the same length as the input. Only the configured table is
    enforced; reserved device names and trailing dots are the caller's concern.

    Args:
        filename: The filename to sanitize (a name, not a path).
        invalid_chars: The active invalid-character table.

    Returns:
        The sanitized filename.

    Raises:
        InvalidArgumentError: If *filename* is None or empty.
    """
    filename = require_non_empty(filename, "filename")

    table = str.maketrans({char: SPACE_CHAR for char in invalid_chars})
    return filename.translate(table)
