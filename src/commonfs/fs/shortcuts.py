"""Shortcut (``.mblink``) files.

A shortcut is a small text file whose only content is the path of the real
location. The media library treats it as a redirect: a folder can hold
``Movies.mblink`` pointing at ``\\\\nas\\movies`` instead of the files
themselves.

Reading and writing shortcuts goes through ``CommonFileSystem`` so that the
target is normalized with the active separator; this module holds the parts
that need no filesystem access.
"""

from typing import Optional

from commonfs.errors import require_non_empty
from commonfs.fs.paths import get_extension

SHORTCUT_EXTENSION = ".mblink"


def is_shortcut(filename: Optional[str]) -> bool:
    """Return True if *filename* has the shortcut extension (any case).

    Raises:
        InvalidArgumentError: If *filename* is None or empty.
    """
    filename = require_non_empty(filename, "filename")
    return get_extension(filename).lower() == SHORTCUT_EXTENSION


def parse_shortcut_target(content: str) -> Optional[str]:
    """Return the target path stored in shortcut *content*, or None if empty.

    A single trailing line terminator is dropped; shortcuts written by hand
    usually carry one.
    """
    if content.endswith("\r\n"):
        content = content[:-2]
    elif content.endswith(("\n", "\r")):
        content = content[:-1]
    return content or None
