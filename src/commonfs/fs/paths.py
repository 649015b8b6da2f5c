"""Path string normalization for commonfs.

Pure functions over path strings. Nothing in this module touches the
filesystem; the result depends only on the arguments and the separator the
caller passes in (normally ``FileSystemOptions.directory_separator``).

Design:
- Paths are plain ``str`` rather than ``pathlib.Path`` because they may come
  from a different host (a Windows share seen from Linux, a URL stored in a
  library database) and must keep their original syntax.
- Name and extension helpers accept both ``/`` and ``\\`` as component
  separators so a path from either convention splits the same way.
"""

import ntpath
import posixpath
import re
from typing import Optional

from commonfs.errors import require_non_blank, require_non_empty

DRIVE_ROOT_PATTERN = re.compile(r"^[A-Za-z]:\\$")

_COMPONENT_SEPARATORS = re.compile(r"[\\/]")


def normalize_path(path: Optional[str], separator: str) -> str:
    """Strip trailing separators from *path*.

    A bare drive root such as ``C:\\`` is returned unchanged since it is only
    valid with its trailing separator.

    Args:
        path: The path to normalize.
        separator: The platform directory separator.

    Returns:
        The normalized path.

    Raises:
        InvalidArgumentError: If *path* is None or empty.
    """
    path = require_non_empty(path, "path")

    if DRIVE_ROOT_PATTERN.match(path):
        return path

    return path.rstrip(separator)


def substitute_path(
    path: Optional[str], from_: Optional[str], to: Optional[str]
) -> str:
    r"""Replace *from_* with *to* inside *path*, ignoring case.

    When at least one replacement happens, every separator in the result is
    rewritten to the style used by *to*: ``/`` if *to* contains one, ``\``
    otherwise. When nothing matches, *path* is returned untouched.

    Example:
        >>> substitute_path("/movies/show/ep1.mkv", "/movies", "\\\\server\\movies")
        '\\\\server\\movies\\show\\ep1.mkv'

    Raises:
        InvalidArgumentError: If any argument is None, empty, or whitespace.
    """
    path = require_non_blank(path, "path")
    from_ = require_non_blank(from_, "from")
    to = require_non_blank(to, "to")

    # A callable replacement keeps backslashes in *to* literal.
    new_path = re.sub(re.escape(from_), lambda _: to, path, flags=re.IGNORECASE)

    if new_path != path:
        if "/" in to:
            new_path = new_path.replace("\\", "/")
        else:
            new_path = new_path.replace("/", "\\")

    return new_path


def contains_sub_path(
    parent_path: Optional[str], path: Optional[str], separator: str
) -> bool:
    """Return True if *path* contains *parent_path* followed by a separator.

    This is a case-insensitive substring test, not a component-wise comparison:
    ``/data/media`` matches ``/data/media/x`` and ``/backup/data/media/x`` but
    not ``/data/mediaextra/x``.

    Raises:
        InvalidArgumentError: If either argument is None or empty.
    """
    parent_path = require_non_empty(parent_path, "parent_path")
    path = require_non_empty(path, "path")

    needle = parent_path.rstrip(separator) + separator
    return needle.casefold() in path.casefold()


def is_root_path(path: Optional[str], separator: str) -> bool:
    """Return True if *path* has no parent directory component.

    Raises:
        InvalidArgumentError: If *path* is None or empty.
    """
    path = require_non_empty(path, "path")

    module = ntpath if separator == "\\" else posixpath
    parent = module.dirname(path)
    return not parent or parent == path


def is_path_file(path: Optional[str]) -> bool:
    """Return True if *path* is a local filesystem path rather than a URI.

    Anything containing ``://`` is treated as a URI unless it uses the
    ``file://`` scheme.

    Raises:
        InvalidArgumentError: If *path* is None, empty, or whitespace.
    """
    path = require_non_blank(path, "path")

    lowered = path.lower()
    if "://" in lowered and not lowered.startswith("file://"):
        return False
    return True


def get_file_name(path: str) -> str:
    """Return the final component of *path* (empty if it ends in a separator)."""
    return _COMPONENT_SEPARATORS.split(path)[-1]


def get_extension(path: str) -> str:
    """Return the extension of *path* including the dot, or ``""``.

    A trailing dot with nothing after it is not an extension.
    """
    name = get_file_name(path)
    index = name.rfind(".")
    if index == -1 or index == len(name) - 1:
        return ""
    return name[index:]


def has_extension(path: str) -> bool:
    """Return True if the final component of *path* has an extension."""
    return get_extension(path) != ""


def get_file_name_without_extension(path: str) -> str:
    """Return the final component of *path* with its last ``.`` suffix removed."""
    name = get_file_name(path)
    index = name.rfind(".")
    if index == -1:
        return name
    return name[:index]
