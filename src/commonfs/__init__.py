# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""commonfs - Cross-platform filesystem abstraction for media libraries."""

from commonfs.__about__ import __version__
from commonfs.errors import CommonFsError, InvalidArgumentError
from commonfs.fs.filesystem import CommonFileSystem

__all__ = [
    "__version__",
    "CommonFileSystem",
    "CommonFsError",
    "InvalidArgumentError",
]
