"""Exception types for commonfs.

Only argument validation failures are modelled here. Failures surfaced by the
host filesystem (missing files, permission denial, path too long, ...) are the
built-in ``OSError`` family and propagate to callers unmodified.
"""

from typing import Optional


class CommonFsError(Exception):
    """Base class for all errors raised by commonfs itself."""


class InvalidArgumentError(CommonFsError, ValueError):
    """Raised when a required string argument is None, empty, or blank.

    Always a caller bug; never retried.
    """

    def __init__(self, param_name: str, message: Optional[str] = None) -> None:
        """Initialize the error with the offending parameter name."""
        super().__init__(message or f"Argument must not be empty: {param_name}")
        self.param_name = param_name


def require_non_empty(value: Optional[str], param_name: str) -> str:
    """Return *value* or raise InvalidArgumentError when it is None or empty."""
    if not value:
        raise InvalidArgumentError(param_name)
    return value


def require_non_blank(value: Optional[str], param_name: str) -> str:
    """Return *value* or raise InvalidArgumentError when it is None or whitespace."""
    if value is None or not value.strip():
        raise InvalidArgumentError(
            param_name, f"Argument must not be empty or whitespace: {param_name}"
        )
    return value
