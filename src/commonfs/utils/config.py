"""Config utility for persistent commonfs settings.

The capability flags of ``CommonFileSystem`` are supplied once at startup by
the embedding application. This module resolves them from
~/.config/commonfs/config.toml, ``COMMONFS_*`` environment variables, and
explicit overrides. Uses tomli/tomli-w for TOML parsing and writing.

Example config.toml::

    [fs]
    supports_async_file_streams = true
    use_preset_invalid_chars = true
"""

from pathlib import Path
from typing import Optional, TypeVar, Any, cast
import os
import contextlib

import tomli
import tomli_w

from commonfs.models.core import FileSystemOptions, InvalidCharsPolicy

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
# Path like ~/.config/commonfs or $XDG_CONFIG_HOME/commonfs
CONFIG_DIR = _xdg_config_home / "commonfs"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ASYNC_STREAMS_KEY = "fs.supports_async_file_streams"
PRESET_CHARS_KEY = "fs.use_preset_invalid_chars"

_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="fs.use_preset_invalid_chars" will attempt
    ``data["fs"]["use_preset_invalid_chars"]`` returning None if any level is
    missing.
    """

    keys = dotted_key.split(".")
    current: Any = data
    for part in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = "COMMONFS_") -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "fs.use_preset_invalid_chars" -> "COMMONFS_FS_USE_PRESET_INVALID_CHARS".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(value: Any, default: T) -> T:
    """Coerce a raw env/config *value* to the type of *default*.

    Falls back to *default* when the value cannot be converted.
    """
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.lower() in _TRUTHY)
        return default
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(value))
        return default
    if isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cast(T, float(value))
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, float(value))
        return default
    return cast(T, value)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"fs.use_preset_invalid_chars"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    # 1. CLI value wins if provided (and not ``None`` to mimic Typer semantics).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    # 4. Default
    return default


def set_setting(key: str, value: Any) -> None:
    """Persist *value* under the dotted *key* in config.toml.

    Args:
        key: Dotted key path, e.g. ``"fs.use_preset_invalid_chars"``.
        value: A TOML-serializable value.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    current = data
    for part in parents:
        current = current.setdefault(part, {})
    current[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)


def load_filesystem_options(
    *,
    supports_async_file_streams: Optional[bool] = None,
    use_preset_invalid_chars: Optional[bool] = None,
) -> FileSystemOptions:
    """Build the capability flags for ``CommonFileSystem``.

    Explicit arguments take precedence over the environment and config file.
    """
    async_streams = resolve_setting(
        ASYNC_STREAMS_KEY, default=False, cli_value=supports_async_file_streams
    )
    preset = resolve_setting(
        PRESET_CHARS_KEY, default=False, cli_value=use_preset_invalid_chars
    )
    return FileSystemOptions(
        supports_async_file_streams=async_streams,
        invalid_chars_policy=(
            InvalidCharsPolicy.PRESET if preset else InvalidCharsPolicy.NATIVE
        ),
    )
