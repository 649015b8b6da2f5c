"""Shared fixtures for commonfs tests."""

import importlib
import logging

import pytest

from commonfs.fs.filesystem import CommonFileSystem
from commonfs.utils import config as cfg


@pytest.fixture()
def fs() -> CommonFileSystem:
    """A facade with the host's native invalid-character table."""
    return CommonFileSystem(logging.getLogger("commonfs.tests"))


@pytest.fixture()
def preset_fs() -> CommonFileSystem:
    """A facade enforcing the strict preset invalid-character table."""
    return CommonFileSystem(
        logging.getLogger("commonfs.tests"),
        use_preset_invalid_file_name_chars=True,
    )


@pytest.fixture()
def reload_config(tmp_path_factory, monkeypatch):
    """Reload utils.config after patching HOME/XDG directories.

    Ensures CONFIG_DIR/FILE constants are recalculated for a temporary home dir
    so tests do not interfere with the real user config. The home directory
    lives outside tmp_path so listing tests see only the files they create.
    """
    fake_home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("COMMONFS_FS_SUPPORTS_ASYNC_FILE_STREAMS", raising=False)
    monkeypatch.delenv("COMMONFS_FS_USE_PRESET_INVALID_CHARS", raising=False)
    # Reload module so that Path.home() & env vars are re-evaluated
    importlib.reload(cfg)
    return fake_home
