"""Tests for the renderer module."""

import io
import logging
from pathlib import Path

from rich.console import Console

from commonfs.cli.renderer import render_entries
from commonfs.fs.filesystem import CommonFileSystem
from commonfs.models.core import EntryKind, FileSystemEntry


def _console() -> Console:
    return Console(file=io.StringIO(), width=400, color_system=None)


def test_render_entries_counts_rows(tmp_path: Path) -> None:
    (tmp_path / "a.mkv").write_text("a")
    (tmp_path / "b.mkv").write_text("b")
    fs = CommonFileSystem(logging.getLogger("commonfs.tests"))
    console = _console()

    count = render_entries(fs.get_files(str(tmp_path)), fs, console=console)

    assert count == 2
    output = console.file.getvalue()
    assert "a.mkv" in output
    assert "b.mkv" in output


def test_render_entries_missing_entry_has_no_timestamps(tmp_path: Path) -> None:
    fs = CommonFileSystem(logging.getLogger("commonfs.tests"))
    entry = FileSystemEntry(full_path=str(tmp_path / "gone.mkv"), kind=EntryKind.FILE)
    console = _console()

    render_entries([entry], fs, console=console)

    output = console.file.getvalue()
    assert "no" in output
    assert "-" in output


def test_render_entries_prints_markup_literally(tmp_path: Path) -> None:
    """Square brackets in paths and titles are not treated as Rich styles."""
    path = tmp_path / "Movie [bold red].mkv"
    path.write_text("x")
    fs = CommonFileSystem(logging.getLogger("commonfs.tests"))
    console = _console()

    render_entries(
        [fs.get_file_system_info(str(path))], fs, console=console, title="[b]Library"
    )

    output = console.file.getvalue()
    assert "Movie [bold red].mkv" in output
    assert "[b]Library" in output
