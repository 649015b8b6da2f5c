"""Tests for the commonfs CLI commands.

Covers each developer command end to end through Typer's CliRunner, the
global --preset option, and the mapping of argument/filesystem errors to exit
code 1.
"""

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from commonfs.cli.commands import ExitCode, app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(reload_config):
    """Keep the user's config.toml and COMMONFS_* variables out of CLI tests."""
    return reload_config


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == ExitCode.SUCCESS
    assert "commonfs version" in result.output


def test_normalize() -> None:
    path = os.sep + "media" + os.sep + "tv" + os.sep + os.sep
    result = runner.invoke(app, ["normalize", path])
    assert result.exit_code == ExitCode.SUCCESS
    assert result.output.strip() == os.sep + "media" + os.sep + "tv"


def test_substitute() -> None:
    result = runner.invoke(
        app, ["substitute", "/movies/show/ep1.mkv", "/MOVIES", "\\\\nas\\movies"]
    )
    assert result.exit_code == ExitCode.SUCCESS
    assert result.output.strip() == "\\\\nas\\movies\\show\\ep1.mkv"


def test_substitute_blank_argument_fails() -> None:
    result = runner.invoke(app, ["substitute", "/movies/a.mkv", " ", "/media"])
    assert result.exit_code == ExitCode.ERROR
    assert "Error" in result.output


def test_valid_filename_preset() -> None:
    result = runner.invoke(app, ["--preset", "valid-filename", "a:b?"])
    assert result.exit_code == ExitCode.SUCCESS
    assert "'a b '" in result.output


def test_valid_filename_preset_from_env(monkeypatch) -> None:
    monkeypatch.setenv("COMMONFS_FS_USE_PRESET_INVALID_CHARS", "1")
    result = runner.invoke(app, ["valid-filename", "x|y"])
    assert result.exit_code == ExitCode.SUCCESS
    assert "'x y'" in result.output


def test_options_shows_policy() -> None:
    result = runner.invoke(app, ["--preset", "options"])
    assert result.exit_code == ExitCode.SUCCESS
    assert "invalid_chars_policy: preset" in result.output
    assert "invalid filename chars: 41" in result.output


def test_info_missing_path(tmp_path: Path) -> None:
    result = runner.invoke(app, ["info", str(tmp_path / "missing.mkv")])
    assert result.exit_code == ExitCode.SUCCESS
    assert "directory" in result.output
    assert "Name without extension: missing" in result.output


def test_ls(tmp_path: Path) -> None:
    (tmp_path / "Season 01").mkdir()
    (tmp_path / "Season 01" / "ep1.mkv").write_text("x")

    result = runner.invoke(app, ["ls", str(tmp_path), "--recursive", "--files"])
    assert result.exit_code == ExitCode.SUCCESS
    assert "file" in result.output
    assert "No entries found" not in result.output


def test_ls_empty_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["ls", str(tmp_path)])
    assert result.exit_code == ExitCode.SUCCESS
    assert "No entries found" in result.output


def test_ls_missing_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["ls", str(tmp_path / "missing")])
    assert result.exit_code == ExitCode.ERROR
    assert "Error" in result.output


def test_ls_conflicting_filters(tmp_path: Path) -> None:
    result = runner.invoke(app, ["ls", str(tmp_path), "--files", "--dirs"])
    assert result.exit_code == ExitCode.ERROR


def test_shortcut_create_and_resolve(tmp_path: Path) -> None:
    shortcut = tmp_path / "movies.mblink"
    target = os.sep + "mnt" + os.sep + "movies" + os.sep

    created = runner.invoke(app, ["shortcut", "create", str(shortcut), target])
    assert created.exit_code == ExitCode.SUCCESS
    assert shortcut.read_text(encoding="utf-8") == target

    resolved = runner.invoke(app, ["shortcut", "resolve", str(shortcut)])
    assert resolved.exit_code == ExitCode.SUCCESS
    assert resolved.output.strip() == target.rstrip(os.sep)


def test_shortcut_resolve_non_shortcut(tmp_path: Path) -> None:
    result = runner.invoke(app, ["shortcut", "resolve", str(tmp_path / "a.mkv")])
    assert result.exit_code == ExitCode.ERROR
    assert "not a shortcut" in result.output


def test_swap(tmp_path: Path) -> None:
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_text("a")
    b.write_text("b")

    result = runner.invoke(app, ["swap", str(a), str(b)])
    assert result.exit_code == ExitCode.SUCCESS
    assert a.read_text() == "b"
    assert b.read_text() == "a"


def test_swap_verify_identical(tmp_path: Path) -> None:
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_text("same")
    b.write_text("same")

    result = runner.invoke(app, ["swap", "--verify", str(a), str(b)])
    assert result.exit_code == ExitCode.SUCCESS
    assert "identical" in result.output


def test_swap_missing_file(tmp_path: Path) -> None:
    a = tmp_path / "a.txt"
    a.write_text("a")

    result = runner.invoke(app, ["swap", str(a), str(tmp_path / "missing.txt")])
    assert result.exit_code == ExitCode.ERROR
    assert "Error" in result.output


def test_ls_empty_subdirectory(tmp_path: Path) -> None:
    empty = tmp_path / "Season 02"
    empty.mkdir()

    result = runner.invoke(app, ["ls", str(empty)])
    assert result.exit_code == ExitCode.SUCCESS
    assert "No entries found" in result.output


def test_messages_with_long_paths_are_not_wrapped(tmp_path: Path) -> None:
    deep = tmp_path / ("Some Very Long Show Name " * 4).strip()
    deep.mkdir()
    path = deep / "episode.mkv"

    result = runner.invoke(app, ["shortcut", "resolve", str(path)])
    assert result.exit_code == ExitCode.ERROR
    assert f"{path} is not a shortcut." in result.output


def test_markup_in_paths_is_printed_literally(tmp_path: Path) -> None:
    path = tmp_path / "Movie [bold red].mkv"
    path.write_text("x")

    result = runner.invoke(app, ["shortcut", "resolve", str(path)])
    assert result.exit_code == ExitCode.ERROR
    assert f"{path} is not a shortcut." in result.output

    info = runner.invoke(app, ["info", str(path)])
    assert info.exit_code == ExitCode.SUCCESS
    assert "Name without extension: Movie [bold red]" in info.output


def test_swap_reports_both_paths(tmp_path: Path) -> None:
    a = tmp_path / "[a].txt"
    b = tmp_path / "[b].txt"
    a.write_text("a")
    b.write_text("b")

    result = runner.invoke(app, ["swap", str(a), str(b)])
    assert result.exit_code == ExitCode.SUCCESS
    assert f"Swapped {a} <-> {b}" in result.output
