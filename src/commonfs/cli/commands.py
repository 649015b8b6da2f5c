"""CLI commands for commonfs.

This module implements the developer-facing commands for inspecting the
filesystem layer: path normalization and substitution, filename sanitization,
entry resolution, directory listing, shortcut files and file swapping.
- Uses Typer for declarative CLI structure and option parsing.
- All output is routed through Rich Console for consistent, styled UX.

Design:
- The top-level callback builds one CommonFileSystem from config.toml /
  ``COMMONFS_*`` environment variables (overridable with ``--preset``) and
  stores it on the Typer context for every command.
- Exit codes are defined as an Enum for clarity and maintainability.
"""

import os
from contextlib import contextmanager
from enum import Enum
from typing import Annotated, Iterator, Optional

import typer
from rich.markup import escape

from commonfs.cli import console
from commonfs.cli.renderer import render_entries
from commonfs.errors import CommonFsError
from commonfs.fs.filesystem import CommonFileSystem
from commonfs.fs.operations import files_identical

app = typer.Typer(
    name="commonfs",
    help="Inspect how commonfs treats paths, filenames and shortcuts on this host.",
    add_completion=False,
)
shortcut_app = typer.Typer(help="Create and resolve .mblink shortcut files.")
app.add_typer(shortcut_app, name="shortcut")


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Turn argument and filesystem errors into a red message and exit code 1."""
    try:
        yield
    except (CommonFsError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(ExitCode.ERROR)


def _fs(ctx: typer.Context) -> CommonFileSystem:
    return ctx.obj


PRESET = Annotated[
    Optional[bool],
    typer.Option(
        "--preset/--native",
        help="Enforce the strict preset invalid-filename table instead of the "
        "host's. Defaults to the fs.use_preset_invalid_chars setting.",
    ),
]

RECURSIVE = Annotated[
    bool,
    typer.Option("--recursive", "-r", help="Walk the whole subtree"),
]


@app.callback()
def callback(
    ctx: typer.Context,
    preset: PRESET = None,
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help="Disable Rich coloured output. "
        "Can also be set with the COMMONFS_NO_RICH environment variable.",
    ),
) -> None:
    """Top-level CLI callback adding global options."""
    if no_rich or os.getenv("COMMONFS_NO_RICH", "0").lower() in {"1", "true", "yes"}:
        console.no_color = True
    ctx.obj = CommonFileSystem.from_config(use_preset_invalid_chars=preset)


@app.command()
def normalize(ctx: typer.Context, path: str) -> None:
    """Strip trailing separators from PATH (drive roots are kept)."""
    with _handle_errors():
        console.print(
            _fs(ctx).normalize_path(path), markup=False, highlight=False, soft_wrap=True
        )


@app.command()
def substitute(ctx: typer.Context, path: str, from_: str, to: str) -> None:
    """Replace FROM_ with TO in PATH, ignoring case, adopting TO's separators."""
    with _handle_errors():
        console.print(
            _fs(ctx).substitute_path(path, from_, to),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


@app.command("valid-filename")
def valid_filename(ctx: typer.Context, name: str) -> None:
    """Replace characters that are invalid in filenames with spaces."""
    with _handle_errors():
        console.print(
            repr(_fs(ctx).get_valid_filename(name)),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


@app.command()
def info(ctx: typer.Context, path: str) -> None:
    """Show how PATH is classified and its timestamps."""
    fs = _fs(ctx)
    with _handle_errors():
        entry = fs.get_file_system_info(path)
        render_entries([entry], fs, console=console, title=path)
        stem = fs.get_file_name_without_extension(entry)
        console.print(f"Name without extension: {escape(stem)}", soft_wrap=True)
        console.print(f"Local path: {fs.is_path_file(path)}")
        console.print(f"Root path: {fs.is_root_path(path)}")
        console.print(f"Shortcut: {fs.is_shortcut(path)}")


@app.command("ls")
def list_entries(
    ctx: typer.Context,
    path: str,
    recursive: RECURSIVE = False,
    files_only: bool = typer.Option(False, "--files", help="Only list files"),
    dirs_only: bool = typer.Option(False, "--dirs", help="Only list directories"),
) -> None:
    """List the entries under PATH."""
    fs = _fs(ctx)
    if files_only and dirs_only:
        console.print("[red]Error: --files and --dirs are mutually exclusive.[/red]")
        raise typer.Exit(ExitCode.ERROR)

    if files_only:
        entries = fs.get_files(path, recursive)
    elif dirs_only:
        entries = fs.get_directories(path, recursive)
    else:
        entries = fs.get_file_system_entries(path, recursive)

    with _handle_errors():
        count = render_entries(entries, fs, console=console, title=path)
    if count == 0:
        console.print("[yellow]No entries found.[/yellow]")


@shortcut_app.command("create")
def shortcut_create(ctx: typer.Context, shortcut_path: str, target: str) -> None:
    """Write a shortcut file pointing at TARGET."""
    fs = _fs(ctx)
    with _handle_errors():
        if not fs.is_shortcut(shortcut_path):
            console.print(
                "[yellow]Warning: shortcut files should use the .mblink extension.[/yellow]"
            )
        fs.create_shortcut(shortcut_path, target)
    console.print(f"[green]Created {escape(shortcut_path)}[/green]", soft_wrap=True)


@shortcut_app.command("resolve")
def shortcut_resolve(ctx: typer.Context, shortcut_path: str) -> None:
    """Print the normalized target of a shortcut file."""
    with _handle_errors():
        target = _fs(ctx).resolve_shortcut(shortcut_path)
    if target is None:
        console.print(
            f"[yellow]{escape(shortcut_path)} is not a shortcut.[/yellow]",
            soft_wrap=True,
        )
        raise typer.Exit(ExitCode.ERROR)
    console.print(target, markup=False, highlight=False, soft_wrap=True)


@app.command()
def swap(
    ctx: typer.Context,
    file1: str,
    file2: str,
    verify: bool = typer.Option(
        False, "--verify", help="Check that the files actually differ before swapping"
    ),
) -> None:
    """Exchange the contents of FILE1 and FILE2 (not atomic)."""
    fs = _fs(ctx)
    with _handle_errors():
        if verify and files_identical(file1, file2):
            console.print("[yellow]Files are identical; nothing to swap.[/yellow]")
            return
        fs.swap_files(file1, file2)
    console.print(
        f"[green]Swapped {escape(file1)} <-> {escape(file2)}[/green]", soft_wrap=True
    )


@app.command()
def options(ctx: typer.Context) -> None:
    """Show the resolved capability flags."""
    fs = _fs(ctx)
    for key, value in fs.options.model_dump(mode="json").items():
        console.print(f"{key}: [bold]{value}[/bold]")
    console.print(f"invalid filename chars: {len(fs.invalid_file_name_chars)}")


@app.command()
def version() -> None:
    """Show the version of commonfs."""
    from commonfs.__about__ import __version__

    console.print(f"commonfs version: [bold]{__version__}[/bold]")


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
