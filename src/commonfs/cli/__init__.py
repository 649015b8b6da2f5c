"""Command-line interface for commonfs.

A small developer tool for inspecting how the filesystem layer treats paths,
filenames, shortcuts and directories on the current host.

- app: The Typer application object (see ``commonfs.cli.commands``).
- console: Rich Console instance for consistent, styled output.
"""

from rich.console import Console
from rich.traceback import install

# Install rich traceback handler for all CLI commands
install(show_locals=True)

console = Console()

__all__ = ["console"]
