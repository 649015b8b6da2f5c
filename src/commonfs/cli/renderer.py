"""Renderer for CLI output.

Renders filesystem entries as Rich tables, using the facade's degraded
timestamp lookups so a single unreadable entry never aborts the listing.
"""

from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from commonfs.fs.filesystem import CommonFileSystem
from commonfs.models.core import MIN_TIMESTAMP, FileSystemEntry


def _format_timestamp(value) -> str:
    if value == MIN_TIMESTAMP:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%S")


def render_entries(
    entries: Iterable[FileSystemEntry],
    fs: CommonFileSystem,
    console: Console | None = None,
    title: str | None = None,
) -> int:
    """Render *entries* as a table.

    Args:
        entries: Entries to render; consumed lazily.
        fs: Facade used for timestamp lookups.
        console: Optional Console instance to use for rendering.
        title: Optional table title.

    Returns:
        Number of rows rendered.
    """
    console = console or Console()

    table = Table(title=escape(title) if title else None)
    table.add_column("Kind", style="bold", no_wrap=True)
    table.add_column("Path", style="cyan")
    table.add_column("Exists", style="green")
    table.add_column("Created (UTC)", style="yellow")
    table.add_column("Modified (UTC)", style="yellow")

    count = 0
    for entry in entries:
        table.add_row(
            entry.kind.value,
            escape(entry.full_path),
            "yes" if entry.exists else "no",
            _format_timestamp(
                fs.get_creation_time_utc(entry) if entry.exists else MIN_TIMESTAMP
            ),
            _format_timestamp(
                fs.get_last_write_time_utc(entry) if entry.exists else MIN_TIMESTAMP
            ),
        )
        count += 1

    console.print(table)
    return count
