"""Console utilities with Rich patterns.

Status messages go to stderr by default: ``qbit mktorrent`` may write torrent
bytes to stdout.
"""

from __future__ import annotations

import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table


def create_console(stderr: bool = True) -> Console:
    """Create a Rich Console for status output."""
    return Console(
        file=sys.stderr if stderr else sys.stdout,
        force_terminal=None,
        legacy_windows=False,
        safe_box=True,
    )


def print_success(message: str, console: Console | None = None, **kwargs: Any) -> None:
    """Print a success message."""
    if console is None:
        console = create_console()
    console.print(f"[green]✓[/green] {escape(message)}", **kwargs)


def print_error(message: str, console: Console | None = None, **kwargs: Any) -> None:
    """Print an error message."""
    if console is None:
        console = create_console()
    console.print(f"[red]✗[/red] {escape(message)}", **kwargs)


def print_info(message: str, console: Console | None = None, **kwargs: Any) -> None:
    if console is None:
        console = create_console()
    console.print(f"[cyan]ℹ[/cyan] {escape(message)}", **kwargs)


def create_table(
    title: str | None = None,
    show_header: bool = True,
    border_style: str = "blue",
    header_style: str = "bold cyan",
    row_styles: list[str] | None = None,
    **kwargs: Any,
) -> Table:
    """Create a Rich table with the CLI's default styling.

    Args:
        title: Optional table title
        show_header: Whether to show table header
        border_style: Border style color
        header_style: Header text style
        row_styles: List of row styles (alternating)
        **kwargs: Additional arguments for Table constructor

    """
    table = Table(
        title=title,
        show_header=show_header,
        border_style=border_style,
        header_style=header_style,
        **kwargs,
    )
    if row_styles:
        table.row_styles = row_styles
    return table
