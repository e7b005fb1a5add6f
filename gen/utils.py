"""Shared console helpers.

Rich-based progress and status output used by the generator and the CLI.
All user-facing text goes through the module-level ``console`` so tests can
capture or silence it in one place.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()


def print_header(title: str) -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold cyan]{escape(title)}[/bold cyan]", style="cyan"))


def print_created(path: str | Path, *, directory: bool = False) -> None:
    """Report a directory or file written by the generator."""
    label = "Created dir " if directory else "Created file"
    console.print(f"[green]{label}[/green] {escape(str(path))}", highlight=False)


def print_tool_output(stream: bytes) -> None:
    """Print captured tool output verbatim (no Rich markup interpretation)."""
    text = stream.decode("utf-8", errors="replace").rstrip()
    if text:
        console.print(text, markup=False, highlight=False)


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_running(command_line: str) -> None:
    """Announce an external command before it runs."""
    console.print(f"[cyan]Running[/cyan] {escape(command_line)}", highlight=False)
