"""Console output helpers for mvcgen.

Rich-based step lines, summary tables and error messages.  Every module
prints through the shared ``console`` so tests can capture or silence it in
one place.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

if TYPE_CHECKING:
    from .scaffolder.routing import Route

console = Console()


# ---------------------------------------------------------------------------
# Headers and step lines
# ---------------------------------------------------------------------------


def print_header(title: str) -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold bright_green] {title} [/bold bright_green]", style="bright_green"))
    console.print()


def print_step(message: str, count: int | None = None) -> None:
    """Print one progress line, e.g. ``  + Entities (3 files)``."""
    suffix = ""
    if count is not None:
        suffix = f" [dim]({count} file{'s' if count != 1 else ''})[/dim]"
    console.print(f"  [green]+[/green] {message}{suffix}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


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


def print_route_table(routes: Iterable[Route], title: str = "Routes") -> None:
    """Print the registered routes in registration order."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Method", no_wrap=True)
    table.add_column("Path")
    table.add_column("Handler")

    for index, route in enumerate(routes, start=1):
        table.add_row(str(index), route.method, route.path, route.handler)

    console.print(table)
    console.print()


def print_manifest(paths: Iterable[str], title: str = "Generated files") -> None:
    """Print the list of generated relative paths."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Path")

    for index, path in enumerate(paths, start=1):
        table.add_row(str(index), path)

    console.print(table)
    console.print()
