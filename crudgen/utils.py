"""Console output helpers for crudgen.

All user-facing output goes through a single Rich ``Console``.  The generator
core never prints; the CLI reports outcomes with the helpers below.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def relative_to(path: str | Path, root: str | Path) -> str:
    """Return *path* relative to *root* when it lives below it, else as given.

    Examples::

        relative_to("/src/Blog/Controller/PostController.php", "/src/Blog")
            -> "Controller/PostController.php"
        relative_to("/elsewhere/file.txt", "/src/Blog") -> "/elsewhere/file.txt"
    """
    try:
        return str(Path(path).relative_to(Path(root)))
    except ValueError:
        return str(path)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str) -> None:
    """Print a full-width rule announcing a generation step."""
    console.print()
    console.print(Rule(f"[bold bright_green] {escape(title)} [/bold bright_green]", style="bright_green"))
    console.print()


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


def print_written_files(paths: list[Path], root: str | Path) -> None:
    """List generated files, relative to the bundle *root*."""
    for path in paths:
        console.print(f"  [green]created[/green] {escape(relative_to(path, root))}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
