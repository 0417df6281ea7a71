"""
Output utility for the kubemap CLI with colors, tables, and verbosity control.

Provides a centralized output manager using the Rich library.
"""

from enum import IntEnum
from typing import Optional, List, Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.table import Table
from rich import box


class Verbosity(IntEnum):
    """Verbosity levels for output."""

    QUIET = 0  # Only errors and final results
    NORMAL = 1  # Standard output with colors
    VERBOSE = 2  # Detailed output including kubectl calls


class OutputManager:
    """
    Centralized output manager for the kubemap CLI.

    Provides methods for formatted output with colors and verbosity control.
    """

    def __init__(self, verbosity: Verbosity = Verbosity.NORMAL):
        """
        Initialize the output manager.

        Args:
            verbosity: Verbosity level for output
        """
        self.verbosity = verbosity
        self.console = Console()
        self.error_console = Console(stderr=True)

    def success(self, message: str) -> None:
        """Print a success message in green."""
        if self.verbosity != Verbosity.QUIET:
            self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, suggestion: Optional[str] = None) -> None:
        """Print an error message in red to stderr."""
        self.error_console.print(f"[red]✗ {message}[/red]", style="red")
        if suggestion and self.verbosity >= Verbosity.NORMAL:
            self.error_console.print(f"[yellow]💡 {suggestion}[/yellow]", style="yellow")

    def warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        if self.verbosity != Verbosity.QUIET:
            self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def result(self, message: str) -> None:
        """Print a final result. Shown in every verbosity level."""
        self.console.print(message, highlight=False)

    def verbose(self, message: str) -> None:
        """Print a verbose message (only shown in VERBOSE mode)."""
        if self.verbosity >= Verbosity.VERBOSE:
            self.console.print(f"[dim]{message}[/dim]", style="dim")

    def table(
        self,
        title: str,
        columns: List[str],
        rows: List[List[str]],
        show_header: bool = True,
    ) -> None:
        """Print a table. Quiet mode prints the first column only."""
        if self.verbosity == Verbosity.QUIET:
            for row in rows:
                self.result(row[0])
            return
        table = Table(title=title, show_header=show_header, box=box.ROUNDED)
        for col in columns:
            table.add_column(col)
        for row in rows:
            table.add_row(*row)
        self.console.print(table)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """
        Context manager for spinner (indeterminate progress).

        Args:
            message: Message to display with spinner

        Yields:
            None
        """
        if self.verbosity == Verbosity.QUIET:
            yield
            return

        with self.console.status(f"[cyan]{message}[/cyan]"):
            yield


# Global output manager instance
_output_manager: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """
    Get the global output manager instance.

    Returns:
        OutputManager instance
    """
    global _output_manager
    if _output_manager is None:
        _output_manager = OutputManager()
    return _output_manager


def set_output(manager: OutputManager) -> None:
    """Set the global output manager instance."""
    global _output_manager
    _output_manager = manager
