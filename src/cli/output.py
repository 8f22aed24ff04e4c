"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
spinners, colored status lines and run summaries. Supports verbosity levels
and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

from src.publisher.models import CleanupResult, PublishSummary


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Published 12 pages")
        >>> with handler.spinner("Publishing..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def print(self, message: str) -> None:
        self.console.print(message)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display a spinner while the block runs.

        Example:
            >>> with handler.spinner("Publishing pages..."):
            ...     publisher.publish(context)
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10):
            yield

    def print_publish_summary(self, summary: PublishSummary) -> None:
        """Display publish summary with color coding."""
        self.console.print("\n[bold]Publish Summary:[/bold]")

        if summary.created > 0:
            self.console.print(f"  [green]+[/green] Created: {summary.created} page(s)")

        if summary.updated > 0:
            self.console.print(f"  [blue]↑[/blue] Updated: {summary.updated} page(s)")

        if summary.deleted > 0:
            self.console.print(f"  [red]✗[/red] Deleted: {summary.deleted} page(s)")

        if summary.unchanged > 0:
            self.console.print(f"  [dim]─[/dim] Unchanged: {summary.unchanged} page(s)")

        if summary.created == 0 and summary.updated == 0 and summary.deleted == 0:
            self.console.print("\n[green]Already published. No changes detected.[/green]")
        else:
            self.console.print("\n[green]Publish completed successfully[/green]")

        if summary.root_url:
            self.console.print(f"  {summary.root_url}")

    def print_cleanup_summary(self, result: CleanupResult) -> None:
        """Display cleanup outcome."""
        if not result.found:
            self.console.print(
                f"\n[yellow]Nothing to clean here: no page titled \"{result.site_name}\"[/yellow]"
            )
            return

        self.console.print(
            f"\n[green]Removed \"{result.site_name}\" and "
            f"{result.removed_pages} page(s) below it[/green]"
        )
