"""Rich terminal output for chunkhint CLI commands."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from chunkhint.core.models import HintResult


class RichOutputFormatter:
    """Consistent status and result output on the terminal."""

    def __init__(self, verbose: bool = False, console: Console | None = None):
        self.verbose = verbose
        self.console = console or Console()
        self._err_console = Console(stderr=True)

    def info(self, message: str) -> None:
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        self._err_console.print(f"[yellow]⚠[/yellow] {message}")

    def error(self, message: str) -> None:
        self._err_console.print(f"[red]✗[/red] {message}")

    def verbose_info(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"[dim]{message}[/dim]")

    def print_hint_results(self, results: Sequence[HintResult]) -> None:
        """Render one table per HTML root."""
        for result in results:
            if result.skipped:
                self.info(f"{result.root.output_name}: excluded, passed through")
                continue
            if not result.entries:
                self.info(f"{result.root.output_name}: no resource hints")
                continue

            table = Table(title=result.root.output_name)
            table.add_column("Path", style="cyan")
            table.add_column("Rel")
            table.add_column("As")
            table.add_column("Crossorigin")
            for entry in result.entries:
                table.add_row(
                    entry.path,
                    entry.rel,
                    entry.as_value or "",
                    "yes" if entry.crossorigin else "",
                )
            self.console.print(table)
            if result.header_path is not None:
                self.verbose_info(f"Header written to {result.header_path}")
