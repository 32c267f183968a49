"""Simple status messages (no panels)."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from cl_launcher.utils.console import get_console


class StatusMessage:
    """Simple status messages without panels.

    Used by: every feature that reports a one-line outcome.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def info(self, message: str) -> None:
        self.console.print(f"[cyan]ℹ {escape(message)}[/cyan]")

    def status(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]")
