"""Command table display component."""

from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from cl_launcher.core.models import Command
from cl_launcher.utils.console import get_console

MAX_CELL_LENGTH = 60


class CommandTable:
    """Reusable command table component.

    Used by: search, list.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def display(
        self,
        commands: List[Command],
        title: str = "Commands",
        scores: Optional[List[int]] = None,
    ) -> None:
        """Display commands as a formatted table.

        Args:
            commands: Commands in display order
            title: Table title
            scores: Optional relevance score per command, adds a Score column
        """
        if not commands:
            self.console.print("[yellow]No commands to display[/yellow]")
            return

        table = Table(title=title)
        table.add_column("#", style="dim", justify="right", no_wrap=True)
        table.add_column("Namespace", style="cyan", no_wrap=True)
        table.add_column("Alias", style="magenta", no_wrap=True)
        table.add_column("Description", style="green")
        table.add_column("Tags", style="yellow")
        table.add_column("Command", style="white")
        if scores is not None:
            table.add_column("Score", style="blue", justify="right")

        for index, command in enumerate(commands):
            row = [
                str(index + 1),
                command.namespace,
                command.alias,
                self._truncate(command.description_text(), MAX_CELL_LENGTH),
                command.tags_as_string(),
                self._truncate(command.command, MAX_CELL_LENGTH),
            ]
            if scores is not None:
                row.append(str(scores[index]))
            table.add_row(*(Text(cell) for cell in row))

        self.console.print(table)

    @staticmethod
    def _truncate(text: str, length: int) -> str:
        """Keep the first line, cut to ``length`` characters."""
        first_line = text.split("\n", 1)[0]
        if len(first_line) > length or first_line != text:
            return first_line[: length - 3] + "..."
        return text
