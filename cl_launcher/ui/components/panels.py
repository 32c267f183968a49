"""Single command detail panel."""

from typing import Optional

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from cl_launcher.core.models import Command
from cl_launcher.utils.console import get_console


class CommandPanel:
    """Display a single command with its metadata.

    Used by: describe.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def display(self, command: Command) -> None:
        header = Table(show_header=False, box=None, padding=(0, 1))
        header.add_column("Field", style="bold")
        header.add_column("Value")
        header.add_row("Namespace", Text(command.namespace))
        header.add_row("Alias", Text(command.alias))
        if command.description is not None:
            header.add_row("Description", Text(command.description))
        if command.tags:
            header.add_row("Tags", Text(command.tags_as_string()))

        body = Syntax(command.command, "bash", word_wrap=True, theme="ansi_dark")

        self.console.print(
            Panel(
                Group(header, "", body),
                title=f"[bold]{escape(command.namespace)}.{escape(command.alias)}[/bold]",
                border_style="cyan",
                padding=(1, 2),
            )
        )
