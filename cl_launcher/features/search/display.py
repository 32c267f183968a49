"""Search display coordinator (uses shared UI components)."""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from cl_launcher.core.models import Command
from cl_launcher.ui.components import CommandTable, StatusMessage


class SearchDisplay:
    """Coordinates display for search feature."""

    def __init__(self, console: Optional[Console] = None):
        self.table = CommandTable(console)
        self.message = StatusMessage(console)

    def display_results(
        self,
        commands: List[Command],
        scores: List[int],
        query: str,
        namespace: Optional[str] = None,
    ) -> None:
        scope = namespace or "all namespaces"
        title = f"Search: '{escape(query)}' in {escape(scope)}"

        self.table.display(commands=commands, title=title, scores=scores)

        if commands:
            self.message.success(f"Found {len(commands)} result(s)")
        else:
            self.message.info(f"No results for '{query}'")

    def show_error(self, message: str) -> None:
        self.message.error(message)
