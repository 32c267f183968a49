from typing import List

from rich.text import Text
from textual.widgets import OptionList

from cl_launcher.core.models import Command


class CommandList(OptionList, can_focus=False):
    """Filtered commands, one row each. The app drives the highlight."""

    def __init__(self):
        super().__init__(id="command-list")

    def show_commands(self, commands: List[Command], selected: int) -> None:
        self.clear_options()
        self.add_options([self._row(command) for command in commands])
        if commands:
            self.highlighted = selected

    @staticmethod
    def _row(command: Command) -> Text:
        row = Text(command.alias, style="bold")
        row.append(f"  {command.namespace}", style="dim")
        return row
