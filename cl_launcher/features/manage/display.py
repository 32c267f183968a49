"""Manage display coordinator (uses shared UI components)."""

from typing import Iterable, List, Optional

from rich.console import Console

from cl_launcher.core.models import Command
from cl_launcher.ui.components import CommandPanel, ConfirmPrompt, StatusMessage


class ManageDisplay:
    """Coordinates display for add / remove / list / describe."""

    def __init__(self, console: Optional[Console] = None):
        self.confirm = ConfirmPrompt(console)
        self.message = StatusMessage(console)
        self.panel = CommandPanel(console)
        self.console = console or self.message.console

    # Confirmation prompts

    async def confirm_remove(self, command: Command) -> bool:
        return self.confirm.ask(
            f"Remove the alias '{command.alias}' from namespace '{command.namespace}'?",
            default=False,
        )

    # Plain listings, one entry per line, suitable for piping

    def show_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.console.print(line, markup=False, highlight=False, soft_wrap=True)

    def show_command(self, command: Command) -> None:
        self.panel.display(command)

    # Status messages

    def show_added(self, command: Command) -> None:
        self.message.success(f"Command added: {command.namespace}.{command.alias}")

    def show_removed(self, command: Command) -> None:
        self.message.success(f"Command removed: {command.namespace}.{command.alias}")

    def show_cancelled(self) -> None:
        self.message.info("Operation cancelled")

    def show_empty(self, namespace: Optional[str] = None) -> None:
        if namespace:
            self.message.info(f'There are no commands to show for namespace "{namespace}".')
        else:
            self.message.info("No commands stored yet. Use `cl add` to create one.")

    def show_warning(self, message: str) -> None:
        self.message.warning(message)

    def show_error(self, message: str) -> None:
        self.message.error(message)


def fzf_lines(commands: List[Command]) -> List[str]:
    """Aliases only, with ``(namespace)`` for aliases stored more than once."""
    counts = {}
    for command in commands:
        counts[command.alias] = counts.get(command.alias, 0) + 1

    return [
        f"{c.alias} ({c.namespace})" if counts[c.alias] > 1 else c.alias
        for c in commands
    ]
