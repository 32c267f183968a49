"""Exec display coordinator (uses shared UI components)."""

from typing import Optional

from rich.console import Console

from cl_launcher.ui.components import StatusMessage
from cl_launcher.utils.console import get_err_console


class ExecDisplay:
    """Coordinates display for the exec feature.

    Messages go to stderr so that the command's own stdout stays clean.
    """

    def __init__(self, console: Optional[Console] = None):
        self.message = StatusMessage(console or get_err_console())

    def show_error(self, message: str) -> None:
        self.message.error(message)

    def show_exit_code(self, alias: str, code: int) -> None:
        self.message.warning(f"'{alias}' exited with status code {code}")
