"""User prompt components."""

from typing import Optional

from rich.console import Console
from rich.prompt import Confirm

from cl_launcher.utils.console import get_console


class ConfirmPrompt:
    """Confirmation prompt component.

    Used by: manage (remove).
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def ask(self, message: str, default: bool = False) -> bool:
        """Ask yes/no confirmation.

        Args:
            message: Confirmation message
            default: Default value if user presses Enter

        Returns:
            True if confirmed, False otherwise (including Ctrl+C / Ctrl+D)
        """
        try:
            return Confirm.ask(message, default=default, console=self.console)
        except (KeyboardInterrupt, EOFError):
            return False
