"""Share display coordinator (uses shared UI components)."""

from pathlib import Path
from typing import List, Optional

from rich.console import Console

from cl_launcher.core.models import Command
from cl_launcher.ui.components import StatusMessage


class ShareDisplay:
    """Coordinates display for import / export."""

    def __init__(self, console: Optional[Console] = None):
        self.message = StatusMessage(console)

    def show_exported(self, count: int, path: Path) -> None:
        self.message.success(f"Exported {count} aliases to {path}")

    def show_imported(self, count: int) -> None:
        if count:
            self.message.success(f"Successfully imported {count} aliases")
        else:
            self.message.info("There are no aliases to be imported")

    def show_duplicates(self, duplicates: List[Command]) -> None:
        if not duplicates:
            return
        lines = ",\n".join(
            f" - alias: {c.alias}, namespace: {c.namespace}" for c in duplicates
        )
        self.message.warning(f"Duplicated aliases found! Please adjust them:\n{lines}")

    def show_error(self, message: str) -> None:
        self.message.error(message)
