"""Import / export of commands through a shareable TOML file."""

from pathlib import Path
from typing import List, Optional

from rich.console import Console

from cl_launcher.core.models import Command
from cl_launcher.core.session import Session
from cl_launcher.core.store import flatten, to_command_map
from cl_launcher.utils.errors import ClError, format_error_message
from cl_launcher.utils.logging import async_log_call, get_logger, log_event
from cl_launcher.utils.paths import SHARED_FILE_NAME

from .display import ShareDisplay

logger = get_logger(__name__)


def _in_namespaces(commands: List[Command], namespaces: Optional[List[str]]) -> List[Command]:
    if not namespaces:
        return list(commands)
    wanted = set(namespaces)
    return [c for c in commands if c.namespace in wanted]


class ShareWorkflow:
    """Orchestrates import and export."""

    def __init__(self, session: Session, console: Optional[Console] = None):
        self.session = session
        self.display = ShareDisplay(console)

    @async_log_call
    async def export(self, path: Path, namespaces: Optional[List[str]] = None) -> bool:
        """Write the stored commands (optionally only some namespaces) to ``path``."""
        try:
            commands = _in_namespaces(self.session.commands(), namespaces)
            self.session.file_handler.save_at(to_command_map(commands), path)

        except ClError as e:
            logger.error(f"Could not export the aliases: {e.message}")
            self.display.show_error(format_error_message(e))
            return False

        log_event(
            "commands_exported",
            f"Exported {len(commands)} aliases",
            count=len(commands),
            path=str(path),
        )
        self.display.show_exported(len(commands), path)
        return True

    @async_log_call
    async def import_(self, path: Path, namespaces: Optional[List[str]] = None) -> bool:
        """Add the commands found in ``path``, skipping keys already stored."""
        try:
            incoming = _in_namespaces(flatten(self.session.file_handler.load_from(path)), namespaces)
            added, skipped = self.session.add_many(incoming)

        except ClError as e:
            logger.error(f"Could not import the aliases: {e.message}")
            self.display.show_error(format_error_message(e))
            return False

        self.display.show_duplicates(skipped)
        if added:
            log_event(
                "commands_imported",
                f"Imported {len(added)} aliases",
                count=len(added),
                skipped=len(skipped),
                path=str(path),
            )
        self.display.show_imported(len(added))
        return True


async def export_commands(
    session: Session,
    path: Optional[Path] = None,
    namespaces: Optional[List[str]] = None,
    console: Optional[Console] = None,
) -> bool:
    workflow = ShareWorkflow(session, console)
    return await workflow.export(Path(path or SHARED_FILE_NAME), namespaces)


async def import_commands(
    session: Session,
    path: Optional[Path] = None,
    namespaces: Optional[List[str]] = None,
    console: Optional[Console] = None,
) -> bool:
    workflow = ShareWorkflow(session, console)
    return await workflow.import_(Path(path or SHARED_FILE_NAME), namespaces)
