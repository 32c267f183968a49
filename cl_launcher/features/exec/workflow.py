"""Exec workflow orchestration."""

from typing import List, Optional

from rich.console import Console

from cl_launcher.core.session import Session
from cl_launcher.utils.errors import ClError, format_error_message
from cl_launcher.utils.logging import async_log_call, get_logger

from .args import prepare_command
from .display import ExecDisplay
from .runner import CommandRunner

logger = get_logger(__name__)


class ExecWorkflow:
    """Resolves an alias, fills in its arguments and runs it."""

    def __init__(self, session: Session, console: Optional[Console] = None):
        self.session = session
        self.runner = CommandRunner(console)
        self.display = ExecDisplay()

    @async_log_call
    async def execute(
        self,
        alias: str,
        namespace: Optional[str] = None,
        args: Optional[List[str]] = None,
        dry_run: bool = False,
        quiet: bool = False,
    ) -> int:
        """Run the command stored under ``alias``.

        Returns:
            The command's exit code, or 1 when it could not be prepared
        """
        try:
            stored = self.session.find(alias, namespace)
            command = stored.with_command(prepare_command(stored.command, args or []))
            logger.debug(f"Command to be executed: {command.command}")
            code = self.runner.run(command, dry_run=dry_run, quiet=quiet)

        except ClError as e:
            logger.error(f"Cannot execute '{alias}': {e.message}")
            self.display.show_error(format_error_message(e))
            return 1

        if code != 0 and not quiet:
            self.display.show_exit_code(alias, code)
        return code


async def exec_command(
    session: Session,
    alias: str,
    namespace: Optional[str] = None,
    args: Optional[List[str]] = None,
    dry_run: bool = False,
    quiet: bool = False,
    console: Optional[Console] = None,
) -> int:
    """Execute a stored command.

    Args:
        session: Open session holding the commands
        alias: Alias to run
        namespace: Namespace to disambiguate the alias
        args: Named parameters and options
        dry_run: Print the command instead of running it
        quiet: Skip the banner
        console: Optional console for dry-run output

    Returns:
        Exit code
    """
    workflow = ExecWorkflow(session, console)
    return await workflow.execute(alias, namespace, args, dry_run, quiet)
