"""Runs a command through the user's shell."""

import os
import subprocess
from typing import Optional

from rich.console import Console

from cl_launcher.core.models import Command
from cl_launcher.utils.console import get_console, get_err_console
from cl_launcher.utils.errors import CannotRunCommandError
from cl_launcher.utils.logging import get_logger, log_event

logger = get_logger(__name__)

DEFAULT_SHELL = "sh"


def resolve_shell() -> str:
    shell = os.environ.get("SHELL")
    if not shell:
        logger.warning("$SHELL not found! Using sh")
        return DEFAULT_SHELL
    return shell


class CommandRunner:
    def __init__(
        self,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.console = console or get_console()
        self.err_console = err_console or get_err_console()

    def run(self, command: Command, dry_run: bool = False, quiet: bool = False) -> int:
        """Execute ``command`` and return its exit code.

        Dry-run prints the command text instead of running it. Unless quiet,
        a ``namespace.alias --> command`` banner goes to stderr first.

        Raises:
            CannotRunCommandError: the shell could not be started.
        """
        if dry_run:
            self.console.print(command.command, markup=False, highlight=False, soft_wrap=True)
            return 0

        if not quiet:
            self.err_console.print(
                f"{command.namespace}.{command.alias} --> {command.truncated()}",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )

        shell = resolve_shell()
        logger.debug(f"Running '{command.namespace}.{command.alias}' with {shell}")

        try:
            completed = subprocess.run([shell, "-c", command.command], env=os.environ.copy())
        except OSError as e:
            raise CannotRunCommandError(command.command, str(e)) from e

        log_event(
            "command_executed",
            f"Command '{command.namespace}.{command.alias}' exited with {completed.returncode}",
            alias=command.alias,
            namespace=command.namespace,
            returncode=completed.returncode,
        )
        return completed.returncode
