"""Add / remove / list / describe workflows."""

import sys
from typing import Optional, TextIO

from rich.console import Console

from cl_launcher.core.models import Command, sorted_by_alias
from cl_launcher.core.session import Session
from cl_launcher.utils.errors import ClError, format_error_message
from cl_launcher.utils.logging import async_log_call, get_logger

from .display import ManageDisplay, fzf_lines
from .input import CommandInputManager

logger = get_logger(__name__)

STDIN_NAMESPACE = "from_stdin"
STDIN_ALIAS_LENGTH = 5
STDIN_MARKER = "-"


def read_command_text(raw: Optional[str], stdin: Optional[TextIO] = None) -> str:
    """The command given on the command line, or read from stdin.

    Stdin is read when ``raw`` is ``-``, or when nothing was given and
    stdin is not a terminal.
    """
    stdin = stdin or sys.stdin
    if raw == STDIN_MARKER or (raw is None and not stdin.isatty()):
        return stdin.read().strip()
    return (raw or "").strip()


def command_from_text(text: str) -> Command:
    """A ``from_stdin`` command whose alias is the first characters of ``text``."""
    alias = "".join("_" if char.isspace() else char for char in text[:STDIN_ALIAS_LENGTH])
    return Command(alias=alias, namespace=STDIN_NAMESPACE, command=text)


class ManageWorkflow:
    """Orchestrates changes to, and listings of, the stored commands."""

    def __init__(self, session: Session, console: Optional[Console] = None):
        self.session = session
        self.display = ManageDisplay(console)

    @async_log_call
    async def add(self, command: Command, quiet: bool = False) -> bool:
        try:
            self.session.add(command)

        except ClError as e:
            logger.error(f"Cannot add '{command.alias}': {e.message}")
            self.display.show_error(format_error_message(e))
            return False

        if not quiet:
            self.display.show_added(command)
        return True

    async def add_text(self, text: str, quiet: bool = False) -> bool:
        if not text:
            self.display.show_warning("No command provided. Use `cl add --help` for more information.")
            return True
        return await self.add(command_from_text(text), quiet)

    async def add_interactive(self, quiet: bool = False) -> bool:
        manager = CommandInputManager(self.session.namespaces())
        command = await manager.prompt_all()
        if command is None:
            self.display.show_cancelled()
            return False
        return await self.add(command, quiet)

    @async_log_call
    async def remove(self, alias: str, namespace: Optional[str] = None, confirm: bool = True) -> bool:
        try:
            command = self.session.find(alias, namespace)

            if confirm and not await self.display.confirm_remove(command):
                self.display.show_cancelled()
                return False

            self.session.remove(command)

        except ClError as e:
            logger.error(f"Cannot remove '{alias}': {e.message}")
            self.display.show_error(format_error_message(e))
            return False

        self.display.show_removed(command)
        return True

    async def list(self, namespace: Optional[str] = None, fzf: bool = False) -> bool:
        """Print every command (or a namespace) sorted by alias."""
        commands = sorted_by_alias(self.session.commands(namespace))
        if not commands:
            if not fzf:
                self.display.show_empty(namespace)
            return True

        if fzf:
            self.display.show_lines(fzf_lines(commands))
        else:
            self.display.show_lines(c.summarize() for c in commands)
        return True

    async def describe(self, alias: str, namespace: Optional[str] = None) -> bool:
        try:
            command = self.session.find(alias, namespace)

        except ClError as e:
            self.display.show_error(format_error_message(e))
            return False

        self.display.show_command(command)
        return True


async def add_command(
    session: Session,
    raw: Optional[str] = None,
    interactive: bool = False,
    quiet: bool = False,
    console: Optional[Console] = None,
    stdin: Optional[TextIO] = None,
) -> bool:
    """Add a command from the argument, stdin or an interactive form."""
    workflow = ManageWorkflow(session, console)
    if interactive:
        return await workflow.add_interactive(quiet)
    return await workflow.add_text(read_command_text(raw, stdin), quiet)


async def remove_command(
    session: Session,
    alias: str,
    namespace: Optional[str] = None,
    confirm: bool = True,
    console: Optional[Console] = None,
) -> bool:
    workflow = ManageWorkflow(session, console)
    return await workflow.remove(alias, namespace, confirm)


async def list_commands(
    session: Session,
    namespace: Optional[str] = None,
    fzf: bool = False,
    console: Optional[Console] = None,
) -> bool:
    workflow = ManageWorkflow(session, console)
    return await workflow.list(namespace, fzf)


async def describe_command(
    session: Session,
    alias: str,
    namespace: Optional[str] = None,
    console: Optional[Console] = None,
) -> bool:
    workflow = ManageWorkflow(session, console)
    return await workflow.describe(alias, namespace)
