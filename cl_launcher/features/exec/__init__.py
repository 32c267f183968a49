"""Command execution feature.

Public API:
    exec_command(session, alias, ...) -> Run a stored command, returns its exit code
    prepare_command(text, args) -> Fill in named parameters and options
    CommandRunner -> Shell runner with dry-run / quiet modes
"""

from .args import CommandArg, CommandArgs, prepare_command
from .runner import CommandRunner, resolve_shell
from .workflow import ExecWorkflow, exec_command

__all__ = [
    "CommandArg",
    "CommandArgs",
    "CommandRunner",
    "ExecWorkflow",
    "exec_command",
    "prepare_command",
    "resolve_shell",
]
