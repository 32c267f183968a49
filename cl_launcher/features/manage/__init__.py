"""Command management feature.

Public API:
    add_command(session, raw, interactive) -> Store a new command
    remove_command(session, alias, namespace, confirm)
    list_commands(session, namespace, fzf)
    describe_command(session, alias, namespace)
"""

from .workflow import (
    ManageWorkflow,
    add_command,
    command_from_text,
    describe_command,
    list_commands,
    read_command_text,
    remove_command,
)

__all__ = [
    "ManageWorkflow",
    "add_command",
    "command_from_text",
    "describe_command",
    "list_commands",
    "read_command_text",
    "remove_command",
]
