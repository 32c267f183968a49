"""Authoritative collection of stored commands, grouped by namespace."""

from typing import Dict, Iterable, List, Optional

from cl_launcher.core.models import Command
from cl_launcher.utils.errors import (
    AlreadyExistsError,
    AmbiguousAliasError,
    NotFoundError,
)
from cl_launcher.utils.logging import get_logger

logger = get_logger(__name__)

CommandMap = Dict[str, List[Command]]


def to_command_map(commands: Iterable[Command]) -> CommandMap:
    """Group commands by namespace, keeping their relative order."""
    command_map: CommandMap = {}
    for command in commands:
        command_map.setdefault(command.namespace, []).append(command)
    return command_map


def flatten(command_map: CommandMap) -> List[Command]:
    return [command for commands in command_map.values() for command in commands]


class CommandStore:
    """Owns every stored Command and enforces lookup key uniqueness.

    Mutations either complete fully or leave the store untouched. Each
    mutating call returns a snapshot of the whole mapping, which the caller
    persists and uses to refresh its views.
    """

    def __init__(self, command_map: Optional[CommandMap] = None):
        self._commands: CommandMap = {}
        for command in flatten(command_map or {}):
            if self._contains_key(command.namespace, command.alias):
                logger.warning(
                    f"Ignoring duplicated alias '{command.alias}' in namespace '{command.namespace}'"
                )
                continue
            self._commands.setdefault(command.namespace, []).append(command)

    @classmethod
    def from_commands(cls, commands: Iterable[Command]) -> "CommandStore":
        return cls(to_command_map(commands))

    def __len__(self) -> int:
        return sum(len(commands) for commands in self._commands.values())

    def __contains__(self, command: Command) -> bool:
        return self._contains_key(command.namespace, command.alias)

    ## Read access

    def snapshot(self) -> CommandMap:
        """Copy of the mapping that callers are free to keep or mutate."""
        return {namespace: list(commands) for namespace, commands in self._commands.items()}

    def get(self, namespace: str) -> List[Command]:
        return list(self._commands.get(namespace, []))

    def as_list(self) -> List[Command]:
        return flatten(self._commands)

    def namespaces(self) -> List[str]:
        return sorted(self._commands)

    def find(self, alias: str, namespace: Optional[str] = None) -> Command:
        """Resolve an alias to exactly one command.

        Raises:
            NotFoundError: nothing matches.
            AmbiguousAliasError: no namespace given and the alias lives in
                more than one namespace.
        """
        if namespace is not None:
            candidates = self._commands.get(namespace, [])
        else:
            candidates = self.as_list()

        matches = [command for command in candidates if command.alias == alias]

        if not matches:
            raise NotFoundError(alias, namespace)
        if len(matches) > 1:
            raise AmbiguousAliasError(alias, sorted(c.namespace for c in matches))

        return matches[0]

    ## Mutations

    def add(self, new_command: Command) -> CommandMap:
        """Insert a new command.

        Raises:
            AlreadyExistsError: the lookup key is taken.
        """
        self._check_duplicated(new_command)
        self._commands.setdefault(new_command.namespace, []).append(new_command)
        logger.debug(f"Added '{new_command.alias}' to namespace '{new_command.namespace}'")
        return self.snapshot()

    def edit(self, new_command: Command, old_command: Command) -> CommandMap:
        """Replace ``old_command`` with ``new_command``, possibly moving it.

        Keeping the same lookup key is always allowed. Moving onto a key
        held by another command raises AlreadyExistsError.
        """
        if new_command.key != old_command.key:
            self._check_duplicated(new_command)

        old_namespace = old_command.namespace
        old_list = self._commands.get(old_namespace, [])
        old_index = next(
            (i for i, command in enumerate(old_list) if command == old_command), None
        )

        if old_index is not None and new_command.namespace == old_namespace:
            old_list[old_index] = new_command
        else:
            if old_index is not None:
                del old_list[old_index]
                if not old_list:
                    del self._commands[old_namespace]
            self._commands.setdefault(new_command.namespace, []).append(new_command)

        logger.debug(
            f"Edited '{old_command.namespace}.{old_command.alias}' -> "
            f"'{new_command.namespace}.{new_command.alias}'"
        )
        return self.snapshot()

    def remove(self, command: Command) -> CommandMap:
        """Remove the command with the same lookup key, if any.

        The namespace disappears together with its last command. Removing
        an unknown key is a no-op.
        """
        namespace = command.namespace
        commands = self._commands.get(namespace)

        if commands is not None:
            remaining = [c for c in commands if c != command]
            if remaining:
                self._commands[namespace] = remaining
            else:
                del self._commands[namespace]
            logger.debug(f"Removed '{command.alias}' from namespace '{namespace}'")

        return self.snapshot()

    def replace_all(self, command_map: CommandMap) -> None:
        """Restore a previous snapshot (used to undo a failed save)."""
        self._commands = {ns: list(cmds) for ns, cmds in command_map.items() if cmds}

    ## Helpers

    def _contains_key(self, namespace: str, alias: str) -> bool:
        return any(c.alias == alias for c in self._commands.get(namespace, []))

    def _check_duplicated(self, new_command: Command) -> None:
        if self._contains_key(new_command.namespace, new_command.alias):
            raise AlreadyExistsError(new_command.alias, new_command.namespace)
