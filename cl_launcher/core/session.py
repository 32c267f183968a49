"""Session: the one object that owns the command store and its views.

A Session bundles the CommandStore, its NamespaceCache, the selection cursor
and the file handler behind a single lock. Every mutation validates, mutates
the store, persists, then patches the cache, all while holding the lock. A
failed save restores the store to where it was before the call, so memory
never diverges from the file.
"""

import threading
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from cl_launcher.core.cursor import SelectionCursor
from cl_launcher.core.models import Command
from cl_launcher.core.search import FuzzyMatch, rank_commands, resolve_candidates
from cl_launcher.core.store import (
    CommandMap,
    CommandsFileHandler,
    CommandStore,
    NamespaceCache,
)
from cl_launcher.utils.errors import FileSystemError
from cl_launcher.utils.logging import get_logger, log_event

if TYPE_CHECKING:
    from cl_launcher.utils.config_manager import ConfigManager

logger = get_logger(__name__)


class Session:
    def __init__(self, file_handler: CommandsFileHandler, command_map: Optional[CommandMap] = None):
        self._lock = threading.RLock()
        self.file_handler = file_handler
        self.store = CommandStore(command_map)
        self.cache = NamespaceCache.build(self.store.as_list())
        self.cursor = SelectionCursor()
        self._filtered: List[Command] = []

    @classmethod
    def open(cls, command_file_path: Path) -> "Session":
        """Load (creating it when missing) the commands file at the given path."""
        file_handler = CommandsFileHandler(command_file_path).ensure_exists()
        session = cls(file_handler, file_handler.load())
        logger.debug(f"Session opened with {len(session.store)} commands")
        return session

    @classmethod
    def from_config(cls, config_manager: "ConfigManager") -> "Session":
        return cls.open(config_manager.command_file_path)

    ## Read access

    def __len__(self) -> int:
        return len(self.store)

    def find(self, alias: str, namespace: Optional[str] = None) -> Command:
        with self._lock:
            return self.store.find(alias, namespace)

    def namespaces(self) -> List[str]:
        with self._lock:
            return self.cache.namespaces()

    def commands(self, namespace: Optional[str] = None) -> List[Command]:
        """Stored commands, alias-sorted per namespace; all of them when no namespace is given."""
        with self._lock:
            if namespace is None:
                return self.cache.all_commands()
            return self.cache.get(namespace)

    def snapshot(self) -> CommandMap:
        with self._lock:
            return self.store.snapshot()

    ## Filtering

    def rank(self, scope: Optional[str], query: str) -> List[Tuple[Command, FuzzyMatch]]:
        """Filter ``scope`` with ``query`` and clamp the cursor to the new list."""
        with self._lock:
            ranked = rank_commands(scope, query, resolve_candidates(self.cache, scope))
            self._filtered = [command for command, _ in ranked]
            self.cursor.revalidate(len(self._filtered))
            return ranked

    def filter(self, scope: Optional[str], query: str) -> List[Command]:
        return [command for command, _ in self.rank(scope, query)]

    def selected_command(self) -> Optional[Command]:
        with self._lock:
            if not self._filtered:
                return None
            return self._filtered[self.cursor.index]

    ## Mutations

    def add(self, new_command: Command) -> CommandMap:
        new_command.validate()
        with self._lock:
            command_map = self._commit(
                lambda: self.store.add(new_command),
                lambda: self.cache.on_insert(new_command),
            )
        log_event(
            "command_added",
            f"Command '{new_command.alias}' added to '{new_command.namespace}'",
            alias=new_command.alias,
            namespace=new_command.namespace,
        )
        return command_map

    def edit(self, new_command: Command, old_command: Command) -> CommandMap:
        new_command.validate()
        with self._lock:
            if not new_command.has_changes(old_command):
                logger.debug(f"No changes to '{old_command.namespace}.{old_command.alias}'")
                return self.store.snapshot()

            command_map = self._commit(
                lambda: self.store.edit(new_command, old_command),
                lambda: self.cache.on_update(new_command, old_command),
            )
        log_event(
            "command_edited",
            f"Command '{old_command.namespace}.{old_command.alias}' edited",
            alias=new_command.alias,
            namespace=new_command.namespace,
            old_alias=old_command.alias,
            old_namespace=old_command.namespace,
        )
        return command_map

    def remove(self, command: Command) -> CommandMap:
        with self._lock:
            if command not in self.store:
                logger.debug(f"Nothing to remove for '{command.namespace}.{command.alias}'")
                return self.store.snapshot()

            command_map = self._commit(
                lambda: self.store.remove(command),
                lambda: self.cache.on_remove(command),
            )
        log_event(
            "command_removed",
            f"Command '{command.alias}' removed from '{command.namespace}'",
            alias=command.alias,
            namespace=command.namespace,
        )
        return command_map

    def add_many(self, commands: List[Command]) -> Tuple[List[Command], List[Command]]:
        """Add every command whose key is free, then save once.

        Returns the ``(added, skipped)`` commands. Invalid commands raise
        before anything is touched. Nothing is written when every key
        is already taken.
        """
        for command in commands:
            command.validate()

        with self._lock:
            added: List[Command] = []
            skipped: List[Command] = []
            seen = set()
            for command in commands:
                if command in self.store or command.key in seen:
                    logger.warning(
                        f"Command with alias '{command.alias}' already exists "
                        f"in '{command.namespace}' namespace, skipping"
                    )
                    skipped.append(command)
                    continue
                seen.add(command.key)
                added.append(command)

            if not added:
                return added, skipped

            def mutate() -> CommandMap:
                for command in added:
                    self.store.add(command)
                return self.store.snapshot()

            def patch_cache() -> None:
                for command in added:
                    self.cache.on_insert(command)

            self._commit(mutate, patch_cache)

        return added, skipped

    def _commit(self, mutate: Callable[[], CommandMap], patch_cache: Callable[[], None]) -> CommandMap:
        """Run ``mutate``, persist its result, then refresh the cache.

        Must be called with the lock held. A save failure rolls the store
        back and re-raises, and the cache is only patched after a good save.
        """
        before = self.store.snapshot()
        command_map = mutate()

        try:
            self.file_handler.save(command_map)
        except FileSystemError:
            logger.error("Saving the commands file failed, rolling back the change")
            self.store.replace_all(before)
            raise

        patch_cache()
        return command_map
