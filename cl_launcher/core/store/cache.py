"""Per-namespace index over the command store."""

from typing import Dict, Iterable, List

from cl_launcher.core.models import Command, sorted_by_alias
from cl_launcher.utils.logging import get_logger

logger = get_logger(__name__)


class NamespaceCache:
    """Caches a Command list using the namespace as a key for faster search.

    Every group is kept sorted by alias, case-insensitively. Mutations only
    touch (and re-sort) the group(s) they affect, so that after each update
    the cache equals ``NamespaceCache.build`` over the store content.
    """

    def __init__(self):
        self._cache: Dict[str, List[Command]] = {}

    @classmethod
    def build(cls, commands: Iterable[Command]) -> "NamespaceCache":
        cache = cls()
        for command in commands:
            cache._cache.setdefault(command.namespace, []).append(command)
        for namespace in cache._cache:
            cache._sort(namespace)
        return cache

    def __contains__(self, namespace: str) -> bool:
        return namespace in self._cache

    def get(self, namespace: str) -> List[Command]:
        """Ordered commands of ``namespace``; empty when unknown."""
        return list(self._cache.get(namespace, []))

    def namespaces(self) -> List[str]:
        return sorted(self._cache)

    def all_commands(self) -> List[Command]:
        """Every cached command, namespaces in sorted order."""
        return [command for namespace in self.namespaces() for command in self._cache[namespace]]

    def to_dict(self) -> Dict[str, List[Command]]:
        return {namespace: list(commands) for namespace, commands in self._cache.items()}

    def on_insert(self, command: Command) -> None:
        self._cache.setdefault(command.namespace, []).append(command)
        self._sort(command.namespace)

    def on_update(self, new_command: Command, old_command: Command) -> None:
        logger.debug(f"updating {new_command.namespace} cache entries with the new command")
        self._discard(old_command)
        self._cache.setdefault(new_command.namespace, []).append(new_command)
        self._sort(new_command.namespace)

    def on_remove(self, command: Command) -> None:
        self._discard(command)

    def _discard(self, command: Command) -> None:
        namespace = command.namespace
        commands = self._cache.get(namespace)
        if commands is None:
            return

        for index, cached in enumerate(commands):
            if cached == command:
                logger.debug(f"removing old cache entry from {namespace}")
                del commands[index]
                break

        if not commands:
            del self._cache[namespace]

    def _sort(self, namespace: str) -> None:
        self._cache[namespace] = sorted_by_alias(self._cache[namespace])
