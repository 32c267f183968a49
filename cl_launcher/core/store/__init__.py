"""Command store, namespace cache and file persistence."""

from .cache import NamespaceCache
from .commands import CommandMap, CommandStore, flatten, to_command_map
from .file_handler import CommandsFileHandler

__all__ = [
    "CommandMap",
    "CommandStore",
    "CommandsFileHandler",
    "NamespaceCache",
    "flatten",
    "to_command_map",
]
