"""Reads and writes the namespace-keyed commands TOML file.

Each top-level key is a namespace holding a list of command tables::

    git = [
        { alias = "gl", namespace = "git", command = "git log --oneline", tags = ["log"] },
    ]

Hand-written files may use the equivalent ``[[git]]`` array of tables.

Optional fields are written only when present, so an absent description
stays absent after a round trip while an empty one stays empty.
"""

import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

import tomli_w

from cl_launcher.core.models import Command
from cl_launcher.utils.errors import (
    CommandsFileReadError,
    CommandsFileWriteError,
    InvalidCommandsFileError,
)
from cl_launcher.utils.logging import get_logger, log_call

from .commands import CommandMap

logger = get_logger(__name__)


def commands_to_toml(commands: CommandMap) -> str:
    document: Dict[str, Any] = {
        namespace: [command.to_dict() for command in commands[namespace]]
        for namespace in sorted(commands)
        if commands[namespace]
    }
    return tomli_w.dumps(document, multiline_strings=True)


def commands_from_toml(text: str, source: Optional[Path] = None) -> CommandMap:
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise InvalidCommandsFileError(
            f"{source or 'commands file'} is not valid TOML: {e}",
            details={"path": str(source) if source else None},
        ) from e

    command_map: CommandMap = {}
    for namespace, records in document.items():
        if not isinstance(records, list):
            raise InvalidCommandsFileError(
                f"Namespace '{namespace}' must be an array of tables",
                details={"namespace": namespace},
            )
        for record in records:
            if not isinstance(record, dict):
                raise InvalidCommandsFileError(
                    f"Invalid entry in namespace '{namespace}'",
                    details={"namespace": namespace},
                )
            record.setdefault("namespace", namespace)
            command = Command.from_dict(record)
            command_map.setdefault(command.namespace, []).append(command)

    return command_map


class CommandsFileHandler:
    """Persistence collaborator for the command store."""

    def __init__(self, command_file_path: Path):
        self.command_file_path = Path(command_file_path)

    def ensure_exists(self) -> "CommandsFileHandler":
        """Create an empty commands file (and its parent dirs) when missing."""
        if not self.command_file_path.exists():
            logger.debug(f"Creating a new commands file at {self.command_file_path}")
            try:
                self.command_file_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise CommandsFileWriteError(
                    f"Cannot create dirs at {self.command_file_path.parent}",
                    details={"path": str(self.command_file_path.parent), "cause": str(e)},
                ) from e
            self.save({})
        else:
            logger.debug(f"Found a commands file at {self.command_file_path}")
        return self

    @log_call
    def load(self) -> CommandMap:
        return self.load_from(self.command_file_path)

    @log_call
    def save(self, commands: CommandMap) -> None:
        self.save_at(commands, self.command_file_path)

    def load_from(self, path: Path) -> CommandMap:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CommandsFileReadError(
                f"Cannot read {path}", details={"path": str(path), "cause": str(e)}
            ) from e
        return commands_from_toml(text, path)

    def save_at(self, commands: CommandMap, path: Path) -> None:
        path = Path(path)
        toml = commands_to_toml(commands)
        try:
            path.write_text(toml, encoding="utf-8")
        except OSError as e:
            raise CommandsFileWriteError(
                f"Cannot write {path}", details={"path": str(path), "cause": str(e)}
            ) from e
        logger.debug(f"Saved {sum(len(c) for c in commands.values())} commands to {path}")
