"""Command domain model"""

import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple

NAMED_PARAMETER_PATTERN = re.compile(r"#\{[^}]*\}")

MAX_BANNER_LENGTH = 120
MAX_SUMMARY_LENGTH = 50
NEWLINE = "\n"


@dataclass(frozen=True, eq=False)
class Command:
    """One stored alias.

    Two commands are equal when they share the same lookup key
    ``(namespace, alias)``, whatever their other fields hold. Ordering
    compares every field, namespace first.
    """

    alias: str
    namespace: str
    command: str
    description: Optional[str] = None
    tags: Optional[Tuple[str, ...]] = field(default=None)

    def __post_init__(self):
        if self.tags is not None and not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def key(self) -> Tuple[str, str]:
        """The (namespace, alias) lookup key."""
        return (self.namespace, self.alias)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def sort_key(self) -> tuple:
        return (
            self.namespace,
            self.alias,
            self.command,
            (self.description is not None, self.description or ""),
            (self.tags is not None, self.tags or ()),
        )

    def __lt__(self, other: "Command") -> bool:
        return self.sort_key() < other.sort_key()

    def __le__(self, other: "Command") -> bool:
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: "Command") -> bool:
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: "Command") -> bool:
        return self.sort_key() >= other.sort_key()

    def validate(self) -> None:
        """Raise a ValidationError subclass if the command is malformed."""
        from cl_launcher.core.validation import CommandValidator

        CommandValidator.validate(self)

    def tags_as_string(self) -> str:
        return ", ".join(sorted(self.tags or ()))

    def description_text(self) -> str:
        return self.description or ""

    def has_named_parameter(self) -> bool:
        return bool(NAMED_PARAMETER_PATTERN.search(self.command))

    def has_changes(self, other: "Command") -> bool:
        """True when any field differs, not only the lookup key."""
        return (
            other.alias != self.alias
            or other.namespace != self.namespace
            or other.command != self.command
            or other.description != self.description
            or other.tags != self.tags
        )

    def with_command(self, command: str) -> "Command":
        return replace(self, command=command)

    def truncated(self, max_length: int = MAX_BANNER_LENGTH) -> str:
        if len(self.command) > max_length:
            return f"{self.command[:max_length]}..."
        return self.command

    def summarize(self) -> str:
        """One line ``namespace.alias[: description] --> command``."""
        head = self.command[:MAX_SUMMARY_LENGTH]
        if NEWLINE in head:
            short = f"{self.command.split(NEWLINE, 1)[0]}..."
        elif len(head) == MAX_SUMMARY_LENGTH:
            short = f"{head}..."
        else:
            short = self.command

        if self.description is not None:
            return f"{self.namespace}.{self.alias}: {self.description} --> {short}"
        return f"{self.namespace}.{self.alias} --> {short}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialisable form; optional fields are left out when absent."""
        data: Dict[str, Any] = {
            "alias": self.alias,
            "namespace": self.namespace,
            "command": self.command,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.tags is not None:
            data["tags"] = list(self.tags)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Command":
        tags = data.get("tags")
        return cls(
            alias=str(data.get("alias", "")),
            namespace=str(data.get("namespace", "")),
            command=str(data.get("command", "")),
            description=data.get("description"),
            tags=tuple(str(tag) for tag in tags) if tags is not None else None,
        )

    @classmethod
    def placeholder(cls) -> "Command":
        """Demo entry shown when nothing has been stored yet."""
        return cls(
            alias="your command alias",
            namespace="Namespace",
            command='echo "this is your command"',
            description=(
                "This is a demo entry and will be removed as soon you save your first command. "
                "Also, a nice description of your command goes here (optional)"
            ),
            tags=("optional", "tags", "comma", "separated"),
        )


def parse_tags(raw: Optional[str]) -> Optional[Tuple[str, ...]]:
    """Turn ``"a, b,,c"`` into ``("a", "b", "c")``; blank input gives None."""
    if raw is None:
        return None
    tags = tuple(tag.strip() for tag in raw.split(",") if tag.strip())
    return tags or None


def sorted_by_alias(commands: Iterable[Command]) -> list:
    """Case-insensitive sort by alias; the raw alias breaks ties."""
    return sorted(commands, key=lambda c: (c.alias.lower(), c.alias))
