"""Named parameter and option handling for ``cl exec``.

Arguments given after ``--`` are split in two groups: the ones whose key
names a ``#{placeholder}`` of the command, and plain options that get
appended to the command text::

    cl exec greet -- --name=World --verbose
    #  echo hi #{name}  ->  echo hi World --verbose
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from cl_launcher.utils.errors import MissingNamedParameterError

ARG_PREFIX = "--"
PLACEHOLDER_PATTERN = re.compile(r"#\{([^}]+)\}")


@dataclass
class CommandArg:
    arg: str
    prefix: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "CommandArg":
        key, sep, value = raw.partition("=")
        prefix = None
        if key.startswith(ARG_PREFIX):
            key, prefix = key[len(ARG_PREFIX):], ARG_PREFIX
        return cls(arg=key, prefix=prefix, value=value if sep else None)

    def is_empty(self) -> bool:
        return not self.arg and not self.prefix

    def __str__(self) -> str:
        prefix = self.prefix or ""
        if self.value is not None:
            return f"{prefix}{self.arg}={self.value}"
        return f"{prefix}{self.arg}"


@dataclass
class CommandArgs:
    named_parameters: Set[str] = field(default_factory=set)
    named: List[CommandArg] = field(default_factory=list)
    options: List[CommandArg] = field(default_factory=list)

    @staticmethod
    def placeholders(command_text: str) -> Set[str]:
        return set(PLACEHOLDER_PATTERN.findall(command_text))

    @classmethod
    def parse(cls, command_text: str, args: List[str]) -> "CommandArgs":
        """Sort ``args`` into named parameters and options.

        A named ``--key`` given without ``=value`` takes the next argument as
        its value.

        Raises:
            MissingNamedParameterError: a placeholder has no value, a named
                argument has no value, or one is given more than once.
        """
        command_args = cls(named_parameters=cls.placeholders(command_text))

        remaining = list(args)
        while remaining:
            command_arg = CommandArg.parse(remaining.pop(0))
            if command_arg.arg in command_args.named_parameters:
                if command_arg.value is None and remaining:
                    command_arg.value = remaining.pop(0)
                command_args.named.append(command_arg)
            else:
                command_args.options.append(command_arg)

        command_args._check_named()
        return command_args

    def _check_named(self) -> None:
        found = [a.arg for a in self.named]
        details = {"expected": sorted(self.named_parameters), "found": found}

        duplicated = sorted({arg for arg in found if found.count(arg) > 1})
        if duplicated:
            raise MissingNamedParameterError(
                f"Named parameters given more than once: {', '.join(duplicated)}",
                details=details,
            )

        without_value = [a.arg for a in self.named if a.value is None]
        if without_value:
            raise MissingNamedParameterError(
                f"Named parameters without a value: {', '.join(without_value)}",
                details=details,
            )

        missing = sorted(self.named_parameters - set(found))
        if missing:
            raise MissingNamedParameterError(
                f"Some named parameters are missing: {', '.join(missing)}",
                details=details,
            )

    def named_values(self) -> Dict[str, str]:
        return {a.arg: a.value for a in self.named}


def prepare_command(command_text: str, args: List[str]) -> str:
    """Substitute placeholders, then append the remaining options."""
    command_args = CommandArgs.parse(command_text, args)
    values = command_args.named_values()

    prepared = command_text
    if values:
        prepared = PLACEHOLDER_PATTERN.sub(
            lambda match: values.get(match.group(1), match.group(0)), prepared
        )

    options = [str(a) for a in command_args.options if not a.is_empty()]
    if options:
        prepared = f"{prepared.strip()} {' '.join(options)}"

    return prepared
