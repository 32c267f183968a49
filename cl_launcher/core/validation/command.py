"""Command validation utilities."""

from typing import Optional

from cl_launcher.utils.errors import (
    EmptyFieldError,
    ValidationError,
    WhitespaceInAliasError,
    WhitespaceInNamespaceError,
)
from cl_launcher.utils.logging import get_logger

logger = get_logger(__name__)


class CommandValidator:
    """Validate stored commands before they reach the store."""

    @staticmethod
    def _has_whitespace(value: str) -> bool:
        return any(char.isspace() for char in value)

    @staticmethod
    def validate(command) -> None:
        """Raise the matching ValidationError for a malformed command.

        Blank fields are reported before whitespace problems, alias before
        namespace.
        """
        empty = [
            name
            for name in ("namespace", "alias", "command")
            if not getattr(command, name, "").strip()
        ]
        if empty:
            raise EmptyFieldError(details={"fields": empty})

        if CommandValidator._has_whitespace(command.alias):
            raise WhitespaceInAliasError(details={"alias": command.alias})

        if CommandValidator._has_whitespace(command.namespace):
            raise WhitespaceInNamespaceError(details={"namespace": command.namespace})

    @staticmethod
    def is_valid(command) -> bool:
        return CommandValidator.error_for(command) is None

    @staticmethod
    def error_for(command) -> Optional[ValidationError]:
        """Return the validation error instead of raising it."""
        try:
            CommandValidator.validate(command)
        except ValidationError as e:
            logger.debug(f"Command rejected: {e.message}")
            return e
        return None
