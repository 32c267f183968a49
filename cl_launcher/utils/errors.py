"""Centralized error handling module."""

from enum import Enum
from typing import Any, Dict, Optional

from cl_launcher.utils.logging import get_logger

_logger = None


def _get_logger():
    """Get logger with lazy initialisation."""
    global _logger
    if _logger is None:
        _logger = get_logger(__name__)
    return _logger


## Error Categories


class ErrorCategory(Enum):
    """Categories of errors for better handling."""

    VALIDATION = "validation"
    COMMAND = "command"
    FILE_SYSTEM = "file_system"
    CONFIGURATION = "configuration"
    EXECUTION = "execution"
    UNKNOWN = "unknown"


## Custom Exceptions


class ClError(Exception):
    """Base exception for all cl errors."""

    category = ErrorCategory.UNKNOWN
    user_message = "An error occurred"

    def __init__(
        self, message: str | None = None, details: Dict[str, Any] | None = None
    ):
        """Initialise ClError with optional message and details."""
        self.message = message or self.user_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error details to a dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }


## Validation Errors


class ValidationError(ClError):
    """Base exception for validation-related errors."""

    category = ErrorCategory.VALIDATION
    user_message = "Invalid input"


class EmptyFieldError(ValidationError):
    """Raised when namespace, alias or command is blank."""

    user_message = "Namespace, command and alias field cannot be empty!"


class WhitespaceInAliasError(ValidationError):
    """Raised when an alias contains a space."""

    user_message = (
        "The alias must not contain whitespace as the application "
        "may interpret some words as arguments"
    )


class WhitespaceInNamespaceError(ValidationError):
    """Raised when a namespace contains a space."""

    user_message = (
        "The namespace must not contain whitespace as the application "
        "may interpret some words as arguments"
    )


class MissingNamedParameterError(ValidationError):
    """Raised when named placeholders are left without a value."""

    user_message = "Some named parameters are missing"


## Command Store Errors


class CommandError(ClError):
    """Base exception for command store errors."""

    category = ErrorCategory.COMMAND
    user_message = "A command error occurred"


class AlreadyExistsError(CommandError):
    """Raised when a (namespace, alias) pair is already taken."""

    user_message = "Command already exists"

    def __init__(self, alias: str, namespace: str):
        self.alias = alias
        self.namespace = namespace
        super().__init__(
            f"Command with alias '{alias}' already exists in '{namespace}' namespace",
            details={"alias": alias, "namespace": namespace},
        )


class NotFoundError(CommandError):
    """Raised when no command matches an alias."""

    user_message = "Alias not found"

    def __init__(self, alias: str, namespace: Optional[str] = None):
        self.alias = alias
        self.namespace = namespace
        details = {"alias": alias}
        if namespace is not None:
            details["namespace"] = namespace
        super().__init__(f"The alias '{alias}' was not found!", details=details)


class AmbiguousAliasError(CommandError):
    """Raised when a bare alias exists in more than one namespace."""

    user_message = "Alias present in many namespaces"

    def __init__(self, alias: str, namespaces: Optional[list] = None):
        self.alias = alias
        self.namespaces = namespaces or []
        super().__init__(
            f"There are commands with the alias '{alias}' in multiples namespaces. "
            "Please use the '--namespace' flag",
            details={"alias": alias, "namespaces": self.namespaces},
        )


## File System Errors


class FileSystemError(ClError):
    """Base exception for file system-related errors."""

    category = ErrorCategory.FILE_SYSTEM
    user_message = "A file system error occurred"


class CommandsFileReadError(FileSystemError):
    """Exception when the commands file cannot be read."""

    user_message = "Cannot read the commands file"


class CommandsFileWriteError(FileSystemError):
    """Exception when the commands file cannot be written."""

    user_message = "Cannot write the commands file"


class InvalidCommandsFileError(FileSystemError):
    """Exception when the commands file is not valid TOML or has bad entries."""

    user_message = "The commands file is invalid"


## Configuration Errors


class ConfigurationError(ClError):
    """Base exception for configuration-related errors."""

    category = ErrorCategory.CONFIGURATION
    user_message = "A configuration error occurred"


class MissingConfigError(ConfigurationError):
    """Exception for missing configuration settings."""

    user_message = "Missing configuration settings"


class InvalidConfigError(ConfigurationError):
    """Exception for invalid configuration settings."""

    user_message = "Invalid configuration settings"


## Execution Errors


class ExecutionError(ClError):
    """Base exception for command execution errors."""

    category = ErrorCategory.EXECUTION
    user_message = "Cannot run the command"


class CannotRunCommandError(ExecutionError):
    """Exception when the shell process cannot be spawned."""

    def __init__(self, command: str, cause: str):
        super().__init__(
            f"Cannot run the command '{command}'\n\nCause: {cause}",
            details={"command": command, "cause": cause},
        )


## Error Handler


class ErrorHandler:
    """Centralized error handling and logging."""

    @staticmethod
    def handle(
        error: Exception, context: str = "", log_traceback: bool = True
    ) -> Dict[str, Any]:
        """Handle errors with logging and user-friendly message."""
        if isinstance(error, ClError):
            _get_logger().error(f"{context}: {error.message}", extra={"context": error.details})
            if log_traceback:
                _get_logger().exception(error)
            return error.to_dict()
        else:
            _get_logger().error(f"{context}: {str(error)}")
            if log_traceback:
                _get_logger().exception(error)
            return {
                "error_type": "UnknownError",
                "category": ErrorCategory.UNKNOWN.value,
                "message": str(error),
                "details": {"context": context},
            }


## Utility Functions


def format_error_message(error: Exception) -> str:
    """Format an error message for display."""
    if isinstance(error, ClError):
        return error.message
    else:
        return "An unexpected error occurred - check logs for details."
