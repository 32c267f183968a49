"""Interactive input for ``cl add --interactive`` using prompt-toolkit."""

from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style
from prompt_toolkit.validation import ValidationError, Validator

from cl_launcher.core.models import Command, parse_tags
from cl_launcher.utils.logging import async_log_call, get_logger

logger = get_logger(__name__)


class SingleWordValidator(Validator):
    """Rejects blank values and values containing whitespace."""

    def __init__(self, field_name: str):
        self.field_name = field_name

    def validate(self, document):
        text = document.text.strip()

        if not text:
            raise ValidationError(
                message=f"The {self.field_name} is required",
                cursor_position=len(document.text),
            )
        if any(char.isspace() for char in text):
            raise ValidationError(
                message=f"The {self.field_name} must not contain whitespace",
                cursor_position=len(document.text),
            )


class RequiredValidator(Validator):
    def validate(self, document):
        if not document.text.strip():
            raise ValidationError(message="The command is required", cursor_position=0)


class CommandInputManager:
    """Collects the fields of a new command, one prompt at a time."""

    def __init__(self, namespaces: Optional[List[str]] = None):
        self.session = PromptSession()
        self.namespaces = namespaces or []
        self.style = Style.from_dict({
            "prompt": "cyan bold",
            "bottom-toolbar": "bg:#333333 #ffffff",
            "validation-toolbar": "bg:#aa0000 #ffffff",
        })

    def _create_command_key_bindings(self) -> KeyBindings:
        """Enter adds a new line, Ctrl+D finishes the command."""
        kb = KeyBindings()

        @kb.add("c-d")
        def _(event):
            event.current_buffer.validate_and_handle()

        return kb

    async def _prompt(self, message: str, **kwargs) -> Optional[str]:
        try:
            result = await self.session.prompt_async(message, style=self.style, **kwargs)
        except (KeyboardInterrupt, EOFError):
            logger.info("Command input cancelled by user")
            return None
        return result.strip()

    @async_log_call
    async def prompt_all(self) -> Optional[Command]:
        """Ask for namespace, alias, description, tags and command.

        Returns:
            The new Command, or None if the user cancelled
        """
        namespace = await self._prompt(
            "Namespace: ",
            completer=WordCompleter(self.namespaces, sentence=True),
            validator=SingleWordValidator("namespace"),
            validate_while_typing=False,
            bottom_toolbar="Existing namespaces complete with Tab (Ctrl+C to cancel)",
        )
        if namespace is None:
            return None

        alias = await self._prompt(
            "Alias: ",
            validator=SingleWordValidator("alias"),
            validate_while_typing=False,
            bottom_toolbar="The name used to call the command (Ctrl+C to cancel)",
        )
        if alias is None:
            return None

        description = await self._prompt(
            "Description: ", bottom_toolbar="Optional, press Enter to skip"
        )
        if description is None:
            return None

        tags = await self._prompt(
            "Tags: ", bottom_toolbar="Optional, comma separated"
        )
        if tags is None:
            return None

        command = await self._prompt(
            "Command: ",
            multiline=True,
            key_bindings=self._create_command_key_bindings(),
            validator=RequiredValidator(),
            validate_while_typing=False,
            bottom_toolbar="Press Ctrl+D to finish, Ctrl+C to cancel",
        )
        if command is None:
            return None

        return Command(
            alias=alias,
            namespace=namespace,
            command=command,
            description=description or None,
            tags=parse_tags(tags),
        )
