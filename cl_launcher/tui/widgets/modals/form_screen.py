from typing import Callable, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label, Static, TextArea

from cl_launcher.core.models import Command, parse_tags
from cl_launcher.utils.errors import ClError, format_error_message
from cl_launcher.utils.logging import get_logger

from .error_dialog import ErrorDialog

logger = get_logger(__name__)


class CommandForm(ModalScreen[Optional[Command]]):
    """Insert / edit form.

    ``submit`` persists the new command and raises a ClError when it is
    rejected; the error is then shown on top of the form, which stays open
    so the user can fix it. On success the form dismisses with the command.
    """

    BINDINGS = [
        Binding("ctrl+s", "save", "Save"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(
        self,
        title: str,
        submit: Callable[[Command], object],
        command: Optional[Command] = None,
        namespace: Optional[str] = None,
    ):
        super().__init__()
        self.form_title = title
        self.submit = submit
        self.initial = command
        self.default_namespace = namespace or ""

    def compose(self) -> ComposeResult:
        initial = self.initial
        yield Vertical(
            Static(self.form_title, classes="modal-title", markup=False),
            Label("Namespace"),
            Input(
                value=initial.namespace if initial else self.default_namespace,
                id="field-namespace",
            ),
            Label("Alias"),
            Input(value=initial.alias if initial else "", id="field-alias"),
            Label("Description"),
            Input(value=initial.description_text() if initial else "", id="field-description"),
            Label("Tags (comma separated)"),
            Input(value=initial.tags_as_string() if initial else "", id="field-tags"),
            Label("Command"),
            TextArea(initial.command if initial else "", id="field-command"),
            classes="modal-window form-window",
        )

    def on_mount(self) -> None:
        self.query_one("#field-namespace", Input).focus()

    def build_command(self) -> Command:
        initial = self.initial
        description = self.query_one("#field-description", Input).value.strip()
        tags = parse_tags(self.query_one("#field-tags", Input).value)
        command_text = self.query_one("#field-command", TextArea).text

        # blank fields keep an initially empty value empty rather than absent
        if not description and initial and initial.description == "":
            description = ""
        elif not description:
            description = None
        if tags is None and initial and initial.tags == ():
            tags = ()
        if initial and command_text.strip() == initial.command.strip():
            command_text = initial.command
        else:
            command_text = command_text.strip()

        return Command(
            alias=self.query_one("#field-alias", Input).value.strip(),
            namespace=self.query_one("#field-namespace", Input).value.strip(),
            command=command_text,
            description=description,
            tags=tags,
        )

    def action_save(self) -> None:
        command = self.build_command()
        try:
            self.submit(command)
        except ClError as e:
            logger.info(f"Form rejected: {e.message}")
            self.app.push_screen(ErrorDialog(format_error_message(e)))
            return
        self.dismiss(command)

    def action_cancel(self) -> None:
        self.dismiss(None)
