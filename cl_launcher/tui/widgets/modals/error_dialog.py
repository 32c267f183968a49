from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ErrorDialog(ModalScreen[None]):
    """Shows an error on top of the current screen."""

    BINDINGS = [
        Binding("escape,enter,q", "close", "Close"),
    ]

    def __init__(self, message: str, title: str = "Error"):
        super().__init__()
        self.dialog_title = title
        self.message = message

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static(self.dialog_title, classes="modal-title error", markup=False),
            Static(self.message, classes="modal-body", markup=False),
            Button("OK", variant="primary", id="error-ok"),
            classes="modal-window",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
