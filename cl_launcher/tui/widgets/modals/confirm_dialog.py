from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmDialog(ModalScreen[bool]):
    """Yes / No question. Dismisses with True only on an explicit yes."""

    BINDINGS = [
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
        Binding("escape,q", "cancel", "Cancel"),
        Binding("left,right,tab", "app.focus_next", "Switch", show=False),
    ]

    def __init__(self, title: str, message: str):
        super().__init__()
        self.dialog_title = title
        self.message = message

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static(self.dialog_title, classes="modal-title", markup=False),
            Static(self.message, classes="modal-body", markup=False),
            Horizontal(
                Button("Yes", variant="error", id="confirm-yes"),
                Button("No", variant="primary", id="confirm-no"),
                classes="modal-actions",
            ),
            classes="modal-window",
        )

    def on_mount(self) -> None:
        self.query_one("#confirm-no", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
