from rich.table import Table
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Static

MAIN_KEYS = [
    ("/ or f", "Search"),
    ("↑ ↓ / k j", "Move selection"),
    ("← → / h l", "Switch namespace"),
    ("enter", "Run the selected command"),
    ("i", "Insert a new command"),
    ("e", "Edit the selected command"),
    ("d", "Remove the selected command"),
    ("y", "Copy the command to the clipboard"),
    ("?", "Show this help"),
    ("q / ctrl+c", "Quit"),
]

FORM_KEYS = [
    ("tab / shift+tab", "Next / previous field"),
    ("ctrl+s", "Save"),
    ("escape", "Cancel"),
]


def key_table(keys) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Action")
    for key, action in keys:
        table.add_row(key, action)
    return table


class HelpScreen(ModalScreen[None]):
    BINDINGS = [
        Binding("escape,q,question_mark,f1", "close", "Close"),
    ]

    def compose(self) -> ComposeResult:
        yield Vertical(
            Static("Help", classes="modal-title"),
            Static(key_table(MAIN_KEYS), classes="modal-body"),
            Static("Form", classes="modal-subtitle"),
            Static(key_table(FORM_KEYS), classes="modal-body"),
            classes="modal-window",
        )

    def action_close(self) -> None:
        self.dismiss(None)
