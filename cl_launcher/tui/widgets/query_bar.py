from textual.binding import Binding
from textual.message import Message
from textual.widgets import Input


class QueryChanged(Message):
    """Posted whenever the query text changes."""

    def __init__(self, query: str):
        super().__init__()
        self.query = query


class QueryBar(Input):
    """Free text filter. Escape or Enter hands focus back to the list."""

    BINDINGS = [
        Binding("escape", "leave", "Back", show=False),
    ]

    class Left(Message):
        """Posted when the user leaves the query box."""

    def __init__(self):
        super().__init__(placeholder="Type / to search", id="query-bar")

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(QueryChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_leave()

    def action_leave(self) -> None:
        self.post_message(self.Left())
