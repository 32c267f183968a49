from textual.widgets import Static


class HintBar(Static):
    """Displays keyboard shortcuts or contextual hints."""

    def __init__(self):
        super().__init__("", id="hint-bar", markup=True)

    def show_hint(self, hint: str) -> None:
        self.update(hint)
