from typing import List, Optional

from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

ALL_TAB = "All"


class NamespaceTabs(Static):
    """``All`` followed by every namespace; the current one is highlighted."""

    index = reactive(0)

    def __init__(self):
        super().__init__(id="namespace-tabs")
        self.namespaces: List[str] = []

    @property
    def tabs(self) -> List[str]:
        return [ALL_TAB, *self.namespaces]

    @property
    def current(self) -> Optional[str]:
        """Selected namespace, None for ``All``."""
        if self.index == 0:
            return None
        return self.namespaces[self.index - 1]

    def set_namespaces(self, namespaces: List[str]) -> None:
        """Replace the tabs, staying on the same namespace when it still exists."""
        current = self.current
        self.namespaces = list(namespaces)
        self.index = self.tabs.index(current) if current in self.namespaces else 0
        self.refresh()

    def next(self) -> None:
        self.index = (self.index + 1) % len(self.tabs)

    def previous(self) -> None:
        self.index = (self.index - 1) % len(self.tabs)

    def render(self) -> Text:
        text = Text()
        for position, name in enumerate(self.tabs):
            if position:
                text.append(" │ ", style="dim")
            style = "bold reverse" if position == self.index else ""
            text.append(f" {name} ", style=style)
        return text
