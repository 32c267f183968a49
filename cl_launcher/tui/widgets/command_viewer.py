from typing import Dict, List, Optional

from rich.console import Group
from rich.text import Text
from textual.widgets import Static

from cl_launcher.core.models import Command
from cl_launcher.core.search import FuzzyMatch, split_match_indices

MATCH_STYLE = "bold underline magenta"


def highlighted(value: str, indices: List[int], style: str = "") -> Text:
    text = Text(value, style=style)
    for index in indices:
        text.stylize(MATCH_STYLE, index, index + 1)
    return text


class CommandViewer(Static):
    """Details of the selected command, matched characters highlighted."""

    def __init__(self, highlight_matches: bool = True):
        super().__init__(id="command-viewer")
        self.highlight_matches = highlight_matches

    def show_command(self, command: Optional[Command], match: Optional[FuzzyMatch] = None) -> None:
        if command is None:
            self.update(Text("No command selected.", style="dim italic"))
            return

        spans: Dict[str, List[int]] = {}
        if self.highlight_matches and match is not None and match.indices:
            spans = split_match_indices(command, match.indices)

        def field(name: str, value: str, style: str = "") -> Text:
            return highlighted(value, spans.get(name, []), style)

        header = Text.assemble(
            field("namespace", command.namespace, "cyan"),
            ".",
            field("alias", command.alias, "bold magenta"),
        )
        lines = [header]
        if command.description is not None:
            lines.append(Text.assemble(("Description: ", "bold"), field("description", command.description)))
        if command.tags:
            lines.append(Text.assemble(("Tags: ", "bold"), field("tags", command.tags_as_string(), "yellow")))
        lines.append(Text(""))
        lines.append(field("command", command.command, "green"))

        self.update(Group(*lines))
