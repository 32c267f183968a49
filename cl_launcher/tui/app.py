"""Interactive command browser."""

from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import OptionList

from cl_launcher.core.models import Command
from cl_launcher.core.search import FuzzyMatch
from cl_launcher.core.session import Session
from cl_launcher.utils.config_manager import PreferencesConfig
from cl_launcher.utils.errors import ClError, format_error_message
from cl_launcher.utils.logging import get_logger

from .widgets.command_list import CommandList
from .widgets.command_viewer import CommandViewer
from .widgets.hint_bar import HintBar
from .widgets.modals.confirm_dialog import ConfirmDialog
from .widgets.modals.error_dialog import ErrorDialog
from .widgets.modals.form_screen import CommandForm
from .widgets.modals.help_screen import HelpScreen
from .widgets.namespace_tabs import NamespaceTabs
from .widgets.query_bar import QueryBar, QueryChanged

logger = get_logger(__name__)


class UIMode(Enum):
    MAIN = "main"
    FORM_INSERT = "form_insert"
    FORM_EDIT = "form_edit"
    POPUP = "popup"


HINTS = {
    UIMode.MAIN: (
        "[b]/[/b] Search · [b]⏎[/b] Run · [b]i[/b] Insert · [b]e[/b] Edit · "
        "[b]d[/b] Delete · [b]y[/b] Copy · [b]?[/b] Help · [b]q[/b] Quit"
    ),
    UIMode.FORM_INSERT: "[b]Tab[/b] Next field · [b]Ctrl+S[/b] Save · [b]Esc[/b] Cancel",
    UIMode.FORM_EDIT: "[b]Tab[/b] Next field · [b]Ctrl+S[/b] Save · [b]Esc[/b] Cancel",
    UIMode.POPUP: "[b]y[/b] Yes · [b]n[/b] No · [b]Esc[/b] Cancel",
}


class ClApp(App[Optional[Command]]):
    """Browse, filter, edit and pick a command.

    The app exits with the command chosen with Enter (or None), and the
    caller runs it once the terminal has been restored.
    """

    CSS_PATH = "styles.tcss"
    TITLE = "cl - command launcher"
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("slash,f", "focus_query", "Search"),
        Binding("down,j", "cursor_down", "Down", show=False),
        Binding("up,k", "cursor_up", "Up", show=False),
        Binding("right,l", "next_namespace", "Next namespace", show=False),
        Binding("left,h", "previous_namespace", "Previous namespace", show=False),
        Binding("enter", "execute", "Run"),
        Binding("i,insert", "insert", "Insert"),
        Binding("e", "edit", "Edit"),
        Binding("d,delete", "delete", "Delete"),
        Binding("y", "copy", "Copy"),
        Binding("question_mark,f1", "help", "Help"),
        Binding("q,escape", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    # Only available while no modal screen is open
    MAIN_ACTIONS = {
        "focus_query",
        "cursor_down",
        "cursor_up",
        "next_namespace",
        "previous_namespace",
        "execute",
        "insert",
        "edit",
        "delete",
        "copy",
        "help",
    }

    def __init__(self, session: Session, preferences: Optional[PreferencesConfig] = None):
        super().__init__()
        self.session = session
        self.preferences = preferences or PreferencesConfig()
        self.mode = UIMode.MAIN
        self.query_text = ""
        self.results: List[Tuple[Command, FuzzyMatch]] = []

        self.tabs = NamespaceTabs()
        self.query_bar = QueryBar()
        self.command_list = CommandList()
        self.viewer = CommandViewer(self.preferences.highlight_matches)
        self.hint_bar = HintBar()

        self._result_handlers: Dict[UIMode, Callable] = {
            UIMode.FORM_INSERT: self._on_form_closed,
            UIMode.FORM_EDIT: self._on_form_closed,
            UIMode.POPUP: self._on_delete_answered,
        }

    def compose(self) -> ComposeResult:
        yield Vertical(
            self.tabs,
            self.query_bar,
            Horizontal(self.command_list, self.viewer, id="main-panes"),
            id="main",
        )
        yield self.hint_bar

    def on_mount(self) -> None:
        self.tabs.set_namespaces(self.session.namespaces())
        self.set_mode(UIMode.MAIN)
        self.refresh_results()

    def check_action(self, action: str, parameters: tuple) -> Optional[bool]:
        if action in self.MAIN_ACTIONS and isinstance(self.screen, ModalScreen):
            return False
        return True

    ## Mode handling

    def set_mode(self, mode: UIMode) -> None:
        self.mode = mode
        self.hint_bar.show_hint(HINTS[mode])

    def open_mode(self, mode: UIMode, screen: Screen, context: Optional[Command] = None) -> None:
        """Push ``screen`` and route its result to the handler for ``mode``."""
        handler = self._result_handlers[mode]

        def on_result(result) -> None:
            self.set_mode(UIMode.MAIN)
            handler(result, context)

        self.set_mode(mode)
        self.push_screen(screen, on_result)

    ## Results

    @property
    def scope(self) -> Optional[str]:
        return self.tabs.current

    @property
    def selected(self) -> Optional[Tuple[Command, FuzzyMatch]]:
        if not self.results:
            return None
        return self.results[self.session.cursor.index]

    def refresh_results(self) -> None:
        """Re-run the filter for the current scope and query, then redraw."""
        self.results = self.session.rank(self.scope, self.query_text)
        self.command_list.show_commands(
            [command for command, _ in self.results], self.session.cursor.index
        )
        self.refresh_viewer()

    def refresh_viewer(self) -> None:
        selected = self.selected
        if selected is None:
            self.viewer.show_command(None)
        else:
            self.viewer.show_command(*selected)

    def move_cursor(self, index: int) -> None:
        self.command_list.highlighted = index if self.results else None
        self.refresh_viewer()

    def selected_stored_command(self) -> Optional[Command]:
        """Selected command, unless it is the demo placeholder."""
        selected = self.selected
        if selected is None or selected[0] not in self.session.store:
            return None
        return selected[0]

    ## Events

    def on_query_changed(self, event: QueryChanged) -> None:
        self.query_text = event.query
        self.refresh_results()

    def on_query_bar_left(self, event: QueryBar.Left) -> None:
        self.set_focus(None)

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        if event.option_index != self.session.cursor.index:
            self.session.cursor.select(event.option_index)
            self.refresh_viewer()

    ## Actions

    def action_focus_query(self) -> None:
        self.query_bar.focus()

    def action_cursor_down(self) -> None:
        self.move_cursor(self.session.cursor.next())

    def action_cursor_up(self) -> None:
        self.move_cursor(self.session.cursor.previous())

    def action_next_namespace(self) -> None:
        self.tabs.next()
        self.session.cursor.reset()
        self.refresh_results()

    def action_previous_namespace(self) -> None:
        self.tabs.previous()
        self.session.cursor.reset()
        self.refresh_results()

    def action_execute(self) -> None:
        command = self.selected_stored_command()
        if command is not None:
            self.exit(command)

    def action_insert(self) -> None:
        form = CommandForm("Insert command", self.session.add, namespace=self.scope)
        self.open_mode(UIMode.FORM_INSERT, form)

    def action_edit(self) -> None:
        command = self.selected_stored_command()
        if command is None:
            return
        form = CommandForm(
            "Edit command",
            lambda new_command: self.session.edit(new_command, command),
            command=command,
        )
        self.open_mode(UIMode.FORM_EDIT, form, command)

    def action_delete(self) -> None:
        command = self.selected_stored_command()
        if command is None:
            return
        dialog = ConfirmDialog(
            "Delete command",
            f"Remove '{command.alias}' from namespace '{command.namespace}'?",
        )
        self.open_mode(UIMode.POPUP, dialog, command)

    def action_copy(self) -> None:
        selected = self.selected
        if selected is None:
            return
        self.copy_to_clipboard(selected[0].command)
        self.notify(f"Copied '{selected[0].alias}' to the clipboard")

    def action_help(self) -> None:
        self.push_screen(HelpScreen())

    ## Result handlers

    def _on_form_closed(self, command: Optional[Command], previous: Optional[Command]) -> None:
        if command is None:
            return
        self.tabs.set_namespaces(self.session.namespaces())
        self.refresh_results()

    def _on_delete_answered(self, confirmed: bool, command: Optional[Command]) -> None:
        if not confirmed or command is None:
            return
        try:
            self.session.remove(command)
        except ClError as e:
            self.push_screen(ErrorDialog(format_error_message(e)))
            return

        self.tabs.set_namespaces(self.session.namespaces())
        self.refresh_results()
        self.notify(f"Removed '{command.namespace}.{command.alias}'")
