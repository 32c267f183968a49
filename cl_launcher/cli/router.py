"""Routes CLI commands to feature modules."""

from typing import Any, Awaitable, Callable, Dict, Optional

from rich.console import Console

from cl_launcher.core.session import Session
from cl_launcher.features.exec import CommandRunner, exec_command
from cl_launcher.features.manage import (
    add_command,
    describe_command,
    list_commands,
    remove_command,
)
from cl_launcher.features.search import search_commands
from cl_launcher.features.share import export_commands, import_commands
from cl_launcher.ui.components import StatusMessage
from cl_launcher.utils.config_manager import ConfigManager
from cl_launcher.utils.console import get_err_console
from cl_launcher.utils.logging import async_log_call, get_logger

logger = get_logger(__name__)

# Handlers return True/False for success, or an exit code
HandlerResult = bool | int
Handler = Callable[[Dict[str, Any]], Awaitable[HandlerResult]]

NAMED_PARAMETER_WARNING = (
    "Warning: This command appears to contain one or more named parameters placeholders. "
    "It may not run correctly using the interface.\n"
    "If you want to use these parameters, please use the CLI (cl exec --help)"
)


class CommandRouter:
    """Routes commands to appropriate feature workflows."""

    def __init__(
        self,
        config_manager: ConfigManager,
        session: Session,
        console: Optional[Console] = None,
    ):
        self.config = config_manager
        self.session = session
        self.console = console

    @async_log_call
    async def route(self, command: str, args: Optional[Dict[str, Any]] = None) -> HandlerResult:
        """Route command to feature.

        Args:
            command: Command name
            args: Parsed arguments dictionary

        Returns:
            True/False for success, or the exit code of an executed command

        Raises:
            ValueError: If command is unknown
        """
        if args is None:
            args = {}

        if not isinstance(command, str):
            raise TypeError("First argument to route() must be a command string")
        if not isinstance(args, dict):
            raise TypeError("Second argument to route() must be a dict")

        handler = self._get_handler(command)
        if not handler:
            raise ValueError(f"Unknown command: {command}")

        try:
            return await handler(args)
        except Exception as e:
            logger.error(f"Command '{command}' failed: {e}")
            raise

    def _get_handler(self, command: str) -> Optional[Handler]:
        handlers = {
            "exec": self._handle_exec,
            "x": self._handle_exec,
            "add": self._handle_add,
            "remove": self._handle_remove,
            "list": self._handle_list,
            "describe": self._handle_describe,
            "search": self._handle_search,
            "share": self._handle_share,
            "config": self._handle_config,
            "tui": self._handle_tui,
        }
        return handlers.get(command)

    def get_available_commands(self) -> Dict[str, str]:
        return {
            "exec": "Run a stored command (alias: x)",
            "add": "Store a new command",
            "remove": "Remove a stored command",
            "list": "List stored commands",
            "describe": "Show every field of a command",
            "search": "Fuzzy search the stored commands",
            "share": "Export or import commands",
            "config": "Show or update preferences",
            "tui": "Open the interactive browser",
        }

    def _quiet(self, args: Dict[str, Any]) -> bool:
        return bool(args.get("quiet")) or self.config.preferences.quiet_mode

    # Command Handlers

    async def _handle_exec(self, args: Dict[str, Any]) -> int:
        command_args = list(args.get("command_args") or [])
        if command_args and command_args[0] == "--":
            command_args = command_args[1:]

        return await exec_command(
            self.session,
            alias=args["alias"],
            namespace=args.get("namespace"),
            args=command_args,
            dry_run=args.get("dry_run", False),
            quiet=self._quiet(args),
            console=self.console,
        )

    async def _handle_add(self, args: Dict[str, Any]) -> bool:
        return await add_command(
            self.session,
            raw=args.get("command_text"),
            interactive=args.get("interactive", False),
            quiet=self._quiet(args),
            console=self.console,
        )

    async def _handle_remove(self, args: Dict[str, Any]) -> bool:
        return await remove_command(
            self.session,
            alias=args["alias"],
            namespace=args.get("namespace"),
            confirm=not args.get("yes", False),
            console=self.console,
        )

    async def _handle_list(self, args: Dict[str, Any]) -> bool:
        return await list_commands(
            self.session,
            namespace=args.get("namespace"),
            fzf=args.get("fzf", False),
            console=self.console,
        )

    async def _handle_describe(self, args: Dict[str, Any]) -> bool:
        return await describe_command(
            self.session,
            alias=args["alias"],
            namespace=args.get("namespace"),
            console=self.console,
        )

    async def _handle_search(self, args: Dict[str, Any]) -> bool:
        query = args.get("query")
        if not query:
            raise ValueError("Search query is required")

        return await search_commands(
            self.session,
            query=query,
            namespace=args.get("namespace"),
            limit=args.get("limit", 20),
            console=self.console,
        )

    async def _handle_share(self, args: Dict[str, Any]) -> bool:
        share = export_commands if args.get("mode") == "export" else import_commands
        return await share(
            self.session,
            path=args.get("file"),
            namespaces=args.get("namespaces"),
            console=self.console,
        )

    async def _handle_config(self, args: Dict[str, Any]) -> bool:
        updates = {
            "preferences.quiet_mode": args.get("quiet_mode"),
            "preferences.log_level": args.get("log_level"),
            "preferences.highlight_matches": args.get("highlight_matches"),
        }
        for key_path, value in updates.items():
            if value is not None:
                self.config.set_config(key_path, value)

        message = StatusMessage(self.console)
        if any(value is not None for value in updates.values()):
            message.success("Configuration updated")
        message.console.print(self.config.printable(), markup=False, highlight=False)
        return True

    async def _handle_tui(self, args: Dict[str, Any]) -> int:
        from cl_launcher.tui.app import ClApp

        app = ClApp(self.session, self.config.preferences)
        command = await app.run_async()
        if command is None:
            return 0

        if command.has_named_parameter():
            StatusMessage(get_err_console()).warning(NAMED_PARAMETER_WARNING)

        runner = CommandRunner(self.console)
        return runner.run(command, quiet=self.config.preferences.quiet_mode)
