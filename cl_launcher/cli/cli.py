"""Main CLI entry point - simplified to use router."""

import asyncio
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from cl_launcher.core.session import Session
from cl_launcher.utils.config_manager import ConfigManager
from cl_launcher.utils.console import get_console, get_err_console
from cl_launcher.utils.errors import ClError, ErrorHandler, format_error_message
from cl_launcher.utils.logging import async_log_call, get_logger, init_logging

from .cli_parser import setup_argument_parser
from .router import CommandRouter

logger = get_logger(__name__)

DEFAULT_COMMAND = "tui"


def _args_to_dict(args) -> Dict[str, Any]:
    """Convert argparse Namespace to dictionary."""
    result = {}
    for key, value in vars(args).items():
        if key != "command" and value is not None:
            result[key] = value
    return result


@async_log_call
async def dispatch_command(args, config_manager: ConfigManager, console: Console) -> int:
    """Dispatch command via router.

    Returns:
        Exit code (0 = success, 1 = error, or the executed command's code)
    """
    command = args.command or DEFAULT_COMMAND
    err_console = get_err_console()

    try:
        session = Session.from_config(config_manager)
        router = CommandRouter(config_manager, session, console)
        result = await router.route(command, _args_to_dict(args))

    except ValueError as e:
        logger.error(f"Invalid command: {e}")
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False)
        return 1

    except ClError as e:
        ErrorHandler.handle(e, f"Command '{command}' failed", log_traceback=False)
        err_console.print(f"[red]Error:[/red] {escape(format_error_message(e))}", highlight=False)
        return 1

    if isinstance(result, bool):
        return 0 if result else 1
    return result


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code
    """
    console = get_console()
    err_console = get_err_console()

    try:
        parser = setup_argument_parser()
        args = parser.parse_args(argv)

        try:
            config_manager = ConfigManager()
            init_logging(
                config_manager.preferences.log_level.value,
                config_manager.log_dir_path,
            )
        except ClError as e:
            err_console.print(f"[red]Configuration error:[/red] {escape(format_error_message(e))}")
            return 1

        return asyncio.run(dispatch_command(args, config_manager, console))

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130  # Standard SIGINT exit code

    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        err_console.print(f"[red]Fatal error: {escape(str(e))}[/red]", highlight=False)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
