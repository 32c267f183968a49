"""Centralised console management module"""

from io import StringIO
from typing import Optional

from rich.console import Console

_console: Optional[Console] = None
_err_console: Optional[Console] = None


def get_console() -> Console:
    """Get the shared stdout Console instance"""
    global _console

    if _console is None:
        _console = Console()

    return _console


def get_err_console() -> Console:
    """Get the shared stderr Console instance (banners, warnings)"""
    global _err_console

    if _err_console is None:
        _err_console = Console(stderr=True)

    return _err_console


def get_buffer_console(width: int = 120) -> tuple[Console, StringIO]:
    """Get a Console for capturing output to a buffer"""
    buffer = StringIO()

    console = Console(
        file=buffer,
        force_terminal=False,
        width=width,
        legacy_windows=False,
        record=True,
    )

    return console, buffer


def reset_console() -> None:
    """Reset the shared Console instances (for testing purposes)"""
    global _console, _err_console
    _console = None
    _err_console = None
