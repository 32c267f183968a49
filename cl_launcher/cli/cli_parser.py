"""Argument parser configuration for the cl CLI"""

import argparse

from cl_launcher import __version__
from cl_launcher.utils.config_manager import LogLevel
from cl_launcher.utils.paths import SHARED_FILE_NAME

TRUE_VALUES = ("true", "yes", "on", "1")
FALSE_VALUES = ("false", "no", "off", "0")


def str_to_bool(value: str) -> bool:
    """argparse type for true/false style values."""

    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"Expected a boolean value, got '{value}'")


## Argument Adding Utilities

def add_namespace_argument(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("-n", "--namespace", help=help_text)


def add_alias_argument(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("alias", help=help_text)


## Command Setup Functions

def setup_exec_command(subparsers) -> None:
    """Setup the exec command (alias: x)."""

    exec_parser = subparsers.add_parser(
        "exec",
        aliases=["x"],
        help="Run a stored command",
        description="Run the command stored under ALIAS through $SHELL",
        epilog="e.g. cl exec greet -- --name=World --verbose",
    )
    add_alias_argument(exec_parser, "The alias of the command to be executed")
    add_namespace_argument(exec_parser, "The namespace to use in case of duplicate aliases")
    exec_parser.add_argument(
        "-d", "--dry-run",
        action="store_true",
        help="Print the command instead of executing it"
    )
    exec_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Print only the command execution output"
    )
    exec_parser.add_argument(
        "command_args",
        nargs="*",
        metavar="ARGS",
        help="Named parameters and options, given after '--'"
    )


def setup_manage_commands(subparsers) -> None:
    """Setup add, remove, list and describe commands."""

    add_parser = subparsers.add_parser(
        "add",
        help="Store a new command",
        description="Store a command given as argument or read from stdin ('-')"
    )
    add_parser.add_argument(
        "command_text",
        nargs="?",
        metavar="COMMAND",
        help="The command to be added (use '-' or a pipe to read stdin)"
    )
    add_parser.add_argument(
        "-i", "--interactive",
        action="store_true",
        help="Fill in every field through prompts"
    )

    remove_parser = subparsers.add_parser(
        "remove",
        help="Remove a stored command",
        description="Remove the command stored under ALIAS"
    )
    add_alias_argument(remove_parser, "The alias of the command to remove")
    add_namespace_argument(remove_parser, "The namespace to use in case of duplicate aliases")
    remove_parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Do not ask for confirmation"
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List stored commands",
        description="Print a one line summary per command, sorted by alias"
    )
    add_namespace_argument(list_parser, "Only list this namespace")
    list_parser.add_argument(
        "--fzf",
        action="store_true",
        help="Print bare aliases, suited for piping into fzf"
    )

    describe_parser = subparsers.add_parser(
        "describe",
        help="Show every field of a command",
        description="Show the stored fields of the command under ALIAS"
    )
    add_alias_argument(describe_parser, "The alias of the command to describe")
    add_namespace_argument(describe_parser, "The namespace to use in case of duplicate aliases")


def setup_search_command(subparsers) -> None:
    """Setup search command."""

    search_parser = subparsers.add_parser(
        "search",
        help="Fuzzy search the stored commands",
        description="Rank commands by how well they match QUERY"
    )
    search_parser.add_argument("query", help="Search text")
    add_namespace_argument(search_parser, "Only search this namespace")
    search_parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Maximum number of results (default: 20)"
    )


def setup_share_command(subparsers) -> None:
    """Setup share export/import commands."""

    share_parser = subparsers.add_parser(
        "share",
        help="Export or import commands",
        description="Exchange commands through a TOML file"
    )
    share_parser.add_argument(
        "mode",
        choices=["export", "import"],
        help="Export/Import mode"
    )
    share_parser.add_argument(
        "-f", "--file",
        default=SHARED_FILE_NAME,
        help=f"Output file for export, source file for import (default: ./{SHARED_FILE_NAME})"
    )
    share_parser.add_argument(
        "-n", "--namespace",
        nargs="+",
        dest="namespaces",
        help="Namespace(s) to export/import (default: all)"
    )


def setup_config_command(subparsers) -> None:
    """Setup configuration command."""

    config_parser = subparsers.add_parser(
        "config",
        help="Show or update preferences",
        description="Without options, print the current configuration"
    )
    config_parser.add_argument(
        "--quiet-mode",
        type=str_to_bool,
        metavar="BOOL",
        help="Hide the banner printed before a command runs"
    )
    config_parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=[level.value for level in LogLevel],
        help="Console log level"
    )
    config_parser.add_argument(
        "--highlight-matches",
        type=str_to_bool,
        metavar="BOOL",
        help="Highlight fuzzy matches in the interactive browser"
    )


def setup_tui_command(subparsers) -> None:
    subparsers.add_parser(
        "tui",
        help="Open the interactive browser (default)",
        description="Browse, filter, edit and run commands in the terminal"
    )


def setup_argument_parser() -> argparse.ArgumentParser:
    """Setup the main argument parser for the cl CLI."""

    parser = argparse.ArgumentParser(
        prog="cl",
        description="Command launcher - store, find and run your shell command aliases",
        epilog="Use 'cl <command> --help' for command-specific help."
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"cl {__version__}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Command to execute (default: tui)"
    )

    setup_exec_command(subparsers)
    setup_manage_commands(subparsers)
    setup_search_command(subparsers)
    setup_share_command(subparsers)
    setup_config_command(subparsers)
    setup_tui_command(subparsers)

    return parser
