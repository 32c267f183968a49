"""
Tests for running stored commands

Tests cover:
- Named parameter substitution and appended options
- Shell resolution and the runner
- The exec workflow exit codes and messages
"""
import subprocess
from unittest.mock import MagicMock

import pytest

from cl_launcher.features.exec import (
    CommandArg,
    CommandRunner,
    exec_command,
    prepare_command,
    resolve_shell,
)
from cl_launcher.utils.console import get_buffer_console
from cl_launcher.utils.errors import CannotRunCommandError, MissingNamedParameterError

from .test_helpers import CommandTestHelper, ConsoleTestHelper


class TestCommandArg:
    """Tests for single argument parsing"""

    def test_prefixed_with_value(self):
        """--key=value keeps prefix, key and value"""
        arg = CommandArg.parse("--name=World")
        assert (arg.prefix, arg.arg, arg.value) == ("--", "name", "World")
        assert str(arg) == "--name=World"

    def test_plain_word(self):
        """A bare word has no prefix and no value"""
        arg = CommandArg.parse("verbose")
        assert arg.prefix is None
        assert arg.value is None
        assert str(arg) == "verbose"

    def test_value_with_equals(self):
        """Only the first = splits key and value"""
        assert CommandArg.parse("--query=a=b").value == "a=b"


class TestPrepareCommand:
    """Tests for prepare_command"""

    def test_no_args(self):
        """Commands without args are left alone"""
        assert prepare_command("echo hello", []) == "echo hello"

    def test_options_appended(self):
        """Arguments that name no placeholder are appended"""
        assert prepare_command("echo hello", ["--name", "unit_test"]) == "echo hello --name unit_test"

    def test_named_with_equals(self):
        """--key=value fills the placeholder"""
        assert prepare_command("echo hello #{name}", ["--name=World"]) == "echo hello World"

    def test_named_with_following_value(self):
        """--key value fills the placeholder with the next argument"""
        assert prepare_command("echo hello #{name}", ["--name", "World"]) == "echo hello World"

    def test_named_without_prefix(self):
        """key=value works without dashes"""
        assert prepare_command("echo #{name}", ["name=x"]) == "echo x"

    def test_named_and_options(self):
        """Options go after the substituted command"""
        result = prepare_command("grep #{pattern} ", ["--pattern=foo", "-r", "--color"])
        assert result == "grep foo -r --color"

    def test_repeated_placeholder(self):
        """Every occurrence of a placeholder is replaced"""
        assert prepare_command("echo #{a} #{a}", ["--a=x"]) == "echo x x"

    def test_missing_named_parameter(self):
        """A placeholder without a value is an error"""
        with pytest.raises(MissingNamedParameterError) as exc_info:
            prepare_command("echo #{first} #{second}", ["--first=1"])
        assert exc_info.value.message == "Some named parameters are missing: second"

    def test_named_parameter_given_twice(self):
        """A key given twice cannot stand in for another placeholder"""
        with pytest.raises(MissingNamedParameterError) as exc_info:
            prepare_command("echo #{a} #{b}", ["--a=1", "--a=2"])
        assert exc_info.value.message == "Named parameters given more than once: a"

    def test_named_parameter_without_value(self):
        """A trailing --key with nothing after it is rejected"""
        with pytest.raises(MissingNamedParameterError) as exc_info:
            prepare_command("echo hello #{name}", ["--name"])
        assert exc_info.value.message == "Named parameters without a value: name"

    def test_empty_value_is_kept(self):
        """An explicit empty value is a value"""
        assert prepare_command("echo [#{name}]", ["--name="]) == "echo []"


class TestCommandRunner:
    """Tests for CommandRunner"""

    def test_resolve_shell_from_env(self, monkeypatch):
        """$SHELL is used when set"""
        monkeypatch.setenv("SHELL", "/bin/zsh")
        assert resolve_shell() == "/bin/zsh"

    def test_resolve_shell_fallback(self, monkeypatch):
        """sh is used when $SHELL is missing"""
        monkeypatch.delenv("SHELL", raising=False)
        assert resolve_shell() == "sh"

    def test_dry_run_prints_only(self, monkeypatch):
        """Dry run prints the command text and runs nothing"""
        mock_run = MagicMock()
        monkeypatch.setattr(subprocess, "run", mock_run)
        console, buffer = get_buffer_console()
        command = CommandTestHelper.create_command(command="echo [bold]hi[/bold]")

        code = CommandRunner(console).run(command, dry_run=True)

        assert code == 0
        assert buffer.getvalue().strip() == "echo [bold]hi[/bold]"
        mock_run.assert_not_called()

    def test_run_uses_shell(self, monkeypatch):
        """The command is passed to the shell with -c"""
        mock_run = MagicMock(return_value=subprocess.CompletedProcess([], 3))
        monkeypatch.setattr(subprocess, "run", mock_run)
        monkeypatch.setenv("SHELL", "/bin/bash")
        console, _ = get_buffer_console()
        err_console, err_buffer = get_buffer_console()
        command = CommandTestHelper.create_command(alias="t", namespace="ns", command="exit 3")

        code = CommandRunner(console, err_console).run(command)

        assert code == 3
        assert mock_run.call_args.args[0] == ["/bin/bash", "-c", "exit 3"]
        assert "ns.t --> exit 3" in err_buffer.getvalue()

    def test_quiet_skips_banner(self, monkeypatch):
        """Quiet mode prints no banner"""
        monkeypatch.setattr(subprocess, "run", MagicMock(return_value=subprocess.CompletedProcess([], 0)))
        console, _ = get_buffer_console()
        err_console, err_buffer = get_buffer_console()

        CommandRunner(console, err_console).run(CommandTestHelper.create_command(), quiet=True)

        assert err_buffer.getvalue() == ""

    def test_spawn_failure(self, monkeypatch):
        """A shell that cannot start raises CannotRunCommandError"""
        monkeypatch.setattr(subprocess, "run", MagicMock(side_effect=FileNotFoundError("no shell")))
        console, _ = get_buffer_console()
        with pytest.raises(CannotRunCommandError) as exc_info:
            CommandRunner(console, console).run(CommandTestHelper.create_command(), quiet=True)
        assert "no shell" in exc_info.value.message


class TestExecWorkflow:
    """Tests for the exec workflow"""

    @pytest.mark.asyncio
    async def test_dry_run_with_named_parameter(self, session):
        """Named parameters are filled before printing"""
        console, buffer = get_buffer_console()
        code = await exec_command(session, "greet", args=["--name=World"], dry_run=True, console=console)
        assert code == 0
        assert ConsoleTestHelper.output_of(buffer).strip() == "echo hello World"

    @pytest.mark.asyncio
    async def test_unknown_alias(self, session, capsys):
        """An unknown alias fails with exit code 1"""
        code = await exec_command(session, "nope", dry_run=True)
        assert code == 1
        assert "The alias 'nope' was not found!" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_missing_parameter(self, session, capsys):
        """A missing named parameter fails with exit code 1"""
        code = await exec_command(session, "greet", dry_run=True)
        assert code == 1
        assert "Some named parameters are missing: name" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_exit_code_is_returned(self, session, monkeypatch):
        """The command's own exit code is returned"""
        monkeypatch.setattr(subprocess, "run", MagicMock(return_value=subprocess.CompletedProcess([], 7)))
        console, _ = get_buffer_console()
        assert await exec_command(session, "ls", quiet=True, console=console) == 7
