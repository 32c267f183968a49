"""
Shared test fixtures and configuration for pytest
"""
import pytest

from cl_launcher.core.session import Session
from cl_launcher.core.store import CommandsFileHandler, to_command_map
from cl_launcher.utils.console import get_buffer_console, reset_console
from cl_launcher.utils.logging import reset_logging

from .test_helpers import CommandTestHelper


@pytest.fixture(autouse=True)
def isolated_app_dir(tmp_path, monkeypatch):
    """Point the config dir at a temp dir and reset shared state between tests"""
    app_dir = tmp_path / "cl"
    monkeypatch.setenv("CL_CONFIG_DIR", str(app_dir))
    monkeypatch.setenv("SHELL", "sh")
    reset_console()
    yield app_dir
    reset_console()
    reset_logging()


@pytest.fixture
def sample_commands():
    """A handful of commands spread over two namespaces"""
    return [
        CommandTestHelper.create_command(alias="gl", namespace="git", command="git log --oneline",
                                         description="Compact history", tags=("log",)),
        CommandTestHelper.create_command(alias="gf", namespace="git", command="git fetch --all"),
        CommandTestHelper.create_command(alias="ls", namespace="sys", command="ls -la"),
        CommandTestHelper.create_command(alias="greet", namespace="sys", command="echo hello #{name}"),
    ]


@pytest.fixture
def commands_file(tmp_path, sample_commands):
    """Commands file pre-filled with the sample commands"""
    path = tmp_path / "commands.toml"
    CommandsFileHandler(path).save(to_command_map(sample_commands))
    return path


@pytest.fixture
def session(commands_file):
    """Session opened over the sample commands file"""
    return Session.open(commands_file)


@pytest.fixture
def empty_session(tmp_path):
    """Session over a commands file that does not exist yet"""
    return Session.open(tmp_path / "empty" / "commands.toml")


@pytest.fixture
def buffer_console():
    """Console writing to an in-memory buffer"""
    return get_buffer_console()
