"""
Tests for the command store, namespace cache and commands file

Tests cover:
- Add / edit / remove / find on the store
- Namespace lifecycle
- Cache patching matching a full rebuild
- TOML persistence and its error cases
"""
import tomllib

import pytest

from cl_launcher.core.store import (
    CommandsFileHandler,
    CommandStore,
    NamespaceCache,
    flatten,
    to_command_map,
)
from cl_launcher.core.store.file_handler import commands_from_toml, commands_to_toml
from cl_launcher.utils.errors import (
    AlreadyExistsError,
    AmbiguousAliasError,
    CommandsFileReadError,
    InvalidCommandsFileError,
    NotFoundError,
)

from .test_helpers import CommandTestHelper


def make(alias, namespace="git", command=None, **kwargs):
    return CommandTestHelper.create_command(
        alias=alias, namespace=namespace, command=command or f"run {alias}", **kwargs
    )


class TestCommandStore:
    """Tests for CommandStore mutations and lookups"""

    def test_add_and_find(self):
        """Added commands can be found by alias"""
        store = CommandStore()
        store.add(make("gl"))
        assert store.find("gl").command == "run gl"
        assert store.find("gl", "git").alias == "gl"
        assert len(store) == 1

    def test_add_duplicate_key(self):
        """The same alias twice in a namespace is rejected"""
        store = CommandStore.from_commands([make("gl")])
        with pytest.raises(AlreadyExistsError) as exc_info:
            store.add(make("gl", command="other"))
        assert "already exists in 'git' namespace" in exc_info.value.message
        assert len(store) == 1

    def test_same_alias_other_namespace(self):
        """The same alias may live in two namespaces"""
        store = CommandStore.from_commands([make("up", "docker")])
        store.add(make("up", "vagrant"))
        assert store.namespaces() == ["docker", "vagrant"]

    def test_add_returns_snapshot(self):
        """Mutations return a copy of the whole mapping"""
        store = CommandStore()
        snapshot = store.add(make("gl"))
        snapshot["git"].append(make("other"))
        assert len(store) == 1

    def test_find_not_found(self):
        """Unknown aliases raise NotFoundError"""
        store = CommandStore.from_commands([make("gl")])
        with pytest.raises(NotFoundError):
            store.find("nope")
        with pytest.raises(NotFoundError):
            store.find("gl", "sys")

    def test_find_ambiguous(self):
        """A bare alias present in two namespaces is ambiguous"""
        store = CommandStore.from_commands([make("up", "docker"), make("up", "vagrant")])
        with pytest.raises(AmbiguousAliasError) as exc_info:
            store.find("up")
        assert exc_info.value.namespaces == ["docker", "vagrant"]
        assert store.find("up", "vagrant").namespace == "vagrant"

    def test_edit_same_key(self):
        """Editing other fields of a command keeps its key"""
        old = make("gl")
        store = CommandStore.from_commands([old])
        store.edit(make("gl", command="git log -5"), old)
        assert store.find("gl").command == "git log -5"
        assert len(store) == 1

    def test_edit_keeps_position(self):
        """Editing in place keeps the command where it was"""
        first, second = make("b"), make("a")
        store = CommandStore.from_commands([first, second])
        store.edit(make("c"), first)
        assert [c.alias for c in store.get("git")] == ["c", "a"]

    def test_edit_moves_namespace(self):
        """Moving the last command of a namespace drops that namespace"""
        old = make("gl")
        store = CommandStore.from_commands([old])
        store.edit(make("gl", "vcs"), old)
        assert store.namespaces() == ["vcs"]

    def test_edit_onto_taken_key(self):
        """Renaming onto another command's key is rejected"""
        gl, gf = make("gl"), make("gf")
        store = CommandStore.from_commands([gl, gf])
        with pytest.raises(AlreadyExistsError):
            store.edit(make("gf", command="x"), gl)
        assert store.find("gl").command == "run gl"

    def test_remove(self):
        """Removing deletes only the matching key"""
        store = CommandStore.from_commands([make("gl"), make("gf"), make("ls", "sys")])
        store.remove(make("gl"))
        assert [c.alias for c in store.as_list()] == ["gf", "ls"]

    def test_remove_last_drops_namespace(self):
        """The namespace goes away with its last command"""
        store = CommandStore.from_commands([make("tmp", "temp"), make("gl")])
        store.remove(make("tmp", "temp"))
        assert "temp" not in store.namespaces()

    def test_remove_unknown_is_noop(self):
        """Removing a missing key leaves the store alone"""
        store = CommandStore.from_commands([make("gl")])
        store.remove(make("zz"))
        assert len(store) == 1

    def test_duplicates_skipped_on_load(self):
        """Duplicated keys in loaded data keep the first occurrence"""
        store = CommandStore({"git": [make("gl"), make("gl", command="second")]})
        assert len(store) == 1
        assert store.find("gl").command == "run gl"

    def test_replace_all(self):
        """A snapshot can be restored"""
        store = CommandStore.from_commands([make("gl")])
        before = store.snapshot()
        store.add(make("gf"))
        store.replace_all(before)
        assert [c.alias for c in store.as_list()] == ["gl"]


class TestNamespaceCache:
    """Tests for NamespaceCache"""

    def test_build_sorts_case_insensitively(self):
        """Each namespace is sorted by alias ignoring case"""
        cache = NamespaceCache.build([make("b"), make("A"), make("c"), make("x", "sys")])
        assert [c.alias for c in cache.get("git")] == ["A", "b", "c"]
        assert cache.namespaces() == ["git", "sys"]

    def test_get_unknown_namespace(self):
        """Unknown namespaces give an empty list"""
        assert NamespaceCache.build([]).get("nothing") == []

    def test_patches_match_rebuild(self):
        """Insert, update and remove leave the cache equal to a rebuild"""
        store = CommandStore.from_commands([make("gl"), make("gf"), make("ls", "sys")])
        cache = NamespaceCache.build(store.as_list())

        new = make("Ga")
        store.add(new)
        cache.on_insert(new)

        moved = make("gf", "vcs")
        store.edit(moved, make("gf"))
        cache.on_update(moved, make("gf"))

        store.remove(make("ls", "sys"))
        cache.on_remove(make("ls", "sys"))

        rebuilt = NamespaceCache.build(store.as_list())
        assert cache.to_dict() == rebuilt.to_dict()
        assert [c.alias for c in cache.get("git")] == ["Ga", "gl"]
        assert "sys" not in cache

    def test_update_same_key_replaces_content(self):
        """Updating in place replaces the cached command"""
        cache = NamespaceCache.build([make("gl")])
        cache.on_update(make("gl", command="new"), make("gl"))
        assert [c.command for c in cache.get("git")] == ["new"]

    def test_all_commands_namespace_order(self):
        """All commands are listed namespace by namespace"""
        cache = NamespaceCache.build([make("z", "b"), make("y", "a")])
        assert [c.namespace for c in cache.all_commands()] == ["a", "b"]


class TestCommandsFile:
    """Tests for TOML persistence"""

    def test_round_trip_keeps_optional_fields(self, tmp_path):
        """Absent and empty optional fields survive a save and load"""
        commands = [
            make("gl", description="history", tags=("log", "git")),
            make("gf", description=""),
            make("ls", "sys", command="ls -la\n| less"),
        ]
        handler = CommandsFileHandler(tmp_path / "commands.toml")
        handler.save(to_command_map(commands))

        loaded = {c.key: c for c in flatten(handler.load())}
        assert loaded[("git", "gl")].tags == ("log", "git")
        assert loaded[("git", "gf")].description == ""
        assert loaded[("git", "gl")].description == "history"
        assert loaded[("sys", "ls")].description is None
        assert loaded[("sys", "ls")].tags is None
        assert loaded[("sys", "ls")].command == "ls -la\n| less"

    def test_toml_layout(self):
        """Each namespace key holds a list of command tables"""
        text = commands_to_toml({"git": [make("gl")], "sys": [make("ls", "sys", tags=("fs",))]})
        assert tomllib.loads(text) == {
            "git": [{"alias": "gl", "namespace": "git", "command": "run gl"}],
            "sys": [{"alias": "ls", "namespace": "sys", "command": "run ls", "tags": ["fs"]}],
        }

    def test_empty_namespaces_not_written(self):
        """Namespaces without commands are left out"""
        assert commands_to_toml({"git": []}).strip() == ""

    def test_namespace_defaults_to_table_name(self):
        """Entries without a namespace take it from their table"""
        command_map = commands_from_toml('[[git]]\nalias = "gl"\ncommand = "git log"\n')
        assert command_map["git"][0].namespace == "git"

    def test_ensure_exists_creates_file(self, tmp_path):
        """A missing file (and its directories) is created empty"""
        path = tmp_path / "nested" / "dir" / "commands.toml"
        handler = CommandsFileHandler(path).ensure_exists()
        assert path.exists()
        assert handler.load() == {}

    def test_invalid_toml(self, tmp_path):
        """Broken TOML raises InvalidCommandsFileError"""
        path = tmp_path / "commands.toml"
        path.write_text("[[git]\nalias = ", encoding="utf-8")
        with pytest.raises(InvalidCommandsFileError):
            CommandsFileHandler(path).load()

    def test_namespace_must_be_array(self):
        """A namespace holding a plain value is rejected"""
        with pytest.raises(InvalidCommandsFileError):
            commands_from_toml('git = "oops"\n')

    def test_missing_file(self, tmp_path):
        """Reading a missing file raises CommandsFileReadError"""
        with pytest.raises(CommandsFileReadError):
            CommandsFileHandler(tmp_path / "missing.toml").load()
