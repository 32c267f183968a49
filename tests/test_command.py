"""
Tests for the Command model and its validation

Tests cover:
- Key based equality and full ordering
- Tag parsing and alias sorting
- Summaries and truncation
- Validation rules and their order
"""
import pytest

from cl_launcher.core.models import Command, parse_tags, sorted_by_alias
from cl_launcher.core.validation import CommandValidator
from cl_launcher.utils.errors import (
    EmptyFieldError,
    WhitespaceInAliasError,
    WhitespaceInNamespaceError,
)

from .test_helpers import CommandTestHelper


class TestCommandIdentity:
    """Tests for equality, hashing and ordering"""

    def test_equal_when_key_matches(self):
        """Commands with the same namespace and alias are equal"""
        a = CommandTestHelper.create_command(command="echo a", description="first")
        b = CommandTestHelper.create_command(command="echo b", tags=("x",))
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_namespace_not_equal(self):
        """Same alias in another namespace is another command"""
        a = CommandTestHelper.create_command(namespace="one")
        b = CommandTestHelper.create_command(namespace="two")
        assert a != b

    def test_ordering_namespace_first(self):
        """Ordering compares the namespace before the alias"""
        a = CommandTestHelper.create_command(alias="zz", namespace="aa")
        b = CommandTestHelper.create_command(alias="aa", namespace="bb")
        assert a < b
        assert sorted([b, a]) == [a, b]

    def test_ordering_absent_description_first(self):
        """An absent description sorts before a present one"""
        a = CommandTestHelper.create_command()
        b = CommandTestHelper.create_command(description="")
        assert a < b

    def test_has_changes_looks_at_every_field(self):
        """has_changes is true even when the key is unchanged"""
        a = CommandTestHelper.create_command()
        assert not a.has_changes(CommandTestHelper.create_command())
        assert a.has_changes(CommandTestHelper.create_command(description="new"))
        assert a.has_changes(CommandTestHelper.create_command(tags=("t",)))

    def test_tags_list_becomes_tuple(self):
        """Tags given as a list are stored as a tuple"""
        command = Command(alias="a", namespace="b", command="c", tags=["x", "y"])
        assert command.tags == ("x", "y")


class TestCommandHelpers:
    """Tests for parsing and presentation helpers"""

    def test_parse_tags(self):
        """Blank entries are dropped and the rest stripped"""
        assert parse_tags("a, b,,c ") == ("a", "b", "c")
        assert parse_tags(" , ") is None
        assert parse_tags(None) is None

    def test_sorted_by_alias_case_insensitive(self):
        """Aliases sort ignoring case"""
        commands = [
            CommandTestHelper.create_command(alias="beta"),
            CommandTestHelper.create_command(alias="Alpha"),
            CommandTestHelper.create_command(alias="gamma"),
        ]
        assert [c.alias for c in sorted_by_alias(commands)] == ["Alpha", "beta", "gamma"]

    def test_named_parameter_detection(self):
        """Placeholders are detected in the command text"""
        assert CommandTestHelper.create_command(command="echo #{name}").has_named_parameter()
        assert not CommandTestHelper.create_command(command="echo {name}").has_named_parameter()

    def test_summarize_with_description(self):
        """Summary line includes the description when present"""
        command = CommandTestHelper.create_command(alias="gl", namespace="git",
                                                   command="git log", description="history")
        assert command.summarize() == "git.gl: history --> git log"

    def test_summarize_multiline(self):
        """Only the first line of a multi-line command is shown"""
        command = CommandTestHelper.create_command(command="echo one\necho two")
        assert command.summarize() == "tests.test --> echo one..."

    def test_summarize_long_command(self):
        """Long commands are cut at 50 characters"""
        command = CommandTestHelper.create_command(command="x" * 80)
        assert command.summarize() == f"tests.test --> {'x' * 50}..."

    def test_truncated(self):
        """Banners cut the command text"""
        command = CommandTestHelper.create_command(command="abcdef")
        assert command.truncated(3) == "abc..."
        assert command.truncated() == "abcdef"

    def test_dict_keeps_absent_fields_absent(self):
        """Absent optional fields are not serialised"""
        command = CommandTestHelper.create_command()
        assert command.to_dict() == {"alias": "test", "namespace": "tests", "command": "echo test"}
        assert Command.from_dict(command.to_dict()).description is None

    def test_dict_keeps_empty_fields(self):
        """Empty optional fields survive serialisation"""
        command = CommandTestHelper.create_command(description="", tags=())
        restored = Command.from_dict(command.to_dict())
        assert restored.description == ""
        assert restored.tags == ()

    def test_placeholder_cannot_be_stored(self):
        """The demo entry fails validation, so it never reaches the store"""
        with pytest.raises(WhitespaceInAliasError):
            CommandValidator.validate(Command.placeholder())


class TestCommandValidation:
    """Tests for CommandValidator"""

    def test_valid_command(self):
        """A normal command passes"""
        command = CommandTestHelper.create_command()
        command.validate()
        assert CommandValidator.is_valid(command)

    @pytest.mark.parametrize("field", ["alias", "namespace", "command"])
    def test_blank_field(self, field):
        """Blank required fields are rejected"""
        command = CommandTestHelper.create_command(**{field: "   "})
        with pytest.raises(EmptyFieldError):
            command.validate()

    def test_whitespace_in_alias(self):
        """An alias containing a space is rejected"""
        with pytest.raises(WhitespaceInAliasError):
            CommandTestHelper.create_command(alias="my alias").validate()

    def test_tab_in_namespace(self):
        """Any whitespace character counts, not only spaces"""
        with pytest.raises(WhitespaceInNamespaceError):
            CommandTestHelper.create_command(namespace="my\tns").validate()

    def test_alias_reported_before_namespace(self):
        """When both are bad the alias error wins"""
        command = CommandTestHelper.create_command(alias="a b", namespace="c d")
        assert isinstance(CommandValidator.error_for(command), WhitespaceInAliasError)

    def test_empty_reported_before_whitespace(self):
        """Blank fields are reported before whitespace problems"""
        command = CommandTestHelper.create_command(alias="a b", command="")
        assert isinstance(CommandValidator.error_for(command), EmptyFieldError)

    def test_error_message(self):
        """Errors carry the user facing message"""
        error = CommandValidator.error_for(CommandTestHelper.create_command(alias=""))
        assert error.message == "Namespace, command and alias field cannot be empty!"
