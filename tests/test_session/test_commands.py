import pytest

from treetrace.core.exceptions import CommandParseError
from treetrace.primitives import Command, CommandKind
from treetrace.session import format_commands, parse_command, parse_commands


class TestParseCommands:
    """Tests for bulk command text."""

    def test_mixed_commands(self):
        """Test prefixed and bare commands."""
        commands = parse_commands("d 45, i 30, 20")

        assert commands == [Command.delete(45), Command.insert(30), Command.insert(20)]

    def test_long_prefixes_and_case(self):
        """Test insert/delete spelled out in any case."""
        commands = parse_commands("INSERT 5\nDelete 5")

        assert commands == [Command.insert(5), Command.delete(5)]

    def test_negative_values(self):
        """Test that negative numbers are accepted."""
        assert parse_commands("-3, d -3") == [Command.insert(-3), Command.delete(-3)]

    def test_empty_entries_skipped(self):
        """Test blank entries and trailing separators."""
        assert parse_commands(" 1, , 2,\n") == [Command.insert(1), Command.insert(2)]
        assert parse_commands("") == []

    @pytest.mark.parametrize("text, token, position", [
        ("1, x 2", "x 2", 1),
        ("i", "i", 0),
        ("1, 2, 3.5", "3.5", 2),
    ])
    def test_invalid_token_rejected(self, text, token, position):
        """Test that a bad token names itself and its position."""
        with pytest.raises(CommandParseError) as info:
            parse_commands(text)

        assert info.value.token == token
        assert info.value.position == position

    def test_parse_single_command(self):
        """Test the single-token parser."""
        command = parse_command("  d 7 ")

        assert command.kind == CommandKind.DELETE
        assert command.value == 7

    def test_format_round_trip(self):
        """Test formatting back to text."""
        commands = [Command.insert(1), Command.delete(2)]

        assert format_commands(commands) == "i 1, d 2"
        assert parse_commands(format_commands(commands)) == commands
