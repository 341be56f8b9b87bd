"""
Tests for session command parsing.

Focus Areas:
1. Prefix operators with node ids and rule numbers
2. Path search and link forms
3. Selection-mode commands
4. Malformed input
"""

import pytest

from prodgraph.commands.parser import (
    CancelCommand,
    ChooseCommand,
    CommandParser,
    CommandType,
    DeleteCommand,
    FocusCommand,
    LinkCommand,
    NewNodeCommand,
    NextCommand,
    PathCommand,
    QuickSelectCommand,
    RefreshCommand,
    RenderCommand,
    SelectCommand,
    UnlinkCommand,
    parse_command,
)
from prodgraph.config import RenderMode
from prodgraph.exceptions import CommandParseError


class TestDefaultCommands:
    """Test commands accepted outside selection."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("+3", NewNodeCommand(rule_number=3)),
            ("~5", UnlinkCommand(node_id=5)),
            ("=5", FocusCommand(node_id=5)),
            ("-12", DeleteCommand(node_id=12)),
            ("+ 3", NewNodeCommand(rule_number=3)),
            ("*", RefreshCommand()),
            ("n", NextCommand()),
            ("N", NextCommand()),
            (".", SelectCommand()),
            ("7", SelectCommand(node_id=7)),
            ("r", RenderCommand(mode=RenderMode.IDS)),
            ("o", RenderCommand(mode=RenderMode.PLAIN)),
            ("F", RenderCommand(mode=RenderMode.FULL)),
        ],
    )
    def test_simple_commands(self, text, expected):
        assert parse_command(text) == expected

    @pytest.mark.parametrize("text", ["2 7", "2 -- 7", "2 -> 7", "  2   --   7  "])
    def test_link_forms(self, text):
        """Test every accepted spelling of a link."""
        command = parse_command(text)

        assert command == LinkCommand(parent_id=2, child_id=7)
        assert command.command_type is CommandType.LINK

    def test_path_from_node(self):
        assert parse_command("s 4 <term> * x") == PathCommand(pattern="<term> * x", node_id=4)

    def test_path_from_current(self):
        assert parse_command("> 'x'") == PathCommand(pattern="'x'")
        assert parse_command(">y z") == PathCommand(pattern="y z")
        assert parse_command("s expr") == PathCommand(pattern="expr")

    def test_path_pattern_keeps_case(self):
        assert parse_command("S 1 Foo").pattern == "Foo"

    def test_surrounding_whitespace_ignored(self):
        assert parse_command("   +1  ") == NewNodeCommand(rule_number=1)


class TestSelectionCommands:
    """Test commands accepted while choosing an alternative."""

    def test_number_chooses(self):
        assert parse_command("2", selecting=True) == ChooseCommand(index=2)

    def test_first_and_last(self):
        assert parse_command("first", selecting=True) == ChooseCommand(index=1)
        assert parse_command("LAST", selecting=True) == ChooseCommand(index=None)

    def test_dash_cancels(self):
        assert parse_command("-", selecting=True) == CancelCommand()

    def test_zero_cancels(self):
        """Test that a number below the first alternative leaves selection."""
        assert parse_command("0", selecting=True) == CancelCommand()
        assert parse_command("00", selecting=True) == CancelCommand()

    def test_anything_else_is_quick_select(self):
        assert parse_command("'+'", selecting=True) == QuickSelectCommand(pattern="'+'")
        assert parse_command("r", selecting=True) == QuickSelectCommand(pattern="r")


class TestInvalidCommands:
    """Test rejection of malformed commands."""

    @pytest.mark.parametrize("text", ["", "   ", "+", "-", "~x", "=1a", "2 3 4", "hello", "s"])
    def test_rejected(self, text):
        with pytest.raises(CommandParseError):
            CommandParser().parse(text)

    def test_blank_rejected_while_selecting(self):
        with pytest.raises(CommandParseError):
            parse_command("", selecting=True)

    def test_error_names_the_operator(self):
        with pytest.raises(CommandParseError) as exc_info:
            parse_command("~x")

        assert "'~' needs a number" in exc_info.value.reason
