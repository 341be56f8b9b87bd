"""
Parser for editing session commands.

Commands are short lines typed by the operator. Most are a prefix operator
followed by a node id or rule number:

    +3          new node from rule 3
    ~5          unlink node 5 from its parent
    =5          make node 5 the current node
    -5          delete node 5 and its descendants
    *           rebuild the current-node queue from incomplete nodes
    n           skip to the next current node
    7           choose an alternative for node 7
    .           choose an alternative for the current node
    2 7         make node 2 the parent of node 7 (also "2 -- 7", "2 -> 7")
    s 4 expr    find a simple path from node 4 to a value matching "expr"
    > expr      find a simple path from the current node
    r / o / f   draw with ids / without ids / with ids on every node

While an alternative is being chosen, a number picks that alternative,
``first``/``last`` pick the ends, ``0`` or ``-`` cancels and anything else is a
quick-select pattern.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from prodgraph.config import RenderMode
from prodgraph.exceptions import CommandParseError


class CommandType(Enum):
    """Type of session command."""

    RENDER = "render"
    NEW_NODE = "new_node"
    UNLINK = "unlink"
    FOCUS = "focus"
    DELETE = "delete"
    REFRESH = "refresh"
    NEXT = "next"
    SELECT = "select"
    LINK = "link"
    PATH = "path"
    CHOOSE = "choose"
    CANCEL = "cancel"
    QUICK_SELECT = "quick_select"


@dataclass(frozen=True)
class RenderCommand:
    """Redraw the graph (r, o, f)."""

    command_type: ClassVar[CommandType] = CommandType.RENDER
    mode: RenderMode = RenderMode.IDS


@dataclass(frozen=True)
class NewNodeCommand:
    """Create a root node labelled with a rule's full name (+N)."""

    command_type: ClassVar[CommandType] = CommandType.NEW_NODE
    rule_number: int


@dataclass(frozen=True)
class UnlinkCommand:
    """Detach a node from its parent (~N)."""

    command_type: ClassVar[CommandType] = CommandType.UNLINK
    node_id: int


@dataclass(frozen=True)
class FocusCommand:
    """Make a node the current node (=N)."""

    command_type: ClassVar[CommandType] = CommandType.FOCUS
    node_id: int


@dataclass(frozen=True)
class DeleteCommand:
    """Delete a node and its descendants (-N)."""

    command_type: ClassVar[CommandType] = CommandType.DELETE
    node_id: int


@dataclass(frozen=True)
class RefreshCommand:
    """Rebuild the current-node queue from incomplete nodes (*)."""

    command_type: ClassVar[CommandType] = CommandType.REFRESH


@dataclass(frozen=True)
class NextCommand:
    """Drop the current node from the queue (n)."""

    command_type: ClassVar[CommandType] = CommandType.NEXT


@dataclass(frozen=True)
class SelectCommand:
    """Start choosing an alternative for a node; None means the current node."""

    command_type: ClassVar[CommandType] = CommandType.SELECT
    node_id: int | None = None


@dataclass(frozen=True)
class LinkCommand:
    """Set a parent-child link (P C, P -- C, P -> C)."""

    command_type: ClassVar[CommandType] = CommandType.LINK
    parent_id: int
    child_id: int


@dataclass(frozen=True)
class PathCommand:
    """Find a simple path to a value; node_id None means the current node."""

    command_type: ClassVar[CommandType] = CommandType.PATH
    pattern: str
    node_id: int | None = None


@dataclass(frozen=True)
class ChooseCommand:
    """Pick an alternative by 1-based position; None picks the last one."""

    command_type: ClassVar[CommandType] = CommandType.CHOOSE
    index: int | None


@dataclass(frozen=True)
class CancelCommand:
    """Leave selection without adding anything."""

    command_type: ClassVar[CommandType] = CommandType.CANCEL


@dataclass(frozen=True)
class QuickSelectCommand:
    """Pick the one alternative matching a pattern."""

    command_type: ClassVar[CommandType] = CommandType.QUICK_SELECT
    pattern: str


SessionCommand = (
    RenderCommand
    | NewNodeCommand
    | UnlinkCommand
    | FocusCommand
    | DeleteCommand
    | RefreshCommand
    | NextCommand
    | SelectCommand
    | LinkCommand
    | PathCommand
    | ChooseCommand
    | CancelCommand
    | QuickSelectCommand
)


class CommandParser:
    """Parser for editing session commands."""

    RENDER_MODES = {"r": RenderMode.IDS, "o": RenderMode.PLAIN, "f": RenderMode.FULL}

    PREFIX_PATTERN = re.compile(r"^(?P<operator>[+~=\-])\s*(?P<argument>.*)$")

    NODE_PATTERN = re.compile(r"^\d+$")

    LINK_PATTERN = re.compile(r"^(?P<parent>\d+)\s+(?:(?:--|->)\s+)?(?P<child>\d+)$")

    PATH_FROM_NODE_PATTERN = re.compile(
        r"^s\s+(?P<node>\d+)\s+(?P<pattern>\S.*)$", re.IGNORECASE
    )

    PATH_FROM_CURRENT_PATTERN = re.compile(
        r"^(?:s\s+|>\s*)(?P<pattern>\S.*)$", re.IGNORECASE
    )

    def parse(self, text: str, selecting: bool = False) -> SessionCommand:
        """
        Parse one command line.

        Params:
            text: The command as typed
            selecting: True while an alternative is being chosen

        Returns:
            The command object

        Raises:
            CommandParseError: If the command is empty or malformed
        """
        command = text.strip()
        if not command:
            raise CommandParseError(text, "Empty command")

        if selecting:
            return self._parse_selection(command)
        return self._parse_default(command)

    def _parse_selection(self, command: str) -> SessionCommand:
        keyword = command.lower()
        if self.NODE_PATTERN.match(command):
            if int(command) < 1:
                return CancelCommand()
            return ChooseCommand(index=int(command))
        if keyword == "first":
            return ChooseCommand(index=1)
        if keyword == "last":
            return ChooseCommand(index=None)
        if command.startswith("-"):
            return CancelCommand()
        return QuickSelectCommand(pattern=command)

    def _parse_default(self, command: str) -> SessionCommand:
        keyword = command.lower()

        if keyword in self.RENDER_MODES:
            return RenderCommand(mode=self.RENDER_MODES[keyword])
        if keyword == "*":
            return RefreshCommand()
        if keyword == "n":
            return NextCommand()
        if keyword == ".":
            return SelectCommand()

        # Path searches first so that "> x" and "s 1 x" never reach the prefix rules
        path_match = self.PATH_FROM_NODE_PATTERN.match(command)
        if path_match:
            return PathCommand(
                pattern=path_match.group("pattern").strip(),
                node_id=int(path_match.group("node")),
            )
        path_match = self.PATH_FROM_CURRENT_PATTERN.match(command)
        if path_match:
            return PathCommand(pattern=path_match.group("pattern").strip())

        prefix_match = self.PREFIX_PATTERN.match(command)
        if prefix_match:
            return self._parse_prefixed(command, prefix_match)

        if self.NODE_PATTERN.match(command):
            return SelectCommand(node_id=int(command))

        link_match = self.LINK_PATTERN.match(command)
        if link_match:
            return LinkCommand(
                parent_id=int(link_match.group("parent")),
                child_id=int(link_match.group("child")),
            )

        raise CommandParseError(command, f"Unknown command: {command}")

    def _parse_prefixed(self, command: str, match: re.Match) -> SessionCommand:
        operator = match.group("operator")
        argument = match.group("argument").strip()
        if not argument:
            raise CommandParseError(command, f"'{operator}' needs a number")
        if not self.NODE_PATTERN.match(argument):
            raise CommandParseError(command, f"'{operator}' needs a number, got '{argument}'")

        number = int(argument)
        if operator == "+":
            return NewNodeCommand(rule_number=number)
        if operator == "~":
            return UnlinkCommand(node_id=number)
        if operator == "=":
            return FocusCommand(node_id=number)
        return DeleteCommand(node_id=number)


def parse_command(text: str, selecting: bool = False) -> SessionCommand:
    """
    Convenience function to parse a command string.

    Params:
        text: The command string to parse
        selecting: True while an alternative is being chosen

    Returns:
        Appropriate command object

    Raises:
        CommandParseError: If the command is malformed
    """
    parser = CommandParser()
    return parser.parse(text, selecting)
