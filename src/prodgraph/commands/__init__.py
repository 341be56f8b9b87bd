"""
Session command language and the headless editing session.
"""

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
    SessionCommand,
    UnlinkCommand,
    parse_command,
)
from prodgraph.commands.session import EditingSession, SessionState

__all__ = [
    "CancelCommand",
    "ChooseCommand",
    "CommandParser",
    "CommandType",
    "DeleteCommand",
    "EditingSession",
    "FocusCommand",
    "LinkCommand",
    "NewNodeCommand",
    "NextCommand",
    "PathCommand",
    "QuickSelectCommand",
    "RefreshCommand",
    "RenderCommand",
    "SelectCommand",
    "SessionCommand",
    "SessionState",
    "UnlinkCommand",
    "parse_command",
]
