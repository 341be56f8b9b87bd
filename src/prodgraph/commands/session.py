"""
Headless grammar editing session.

The session owns the grammar text, one derivation graph and the queue of
current nodes, and applies parsed commands to them. Grammar text is re-read
for every query, so edits to `grammar_text` take effect immediately.
"""

import logging
from enum import Enum

from prodgraph.commands.parser import (
    CancelCommand,
    ChooseCommand,
    CommandParser,
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
)
from prodgraph.config import ExportOptions, RenderMode
from prodgraph.core.types import NodeId, RuleLines
from prodgraph.exceptions import RuleLookupError, SelectionError, UnknownNodeError
from prodgraph.export.dot import export_with
from prodgraph.grammar.index import RuleIndex, merge_by_name
from prodgraph.grammar.reader import parse, rule_by_number, rule_lines
from prodgraph.grammar.rules import Rule
from prodgraph.matching import matches, single
from prodgraph.resolution.path_resolver import PathResult, simple_path
from prodgraph.structure.expansion import expand, placeholders
from prodgraph.structure.focus import FocusQueue
from prodgraph.structure.graph import DerivationGraph

logger = logging.getLogger(__name__)


class SessionState(Enum):
    DEFAULT = "default"
    SELECT = "select"


class EditingSession:
    """Coordinator for building a derivation tree from editable grammar text.

    Responsibilities:
      - Parse the grammar text on demand and number its valid rules.
      - Apply node creation, linking, unlinking and deletion to the graph.
      - Run the alternative selection flow for a placeholder node.
      - Resolve simple paths with a freshly built rule index.
      - Keep the queue of current nodes up to date after every change.

    Notes:
      - Failed commands raise a `ProdGraphError` subclass and leave the graph
        and the selection state as they were.
    """

    def __init__(self, grammar_text: str = ""):
        self.grammar_text = grammar_text
        self.graph = DerivationGraph()
        self.focus = FocusQueue()
        self.state = SessionState.DEFAULT
        self._selecting: Rule | None = None
        self._selection_parent: NodeId | None = None
        self._parser = CommandParser()

    # Grammar queries

    def rules(self) -> list[Rule | None]:
        """Rules of the current grammar text, None for malformed blocks."""
        return parse(self.grammar_text)

    def rule_lines(self) -> RuleLines:
        """Starting lines of the numbered rules."""
        return rule_lines(self.rules())

    def rule_for(self, full_name: str) -> Rule:
        """
        Merged rule for a non-terminal.

        Raises:
            RuleLookupError: If no rule has that name
        """
        rule = merge_by_name(self.rules(), full_name)
        if rule is None:
            raise RuleLookupError(full_name)
        return rule

    # Graph edits

    def new_node(self, rule_number: int) -> NodeId:
        """
        Create a root node labelled with the full name of a numbered rule.

        Raises:
            RuleLookupError: If no valid rule has that number
        """
        rule = rule_by_number(self.rules(), rule_number)
        if rule is None:
            raise RuleLookupError(rule_number)
        node_id = self.graph.new_node(rule.full_name)
        self.focus.push_back(node_id)
        return node_id

    def link(self, parent_id: NodeId, child_id: NodeId) -> None:
        self.graph.add_link(parent_id, child_id)
        self.focus.discard(parent_id)

    def unlink(self, node_id: NodeId) -> NodeId | None:
        former_parent = self.graph.unlink(node_id)
        self.focus.push_back(former_parent)
        return former_parent

    def delete(self, node_id: NodeId) -> NodeId | None:
        former_parent = self.graph.delete(node_id)
        self.focus.prune(self.graph)
        self.focus.push_back(former_parent)
        return former_parent

    def set_focus(self, node_id: NodeId) -> None:
        if node_id not in self.graph:
            raise UnknownNodeError(node_id, "focus")
        self.focus.promote(node_id)

    def refresh(self) -> None:
        self.focus.rebuild(self.graph)

    def advance(self) -> NodeId | None:
        return self.focus.advance()

    def _current(self) -> NodeId:
        node_id = self.focus.current()
        if node_id is None:
            raise SelectionError("there is no current node")
        return node_id

    # Alternative selection

    @property
    def selecting(self) -> Rule | None:
        """Rule whose alternatives are being chosen from, if any."""
        return self._selecting

    def alternatives(self) -> list[str]:
        """Alternatives offered by the current selection, empty outside selection."""
        return list(self._selecting.alternatives) if self._selecting else []

    def start_selection(self, node_id: NodeId | None = None) -> Rule:
        """
        Begin choosing an alternative for a node.

        Params:
            node_id: Node to expand, the current node when None

        Returns:
            Merged rule whose alternatives can be chosen

        Raises:
            UnknownNodeError: If there is no such node
            RuleLookupError: If the node's label has no production rule
        """
        if node_id is None:
            node_id = self._current()
        label = self.graph.get_label(node_id)
        if label is None:
            raise UnknownNodeError(node_id, "select")

        rule = self.rule_for(label)
        self.state = SessionState.SELECT
        self._selecting = rule
        self._selection_parent = node_id
        return rule

    def cancel_selection(self) -> None:
        self.state = SessionState.DEFAULT
        self._selecting = None
        self._selection_parent = None

    def choose(self, index: int | None) -> list[NodeId]:
        """
        Expand the chosen alternative under the selected node.

        Params:
            index: 1-based alternative position, None for the last one

        Returns:
            Ids of the created children

        Raises:
            SelectionError: Outside selection or for an out-of-range index
            UnknownNodeError: If the selected node was deleted meanwhile; the
                selection is cancelled
        """
        if self._selecting is None or self._selection_parent is None:
            raise SelectionError("no alternative is being chosen")
        if self._selection_parent not in self.graph:
            parent_id = self._selection_parent
            self.cancel_selection()
            raise UnknownNodeError(parent_id, "expand")
        alternatives = self._selecting.alternatives
        position = len(alternatives) if index is None else index
        if not 1 <= position <= len(alternatives):
            raise SelectionError(f"there is no alternative {position}")

        parent_id = self._selection_parent
        created = expand(self.graph, alternatives[position - 1], parent_id)
        self.focus.discard(parent_id)
        self.focus.push_front(placeholders(self.graph, created))
        self.cancel_selection()
        return created

    def quick_select(self, pattern: str) -> list[NodeId]:
        """
        Choose the one alternative matching a pattern.

        Raises:
            SelectionError: If zero or several alternatives match
        """
        alternatives = self.alternatives()
        found = single(
            enumerate(alternatives, start=1), lambda item: matches(pattern, item[1])
        )
        if found is None:
            count = sum(1 for alternative in alternatives if matches(pattern, alternative))
            if count == 0:
                raise SelectionError(f"'{pattern}' matches no alternative")
            raise SelectionError(f"'{pattern}' matches {count} alternatives, expected one")
        return self.choose(found[0])

    # Path search

    def simple_path(self, node_id: NodeId | None, pattern: str) -> PathResult:
        """
        Resolve a simple path from a node using the current grammar.

        Params:
            node_id: Start node, the current node when None
            pattern: Search pattern for the value to reach

        Returns:
            PathResult of the created nodes
        """
        if node_id is None:
            node_id = self._current()

        result = simple_path(self.graph, RuleIndex.build(self.rules()), node_id, pattern)
        self.focus.push_front(result.incomplete_ids)
        self.focus.discard(node_id)
        return result

    # Output

    def render(self, mode: RenderMode = RenderMode.IDS) -> str:
        """Graph description for the layout tool, the current node boxed."""
        return export_with(self.graph, ExportOptions.for_mode(mode, self.focus.current()))

    # Command dispatch

    def execute(self, command: SessionCommand) -> str | None:
        """
        Apply a parsed command.

        Returns:
            Graph description for render commands, None otherwise
        """
        logger.debug("Applying %s", command)
        if isinstance(command, RenderCommand):
            return self.render(command.mode)
        if isinstance(command, NewNodeCommand):
            self.new_node(command.rule_number)
        elif isinstance(command, UnlinkCommand):
            self.unlink(command.node_id)
        elif isinstance(command, FocusCommand):
            self.set_focus(command.node_id)
        elif isinstance(command, DeleteCommand):
            self.delete(command.node_id)
        elif isinstance(command, RefreshCommand):
            self.refresh()
        elif isinstance(command, NextCommand):
            self.advance()
        elif isinstance(command, SelectCommand):
            self.start_selection(command.node_id)
        elif isinstance(command, LinkCommand):
            self.link(command.parent_id, command.child_id)
        elif isinstance(command, PathCommand):
            self.simple_path(command.node_id, command.pattern)
        elif isinstance(command, ChooseCommand):
            self.choose(command.index)
        elif isinstance(command, CancelCommand):
            self.cancel_selection()
        elif isinstance(command, QuickSelectCommand):
            self.quick_select(command.pattern)
        return None

    def run(self, text: str) -> str | None:
        """Parse a command line in the current state and apply it."""
        command = self._parser.parse(text, selecting=self.state is SessionState.SELECT)
        return self.execute(command)
