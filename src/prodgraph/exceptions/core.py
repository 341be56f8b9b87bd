"""
Exception classes for grammar editing and derivation tree construction.

This module defines specific exception types for the error conditions that
can occur while parsing production rules, mutating the derivation graph,
resolving simple paths and interpreting session commands.
"""

from dataclasses import dataclass


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where an error originated in grammar-editing terms so that the
    message shown to the operator points at something they can correct.

    Params:
        grammar_line: 1-based line in the grammar text where a rule starts
        node_id: Derivation node the failing operation referred to
        command_text: The original command text that caused the error
    """

    grammar_line: int | None = None
    node_id: int | None = None
    command_text: str | None = None

    def format_location(self) -> str:
        """
        Format location information as indented lines.

        Returns:
            Formatted location string, empty when no context is known
        """
        lines = []

        if self.grammar_line is not None:
            lines.append(f"  at grammar line {self.grammar_line}")

        if self.node_id is not None:
            lines.append(f"  on node {self.node_id}")

        if self.command_text:
            lines.append(f"  command: {self.command_text}")

        return "\n".join(lines)


class ProdGraphError(Exception):
    """Base exception for all prodgraph errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        """
        Initialize the exception.

        Params:
            message: Primary error message
            context: Optional location information appended to the message
        """
        self.context = context
        location = context.format_location() if context else ""
        super().__init__(f"{message}\n{location}" if location else message)


class MalformedRuleError(ProdGraphError):
    """Raised when a rule block is not structurally well formed."""

    def __init__(self, text: str, reason: str, line: int | None = None):
        """
        Initialize the exception.

        Params:
            text: The raw rule text
            reason: Why the rule is malformed
            line: Line number where the rule block starts
        """
        self.text = text
        self.reason = reason
        self.line = line
        super().__init__(
            f"Malformed rule '{text}': {reason}",
            ErrorContext(grammar_line=line) if line is not None else None,
        )


class UnknownNodeError(ProdGraphError):
    """Raised when an operation refers to a node that does not exist."""

    def __init__(self, node_id: int, operation: str):
        """
        Initialize the exception.

        Params:
            node_id: The missing node id
            operation: Name of the operation that required the node
        """
        self.node_id = node_id
        self.operation = operation
        super().__init__(f"Cannot {operation}: there is no node {node_id}")


class LinkCycleError(ProdGraphError):
    """Raised when a parent link would make a node its own ancestor."""

    def __init__(self, parent_id: int, child_id: int):
        """
        Initialize the exception.

        Params:
            parent_id: Requested parent
            child_id: Requested child
        """
        self.parent_id = parent_id
        self.child_id = child_id
        super().__init__(
            f"Cannot link {parent_id} -- {child_id}: node {parent_id} descends from node {child_id}"
        )


class PathResolutionError(ProdGraphError):
    """Base exception for simple path resolution failures."""

    pass


class TrivialTargetError(PathResolutionError):
    """Raised when the search pattern already names the starting node."""

    def __init__(self, node_id: int, label: str):
        """
        Initialize the exception.

        Params:
            node_id: Node the search started from
            label: Label of that node
        """
        self.node_id = node_id
        self.label = label
        super().__init__(f"Node {node_id} is already '{label}'")


class AmbiguousOrMissingSeedError(PathResolutionError):
    """Raised when the pattern matches no production value or more than one."""

    def __init__(self, pattern: str, matches: list[str]):
        """
        Initialize the exception.

        Params:
            pattern: The search pattern
            matches: Every production value the pattern matched
        """
        self.pattern = pattern
        self.matches = matches
        if matches:
            reason = f"matches {len(matches)} productions: {', '.join(matches)}"
        else:
            reason = "matches no production"
        super().__init__(f"Pattern '{pattern}' {reason}")

    @property
    def is_missing(self) -> bool:
        """True when nothing matched, False when the match was ambiguous."""
        return not self.matches


class AmbiguousOrMultiplePathsError(PathResolutionError):
    """Raised when a backward step has zero or several unvisited producers."""

    def __init__(self, value: str, candidates: list[str]):
        """
        Initialize the exception.

        Params:
            value: Production value being traced backward
            candidates: Unvisited rules that can produce the value
        """
        self.value = value
        self.candidates = candidates
        if candidates:
            reason = f"is produced by several rules: {', '.join(candidates)}"
        else:
            reason = "is only produced by rules already on the path"
        super().__init__(f"No simple path: '{value}' {reason}")


class NoPathError(PathResolutionError):
    """Raised when no rule produces a value on the way back to the start."""

    def __init__(self, value: str):
        """
        Initialize the exception.

        Params:
            value: Production value with no producing rule
        """
        self.value = value
        super().__init__(f"No simple path: nothing produces '{value}'")


class RuleLookupError(ProdGraphError):
    """Raised when a rule number or non-terminal has no production rule."""

    def __init__(self, reference: int | str):
        """
        Initialize the exception.

        Params:
            reference: Rule number or non-terminal full name
        """
        self.reference = reference
        if isinstance(reference, int):
            message = f"Could not get production rule {reference}"
        else:
            message = f"There is no production rule for {reference}"
        super().__init__(message)


class SelectionError(ProdGraphError):
    """Raised when an alternative cannot be chosen."""

    def __init__(self, reason: str):
        """
        Initialize the exception.

        Params:
            reason: Why the selection failed
        """
        self.reason = reason
        super().__init__(f"Invalid selection: {reason}")


class CommandParseError(ProdGraphError):
    """Raised when a session command cannot be parsed."""

    def __init__(self, command: str, reason: str):
        """
        Initialize the exception.

        Params:
            command: The raw command text
            reason: Why the command is invalid
        """
        self.command = command
        self.reason = reason
        super().__init__(reason, ErrorContext(command_text=command) if command else None)
