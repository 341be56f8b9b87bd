"""
Production rule model and single-rule parser.

A rule is written ``<name> ::= alt1 | alt2 | ...``. Alternatives are split at
isolated pipes, meaning a ``|`` that is not next to another ``|``. A pipe can
be escaped with a backslash to keep it inside an alternative.
"""

import re

from pydantic import BaseModel, ConfigDict, field_validator

from prodgraph.core.symbols import full_name, is_enclosed
from prodgraph.exceptions import MalformedRuleError

RULE_SEPARATOR = "::="

# A pipe that is not preceded by another pipe or a backslash and not followed by a pipe
ALTERNATIVE_SPLIT_PATTERN = re.compile(r"(?<![|\\])\|(?!\|)")


class Rule(BaseModel):
    """
    A parsed production rule.

    Params:
        line: 1-based line where the rule block starts, None for merged rules
        name: Rule name without angle brackets
        alternatives: Right-hand side options in written order
    """

    model_config = ConfigDict(frozen=True)

    line: int | None = None
    name: str
    alternatives: tuple[str, ...]

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("rule name must not be empty")
        return value

    @field_validator("alternatives")
    @classmethod
    def _first_alternative_present(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value or not value[0]:
            raise ValueError("rule needs a non-empty first alternative")
        return value

    @property
    def full_name(self) -> str:
        """Rule name including angle brackets."""
        return full_name(self.name)

    def __str__(self) -> str:
        """Return the rule in grammar syntax, escaping literal pipes."""
        parts = " | ".join(alt.replace("|", "\\|") for alt in self.alternatives)
        return f"{self.full_name} {RULE_SEPARATOR} {parts}"


def split_alternatives(right_side: str) -> list[str]:
    """
    Split the right-hand side of a rule into trimmed alternatives.

    Zero-length pieces after the last pipe are dropped, escaped pipes are
    unescaped after trimming.

    Params:
        right_side: Text after the ``::=`` separator

    Returns:
        Alternatives in written order
    """
    pieces = ALTERNATIVE_SPLIT_PATTERN.split(right_side)
    while len(pieces) > 1 and pieces[-1] == "":
        pieces.pop()
    return [piece.strip().replace("\\|", "|") for piece in pieces]


def parse_rule_strict(text: str, line: int | None = None) -> Rule:
    """
    Parse a single production rule.

    No validation is done beyond the structure ``<name> ::= ...`` where
    ``...`` has a non-empty first alternative.

    Params:
        text: Raw rule text, block lines already concatenated
        line: Line number where the rule block starts

    Returns:
        The parsed Rule

    Raises:
        MalformedRuleError: If the text is not a well-formed rule
    """
    separators = text.count(RULE_SEPARATOR)
    if separators != 1:
        raise MalformedRuleError(
            text, f"expected exactly one '{RULE_SEPARATOR}', found {separators}", line
        )

    left, right = text.split(RULE_SEPARATOR, 1)
    name = left.strip()
    if not is_enclosed(name, "<", ">"):
        raise MalformedRuleError(text, "left side must be a <name>", line)

    alternatives = split_alternatives(right)
    if not alternatives or not alternatives[0]:
        raise MalformedRuleError(text, "first alternative is empty", line)

    return Rule(line=line, name=name[1:-1], alternatives=tuple(alternatives))


def parse_rule(text: str, line: int | None = None) -> Rule | None:
    """
    Parse a single production rule, returning None for an invalid definition.

    Params:
        text: Raw rule text
        line: Line number where the rule block starts

    Returns:
        Rule object, or None if the text is malformed
    """
    try:
        return parse_rule_strict(text, line)
    except MalformedRuleError:
        return None
