"""
Reader for grammar text made of production rule blocks.

A rule block starts at a line containing ``::=`` and ends at the next blank
line or at the next line containing ``::=``. All lines of a block are joined
without separators and parsed as one rule. Malformed blocks produce ``None``
entries instead of aborting the read.
"""

import logging
from collections.abc import Iterable, Iterator

from prodgraph.core.types import RuleLines
from prodgraph.grammar.rules import RULE_SEPARATOR, Rule, parse_rule

logger = logging.getLogger(__name__)


def iter_blocks(text: str) -> Iterator[tuple[int, str]]:
    """
    Split grammar text into rule blocks.

    Params:
        text: Full grammar text

    Yields:
        (start_line, block_text) pairs in document order, start_line 1-based
    """
    block: list[str] = []
    start = 0
    started = False

    for index, line in enumerate(text.split("\n")):
        if started and not line.strip():
            yield start, "".join(block)
            block = []
            started = False

        if RULE_SEPARATOR in line:
            if started:
                yield start, "".join(block)
                block = []
            started = True
            start = index + 1

        if started:
            block.append(line)

    if started:
        yield start, "".join(block)


def parse(text: str) -> list[Rule | None]:
    """
    Parse grammar text into rules.

    Params:
        text: Full grammar text

    Returns:
        One entry per rule block in document order, None for malformed blocks
    """
    rules: list[Rule | None] = []
    for line, block in iter_blocks(text):
        rule = parse_rule(block, line)
        if rule is None:
            logger.warning("Skipping malformed rule at line %d: %r", line, block)
        rules.append(rule)
    return rules


def valid_rules(rules: Iterable[Rule | None]) -> list[Rule]:
    """Drop the None markers left by malformed blocks."""
    return [rule for rule in rules if rule is not None]


def to_text(rules: Iterable[Rule | None] | None) -> str:
    """
    Serialize rules back into grammar text, one rule per line.

    Params:
        rules: Parsed rules, None entries are skipped

    Returns:
        Grammar text, empty for None
    """
    if rules is None:
        return ""
    return "\n".join(str(rule) for rule in valid_rules(rules))


def rule_lines(rules: Iterable[Rule | None]) -> RuleLines:
    """
    Return the starting line of every valid rule.

    Rule number ``n`` (1-based) is displayed next to the n-th line returned.
    """
    return [rule.line for rule in valid_rules(rules) if rule.line is not None]


def gutter_text(lines: RuleLines) -> str:
    """
    Render the rule-number gutter shown beside the grammar text.

    Numbers start at 1 and are placed on the given 1-based lines, with blank
    lines in between.

    Params:
        lines: Ascending 1-based line numbers

    Returns:
        Gutter text aligned with the grammar text
    """
    parts: list[str] = []
    last = 0
    for count, line in enumerate(lines, start=1):
        parts.append("\n" * (line - 1 - last))
        parts.append(str(count))
        last = line - 1
    return "".join(parts)


def rule_by_number(rules: Iterable[Rule | None], number: int) -> Rule | None:
    """
    Get the rule shown with the given gutter number.

    Params:
        rules: Parsed rules including None markers
        number: 1-based count of valid rules

    Returns:
        The rule, or None if the number is out of range
    """
    if number < 1:
        return None
    valid = valid_rules(rules)
    return valid[number - 1] if number <= len(valid) else None
