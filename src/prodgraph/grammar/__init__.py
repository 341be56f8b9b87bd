"""
Grammar text parsing and rule lookups.

This package turns raw grammar text into Rule records and builds the merged
and reverse views used to expand nodes and resolve paths.
"""

from prodgraph.grammar.index import (
    RuleIndex,
    build_reverse_index,
    merge_by_name,
    normalize_alternative,
    split_alternative,
)
from prodgraph.grammar.reader import (
    gutter_text,
    iter_blocks,
    parse,
    rule_by_number,
    rule_lines,
    to_text,
    valid_rules,
)
from prodgraph.grammar.rules import (
    RULE_SEPARATOR,
    Rule,
    parse_rule,
    parse_rule_strict,
    split_alternatives,
)

__all__ = [
    "RULE_SEPARATOR",
    "Rule",
    "RuleIndex",
    "build_reverse_index",
    "gutter_text",
    "iter_blocks",
    "merge_by_name",
    "normalize_alternative",
    "parse",
    "parse_rule",
    "parse_rule_strict",
    "rule_by_number",
    "rule_lines",
    "split_alternative",
    "split_alternatives",
    "to_text",
    "valid_rules",
]
