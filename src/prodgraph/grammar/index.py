"""
Derived lookups over a parsed rule set.

Rules sharing a name are merged into one rule, and every alternative is
reduced to a normalized value so that alternatives differing only in spacing
compare equal. The reverse index maps each normalized value to the rules
that can produce it. Indexes are rebuilt from the current rules for every
query rather than kept up to date.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from prodgraph.core.symbols import is_placeholder
from prodgraph.core.types import ReverseIndex
from prodgraph.grammar.reader import valid_rules
from prodgraph.grammar.rules import Rule

NONTERMINAL_PATTERN = re.compile(r"<[^<>\s][^<>]*>")


def split_alternative(alternative: str) -> list[str]:
    """
    Split an alternative into the tokens that become derivation nodes.

    Each ``<...>`` run is one token, every other run of non-whitespace
    characters is one token.

    Params:
        alternative: One right-hand side option

    Returns:
        Tokens in written order

    Examples:
        "x <b>" -> ["x", "<b>"]
        "f(<arg list>)" -> ["f(", "<arg list>", ")"]
    """
    tokens: list[str] = []
    position = 0
    for match in NONTERMINAL_PATTERN.finditer(alternative):
        tokens.extend(alternative[position : match.start()].split())
        tokens.append(match.group())
        position = match.end()
    tokens.extend(alternative[position:].split())
    return tokens


def normalize_alternative(alternative: str) -> str:
    """Return the whitespace-free lookup key for an alternative."""
    return "".join(split_alternative(alternative))


def merge_by_name(rules: Iterable[Rule | None], target_full_name: str) -> Rule | None:
    """
    Combine every definition of a rule into one.

    Params:
        rules: Parsed rules, None entries are ignored
        target_full_name: Rule name including angle brackets

    Returns:
        Rule without a line number holding all alternatives in document
        order, or None if no rule has that name
    """
    alternatives = [
        alternative
        for rule in valid_rules(rules)
        if rule.full_name == target_full_name
        for alternative in rule.alternatives
    ]
    if not alternatives:
        return None
    return Rule(line=None, name=target_full_name[1:-1], alternatives=tuple(alternatives))


def build_reverse_index(rules: Iterable[Rule | None]) -> ReverseIndex:
    """
    Map every normalized alternative to the rules producing it.

    Params:
        rules: Parsed rules, None entries are ignored

    Returns:
        Mapping of normalized value to a set of rule full names
    """
    reverse: ReverseIndex = {}
    for rule in valid_rules(rules):
        for alternative in rule.alternatives:
            reverse.setdefault(normalize_alternative(alternative), set()).add(
                rule.full_name
            )
    return reverse


@dataclass
class RuleIndex:
    """
    Lookups for one path query, built from a snapshot of the rules.

    Params:
        rules: Valid rules in document order
        reverse: Normalized value -> producing rule full names
        spellings: Normalized value -> first alternative text written for it
        containing: Non-terminal -> rules with an alternative using it as a token
    """

    rules: list[Rule]
    reverse: ReverseIndex = field(default_factory=dict)
    spellings: dict[str, str] = field(default_factory=dict)
    containing: ReverseIndex = field(default_factory=dict)

    @classmethod
    def build(cls, rules: Iterable[Rule | None]) -> "RuleIndex":
        """Build all lookups from parsed rules."""
        valid = valid_rules(rules)
        index = cls(rules=valid, reverse=build_reverse_index(valid))
        for rule in valid:
            for alternative in rule.alternatives:
                tokens = split_alternative(alternative)
                index.spellings.setdefault("".join(tokens), alternative)
                for token in tokens:
                    if is_placeholder(token):
                        index.containing.setdefault(token, set()).add(rule.full_name)
        return index

    def values(self) -> list[str]:
        """All normalized values in first-seen order."""
        return list(self.reverse)

    def producers(self, value: str) -> set[str]:
        """
        Rules able to derive a value in one step.

        A rule produces a value if one of its alternatives normalizes to it.
        For a non-terminal value, a rule also produces it if the non-terminal
        is one of the tokens of its alternatives.

        Params:
            value: Normalized value or non-terminal full name

        Returns:
            Set of rule full names, empty if nothing produces the value
        """
        found = set(self.reverse.get(value, ()))
        if is_placeholder(value):
            found |= self.containing.get(value, set())
        return found

    def spelling(self, value: str) -> str:
        """Alternative text to expand for a normalized value."""
        return self.spellings.get(value, value)

    def merged(self, target_full_name: str) -> Rule | None:
        """Merged rule for a non-terminal, see merge_by_name."""
        return merge_by_name(self.rules, target_full_name)
