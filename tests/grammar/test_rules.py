"""
Tests for the Rule model and the single-rule parser.

Focus Areas:
1. Splitting alternatives at isolated, unescaped pipes
2. Rejecting structurally malformed rules
3. Rule invariants enforced by the model itself
"""

import pytest
from pydantic import ValidationError

from prodgraph.exceptions import MalformedRuleError
from prodgraph.grammar.rules import Rule, parse_rule, parse_rule_strict, split_alternatives


class TestParseRule:
    """Test parsing of well-formed rules."""

    def test_basic_rule(self):
        """Test name and alternatives of a simple rule."""
        rule = parse_rule("<digit> ::= 0 | 1 | 2", line=4)

        assert rule is not None
        assert rule.line == 4
        assert rule.name == "digit"
        assert rule.full_name == "<digit>"
        assert rule.alternatives == ("0", "1", "2")

    def test_alternatives_are_trimmed(self):
        """Test that surrounding whitespace is removed from each alternative."""
        rule = parse_rule("  <a>   ::=    x y   |   <b>  ")

        assert rule.name == "a"
        assert rule.alternatives == ("x y", "<b>")

    def test_escaped_pipe_is_literal(self):
        """Test that \\| does not split and is unescaped."""
        rule = parse_rule(r"<op> ::= a \| b | c")

        assert rule.alternatives == ("a | b", "c")

    def test_double_pipe_does_not_split(self):
        """Test that adjacent pipes stay inside one alternative."""
        rule = parse_rule("<or> ::= <a> || <b> | <c>")

        assert rule.alternatives == ("<a> || <b>", "<c>")

    def test_trailing_pipe_is_dropped(self):
        """Test that an empty piece after the last pipe is not an alternative."""
        rule = parse_rule("<a> ::= x |")

        assert rule.alternatives == ("x",)

    def test_blank_piece_after_pipe_is_kept(self):
        """Test that a whitespace-only piece becomes an empty alternative."""
        rule = parse_rule("<a> ::= x | ")

        assert rule.alternatives == ("x", "")

    def test_name_may_contain_spaces(self):
        """Test that anything between the brackets is the name."""
        rule = parse_rule("<arg list> ::= <arg>")

        assert rule.name == "arg list"
        assert rule.full_name == "<arg list>"


class TestMalformedRules:
    """Test rejection of malformed rules."""

    @pytest.mark.parametrize(
        "text",
        [
            "<a> x | y",
            "<a> ::= x ::= y",
            "a ::= x",
            "<> ::= x",
            "<a ::= x",
            "<a> ::=",
            "<a> ::=   ",
            "<a> ::= | x",
            "",
        ],
    )
    def test_parse_rule_returns_none(self, text):
        """Test that malformed text yields no rule."""
        assert parse_rule(text) is None

    def test_strict_parse_reports_reason_and_line(self):
        """Test that the strict parser explains the failure."""
        with pytest.raises(MalformedRuleError) as exc_info:
            parse_rule_strict("<a> ::= x ::= y", line=7)

        assert exc_info.value.line == 7
        assert "exactly one" in exc_info.value.reason
        assert "grammar line 7" in str(exc_info.value)

    def test_strict_parse_rejects_bad_name(self):
        """Test that the left side must be a bracketed name."""
        with pytest.raises(MalformedRuleError) as exc_info:
            parse_rule_strict("name ::= x")

        assert "<name>" in exc_info.value.reason


class TestSplitAlternatives:
    """Test the alternative splitter on its own."""

    def test_no_pipe(self):
        assert split_alternatives(" a b ") == ["a b"]

    def test_escaped_and_plain(self):
        assert split_alternatives(r" \| | x") == ["|", "x"]


class TestRuleModel:
    """Test Rule construction and serialization."""

    def test_rule_is_frozen(self):
        """Test that rules cannot be mutated after construction."""
        rule = Rule(line=1, name="a", alternatives=("x",))

        with pytest.raises(ValidationError):
            rule.name = "b"

    def test_empty_first_alternative_rejected(self):
        """Test that the model enforces a non-empty first alternative."""
        with pytest.raises(ValidationError):
            Rule(name="a", alternatives=("",))

    def test_no_alternatives_rejected(self):
        with pytest.raises(ValidationError):
            Rule(name="a", alternatives=())

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Rule(name="", alternatives=("x",))

    def test_str_round_trips(self):
        """Test that serializing and reparsing gives back the same rule."""
        rule = parse_rule(r"<s> ::= a \| b |  <s>   c | d || e")

        reparsed = parse_rule(str(rule))

        assert reparsed.name == rule.name
        assert reparsed.alternatives == rule.alternatives

    def test_str_format(self):
        rule = Rule(name="s", alternatives=("a", "<s> b"))

        assert str(rule) == "<s> ::= a | <s> b"
