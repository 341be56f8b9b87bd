"""
Tests for reading grammar text into rule blocks.
"""

import logging

from prodgraph.grammar.reader import (
    gutter_text,
    iter_blocks,
    parse,
    rule_by_number,
    rule_lines,
    to_text,
    valid_rules,
)


class TestBlocks:
    """Test how grammar text is split into rule blocks."""

    def test_blank_line_ends_block(self):
        """Test that a blank line closes the current rule."""
        text = "<S> ::= <A> b\n\n<A> ::= a"

        assert list(iter_blocks(text)) == [(1, "<S> ::= <A> b"), (3, "<A> ::= a")]

    def test_separator_line_ends_block(self):
        """Test that a new ::= line starts a new rule without a blank line."""
        text = "<a> ::= x\n<b> ::= y"

        assert list(iter_blocks(text)) == [(1, "<a> ::= x"), (2, "<b> ::= y")]

    def test_continuation_lines_joined_without_separator(self):
        """Test that lines of one block are concatenated as written."""
        text = "<a> ::= x\n | y\n | z\n"

        assert list(iter_blocks(text)) == [(1, "<a> ::= x | y | z")]

    def test_text_before_first_rule_ignored(self):
        """Test that lines before any ::= line belong to no block."""
        text = "comment line\n\n<a> ::= x"

        assert list(iter_blocks(text)) == [(3, "<a> ::= x")]

    def test_whitespace_only_line_is_blank(self):
        text = "<a> ::= x\n   \n y"

        assert list(iter_blocks(text)) == [(1, "<a> ::= x")]


class TestParse:
    """Test parsing whole grammar texts."""

    def test_end_to_end_example(self):
        """Test the two-rule example grammar."""
        rules = parse("<S> ::= <A> b\n\n<A> ::= a")

        assert [rule.full_name for rule in rules] == ["<S>", "<A>"]
        assert rules[0].alternatives == ("<A> b",)
        assert rules[1].alternatives == ("a",)

    def test_malformed_block_is_none_and_parsing_continues(self, caplog):
        """Test that a bad block leaves a None entry and a warning."""
        text = "<a> ::= x\n<b> ::=\n<c> ::= z"

        with caplog.at_level(logging.WARNING, logger="prodgraph.grammar.reader"):
            rules = parse(text)

        assert rules[0].name == "a"
        assert rules[1] is None
        assert rules[2].name == "c"
        assert "line 2" in caplog.text

    def test_multiline_rule_keeps_start_line(self):
        rules = parse("\n\n<a> ::= x\n | y")

        assert rules[0].line == 3
        assert rules[0].alternatives == ("x", "y")

    def test_empty_text(self):
        assert parse("") == []


class TestRuleNumbering:
    """Test rule numbering used for the gutter and '+N' commands."""

    TEXT = "<a> ::= x\n\n<bad> ::=\n\n<b> ::= y\n<c> ::= z"

    def test_rule_lines_skip_malformed(self):
        assert rule_lines(parse(self.TEXT)) == [1, 5, 6]

    def test_rule_by_number_counts_valid_rules_only(self):
        rules = parse(self.TEXT)

        assert rule_by_number(rules, 1).name == "a"
        assert rule_by_number(rules, 2).name == "b"
        assert rule_by_number(rules, 3).name == "c"

    def test_rule_by_number_out_of_range(self):
        rules = parse(self.TEXT)

        assert rule_by_number(rules, 0) is None
        assert rule_by_number(rules, 4) is None

    def test_gutter_text_places_numbers_on_rule_lines(self):
        """Test that number n appears on the line of the n-th rule."""
        gutter = gutter_text([1, 5, 6])

        assert gutter.split("\n") == ["1", "", "", "", "2", "3"]

    def test_gutter_text_empty(self):
        assert gutter_text([]) == ""


class TestToText:
    """Test serializing rules back to text."""

    def test_round_trip(self):
        rules = parse("<a> ::= x |  y\n<b> ::= <a>")

        text = to_text(rules)

        assert text == "<a> ::= x | y\n<b> ::= <a>"
        assert [(r.name, r.alternatives) for r in valid_rules(parse(text))] == [
            ("a", ("x", "y")),
            ("b", ("<a>",)),
        ]

    def test_none_gives_empty_text(self):
        assert to_text(None) == ""
