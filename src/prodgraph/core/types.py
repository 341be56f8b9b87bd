"""
Core type definitions for prodgraph.

This module contains type aliases shared by the grammar, structure and
resolution packages.
"""

NodeId = int

ReverseIndex = dict[str, set[str]]

RuleLines = list[int]
