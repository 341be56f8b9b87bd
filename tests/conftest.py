"""
Shared test fixtures for the prodgraph test suite.
"""

import pytest

from prodgraph.structure.graph import DerivationGraph

EXPRESSION_GRAMMAR = """\
<expr> ::= <term> | <expr> + <term>
<term> ::= <factor> | <term> * <factor>
<factor> ::= ( <expr> ) | x
"""


@pytest.fixture
def graph():
    """Empty derivation graph."""
    return DerivationGraph()


@pytest.fixture
def expression_grammar():
    """Small arithmetic grammar with left-recursive rules."""
    return EXPRESSION_GRAMMAR
