"""
prodgraph - Build derivation trees from editable context-free grammars.

prodgraph parses production rules, grows a derivation tree one alternative or
one unique simple path at a time, and describes the tree in the DOT language
for an external layout tool.
"""

from importlib.metadata import version

from prodgraph.commands.session import EditingSession
from prodgraph.grammar.rules import Rule
from prodgraph.structure.graph import DerivationGraph

__version__ = version("prodgraph")

__all__ = [
    "__version__",
    "DerivationGraph",
    "EditingSession",
    "Rule",
]
