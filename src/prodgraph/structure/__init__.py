"""
Derivation tree structure.

This package provides the mutable derivation graph, alternative expansion
and the focus queue of nodes still to be worked on.
"""

from prodgraph.structure.expansion import expand, placeholders
from prodgraph.structure.focus import FocusQueue
from prodgraph.structure.graph import DerivationGraph

__all__ = [
    "DerivationGraph",
    "FocusQueue",
    "expand",
    "placeholders",
]
