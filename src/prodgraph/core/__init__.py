"""
Core prodgraph components.

This package contains the symbol helpers and type aliases used throughout
prodgraph.
"""

from prodgraph.core.symbols import full_name, is_enclosed, is_placeholder
from prodgraph.core.types import NodeId, ReverseIndex, RuleLines

__all__ = [
    "NodeId",
    "ReverseIndex",
    "RuleLines",
    "full_name",
    "is_enclosed",
    "is_placeholder",
]
