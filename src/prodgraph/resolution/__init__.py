"""
Simple path resolution over the reverse rule index.
"""

from prodgraph.resolution.path_resolver import (
    PathResult,
    ResolvedChain,
    find_chain,
    normalize_pattern,
    simple_path,
)

__all__ = [
    "PathResult",
    "ResolvedChain",
    "find_chain",
    "normalize_pattern",
    "simple_path",
]
