"""
Export of the derivation graph to the layout tool's graph language.
"""

from prodgraph.export.dot import escape_label, export, export_with, node_label

__all__ = [
    "escape_label",
    "export",
    "export_with",
    "node_label",
]
