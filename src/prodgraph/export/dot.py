"""
Graph description export for the external layout tool.

The derivation graph is written in the DOT language as an undirected graph:

    graph G {
    0 [label="0: <S>" shape=box]
    1 [label="a" shape=plain]
    0 -- 1
    }

Only the text is produced here; running the layout tool and handling the
rendered image is left to the caller.
"""

from prodgraph.config import ExportOptions
from prodgraph.core.types import NodeId
from prodgraph.structure.graph import DerivationGraph


def escape_label(label: str) -> str:
    """Escape a label for use inside a double-quoted DOT string."""
    return label.replace("\\", "\\\\").replace('"', '\\"')


def node_label(graph: DerivationGraph, node_id: NodeId, options: ExportOptions) -> str:
    """
    Text displayed for a node.

    Ids are prefixed on placeholders when ids are shown, and on terminals too
    when terminal ids are requested.
    """
    label = graph.get_label(node_id) or ""
    if options.show_ids and (options.show_ids_on_terminals or graph.is_placeholder(node_id)):
        return f"{node_id}: {label}"
    return label


def export(
    graph: DerivationGraph,
    show_ids: bool = True,
    show_ids_on_terminals: bool = False,
    highlight_id: NodeId | None = None,
) -> str:
    """
    Render the graph as DOT text.

    Params:
        graph: Graph to describe
        show_ids: Prefix placeholder labels with their node id
        show_ids_on_terminals: Prefix terminal labels too; implies show_ids
        highlight_id: Node drawn with a box instead of plain text

    Returns:
        DOT description ending with a newline
    """
    options = ExportOptions(
        show_ids=show_ids,
        show_ids_on_terminals=show_ids_on_terminals,
        highlight=highlight_id,
    )
    return export_with(graph, options)


def export_with(graph: DerivationGraph, options: ExportOptions) -> str:
    """Render the graph as DOT text using an ExportOptions record."""
    options = options.resolved()
    lines = ["graph G {"]

    for node_id in graph:
        shape = "box" if node_id == options.highlight else "plain"
        label = escape_label(node_label(graph, node_id, options))
        lines.append(f'{node_id} [label="{label}" shape={shape}]')

    for parent_id, child_id in graph.links():
        lines.append(f"{parent_id} -- {child_id}")

    lines.append("}")
    return "\n".join(lines) + "\n"
