"""
Expansion of a chosen rule alternative into child nodes.
"""

from prodgraph.core.types import NodeId
from prodgraph.exceptions import UnknownNodeError
from prodgraph.grammar.index import split_alternative
from prodgraph.structure.graph import DerivationGraph


def expand(graph: DerivationGraph, alternative: str, parent_id: NodeId) -> list[NodeId]:
    """
    Add one child node per token of an alternative.

    Nodes are created in left-to-right token order, so their ids are
    consecutive and ascending.

    Params:
        graph: Graph to extend
        alternative: Rule alternative text
        parent_id: Node receiving the children

    Returns:
        Ids of the created nodes in token order

    Raises:
        UnknownNodeError: If the parent does not exist
    """
    if parent_id not in graph:
        raise UnknownNodeError(parent_id, "expand")

    created = []
    for token in split_alternative(alternative):
        node_id = graph.new_node(token)
        graph.add_link(parent_id, node_id)
        created.append(node_id)
    return created


def placeholders(graph: DerivationGraph, node_ids: list[NodeId]) -> list[NodeId]:
    """Filter node ids down to the newly incomplete placeholders, order kept."""
    return [node_id for node_id in node_ids if graph.is_placeholder(node_id)]
