"""
Mutable derivation tree.

Nodes are integer ids holding a string label. Parent links are kept in a
child -> parent mapping, so a node has at most one parent and any number of
children. Ids are handed out sequentially from 0 and are never reused, even
after the node is deleted.
"""

from collections.abc import Iterator

from prodgraph.core.symbols import is_placeholder
from prodgraph.core.types import NodeId
from prodgraph.exceptions import LinkCycleError, UnknownNodeError


class DerivationGraph:
    """Arena of labelled nodes with single-parent links.

    Responsibilities:
      - Allocate node ids and store labels.
      - Maintain parent links as a forest; links that would close a cycle are
        rejected.
      - Delete nodes together with all their descendants.
      - Report incomplete nodes (placeholders without children).

    Notes:
      - Every operation other than `get_label`/`parent`/`children` requires the
        ids it receives to exist and raises `UnknownNodeError` otherwise.
      - No locking: callers sharing one graph across threads must serialize
        mutations themselves.
    """

    def __init__(self) -> None:
        self._labels: dict[NodeId, str] = {}
        self._parents: dict[NodeId, NodeId] = {}
        self._next_id: NodeId = 0

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._labels

    def __iter__(self) -> Iterator[NodeId]:
        return iter(sorted(self._labels))

    @property
    def next_id(self) -> NodeId:
        """Id the next created node will receive."""
        return self._next_id

    def _require(self, node_id: NodeId, operation: str) -> None:
        if node_id not in self._labels:
            raise UnknownNodeError(node_id, operation)

    def new_node(self, label: str) -> NodeId:
        """
        Create a node without a parent.

        Params:
            label: Node text, a terminal or a ``<name>`` placeholder

        Returns:
            The new node id
        """
        node_id = self._next_id
        self._next_id += 1
        self._labels[node_id] = label
        return node_id

    def add_link(self, parent_id: NodeId, child_id: NodeId) -> None:
        """
        Make parent_id the parent of child_id, replacing any previous parent.

        Params:
            parent_id: New parent
            child_id: Node being attached

        Raises:
            UnknownNodeError: If either node does not exist
            LinkCycleError: If child_id is parent_id or one of its ancestors
        """
        self._require(parent_id, "link")
        self._require(child_id, "link")
        ancestor: NodeId | None = parent_id
        while ancestor is not None:
            if ancestor == child_id:
                raise LinkCycleError(parent_id, child_id)
            ancestor = self._parents.get(ancestor)
        self._parents[child_id] = parent_id

    def unlink(self, child_id: NodeId) -> NodeId | None:
        """
        Remove the parent of a node.

        Returns:
            The former parent, or None if the node had none

        Raises:
            UnknownNodeError: If the node does not exist
        """
        self._require(child_id, "unlink")
        return self._parents.pop(child_id, None)

    def delete(self, node_id: NodeId) -> NodeId | None:
        """
        Delete a node and all of its descendants.

        Params:
            node_id: Root of the subtree to delete

        Returns:
            The former parent of node_id (not of its descendants), or None

        Raises:
            UnknownNodeError: If the node does not exist
        """
        self._require(node_id, "delete")
        former_parent = self._parents.pop(node_id, None)
        pending = [node_id]
        while pending:
            current = pending.pop()
            del self._labels[current]
            children = self.children(current)
            for child in children:
                del self._parents[child]
            pending.extend(children)
        return former_parent

    def get_label(self, node_id: NodeId) -> str | None:
        """Label of a node, or None if it does not exist."""
        return self._labels.get(node_id)

    def parent(self, node_id: NodeId) -> NodeId | None:
        """Parent of a node, or None."""
        return self._parents.get(node_id)

    def children(self, node_id: NodeId) -> list[NodeId]:
        """Children of a node in ascending id order."""
        return sorted(child for child, parent in self._parents.items() if parent == node_id)

    def links(self) -> list[tuple[NodeId, NodeId]]:
        """All (parent, child) pairs ordered by child id."""
        return [(self._parents[child], child) for child in sorted(self._parents)]

    def is_placeholder(self, node_id: NodeId) -> bool:
        """True if the node exists and its label is a ``<name>`` placeholder."""
        return is_placeholder(self._labels.get(node_id))

    def get_incomplete(self) -> set[NodeId]:
        """Placeholder nodes that have no children."""
        with_children = set(self._parents.values())
        return {
            node_id
            for node_id, label in self._labels.items()
            if is_placeholder(label) and node_id not in with_children
        }
