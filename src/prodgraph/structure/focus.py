"""
Queue of nodes the operator is expected to work on next.

The front of the queue is the current node: it is highlighted when the graph
is drawn and is the default start for selections and path searches.
"""

from collections import deque
from collections.abc import Iterable, Iterator

from prodgraph.core.types import NodeId
from prodgraph.structure.graph import DerivationGraph


class FocusQueue:
    """Double-ended queue of relevant node ids."""

    def __init__(self, node_ids: Iterable[NodeId] = ()):
        self._queue: deque[NodeId] = deque(node_ids)

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self._queue)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._queue

    def current(self) -> NodeId | None:
        """Front of the queue, or None when empty."""
        return self._queue[0] if self._queue else None

    def push_front(self, node_ids: Iterable[NodeId]) -> None:
        """
        Put nodes in front, keeping their given order.

        Params:
            node_ids: Nodes to prepend, the first one becomes current
        """
        for node_id in reversed(list(node_ids)):
            self._queue.appendleft(node_id)

    def push_back(self, node_id: NodeId | None) -> None:
        """Append a node; None and negative ids are ignored."""
        if node_id is None or node_id < 0:
            return
        self._queue.append(node_id)

    def discard(self, node_id: NodeId) -> None:
        """Remove the first occurrence of a node if present."""
        try:
            self._queue.remove(node_id)
        except ValueError:
            pass

    def promote(self, node_id: NodeId) -> None:
        """Make a node current, whether or not it was queued."""
        self.discard(node_id)
        self._queue.appendleft(node_id)

    def advance(self) -> NodeId | None:
        """Drop the current node and return it."""
        return self._queue.popleft() if self._queue else None

    def clear(self) -> None:
        self._queue.clear()

    def prune(self, graph: DerivationGraph) -> None:
        """Drop ids that no longer exist in the graph."""
        self._queue = deque(node_id for node_id in self._queue if node_id in graph)

    def rebuild(self, graph: DerivationGraph) -> None:
        """Refill from the graph's incomplete nodes in ascending id order."""
        self._queue = deque(sorted(graph.get_incomplete()))
