"""
Tests for the queue of current nodes.
"""

from prodgraph.structure.focus import FocusQueue


class TestFocusQueue:
    """Test queue ordering rules."""

    def test_empty_queue_has_no_current(self):
        queue = FocusQueue()

        assert queue.current() is None
        assert queue.advance() is None
        assert len(queue) == 0

    def test_push_front_keeps_given_order(self):
        """Test that the first pushed id becomes current."""
        queue = FocusQueue([9])

        queue.push_front([3, 5])

        assert list(queue) == [3, 5, 9]
        assert queue.current() == 3

    def test_push_back_ignores_missing_ids(self):
        queue = FocusQueue([1])

        queue.push_back(None)
        queue.push_back(-1)
        queue.push_back(4)

        assert list(queue) == [1, 4]

    def test_discard_and_advance(self):
        queue = FocusQueue([1, 2, 3])

        queue.discard(2)
        queue.discard(7)

        assert queue.advance() == 1
        assert list(queue) == [3]

    def test_promote_moves_or_inserts_in_front(self):
        queue = FocusQueue([1, 2, 3])

        queue.promote(3)
        assert list(queue) == [3, 1, 2]

        queue.promote(8)
        assert list(queue) == [8, 3, 1, 2]

    def test_clear(self):
        queue = FocusQueue([1, 2])

        queue.clear()

        assert 1 not in queue
        assert len(queue) == 0


class TestFocusQueueWithGraph:
    """Test queue maintenance against graph state."""

    def test_prune_drops_deleted_nodes(self, graph):
        parent = graph.new_node("<a>")
        child = graph.new_node("<b>")
        graph.add_link(parent, child)
        queue = FocusQueue([child, parent])

        graph.delete(child)
        queue.prune(graph)

        assert list(queue) == [parent]

    def test_rebuild_uses_incomplete_nodes_in_id_order(self, graph):
        first = graph.new_node("<b>")
        graph.new_node("x")
        second = graph.new_node("<a>")
        queue = FocusQueue([1])

        queue.rebuild(graph)

        assert list(queue) == [first, second]
