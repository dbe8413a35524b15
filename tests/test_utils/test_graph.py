import pytest

from utils import CycleDetectedError, UnknownNodeError, successors, topological_order


class TestTopologicalOrder:
    def test_chain(self):
        order = topological_order(
            node_ids=["c", "b", "a"], edges=[("a", "b"), ("b", "c")]
        )

        assert order == ["a", "b", "c"]

    def test_ties_broken_by_id(self):
        order = topological_order(
            node_ids=["z", "y", "x", "m"], edges=[("x", "m"), ("y", "m"), ("z", "m")]
        )

        assert order == ["x", "y", "z", "m"]

    def test_isolated_nodes(self):
        assert topological_order(node_ids=["b", "a"], edges=[]) == ["a", "b"]

    def test_cycle(self):
        with pytest.raises(CycleDetectedError, match="a, b"):
            topological_order(
                node_ids=["a", "b", "c"], edges=[("a", "b"), ("b", "a")]
            )

    def test_unknown_node(self):
        with pytest.raises(UnknownNodeError, match="ghost"):
            topological_order(node_ids=["a"], edges=[("a", "ghost")])


class TestSuccessors:
    def test_transitive(self):
        result = successors(
            start_ids=["a"],
            node_ids=["a", "b", "c", "d"],
            edges=[("a", "b"), ("b", "c"), ("d", "c")],
        )

        assert result == ["b", "c"]

    def test_excludes_start_nodes(self):
        result = successors(
            start_ids=["a", "b"],
            node_ids=["a", "b", "c"],
            edges=[("a", "b"), ("b", "c")],
        )

        assert result == ["c"]

    def test_diamond_visited_once(self):
        result = successors(
            start_ids=["a"],
            node_ids=["a", "b", "c", "d"],
            edges=[("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")],
        )

        assert result == ["b", "c", "d"]

    def test_leaf(self):
        result = successors(start_ids=["b"], node_ids=["a", "b"], edges=[("a", "b")])

        assert result == []
