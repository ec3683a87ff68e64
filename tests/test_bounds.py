"""Tests for primal bound propagation."""
import pytest

from vbctree.bounds import best, is_better, no_better, propagate_primal_bound, sentinel
from vbctree.constants import NodeColor, ProblemSense
from vbctree.tree import TreeStore


def make_store(sense, edges):
    store = TreeStore(sense)
    store.create_node(1, None, NodeColor.UNSOLVED)
    for parent, child in edges:
        store.create_node(child, parent, NodeColor.UNSOLVED)
    return store


def test_comparisons():
    assert is_better(1.0, 2.0, ProblemSense.MINIMIZE)
    assert is_better(2.0, 1.0, ProblemSense.MAXIMIZE)
    assert not is_better(2.0, 2.0, ProblemSense.MINIMIZE)
    assert no_better(2.0, 2.0, ProblemSense.MAXIMIZE)
    assert best(3.0, 4.0, ProblemSense.MINIMIZE) == 3.0
    assert best(3.0, 4.0, ProblemSense.MAXIMIZE) == 4.0
    assert sentinel(ProblemSense.MINIMIZE) == 1e99
    assert sentinel(ProblemSense.MAXIMIZE) == -1e99


class TestSiblings:
    """A better child improves the root; a worse sibling stops at the root."""

    @pytest.fixture
    def store(self):
        store = make_store(ProblemSense.MINIMIZE, [(1, 2), (1, 3)])
        store.record_solution(1, "root", 50.0)
        return store

    def test_better_child_improves_root(self, store):
        assert store.record_solution(2, "child", 40.0) == [1]
        assert store.get(1).primal_bound == 40.0

    def test_worse_sibling_stops(self, store):
        store.record_solution(2, "child", 40.0)
        assert store.record_solution(3, "sibling", 60.0) == []
        assert store.get(1).primal_bound == 40.0
        assert store.get(3).primal_bound == 60.0

    def test_idempotent(self, store):
        store.record_solution(2, "child", 40.0)
        before = [(n.id, n.primal_bound) for n in store]
        assert propagate_primal_bound(store, 2) == []
        assert [(n.id, n.primal_bound) for n in store] == before


def test_deep_chain():
    store = make_store(ProblemSense.MINIMIZE, [(1, 2), (2, 3), (3, 4)])
    assert store.record_solution(4, "leaf", 10.0) == [3, 2, 1]
    assert [n.primal_bound for n in store] == [10.0, 10.0, 10.0, 10.0]


def test_stops_at_better_ancestor():
    store = make_store(ProblemSense.MINIMIZE, [(1, 2), (2, 3)])
    store.record_solution(2, "mid", 20.0)
    assert store.record_solution(3, "leaf", 30.0) == []
    assert store.get(2).primal_bound == 20.0
    assert store.get(1).primal_bound == 20.0


def test_ties_keep_walking():
    store = make_store(ProblemSense.MINIMIZE, [(1, 2), (2, 3)])
    store.record_solution(1, "root", 10.0)
    assert store.record_solution(3, "leaf", 10.0) == [2]
    assert store.get(2).primal_bound == 10.0


def test_maximize():
    store = make_store(ProblemSense.MAXIMIZE, [(1, 2), (1, 3)])
    store.record_solution(1, "root", 5.0)
    assert store.record_solution(2, "better", 7.0) == [1]
    assert store.record_solution(3, "worse", 3.0) == []
    assert store.incumbent == 7.0


@pytest.mark.parametrize(
    "sense, pick", [(ProblemSense.MINIMIZE, min), (ProblemSense.MAXIMIZE, max)]
)
def test_root_holds_best_solution(sense, pick):
    store = make_store(sense, [(1, 2), (1, 3), (2, 4), (2, 5), (3, 6), (6, 7)])
    solutions = [(4, 12.0), (7, 9.5), (5, 15.0), (3, 11.0), (6, 8.0), (2, 14.0)]
    seen = []
    for node_id, value in solutions:
        before = {n.id: n.primal_bound for n in store}
        store.record_solution(node_id, "sol", value)
        seen.append(value)
        assert store.incumbent == pick(seen)
        # No ancestor ever gets worse
        for node in store:
            assert not is_better(before[node.id], node.primal_bound, sense)
