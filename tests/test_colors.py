"""Tests for display color resolution."""
import pytest

from vbctree.colors import NodeStyle, resolve_color, resolve_style
from vbctree.constants import NodeColor, ProblemSense
from vbctree.tree import SearchNode

MIN = ProblemSense.MINIMIZE
MAX = ProblemSense.MAXIMIZE


def make_node(dual, primal=1e99, color=NodeColor.SOLVED, feasible=False):
    return SearchNode(
        id=2,
        parent_id=1,
        raw_color=color,
        dual_bound=dual,
        primal_bound=primal,
        feasible=feasible,
    )


def test_inferior_overrides_raw_color():
    node = make_node(45.0, color=NodeColor.CUTOFF)
    assert resolve_color(node, 40.0, MIN) == NodeColor.INFERIOR


def test_inferior_maximize():
    assert resolve_color(make_node(35.0, primal=-1e99), 40.0, MAX) == NodeColor.INFERIOR
    assert resolve_color(make_node(45.0, primal=-1e99), 40.0, MAX) == NodeColor.SOLVED


def test_optimal():
    node = make_node(40.0, primal=40.0)
    assert resolve_color(node, 40.0, MIN) == NodeColor.OPTIMAL


def test_optimal_after_rounding():
    node = make_node(40.0, primal=40.000000001)
    assert resolve_color(node, 40.0, MIN) == NodeColor.OPTIMAL


def test_open_node_keeps_raw_color():
    node = make_node(30.0, color=NodeColor.UNSOLVED)
    assert resolve_color(node, 40.0, MIN) == NodeColor.UNSOLVED


@pytest.mark.parametrize("dual, incumbent", [(1e99, 40.0), (45.0, 1e99), (45.0, -1e99)])
def test_unbounded_keeps_raw_color(dual, incumbent):
    node = make_node(dual, color=NodeColor.REPROP)
    assert resolve_color(node, incumbent, MIN) == NodeColor.REPROP


def test_resolution_is_pure():
    node = make_node(45.0, color=NodeColor.CUTOFF)
    first = resolve_color(node, 40.0, MIN)
    second = resolve_color(node, 40.0, MIN)
    assert first == second
    assert node.raw_color == NodeColor.CUTOFF


def test_style_overlay_for_feasible_nodes():
    style = resolve_style(make_node(40.0, primal=40.0, feasible=True), 40.0, MIN)
    assert style == NodeStyle(color=NodeColor.OPTIMAL, filled=True, fillcolor="palegreen")
    plain = resolve_style(make_node(30.0), 40.0, MIN)
    assert not plain.filled
    assert plain.fillcolor is None
