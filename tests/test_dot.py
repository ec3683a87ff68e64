"""Tests for the Graphviz description of snapshots."""
import pytest

from vbctree.constants import ProblemSense
from vbctree.dot import build_digraph, to_dot
from vbctree.errors import ConfigError
from vbctree.machine import TreeStateMachine
from vbctree.records import parse_log

LOG = [
    "N 0 1 2",
    "N 1 2 4",
    "N 1 3 2",
    "I 2|node|2|x|1|y|x [0,1] <= 0|z|45.0",
    "I 3|node|3|x|1|y|x [0,1] >= 1|z|40.0",
    "A 3 objective 40.0",
]


@pytest.fixture
def snapshot():
    machine = TreeStateMachine(ProblemSense.MINIMIZE)
    machine.apply_all(parse_log(LOG))
    return machine.snapshot()


def test_graph_attributes(snapshot):
    source = to_dot(snapshot, rankdir="LR")
    assert source.startswith("digraph finite_state_machine {")
    assert "rankdir=LR" in source
    assert 'size="11,17"' in source
    assert "shape=circle" in source


def test_one_edge_per_child(snapshot):
    source = to_dot(snapshot)
    assert source.count("->") == 2
    assert "1 -> 2" in source
    assert "1 -> 3" in source
    assert 'label="x in [0,1]\\nx <= 0.0"' in source


def test_node_statements(snapshot):
    source = to_dot(snapshot)
    assert 'label="1\\n--\\n40.0"' in source
    assert "color=plum" in source  # node 2 is inferior
    assert "color=green" in source  # node 3 is optimal


def test_solution_overlay(snapshot):
    dot = build_digraph(snapshot)
    overlays = [line for line in dot.body if "fillcolor=palegreen" in line]
    assert len(overlays) == 1
    assert overlays[0].strip().startswith("3 ")
    assert "style=filled" in overlays[0]


def test_legend(snapshot):
    plain = to_dot(snapshot)
    with_legend = to_dot(snapshot, legend=True)
    assert "cluster_legend" not in plain
    assert "subgraph cluster_legend" in with_legend
    assert "a -> d" in with_legend
    assert with_legend.index("cluster_legend") < with_legend.index("1 -> 2")


def test_invalid_rankdir(snapshot):
    with pytest.raises(ConfigError):
        to_dot(snapshot, rankdir="XY")
