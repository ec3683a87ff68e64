"""
Graphviz Description of a Tree Snapshot

Each node is drawn as a circle labelled with its id, dual bound and primal
bound; edges carry the branching decision. Nodes where a solution was found
get a second statement that fills them.
"""

from __future__ import annotations

import graphviz

from .constants import RANKDIRS, SOLUTION_FILL, NodeColor
from .errors import ConfigError
from .machine import GraphSnapshot

GRAPH_NAME = "finite_state_machine"
PAGE_SIZE = "11,17"

# Static example nodes: (name, label, color, filled)
_LEGEND_NODES = [
    ("a", "node name\\ndual bound\\nprimal bound", NodeColor.SOLVED, False),
    ("b", "solved\\nnode", NodeColor.SOLVED, False),
    ("c", "in-\\nfeasible\\ncutoff", NodeColor.CUTOFF, False),
    ("d", "solved\\nnode", NodeColor.SOLVED, False),
    ("e", "marked\\nfor\\nrepropa-\\ngation", NodeColor.MARKREPROP, False),
    ("f", "solved\\nnode", NodeColor.SOLVED, False),
    ("g", "solved\\nnode", NodeColor.SOLVED, False),
    ("h", "inferior\\nnode", NodeColor.INFERIOR, False),
    ("i", "newly\\ncreated\\nnot yet\\nsolved", NodeColor.UNSOLVED, False),
    ("j", "conflict\\ncon-\\nstraint\\nfound", NodeColor.CONFLICT, False),
    ("k", "solved\\nnode\\nsolution\\nfound", NodeColor.OPTIMAL, True),
    ("l", "repro-\\npagated\\nnode", NodeColor.REPROP, False),
]

_LEGEND_EDGES = [
    ("a", "d", "branching\\ninformation"),
    ("a", "b", None),
    ("b", "e", None),
    ("b", "c", None),
    ("d", "f", None),
    ("d", "g", None),
    ("e", "l", None),
    ("f", "h", None),
    ("f", "i", None),
    ("g", "j", None),
    ("g", "k", None),
]


def _escape_newlines(text: str) -> str:
    return text.replace("\n", "\\n")


def add_legend(dot: graphviz.Digraph) -> None:
    """Add a fixed subgraph explaining the node colors."""
    with dot.subgraph(name="cluster_legend") as legend:
        legend.attr(label="legend", style="dashed")
        for tail, head, label in _LEGEND_EDGES:
            if label is None:
                legend.edge(tail, head)
            else:
                legend.edge(tail, head, label=label)
        for name, label, color, filled in _LEGEND_NODES:
            if filled:
                legend.node(
                    name, label=label, color=str(color), style="filled", fillcolor=SOLUTION_FILL
                )
            else:
                legend.node(name, label=label, color=str(color))


def build_digraph(
    snapshot: GraphSnapshot, rankdir: str = "TB", legend: bool = False
) -> graphviz.Digraph:
    if rankdir not in RANKDIRS:
        raise ConfigError(f"rankdir must be one of {', '.join(RANKDIRS)}, got '{rankdir}'")

    dot = graphviz.Digraph(
        name=GRAPH_NAME,
        graph_attr={"rankdir": rankdir, "size": PAGE_SIZE},
        node_attr={"shape": "circle"},
    )
    if legend:
        add_legend(dot)

    for edge in snapshot.edges:
        dot.edge(str(edge.parent), str(edge.child), label=_escape_newlines(edge.label))

    for view in snapshot.nodes:
        name = str(view.id)
        dot.node(name, label=_escape_newlines(view.label), color=str(view.style.color))
        if view.style.filled:
            dot.node(name, style="filled", fillcolor=view.style.fillcolor)
    return dot


def to_dot(snapshot: GraphSnapshot, rankdir: str = "TB", legend: bool = False) -> str:
    """Return the DOT source for ``snapshot``."""
    return build_digraph(snapshot, rankdir=rankdir, legend=legend).source
