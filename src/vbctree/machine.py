"""
Tree State Machine

Applies parsed VBC records to a TreeStore one at a time and produces
immutable snapshots of the tree for rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .colors import NodeStyle, resolve_style
from .constants import ProblemSense
from .errors import TreeError
from .numeric import sig_round_nice
from .records import (
    BoundUpdate,
    NewColor,
    NewNode,
    NodeInfo,
    Record,
    SolutionInfo,
)
from .tree import TreeStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeView:
    id: int
    label: str
    style: NodeStyle


@dataclass(frozen=True)
class EdgeView:
    parent: int
    child: int
    label: str


@dataclass(frozen=True)
class GraphSnapshot:
    """A consistent, immutable picture of the tree after some record."""

    sequence: int
    records_applied: int
    sense: ProblemSense
    incumbent: float
    nodes: Tuple[NodeView, ...]
    edges: Tuple[EdgeView, ...]

    def node(self, node_id: int) -> NodeView:
        for view in self.nodes:
            if view.id == node_id:
                return view
        raise KeyError(node_id)


class TreeStateMachine:
    """Append-only reconstruction of a branch-and-bound tree from its log."""

    def __init__(self, sense: ProblemSense, store: Optional[TreeStore] = None):
        self.sense = ProblemSense(sense)
        if store is None:
            store = TreeStore(self.sense)
        elif store.sense != self.sense:
            raise ValueError(
                f"Store sense '{store.sense}' does not match machine sense '{self.sense}'"
            )
        self.store = store
        self.records_applied = 0
        self.snapshot_counter = 0
        self.last_bound: Optional[float] = None

    def apply(self, record: Record) -> None:
        """Apply one record, including any bound propagation it triggers."""
        try:
            self._dispatch(record)
        except TreeError as e:
            e.at_line(record.line)
            raise
        self.records_applied += 1

    def apply_all(self, records: Iterable[Record]) -> int:
        count = 0
        for record in records:
            self.apply(record)
            count += 1
        return count

    def _dispatch(self, record: Record) -> None:
        match record:
            case NewNode(node_id=node_id, parent_id=parent_id, color=color):
                self.store.create_node(node_id, parent_id, color)
            case NewColor(node_id=node_id, color=color):
                self.store.set_color(node_id, color)
            case NodeInfo(node_id=node_id, depth=depth, branch=branch, dual_bound=dual):
                self.store.attach_info(node_id, depth, branch, dual)
            case SolutionInfo(node_id=node_id, info=info, objective=objective):
                improved = self.store.record_solution(node_id, info, objective)
                if improved:
                    logger.debug(f"Solution at node {node_id} improved nodes {improved}")
            case BoundUpdate(kind=kind, value=value):
                expected = "U" if self.sense == ProblemSense.MINIMIZE else "L"
                if kind != expected:
                    logger.warning(
                        f"Line {record.line}: '{kind}' bound in a '{self.sense}' problem"
                    )
                self.last_bound = value
            case _:
                raise TypeError(f"Unsupported record type {type(record).__name__}")

    def snapshot(self) -> GraphSnapshot:
        """
        Build the current graph: one edge per non-root node, labelled with its
        branching decision, and one styled node per node in creation order.
        """
        incumbent = self.store.incumbent
        nodes = []
        edges = []
        for node in self.store:
            if node.parent_id is not None:
                edges.append(EdgeView(node.parent_id, node.id, node.branch or ""))
            label = (
                f"{node.id}\n{sig_round_nice(node.dual_bound)}\n"
                f"{sig_round_nice(node.primal_bound)}"
            )
            nodes.append(NodeView(node.id, label, resolve_style(node, incumbent, self.sense)))
        self.snapshot_counter += 1
        return GraphSnapshot(
            sequence=self.snapshot_counter,
            records_applied=self.records_applied,
            sense=self.sense,
            incumbent=incumbent,
            nodes=tuple(nodes),
            edges=tuple(edges),
        )
