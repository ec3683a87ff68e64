"""
Search Tree Store

Holds the nodes of the branch-and-bound tree in creation order. Nodes are
never removed; all of their fields are updated in place as records arrive.
The parent/child structure is kept in a networkx DiGraph whose nodes carry
the SearchNode under the ``data`` attribute.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

import networkx as nx

from .bounds import best, propagate_primal_bound, sentinel
from .constants import ROOT_ID, NodeColor, ProblemSense
from .errors import DuplicateNodeError, MissingParentError, UnknownNodeError

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    """A node of the search tree as reconstructed from the log."""

    id: int
    parent_id: Optional[int]
    raw_color: NodeColor

    # Bounds start at the sense-dependent sentinel
    dual_bound: float
    primal_bound: float

    # Set once a solution has been recorded at this node
    feasible: bool = False

    depth: Optional[str] = None
    branch: Optional[str] = None
    info: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class TreeStore:
    """Registry of search nodes keyed by id."""

    def __init__(self, sense: ProblemSense):
        self.sense = ProblemSense(sense)
        self._graph = nx.DiGraph()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __iter__(self) -> Iterator[SearchNode]:
        for _, node in self._graph.nodes(data="data"):
            yield node

    @property
    def root(self) -> Optional[SearchNode]:
        if ROOT_ID not in self._graph:
            return None
        return self._graph.nodes[ROOT_ID]["data"]

    @property
    def incumbent(self) -> float:
        """Best primal bound found anywhere in the tree (held by the root)."""
        root = self.root
        return root.primal_bound if root is not None else sentinel(self.sense)

    def get(self, node_id: int) -> SearchNode:
        if node_id not in self._graph:
            raise UnknownNodeError(node_id)
        return self._graph.nodes[node_id]["data"]

    def children(self, node_id: int) -> List[SearchNode]:
        self.get(node_id)
        return [self._graph.nodes[child]["data"] for child in self._graph.successors(node_id)]

    def create_node(
        self, node_id: int, parent_id: Optional[int], color: NodeColor
    ) -> SearchNode:
        """
        Add a node below ``parent_id``.

        The store is left unchanged if the node already exists or its parent
        has not been created yet.
        """
        if node_id in self._graph:
            raise DuplicateNodeError(node_id)
        if parent_id is None:
            if node_id != ROOT_ID:
                raise MissingParentError(node_id, 0)
        elif parent_id not in self._graph:
            raise MissingParentError(node_id, parent_id)

        bound = sentinel(self.sense)
        node = SearchNode(
            id=node_id,
            parent_id=parent_id,
            raw_color=NodeColor(color),
            dual_bound=bound,
            primal_bound=bound,
        )
        self._graph.add_node(node_id, data=node)
        if parent_id is not None:
            self._graph.add_edge(parent_id, node_id)
        return node

    def set_color(self, node_id: int, color: NodeColor) -> None:
        node = self.get(node_id)
        # Found solutions are tracked through the feasible flag instead
        if color == NodeColor.SOLUTION:
            logger.debug(f"Node {node_id}: keeping color {node.raw_color}, solution found")
            return
        node.raw_color = NodeColor(color)

    def attach_info(
        self,
        node_id: int,
        depth: Optional[str],
        branch: Optional[str],
        dual_bound: float,
    ) -> None:
        node = self.get(node_id)
        node.depth = depth
        node.branch = branch
        node.dual_bound = float(dual_bound)

    def record_solution(self, node_id: int, info: str, objective: float) -> List[int]:
        """
        Mark ``node_id`` feasible with objective value ``objective``.

        The node keeps the better of its current and the new primal bound, and
        the bound is then propagated to its ancestors.

        Returns:
            The ids of the ancestors whose primal bound improved
        """
        node = self.get(node_id)
        node.feasible = True
        node.info = info
        node.primal_bound = best(node.primal_bound, float(objective), self.sense)
        return propagate_primal_bound(self, node_id)

    def as_networkx(self) -> nx.DiGraph:
        """Read-only view of the tree structure."""
        return self._graph.copy(as_view=True)
