"""
Display Color Resolution

The color shown for a node is derived at snapshot time from its raw solver
color, its own bounds and the current incumbent. Nothing is written back to
the node, since the incumbent may still improve.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .bounds import is_better
from .constants import SOLUTION_FILL, NodeColor, ProblemSense
from .numeric import is_unbounded, sig_round
from .tree import SearchNode


@dataclass(frozen=True)
class NodeStyle:
    color: NodeColor
    filled: bool = False
    fillcolor: Optional[str] = None


def resolve_color(node: SearchNode, incumbent: float, sense: ProblemSense) -> NodeColor:
    """
    Compute the display color of ``node``.

    - Inferior: the dual bound is strictly worse than the incumbent
    - Optimal: primal and dual bound of the node coincide
    - Otherwise, or while either bound is unbounded: the raw color
    """
    if is_unbounded(node.dual_bound) or is_unbounded(incumbent):
        return node.raw_color
    dual = sig_round(node.dual_bound)
    if is_better(sig_round(incumbent), dual, sense):
        return NodeColor.INFERIOR
    if sig_round(node.primal_bound) == dual:
        return NodeColor.OPTIMAL
    return node.raw_color


def resolve_style(node: SearchNode, incumbent: float, sense: ProblemSense) -> NodeStyle:
    """Display color plus the fill overlay of nodes where a solution was found."""
    color = resolve_color(node, incumbent, sense)
    if node.feasible:
        return NodeStyle(color=color, filled=True, fillcolor=SOLUTION_FILL)
    return NodeStyle(color=color)
