"""
Primal Bound Propagation

A new feasible solution at a node improves the primal bound of every ancestor
whose bound is no better than it. The walk stops at the first ancestor that
already holds a strictly better bound, so the root always carries the global
incumbent.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from .constants import BOUND_SENTINEL, ProblemSense

if TYPE_CHECKING:
    from .tree import TreeStore

logger = logging.getLogger(__name__)


def sentinel(sense: ProblemSense) -> float:
    """Initial (worst possible) bound for a node."""
    return BOUND_SENTINEL if sense == ProblemSense.MINIMIZE else -BOUND_SENTINEL


def is_better(a: float, b: float, sense: ProblemSense) -> bool:
    """True if bound ``a`` is strictly better than ``b``."""
    return a < b if sense == ProblemSense.MINIMIZE else a > b


def no_better(a: float, b: float, sense: ProblemSense) -> bool:
    """True if bound ``a`` is not better than ``b`` (worse or equal)."""
    return not is_better(a, b, sense)


def best(a: float, b: float, sense: ProblemSense) -> float:
    return b if is_better(b, a, sense) else a


def propagate_primal_bound(store: "TreeStore", node_id: int) -> List[int]:
    """
    Push the primal bound of ``node_id`` up its ancestor chain.

    Returns:
        The ids of the ancestors whose primal bound changed, nearest first
    """
    sense = store.sense
    rel = "<=" if sense == ProblemSense.MINIMIZE else ">="
    node = store.get(node_id)
    changed: List[int] = []
    while node.parent_id is not None:
        father = store.get(node.parent_id)
        logger.debug(
            f"Propagate primal bound from {node.id}: primalBound = {node.primal_bound} "
            f"{rel} {father.primal_bound} = primalBound of father {father.id}"
        )
        if not no_better(father.primal_bound, node.primal_bound, sense):
            break
        if father.primal_bound != node.primal_bound:
            changed.append(father.id)
        father.primal_bound = node.primal_bound
        node = father
    return changed
