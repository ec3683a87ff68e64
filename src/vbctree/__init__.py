__all__ = [
    "ProblemSense",
    "NodeColor",
    "MINIMIZE",
    "MAXIMIZE",
    "VbcError",
    "ConfigError",
    "ParseError",
    "TreeError",
    "DuplicateNodeError",
    "MissingParentError",
    "UnknownNodeError",
    "RenderError",
    "sig_round",
    "sig_round_nice",
    "parse_line",
    "parse_log",
    "detect_sense",
    "SearchNode",
    "TreeStore",
    "propagate_primal_bound",
    "resolve_color",
    "TreeStateMachine",
    "GraphSnapshot",
    "to_dot",
    "GraphvizRenderer",
    "RunConfig",
    "run",
]

from .constants import ProblemSense, NodeColor
from .errors import (
    VbcError,
    ConfigError,
    ParseError,
    TreeError,
    DuplicateNodeError,
    MissingParentError,
    UnknownNodeError,
    RenderError,
)
from .numeric import sig_round, sig_round_nice
from .records import parse_line, parse_log, detect_sense
from .tree import SearchNode, TreeStore
from .bounds import propagate_primal_bound
from .colors import resolve_color
from .machine import TreeStateMachine, GraphSnapshot
from .dot import to_dot
from .render import GraphvizRenderer
from .runner import RunConfig, run

MINIMIZE = ProblemSense.MINIMIZE
MAXIMIZE = ProblemSense.MAXIMIZE
