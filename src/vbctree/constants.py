from enum import StrEnum


class ProblemSense(StrEnum):
    MINIMIZE = "min"
    MAXIMIZE = "max"


class NodeColor(StrEnum):
    """Graphviz colors for the node states written by SCIP's VBC output."""

    UNSOLVED = "gold3"  # newly created, unsolved nodes
    SOLVED = "blue"  # solved nodes
    CUTOFF = "red"  # nodes that were cut off
    CONFLICT = "sandybrown"  # a conflict constraint was found
    MARKREPROP = "gray"  # marked to be repropagated
    REPROP = "steelblue"  # repropagated nodes
    SOLUTION = "palegreen"  # solved nodes where a solution has been found
    NONE = "black"  # color should not be changed
    OPTIMAL = "green"
    INFERIOR = "plum"


# VBC color code -> node color
COLOR_CODES = {
    "3": NodeColor.UNSOLVED,
    "2": NodeColor.SOLVED,
    "4": NodeColor.CUTOFF,
    "15": NodeColor.CONFLICT,
    "11": NodeColor.MARKREPROP,
    "12": NodeColor.REPROP,
    "14": NodeColor.SOLUTION,
    "-1": NodeColor.NONE,
    "5": NodeColor.OPTIMAL,
    "99": NodeColor.INFERIOR,
}

SOLUTION_FILL = "palegreen"

ROOT_ID = 1
NO_PARENT_ID = 0

# Initial bound magnitude for a fresh node
BOUND_SENTINEL = 1.0e99

# Values above this magnitude are treated as unbounded
UNBOUNDED_THRESHOLD = 0.99e20
UNBOUNDED_LABEL = "--"

DEFAULT_SIG_DIGITS = 8
NICE_MAX_LENGTH = 8

RANKDIRS = ("TB", "LR", "BT", "RL")
