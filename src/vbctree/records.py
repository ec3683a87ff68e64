"""
VBC Record Parsing

Turns lines of a SCIP VBC file into typed records. One record per line:

    N <father> <new node> <color>        new node
    D <father> <new node> <color> <flag> new node (display flag ignored)
    P <node> <color>                     recolor node
    I <node> <info>                      node information
    A <node> <info>                      additional node information (solutions)
    U <value> / L <value>                new primal bound (min / max problems)

Lines may be prefixed by a ``hh:mm:ss.cc`` timestamp; lines starting with
``#`` are comments.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .constants import COLOR_CODES, NO_PARENT_ID, NodeColor, ProblemSense
from .errors import ConfigError, ParseError
from .numeric import sig_round_nice

logger = logging.getLogger(__name__)

_TIMESTAMP = re.compile(r"^\d+:\d+:\d+(?:\.\d+)?$")

# Info fields are separated by escaped \t, \i, \n sequences, tabs or pipes
_FIELD_SEP = re.compile(r"\\t|\\i|\\n|\t|\|")

_BRANCH = re.compile(r"(.*) (\[.*\]) ([<=>]*) (.*)")

_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# Field positions within an "I" record
INFO_ID_FIELD = 0
INFO_DEPTH_FIELD = 4
INFO_BRANCH_FIELD = 6
INFO_BOUND_FIELD = 8


@dataclass(frozen=True)
class NewNode:
    line: int
    parent_id: Optional[int]  # None for the root
    node_id: int
    color: NodeColor


@dataclass(frozen=True)
class NewColor:
    line: int
    node_id: int
    color: NodeColor


@dataclass(frozen=True)
class NodeInfo:
    line: int
    node_id: int
    depth: Optional[str]
    branch: Optional[str]
    dual_bound: float


@dataclass(frozen=True)
class SolutionInfo:
    line: int
    node_id: int
    info: str
    objective: float


@dataclass(frozen=True)
class BoundUpdate:
    line: int
    kind: str  # "U" (upper, minimization) or "L" (lower, maximization)
    value: float


Record = Union[NewNode, NewColor, NodeInfo, SolutionInfo, BoundUpdate]


def _split_tag(text: str) -> Tuple[str, str]:
    parts = text.split(None, 1)
    if parts and _TIMESTAMP.match(parts[0]):
        parts = parts[1].split(None, 1) if len(parts) > 1 else []
    if not parts:
        return "", ""
    return parts[0], parts[1] if len(parts) > 1 else ""


def _parse_int(token: str, line_number: int, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ParseError(line_number, token, f"is not a valid {what}") from None


def _parse_float(token: str, line_number: int, what: str) -> float:
    try:
        return float(token)
    except ValueError:
        raise ParseError(line_number, token, f"is not a valid {what}") from None


def _parse_color(code: str, line_number: int) -> NodeColor:
    if code not in COLOR_CODES:
        raise ParseError(line_number, code, "is not a known color code")
    return COLOR_CODES[code]


def _tokens(tag: str, rest: str, count: int, line_number: int) -> List[str]:
    tokens = rest.split()
    if len(tokens) < count:
        raise ParseError(line_number, tag, f"expects {count} fields, got {len(tokens)}")
    return tokens


def format_branch(branch: str) -> str:
    """Rewrite ``"x [0,1] <= 0.5"`` as ``"x in [0,1]\\nx <= 0.5"``."""
    match = _BRANCH.match(branch)
    if match is None:
        return branch
    var, domain, op, value = match.groups()
    try:
        value = sig_round_nice(float(value))
    except ValueError:
        pass
    return f"{var} in {domain}\n{var} {op} {value}"


def _new_node(tag: str, rest: str, line_number: int) -> NewNode:
    father, name, color = _tokens(tag, rest, 3, line_number)[:3]
    parent_id = _parse_int(father, line_number, "father id")
    record = NewNode(
        line=line_number,
        parent_id=None if parent_id == NO_PARENT_ID else parent_id,
        node_id=_parse_int(name, line_number, "node id"),
        color=_parse_color(color, line_number),
    )
    logger.debug(
        f"newNode {record.node_id:>5}: color = {record.color:>10} father = {parent_id:>5}"
    )
    return record


def _new_color(tag: str, rest: str, line_number: int) -> NewColor:
    name, color = _tokens(tag, rest, 2, line_number)[:2]
    record = NewColor(
        line=line_number,
        node_id=_parse_int(name, line_number, "node id"),
        color=_parse_color(color, line_number),
    )
    logger.debug(f"newNodeColor for node {record.node_id:>5}: color = {record.color:>10}")
    return record


def _node_info(tag: str, rest: str, line_number: int) -> NodeInfo:
    fields = _FIELD_SEP.split(rest.strip())
    if len(fields) <= INFO_BOUND_FIELD:
        raise ParseError(
            line_number, tag, f"expects {INFO_BOUND_FIELD + 1} fields, got {len(fields)}"
        )
    depth = fields[INFO_DEPTH_FIELD].strip() or None
    branch = fields[INFO_BRANCH_FIELD].strip()
    record = NodeInfo(
        line=line_number,
        node_id=_parse_int(fields[INFO_ID_FIELD].strip(), line_number, "node id"),
        depth=depth,
        branch=format_branch(branch) if branch else None,
        dual_bound=_parse_float(
            fields[INFO_BOUND_FIELD].strip(), line_number, "dual bound"
        ),
    )
    logger.debug(
        f"newNodeInfo for node {record.node_id:>5}: depth = {depth} "
        f"dualBound = {sig_round_nice(record.dual_bound)} branch = {record.branch!r}"
    )
    return record


def _solution_info(tag: str, rest: str, line_number: int) -> SolutionInfo:
    fields = _FIELD_SEP.split(rest.strip())
    head = fields[0].split(None, 1)
    if not head:
        raise ParseError(line_number, tag, "is missing a node id")
    # Without separators the info text follows the node id on the same field
    parts = head[1:] + fields[1:]
    info = " ".join(part.strip() for part in parts if part.strip())
    match = _NUMBER.search(info)
    if match is None:
        raise ParseError(line_number, info or tag, "contains no objective value")
    record = SolutionInfo(
        line=line_number,
        node_id=_parse_int(head[0], line_number, "node id"),
        info=info,
        objective=float(match.group(0)),
    )
    logger.debug(
        f"moreNodeInfo for node {record.node_id:>5}: objVal = {record.objective} info = {info}"
    )
    return record


def _bound_update(tag: str, rest: str, line_number: int) -> BoundUpdate:
    value = _tokens(tag, rest, 1, line_number)[0]
    record = BoundUpdate(
        line=line_number, kind=tag, value=_parse_float(value, line_number, "bound")
    )
    logger.debug(f"newPrimalBound ({tag}): primalBound = {record.value}")
    return record


_PARSERS = {
    "N": _new_node,
    "D": _new_node,
    "P": _new_color,
    "I": _node_info,
    "A": _solution_info,
    "U": _bound_update,
    "L": _bound_update,
}


def parse_line(text: str, line_number: int) -> Optional[Record]:
    """
    Parse a single VBC line.

    Args:
        text: The raw line, with or without trailing newline
        line_number: 1-based line number, attached to records and errors

    Returns:
        The typed record, or None for blank and comment lines

    Raises:
        ParseError: If the tag is unknown or a field is malformed
    """
    stripped = text.strip()
    if not stripped or stripped.startswith("#"):
        return None
    tag, rest = _split_tag(stripped)
    parser = _PARSERS.get(tag)
    if parser is None:
        raise ParseError(line_number, tag or stripped)
    return parser(tag, rest, line_number)


def parse_log(lines: Iterable[str]) -> Iterator[Record]:
    """Lazily parse VBC lines in order, skipping comments."""
    for line_number, text in enumerate(lines, start=1):
        record = parse_line(text, line_number)
        if record is not None:
            yield record


def _is_bound_line(text: str, tag: str) -> bool:
    stripped = text.strip()
    if not stripped or stripped.startswith("#"):
        return False
    found, rest = _split_tag(stripped)
    if found != tag:
        return False
    tokens = rest.split()
    if not tokens:
        return False
    try:
        float(tokens[0])
    except ValueError:
        return False
    return True


def detect_sense(lines: Iterable[str]) -> ProblemSense:
    """
    Decide the problem sense from the primal bound records of a log.

    Any "U" record means minimization; otherwise any "L" record means
    maximization.

    Raises:
        ConfigError: If the log contains neither kind of record
    """
    has_lower = False
    for text in lines:
        if _is_bound_line(text, "U"):
            return ProblemSense.MINIMIZE
        if not has_lower and _is_bound_line(text, "L"):
            has_lower = True
    if has_lower:
        return ProblemSense.MAXIMIZE
    raise ConfigError(
        "No primal bound exists in the log. Cannot decide if this is a "
        "maximization or minimization problem; specify the problem sense explicitly."
    )
