"""
Error Taxonomy

Every error raised here is fatal for a run: once a record has failed to
apply, the tree can no longer be trusted for bound propagation.
"""

from __future__ import annotations

from typing import Optional


class VbcError(Exception):
    """Base class for all errors raised by vbctree."""


class ConfigError(VbcError, ValueError):
    """The run cannot be configured (e.g. the problem sense is unknown)."""


class ParseError(VbcError, ValueError):
    """A log line could not be turned into a record."""

    def __init__(
        self, line_number: int, token: str, reason: str = "is not a recognized record identifier"
    ):
        self.line_number = line_number
        self.token = token
        self.reason = reason
        super().__init__(f"{token!r} in line {line_number} {reason}")


class TreeError(VbcError):
    """A record is inconsistent with the current tree."""

    def __init__(self, node_id: int, message: str, line_number: Optional[int] = None):
        self.node_id = node_id
        self.line_number = line_number
        self.message = message
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line_number is None:
            return self.message
        return f"{self.message} (line {self.line_number})"

    def at_line(self, line_number: int) -> "TreeError":
        """Attach the offending log line number."""
        self.line_number = line_number
        self.args = (self._format(),)
        return self

    # KeyError quotes its argument in str(); keep the plain message
    def __str__(self) -> str:
        return self._format()


class DuplicateNodeError(TreeError, KeyError):
    def __init__(self, node_id: int, line_number: Optional[int] = None):
        super().__init__(node_id, f"Node {node_id} already exists", line_number)


class MissingParentError(TreeError, KeyError):
    def __init__(self, node_id: int, parent_id: int, line_number: Optional[int] = None):
        self.parent_id = parent_id
        super().__init__(
            node_id,
            f"Father {parent_id} of node {node_id} has not been created",
            line_number,
        )


class UnknownNodeError(TreeError, KeyError):
    def __init__(self, node_id: int, line_number: Optional[int] = None):
        super().__init__(node_id, f"Node {node_id} was never created", line_number)


class RenderError(VbcError, RuntimeError):
    """The external graph renderer failed."""
