"""
Run Orchestration

Reads a VBC log, replays it through a TreeStateMachine and hands snapshots
to a renderer: every ``frequency`` records while replaying, and once more
for the final tree.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .constants import RANKDIRS, ProblemSense
from .dot import to_dot
from .errors import ConfigError
from .machine import GraphSnapshot, TreeStateMachine
from .records import detect_sense, parse_log
from .render import GraphvizRenderer, Renderer, RenderResult

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    log_path: Path
    output: Optional[str] = None  # defaults to the log file name without suffix
    rankdir: str = "TB"
    legend: bool = False
    delay: float = 0.0
    frequency: Optional[int] = None  # None: render the final tree only
    sense: Optional[ProblemSense] = None  # None: detect from the log
    formats: Tuple[str, ...] = ("pdf",)

    def __post_init__(self):
        self.log_path = Path(self.log_path)
        if self.output is None:
            self.output = self.log_path.stem
        if self.rankdir not in RANKDIRS:
            raise ConfigError(
                f"rankdir must be one of {', '.join(RANKDIRS)}, got '{self.rankdir}'"
            )
        if self.delay < 0:
            raise ConfigError(f"delay must be non-negative, got {self.delay}")
        if self.frequency is not None and self.frequency < 1:
            raise ConfigError(f"frequency must be a positive integer, got {self.frequency}")
        if self.sense is not None:
            try:
                self.sense = ProblemSense(self.sense)
            except ValueError:
                raise ConfigError(
                    f"Problem sense must be 'min' or 'max', got '{self.sense}'"
                ) from None
        self.formats = tuple(self.formats)

    @classmethod
    def from_options(cls, options: Dict[str, object]) -> "RunConfig":
        """
        Build a config from a dict of options.

        Options:
            - log_path: VBC file to read (required)
            - output: Base name of generated files (default: log file stem)
            - rankdir: "TB", "LR", "BT" or "RL" (default: "TB")
            - legend: Prepend a legend subgraph (default: False)
            - delay: Seconds to wait after each intermediate render (default: 0)
            - frequency: Render every n-th record (default: None, final only)
            - sense: "min" or "max" (default: None, detected from the log)
            - formats: Output formats passed to Graphviz (default: ("pdf",))
        """
        options = dict(options)
        if "log_path" not in options:
            raise ConfigError("No VBC file given")
        log_path = Path(str(options.pop("log_path")))
        output = options.pop("output", None)
        rankdir = str(options.pop("rankdir", "TB"))
        legend = bool(options.pop("legend", False))
        delay = float(options.pop("delay", 0.0))
        frequency = options.pop("frequency", None)
        sense = options.pop("sense", None)
        formats = options.pop("formats", None) or ("pdf",)
        if options:
            raise ConfigError(f"Unknown options: {', '.join(sorted(options))}")
        return cls(
            log_path=log_path,
            output=None if output is None else str(output),
            rankdir=rankdir,
            legend=legend,
            delay=delay,
            frequency=None if frequency is None else int(frequency),
            sense=sense,
            formats=tuple(formats),
        )


@dataclass
class RunSummary:
    sense: ProblemSense
    records_applied: int
    snapshot: GraphSnapshot
    renders: List[RenderResult] = field(default_factory=list)


def resolve_sense(config: RunConfig, lines: Sequence[str]) -> ProblemSense:
    if config.sense is not None:
        return config.sense
    sense = detect_sense(lines)
    logger.info(f"Detected '{sense}' problem from primal bound records")
    return sense


def run(
    config: RunConfig,
    renderer: Optional[Renderer] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunSummary:
    """
    Replay the log of ``config`` and render its snapshots.

    Any parse, tree or render error aborts the run; nothing is rendered for
    the record that failed.
    """
    if renderer is None:
        renderer = GraphvizRenderer(config.log_path.parent)

    lines = config.log_path.read_text().splitlines()
    sense = resolve_sense(config, lines)
    machine = TreeStateMachine(sense)
    renders: List[RenderResult] = []

    def emit(stem: str) -> GraphSnapshot:
        snapshot = machine.snapshot()
        source = to_dot(snapshot, rankdir=config.rankdir, legend=config.legend)
        renders.append(renderer.render(source, stem, config.formats))
        return snapshot

    for record in parse_log(lines):
        machine.apply(record)
        if config.frequency is not None and machine.records_applied % config.frequency == 0:
            emit(f"{config.output}_{machine.records_applied:05d}")
            if config.delay:
                sleep(config.delay)

    snapshot = emit(config.output)
    logger.info(
        f"Processed {machine.records_applied} records, {len(machine.store)} nodes, "
        f"incumbent {snapshot.incumbent}"
    )
    return RunSummary(
        sense=sense,
        records_applied=machine.records_applied,
        snapshot=snapshot,
        renders=renders,
    )
