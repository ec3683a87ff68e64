"""
Rendering Backends

The renderer turns a DOT description into image files. It is invoked by the
run orchestrator and blocks until Graphviz has finished.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence, Tuple

import graphviz

from .errors import RenderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    source_path: Path
    outputs: Tuple[Path, ...]


class Renderer(Protocol):
    def render(self, source: str, stem: str, formats: Sequence[str]) -> RenderResult:
        ...


class GraphvizRenderer:
    """Write ``<stem>.dot`` and lay it out with the Graphviz executables."""

    def __init__(self, directory: str | Path = ".", engine: str = "dot"):
        self.directory = Path(directory)
        self.engine = engine

    def render(self, source: str, stem: str, formats: Sequence[str]) -> RenderResult:
        self.directory.mkdir(parents=True, exist_ok=True)
        src = graphviz.Source(
            source, filename=f"{stem}.dot", directory=self.directory, engine=self.engine
        )
        source_path = Path(src.save())
        outputs = []
        for fmt in formats:
            outfile = self.directory / f"{stem}.{fmt}"
            logger.info(f"Execute {self.engine} -T{fmt} {source_path} -o {outfile}")
            try:
                outputs.append(Path(src.render(outfile=outfile, format=fmt)))
            except graphviz.ExecutableNotFound as e:
                logger.warning(f"Graphviz executable '{self.engine}' not found")
                raise RenderError(f"Graphviz executable '{self.engine}' not found") from e
            except subprocess.CalledProcessError as e:
                logger.warning(f"Rendering {outfile} failed with exit code {e.returncode}")
                raise RenderError(f"Rendering {outfile} failed: {e}") from e
        return RenderResult(source_path=source_path, outputs=tuple(outputs))
