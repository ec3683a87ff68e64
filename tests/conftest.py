from pathlib import Path

import pytest

from vbctree.render import RenderResult


class FakeRenderer:
    """Collects render calls instead of invoking Graphviz."""

    def __init__(self):
        self.calls = []

    def render(self, source, stem, formats):
        self.calls.append((source, stem, tuple(formats)))
        return RenderResult(
            source_path=Path(f"{stem}.dot"),
            outputs=tuple(Path(f"{stem}.{fmt}") for fmt in formats),
        )

    @property
    def stems(self):
        return [stem for _, stem, _ in self.calls]


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def write_log(tmp_path):
    """Write lines to a VBC file in a temporary directory."""

    def _write(lines, name="tree.vbc"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write
