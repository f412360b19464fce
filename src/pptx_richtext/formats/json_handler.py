"""JSON run-sequence file handler."""

import json
from pathlib import Path

from pptx_richtext.config import get_settings
from pptx_richtext.formats.base import FormatHandler
from pptx_richtext.formatting.display import format_runs, runs_from_data
from pptx_richtext.formatting.ir import StyledRun
from pptx_richtext.formatting.parser import MarkdownParser


class JSONHandler(FormatHandler):
    """Handler for serialized run sequences (.json).

    The file holds a list of ``{"text": ..., "options": {...}}`` objects,
    the shape slide libraries such as PptxGenJS accept directly.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".json",)

    def read(self, path: Path) -> str:
        """Read the serialized runs back as Markdown-style text."""
        return MarkdownParser().to_markdown(self.load_runs(path))

    def load_runs(self, path: Path) -> list[StyledRun]:
        """Load a run sequence from file."""
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON list of runs in {path}")
        return runs_from_data(data)

    def write(self, runs: list[StyledRun], path: Path) -> None:
        """Write runs as formatted JSON."""
        content = format_runs(runs, indent=get_settings().display_indent)
        path.write_text(content + "\n", encoding="utf-8")
