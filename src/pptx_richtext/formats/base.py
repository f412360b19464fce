"""Abstract base class for document format handlers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pptx_richtext.formatting.ir import StyledRun, StyleSet


class FormatHandler(ABC):
    """Abstract base class for document format handlers.

    Each handler reads a document into the text a conversion pipeline
    accepts, and writes a run sequence back out in its own format.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., ('.html',))."""
        ...

    @abstractmethod
    def read(self, path: Path) -> str:
        """Extract convertible text from a document.

        Args:
            path: Path to the input document

        Returns:
            Markdown-style text or an HTML fragment
        """
        ...

    @abstractmethod
    def write(self, runs: list[StyledRun], path: Path) -> None:
        """Write a run sequence to file.

        Args:
            runs: The styled runs to render
            path: Path to write the output document
        """
        ...


@dataclass
class Paragraph:
    """Runs between two line boundaries, with paragraph-level styling.

    Attributes:
        runs: Text runs, newline-free
        style: Bullet, indent, alignment and spacing of the paragraph
    """

    runs: list[StyledRun] = field(default_factory=list)
    style: Optional[StyleSet] = None

    @property
    def plain_text(self) -> str:
        return "".join(run.text for run in self.runs)


def _paragraph_style(style: Optional[StyleSet]) -> Optional[StyleSet]:
    if style is None:
        return None
    para = StyleSet(
        align=style.align,
        indent_level=style.indent_level,
        bullet=style.bullet,
        para_space_after=style.para_space_after,
    )
    return None if para.is_empty else para


def split_paragraphs(runs: list[StyledRun]) -> list[Paragraph]:
    """Group a flat run sequence into paragraphs.

    Break sentinels and embedded newlines end the current paragraph, and
    a run carrying a list marker always starts a new one. The first run
    contributing paragraph-level attributes (bullet, indent, alignment,
    spacing) decides the paragraph's style. A trailing empty paragraph is
    dropped.
    """
    paragraphs: list[Paragraph] = [Paragraph()]

    for run in runs:
        if run.is_break:
            paragraphs.append(Paragraph())
            continue

        if run.has_bullet and paragraphs[-1].runs:
            paragraphs.append(Paragraph())

        for index, piece in enumerate(run.text.split("\n")):
            if index > 0:
                paragraphs.append(Paragraph())
            if not piece:
                continue
            current = paragraphs[-1]
            if current.style is None:
                current.style = _paragraph_style(run.style)
            current.runs.append(run.with_text(piece))

    if len(paragraphs) > 1 and not paragraphs[-1].runs:
        paragraphs.pop()
    if len(paragraphs) == 1 and not paragraphs[0].runs:
        return []
    return paragraphs
