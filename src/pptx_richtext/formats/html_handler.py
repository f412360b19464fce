"""HTML fragment file handler."""

from html import escape
from pathlib import Path
from typing import Optional

from pptx_richtext.formats.base import FormatHandler, Paragraph, split_paragraphs
from pptx_richtext.formatting.ir import Align, BulletKind, StyledRun


class HTMLHandler(FormatHandler):
    """Handler for HTML (.html, .htm) fragments.

    Reads markup as-is for the HTML pipeline. Writes runs as a fragment
    in the markup the HTML pipeline reads back: one <p> per paragraph,
    nested <ul>/<ol> for list items, inline marks as tags.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".html", ".htm")

    def read(self, path: Path) -> str:
        """Read HTML markup from file."""
        return path.read_text(encoding="utf-8")

    def write(self, runs: list[StyledRun], path: Path) -> None:
        """Write runs as an HTML fragment."""
        path.write_text(self.render(runs), encoding="utf-8")

    def render(self, runs: list[StyledRun]) -> str:
        """Render runs as an HTML fragment string."""
        parts: list[str] = []
        # Open lists as (tag, level), innermost last; each has an open <li>
        open_lists: list[tuple[str, int]] = []

        for paragraph in split_paragraphs(runs):
            if not paragraph.runs:
                continue
            style = paragraph.style
            content = self._render_inline(paragraph)

            if style is None or style.bullet is None:
                while open_lists:
                    tag, _ = open_lists.pop()
                    parts.append(f"</li></{tag}>")
                parts.append(f"<p{self._align_attr(style and style.align)}>{content}</p>")
                continue

            tag = "ol" if style.bullet.kind is BulletKind.NUMBER else "ul"
            level = style.indent_level or 0

            while open_lists and open_lists[-1][1] > level:
                closed, _ = open_lists.pop()
                parts.append(f"</li></{closed}>")
            if open_lists and open_lists[-1][1] == level:
                if open_lists[-1][0] == tag:
                    parts.append("</li>")
                else:
                    closed, _ = open_lists.pop()
                    parts.append(f"</li></{closed}>")
            if not open_lists or open_lists[-1][1] < level:
                parts.append(f"<{tag}>")
                open_lists.append((tag, level))

            parts.append(f"<li{self._align_attr(style.align)}>{content}")

        while open_lists:
            tag, _ = open_lists.pop()
            parts.append(f"</li></{tag}>")

        return "".join(parts)

    @staticmethod
    def _align_attr(align: Optional[Align]) -> str:
        if align is None or align is Align.LEFT:
            return ""
        return f' class="align-{align.value}"'

    @staticmethod
    def _render_inline(paragraph: Paragraph) -> str:
        pieces: list[str] = []

        for run in paragraph.runs:
            text = escape(run.text, quote=False)
            style = run.style
            if style is not None:
                if style.strike:
                    text = f"<s>{text}</s>"
                if style.underline is not None:
                    text = f"<u>{text}</u>"
                if style.italic:
                    text = f"<em>{text}</em>"
                if style.bold:
                    text = f"<strong>{text}</strong>"
                if style.font_size is not None:
                    text = f'<span style="font-size: {style.font_size}pt">{text}</span>'
            pieces.append(text)

        return "".join(pieces)
