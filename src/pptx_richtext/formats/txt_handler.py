"""Plain text / Markdown file handler."""

from pathlib import Path

from pptx_richtext.formats.base import FormatHandler, split_paragraphs
from pptx_richtext.formatting.ir import BulletKind, StyledRun
from pptx_richtext.formatting.parser import wrap_markdown


class TXTHandler(FormatHandler):
    """Handler for plain text (.txt) and Markdown (.md) files.

    Text files carry formatting via the inline notation the Markdown
    pipeline reads:
    - **bold** for bold text
    - *italic* for italic text
    - ~~strike~~ for strikethrough
    - <u>underline</u> for underlined text
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".txt", ".md")

    def read(self, path: Path) -> str:
        """Read plain text from file."""
        return path.read_text(encoding="utf-8")

    def write(self, runs: list[StyledRun], path: Path) -> None:
        """Write runs as Markdown-styled plain text.

        Each paragraph becomes one line. List items get a "- " or "1. "
        prefix indented two spaces per level.
        """
        lines: list[str] = []

        for paragraph in split_paragraphs(runs):
            prefix = ""
            style = paragraph.style
            if style is not None and style.bullet is not None:
                indent = "  " * (style.indent_level or 0)
                marker = "1." if style.bullet.kind is BulletKind.NUMBER else "-"
                prefix = f"{indent}{marker} "

            lines.append(prefix + "".join(wrap_markdown(run) for run in paragraph.runs))

        path.write_text("\n".join(lines), encoding="utf-8")
