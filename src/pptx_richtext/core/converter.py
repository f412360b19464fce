"""Main rich-text conversion orchestrator."""

import logging
import re
from enum import Enum
from typing import Optional, Union

from pptx_richtext.config import Settings, get_settings
from pptx_richtext.formatting.display import format_runs
from pptx_richtext.formatting.html_markdown import html_to_markdown
from pptx_richtext.formatting.html_walker import HTMLRunConverter
from pptx_richtext.formatting.ir import StyledRun
from pptx_richtext.formatting.parser import MarkdownParser

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """Error during rich-text conversion."""

    pass


class InputKind(str, Enum):
    """Which pipeline handles an input document."""

    AUTO = "auto"
    MARKDOWN = "markdown"
    HTML = "html"
    # Degrade HTML to Markdown notation, then tokenize
    HTML_MARKDOWN = "html-markdown"


# Any recognised tag other than <u>, which is also Markdown underline notation
HTML_TAG_PATTERN = re.compile(
    r"</?(?:p|div|br|span|strong|b|em|i|s|strike|del|ul|ol|li|h[1-6])\b[^>]*>",
    re.IGNORECASE,
)

# What an editor holds when it has been cleared
EMPTY_EDITOR_DOCUMENTS = frozenset({"<p><br></p>", "<p><br/></p>", "<p></p>"})


def detect_input_kind(text: str) -> InputKind:
    """Guess whether text is editor HTML or Markdown-style plain text."""
    if HTML_TAG_PATTERN.search(text):
        return InputKind.HTML
    return InputKind.MARKDOWN


class RichTextConverter:
    """Orchestrates the rich-text conversion pipelines.

    Pipelines:
    - markdown: split lines, tokenize inline marks
    - html: walk the parsed tree, inheriting styles downward
    - html-markdown: degrade HTML to Markdown notation, then tokenize

    Every call builds fresh state; a converter holds only configuration.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        input_kind: Union[InputKind, str] = InputKind.AUTO,
    ) -> None:
        """Initialize the converter.

        Args:
            settings: Configuration (default: global settings)
            input_kind: Pipeline to use when a call does not name one
        """
        self.settings = settings or get_settings()
        self.input_kind = InputKind(input_kind)
        self.markdown_parser = MarkdownParser(
            underline_variant=self.settings.underline_variant
        )
        self.html_converter = HTMLRunConverter(self.settings)

    def convert(
        self,
        text: Optional[str],
        input_kind: Union[InputKind, str, None] = None,
    ) -> list[StyledRun]:
        """Convert a document to styled runs.

        Args:
            text: Markdown-flavoured text or an HTML fragment
            input_kind: Pipeline override for this call

        Returns:
            Ordered list of StyledRun objects (empty for empty input)

        Raises:
            ConversionError: If the pipeline fails; no partial result is kept
        """
        if not text or not text.strip():
            return []
        if text.strip() in EMPTY_EDITOR_DOCUMENTS:
            return []

        kind = InputKind(input_kind or self.input_kind)
        if kind is InputKind.AUTO:
            kind = detect_input_kind(text)

        logger.debug("Converting %d character(s) with the %s pipeline", len(text), kind.value)

        try:
            if kind is InputKind.HTML:
                runs = self.html_converter.convert_html(text)
            elif kind is InputKind.HTML_MARKDOWN:
                runs = self.markdown_parser.convert(html_to_markdown(text))
            else:
                runs = self.markdown_parser.convert(text)
        except Exception as e:
            raise ConversionError(f"Failed to convert {kind.value} input: {e}") from e

        logger.debug("Produced %d run(s)", len(runs))
        return runs

    def convert_markdown(self, text: Optional[str]) -> list[StyledRun]:
        """Convert Markdown-style text."""
        return self.convert(text, InputKind.MARKDOWN)

    def convert_html(self, html: Optional[str]) -> list[StyledRun]:
        """Convert an editor HTML fragment."""
        return self.convert(html, InputKind.HTML)

    def format(self, runs: list[StyledRun], compact: bool = False) -> str:
        """Render runs for display."""
        return format_runs(runs, indent=self.settings.display_indent, compact=compact)

    def convert_to_display(
        self,
        text: Optional[str],
        input_kind: Union[InputKind, str, None] = None,
        compact: bool = False,
    ) -> str:
        """Convert text and render the result for display."""
        return self.format(self.convert(text, input_kind), compact=compact)


def get_sample_rich_text() -> str:
    """Sample Markdown-style rich text exercising every inline mark."""
    return """This is **bold text**, and this is *italic text*.

Here's some ~~strikethrough~~ text and <u>underlined</u> text.

You can combine **bold and *italic* together**.

Multiple lines
with breaks
work too!"""


def get_sample_html() -> str:
    """Sample editor HTML exercising headings, lists and inline marks."""
    return (
        "<h2>Quarterly update</h2>"
        "<p>Revenue is <strong>up</strong> and costs are <em>down</em>.</p>"
        '<p class="ql-align-center"><u>Highlights</u></p>'
        "<ul><li>New <s>office</s> HQ<ul><li>Opens in May</li></ul></li>"
        "<li>Hiring</li></ul>"
        "<ol><li>Plan</li><li>Execute</li></ol>"
    )
