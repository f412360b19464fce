"""Formatting utilities for converting rich text into styled runs."""

from pptx_richtext.formatting.ir import (
    Align,
    Bullet,
    BulletKind,
    ListContext,
    MarkKind,
    MarkToken,
    StyledRun,
    StyleSet,
    Underline,
    UnderlineVariant,
    runs_plain_text,
)
from pptx_richtext.formatting.parser import MarkdownParser
from pptx_richtext.formatting.html_walker import HTMLRunConverter, TagKind, convert_html
from pptx_richtext.formatting.html_markdown import html_to_markdown
from pptx_richtext.formatting.display import format_runs, runs_from_data, runs_to_data

__all__ = [
    "Align",
    "Bullet",
    "BulletKind",
    "ListContext",
    "MarkKind",
    "MarkToken",
    "StyledRun",
    "StyleSet",
    "Underline",
    "UnderlineVariant",
    "runs_plain_text",
    "MarkdownParser",
    "HTMLRunConverter",
    "TagKind",
    "convert_html",
    "html_to_markdown",
    "format_runs",
    "runs_from_data",
    "runs_to_data",
]
