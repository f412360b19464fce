"""Degrade HTML to the Markdown notation understood by MarkdownParser."""

import re
from typing import Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from pptx_richtext.formatting.html_walker import (
    BOLD_STYLE_PATTERN,
    ITALIC_STYLE_PATTERN,
    STRIKE_STYLE_PATTERN,
    UNDERLINE_STYLE_PATTERN,
    TagKind,
    parse_html,
)

EXCESS_NEWLINES_PATTERN = re.compile(r"\n\s*\n\s*\n")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Inline-style spans map to a single mark; the first declaration found wins
SPAN_DELIMITERS: tuple[tuple[re.Pattern, str, str], ...] = (
    (BOLD_STYLE_PATTERN, "**", "**"),
    (ITALIC_STYLE_PATTERN, "*", "*"),
    (UNDERLINE_STYLE_PATTERN, "<u>", "</u>"),
    (STRIKE_STYLE_PATTERN, "~~", "~~"),
)

TAG_DELIMITERS: dict[TagKind, tuple[str, str]] = {
    TagKind.BOLD: ("**", "**"),
    TagKind.ITALIC: ("*", "*"),
    TagKind.UNDERLINE: ("<u>", "</u>"),
    TagKind.STRIKE: ("~~", "~~"),
    TagKind.BLOCK: ("", "\n\n"),
    TagKind.HEADING: ("**", "**\n\n"),
}


def html_to_markdown(html: Optional[str]) -> str:
    """Convert an HTML fragment to Markdown-style notation.

    The result is normalized aggressively: three or more newlines
    collapse to two, the ends are trimmed, and then every whitespace run
    (newlines included) becomes a single space. Soft line breaks inside
    paragraphs are therefore not preserved.
    """
    if not html:
        return ""

    markdown = _render_children(parse_html(html))
    markdown = EXCESS_NEWLINES_PATTERN.sub("\n\n", markdown)
    markdown = markdown.strip()
    return WHITESPACE_PATTERN.sub(" ", markdown)


def _render_children(node: Union[BeautifulSoup, Tag]) -> str:
    parts: list[str] = []

    for child in node.children:
        if isinstance(child, NavigableString):
            if not isinstance(child, PreformattedString):
                parts.append(str(child))
            continue
        if not isinstance(child, Tag):
            continue

        kind = TagKind.of(child.name)
        if kind is TagKind.BREAK:
            parts.append("\n")
            continue

        content = _render_children(child)
        # Elements without visible text contribute nothing
        if not content.strip():
            continue

        if kind is TagKind.SPAN:
            opening, closing = _span_delimiters(child.get("style") or "")
        else:
            opening, closing = TAG_DELIMITERS.get(kind, ("", ""))
        parts.append(f"{opening}{content}{closing}")

    return "".join(parts)


def _span_delimiters(declarations: str) -> tuple[str, str]:
    for pattern, opening, closing in SPAN_DELIMITERS:
        if pattern.search(declarations):
            return opening, closing
    return "", ""
