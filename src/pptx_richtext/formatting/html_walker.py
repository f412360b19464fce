"""HTML tree walker producing styled runs from editor markup.

Walks a BeautifulSoup tree depth-first. Each element derives a new,
immutable style context from its parent's, so formatting flows down to
descendant text but never sideways into siblings. Lists are handled by a
dedicated routine that attaches bullet/number markers and indentation to
the first run of every item.
"""

import logging
import re
from dataclasses import replace
from enum import Enum
from typing import Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from pptx_richtext.config import Settings, get_settings
from pptx_richtext.formatting.ir import (
    Align,
    ListContext,
    RunBuffer,
    StyledRun,
    StyleSet,
    Underline,
    UnderlineVariant,
)

logger = logging.getLogger(__name__)


class TagKind(Enum):
    """Closed set of tag behaviours recognised by the walker."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKE = "strike"
    SPAN = "span"
    BLOCK = "block"
    BREAK = "break"
    UNORDERED_LIST = "unordered_list"
    ORDERED_LIST = "ordered_list"
    LIST_ITEM = "list_item"
    HEADING = "heading"
    PASSTHROUGH = "passthrough"

    @classmethod
    def of(cls, tag_name: Optional[str]) -> "TagKind":
        """Classify a tag name; unknown tags are transparent."""
        return _TAG_KINDS.get((tag_name or "").lower(), cls.PASSTHROUGH)


_TAG_KINDS: dict[str, TagKind] = {
    "strong": TagKind.BOLD,
    "b": TagKind.BOLD,
    "em": TagKind.ITALIC,
    "i": TagKind.ITALIC,
    "u": TagKind.UNDERLINE,
    "s": TagKind.STRIKE,
    "strike": TagKind.STRIKE,
    "del": TagKind.STRIKE,
    "span": TagKind.SPAN,
    "p": TagKind.BLOCK,
    "div": TagKind.BLOCK,
    "br": TagKind.BREAK,
    "ul": TagKind.UNORDERED_LIST,
    "ol": TagKind.ORDERED_LIST,
    "li": TagKind.LIST_ITEM,
    **{f"h{level}": TagKind.HEADING for level in range(1, 7)},
}

# Inline CSS declarations understood on <span>
BOLD_STYLE_PATTERN = re.compile(r"font-weight:\s*bold", re.IGNORECASE)
ITALIC_STYLE_PATTERN = re.compile(r"font-style:\s*italic", re.IGNORECASE)
UNDERLINE_STYLE_PATTERN = re.compile(r"text-decoration:\s*underline", re.IGNORECASE)
STRIKE_STYLE_PATTERN = re.compile(r"text-decoration:\s*line-through", re.IGNORECASE)
FONT_SIZE_PATTERN = re.compile(r"font-size:\s*(\d+(?:\.\d+)?)\s*pt", re.IGNORECASE)
INDENT_CLASS_PATTERN = re.compile(r"ql-indent-(\d+)")

# Checked in this order; a class such as "ql-align-center" also matches
ALIGN_CLASS_SUFFIXES: tuple[tuple[str, Align], ...] = (
    ("align-justify", Align.JUSTIFY),
    ("align-center", Align.CENTER),
    ("align-right", Align.RIGHT),
)


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML fragment with the stdlib-backed parser."""
    return BeautifulSoup(html, "html.parser")


def span_style(declarations: str, underline: Underline) -> StyleSet:
    """Translate an inline ``style`` attribute into style flags."""
    changes: dict = {}
    if BOLD_STYLE_PATTERN.search(declarations):
        changes["bold"] = True
    if ITALIC_STYLE_PATTERN.search(declarations):
        changes["italic"] = True
    if UNDERLINE_STYLE_PATTERN.search(declarations):
        changes["underline"] = underline
    if STRIKE_STYLE_PATTERN.search(declarations):
        changes["strike"] = True
    match = FONT_SIZE_PATTERN.search(declarations)
    if match:
        size = float(match.group(1))
        changes["font_size"] = int(size) if size.is_integer() else size
    return StyleSet(**changes)


def class_names(element: Tag) -> list[str]:
    """Return an element's classes as a list of names."""
    classes = element.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def alignment_of(element: Tag) -> Optional[Align]:
    """Return the paragraph alignment declared by an element's classes."""
    for name in class_names(element):
        for suffix, align in ALIGN_CLASS_SUFFIXES:
            if name.endswith(suffix):
                return align
    return None


class HTMLRunConverter:
    """Convert a parsed HTML tree into a flat run sequence.

    Uses BeautifulSoup trees as input. Recognised inline marks are
    strong/b, em/i, u, s/strike/del and styled spans; block structure
    comes from p/div, br, h1-h6 and nested ul/ol lists.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the converter.

        Args:
            settings: Configuration (default: global settings)
        """
        self.settings = settings or get_settings()
        self.underline = Underline(UnderlineVariant(self.settings.underline_variant))
        self.skip_classes = frozenset(self.settings.skip_classes)

    def convert_html(self, html: Optional[str]) -> list[StyledRun]:
        """Parse an HTML fragment and convert it."""
        if not html or not html.strip():
            return []
        return self.convert(parse_html(html))

    def convert(self, root: Union[BeautifulSoup, Tag]) -> list[StyledRun]:
        """Convert the children of ``root`` into styled runs.

        Args:
            root: Parsed fragment (the root itself contributes no style)

        Returns:
            Ordered list of StyledRun objects
        """
        result = RunBuffer()
        self._walk_children(root, StyleSet(), 0, result)
        logger.debug("Converted HTML tree into %d run(s)", len(result))
        return result.runs

    def _walk_children(
        self,
        element: Tag,
        context: StyleSet,
        indent_level: int,
        result: RunBuffer,
    ) -> None:
        for child in element.children:
            self._walk(child, context, indent_level, result)

    def _walk(
        self,
        node: Union[NavigableString, Tag],
        context: StyleSet,
        indent_level: int,
        result: RunBuffer,
    ) -> None:
        if isinstance(node, NavigableString):
            # Comments, CDATA, doctypes and the like are not content
            if not isinstance(node, PreformattedString):
                self._emit_text(str(node), context, indent_level, result)
            return

        if not isinstance(node, Tag) or self._is_chrome(node):
            return

        kind = TagKind.of(node.name)
        align = alignment_of(node)
        if align is not None:
            context = context.with_changes(align=align)

        if kind is TagKind.BREAK:
            result.append_newline()
            return

        if kind in (TagKind.UNORDERED_LIST, TagKind.ORDERED_LIST):
            self.process_list(
                node,
                indent_level,
                ordered=kind is TagKind.ORDERED_LIST,
                result=result,
            )
            return

        if kind is TagKind.BLOCK:
            self._walk_children(node, context, indent_level, result)
            result.append_newline()
            return

        self._walk_children(
            node,
            self._derive_context(node, kind, context, indent_level),
            indent_level,
            result,
        )

    def _derive_context(
        self,
        element: Tag,
        kind: TagKind,
        context: StyleSet,
        indent_level: int,
    ) -> StyleSet:
        """Return the child context for inline and heading elements."""
        if kind is TagKind.BOLD:
            return context.with_changes(bold=True)
        if kind is TagKind.ITALIC:
            return context.with_changes(italic=True)
        if kind is TagKind.UNDERLINE:
            return context.with_changes(underline=self.underline)
        if kind is TagKind.STRIKE:
            return context.with_changes(strike=True)
        if kind is TagKind.HEADING:
            return context.with_changes(
                bold=True,
                para_space_after=self.settings.heading_space_after,
            )
        if kind is TagKind.LIST_ITEM:
            # Stray <li> outside a list: indent without a marker
            return context.with_changes(indent_level=indent_level)
        if kind is TagKind.SPAN:
            return context.merged_with(
                span_style(element.get("style") or "", self.underline)
            )
        return context

    def _emit_text(
        self,
        text: str,
        context: StyleSet,
        indent_level: int,
        result: RunBuffer,
    ) -> None:
        if not text.strip():
            return

        style = context
        if indent_level > 0 and style.bullet is None:
            style = style.with_changes(indent_level=indent_level)
        if self.settings.apply_default_font and style.font_face is None:
            style = style.with_changes(font_face=self.settings.default_font_face)

        result.append(StyledRun(text=text, style=None if style.is_empty else style))

    def _is_chrome(self, element: Tag) -> bool:
        """Check if the element is editor UI rather than content."""
        return any(name in self.skip_classes for name in class_names(element))

    def process_list(
        self,
        list_element: Tag,
        indent_level: int,
        ordered: bool,
        result: RunBuffer,
    ) -> None:
        """Convert a ``<ul>``/``<ol>`` and append its runs to ``result``.

        Only direct ``<li>`` children are items. Each item's content is
        converted into its own buffer with a fresh context one level
        deeper, then the list marker is merged into the item's first run.

        Args:
            list_element: The list container
            indent_level: Nesting depth of this list
            ordered: True for numbered lists
            result: Output buffer of the enclosing scope
        """
        context = ListContext(indent_level=indent_level, ordered=ordered)
        items = [
            child
            for child in list_element.children
            if isinstance(child, Tag) and TagKind.of(child.name) is TagKind.LIST_ITEM
        ]

        for index, item in enumerate(items):
            item_context = self._item_context(context, item, index)
            item_runs = RunBuffer()
            # Item content starts from a fresh context; only its own
            # alignment class carries over
            self._walk_children(
                item,
                StyleSet(align=alignment_of(item)),
                item_context.indent_level + 1,
                item_runs,
            )
            item_runs.merge_into_first(
                item_context.bullet_style(self.settings.list_space_after)
            )

            result.extend(item_runs)
            if index < len(items) - 1:
                result.append_newline()

        if result:
            result.append_newline()

    @staticmethod
    def _item_context(context: ListContext, item: Tag, index: int) -> ListContext:
        """Apply Quill 2 per-item list markup to the list context.

        Quill 2 emits every list as <ol> and records the marker kind in
        ``data-list`` and the nesting depth in a ``ql-indent-N`` class.
        """
        item_context = context.at_item(index)
        data_list = item.get("data-list")
        if data_list in ("bullet", "ordered", "checked", "unchecked"):
            item_context = replace(item_context, ordered=data_list == "ordered")
        for name in class_names(item):
            match = INDENT_CLASS_PATTERN.fullmatch(name)
            if match:
                item_context = replace(
                    item_context,
                    indent_level=context.indent_level + int(match.group(1)),
                )
        return item_context


def convert_html(html: Optional[str], settings: Optional[Settings] = None) -> list[StyledRun]:
    """Convert an HTML fragment into styled runs."""
    return HTMLRunConverter(settings).convert_html(html)
