"""Markdown parser for converting plain-text rich text to styled runs."""

import logging
import re
from typing import Optional

from pptx_richtext.config import get_settings
from pptx_richtext.formatting.ir import (
    MarkKind,
    MarkToken,
    StyledRun,
    StyleSet,
    Underline,
    UnderlineVariant,
)

logger = logging.getLogger(__name__)


class MarkdownParser:
    """Parse Markdown-style inline marks into a flat run sequence.

    Supported notation:
    - **bold** or __bold__
    - *italic* or _italic_
    - ~~strikethrough~~
    - <u>underline</u>

    Marks do not nest. Each line is scanned once per mark kind, all
    candidates are pooled, and overlapping candidates are resolved by
    keeping whichever starts first (scan order breaks ties). A rejected
    candidate keeps its delimiters: its text stays in the surrounding
    plain gap or in the accepted token's content verbatim.
    """

    # Scan order matters: it is the tie-break for equal start offsets
    PATTERNS: tuple[tuple[MarkKind, re.Pattern], ...] = (
        (MarkKind.BOLD, re.compile(r"(\*\*|__)(.+?)\1")),
        (
            MarkKind.ITALIC,
            re.compile(
                r"(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)"
                r"|(?<!_)_(?!_)(.+?)(?<!_)_(?!_)"
            ),
        ),
        (MarkKind.STRIKE, re.compile(r"~~(.+?)~~")),
        (MarkKind.UNDERLINE, re.compile(r"<u>(.+?)</u>", re.IGNORECASE)),
    )

    LINE_SPLIT_PATTERN = re.compile(r"\r?\n")

    def __init__(self, underline_variant: Optional[UnderlineVariant] = None) -> None:
        """Initialize the parser.

        Args:
            underline_variant: Line style for <u> marks (default from settings)
        """
        settings = get_settings()
        self.underline_variant = UnderlineVariant(
            underline_variant or settings.underline_variant
        )

    def convert(self, document: Optional[str]) -> list[StyledRun]:
        """Convert a multi-line document to styled runs.

        Blank lines become a single break sentinel; every other line is
        tokenized and followed by a break sentinel unless it is the last.

        Args:
            document: Markdown-flavoured text (None or "" yield [])

        Returns:
            Ordered list of StyledRun objects
        """
        if not document:
            return []

        lines = self.LINE_SPLIT_PATTERN.split(document)
        result: list[StyledRun] = []

        for index, line in enumerate(lines):
            if not line.strip():
                result.append(StyledRun.line_break())
                continue

            result.extend(self.tokenize(line))

            if index < len(lines) - 1:
                result.append(StyledRun.line_break())

        logger.debug("Converted %d markdown line(s) into %d run(s)", len(lines), len(result))
        return result

    def tokenize(self, line: str) -> list[StyledRun]:
        """Split a single line into plain and styled runs."""
        if not line:
            return []

        tokens = self.find_tokens(line)
        if not tokens:
            return [StyledRun(text=line)]

        runs: list[StyledRun] = []
        last_end = 0

        for token in tokens:
            if token.start > last_end:
                runs.append(StyledRun(text=line[last_end:token.start]))
            runs.append(StyledRun(text=token.content, style=self._style_for(token.kind)))
            last_end = token.end

        if last_end < len(line):
            runs.append(StyledRun(text=line[last_end:]))

        return runs

    def find_tokens(self, line: str) -> list[MarkToken]:
        """Return the accepted, pairwise non-overlapping tokens of a line.

        Tokens are returned sorted by start offset.
        """
        candidates = self._scan(line)
        # sorted() is stable, so equal starts keep scan order
        candidates.sort(key=lambda token: token.start)

        accepted: list[MarkToken] = []
        for candidate in candidates:
            if any(candidate.overlaps(token) for token in accepted):
                continue
            accepted.append(candidate)

        accepted.sort(key=lambda token: token.start)
        return accepted

    def _scan(self, line: str) -> list[MarkToken]:
        """Run every pattern over the line and pool the candidates."""
        candidates: list[MarkToken] = []

        for kind, pattern in self.PATTERNS:
            for match in pattern.finditer(line):
                content = self._content_of(kind, match)
                if not content:
                    continue
                candidates.append(
                    MarkToken(
                        kind=kind,
                        content=content,
                        start=match.start(),
                        end=match.end(),
                    )
                )

        return candidates

    @staticmethod
    def _content_of(kind: MarkKind, match: re.Match) -> str:
        if kind is MarkKind.BOLD:
            return match.group(2) or ""
        if kind is MarkKind.ITALIC:
            return match.group(1) or match.group(2) or ""
        return match.group(1) or ""

    def _style_for(self, kind: MarkKind) -> StyleSet:
        if kind is MarkKind.BOLD:
            return StyleSet(bold=True)
        if kind is MarkKind.ITALIC:
            return StyleSet(italic=True)
        if kind is MarkKind.STRIKE:
            return StyleSet(strike=True)
        return StyleSet(underline=Underline(self.underline_variant))

    def to_markdown(self, runs: list[StyledRun]) -> str:
        """Render runs back into the notation this parser reads."""
        parts: list[str] = []

        for run in runs:
            if run.is_break:
                parts.append("\n")
                continue
            parts.append(wrap_markdown(run))

        return "".join(parts)


def wrap_markdown(run: StyledRun) -> str:
    """Wrap a run's text in the delimiters for its inline marks.

    Trailing newlines stay outside the delimiters so a mark never spans
    a line boundary.
    """
    text = run.text
    body = text.rstrip("\n")
    tail = text[len(body):]
    style = run.style

    if not body or style is None:
        return text

    if style.strike:
        body = f"~~{body}~~"
    if style.underline is not None:
        body = f"<u>{body}</u>"
    if style.italic:
        body = f"*{body}*"
    if style.bold:
        body = f"**{body}**"

    return body + tail
