"""Intermediate Representation for styled text runs.

This module defines the data structures that bridge editor output
(Markdown-flavoured text or HTML) to presentation rendering. The IR is a
flat, ordered sequence of runs: no tree structure survives conversion,
so order is the only encoding of document sequence.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Optional


class MarkKind(str, Enum):
    """Inline mark kinds recognised by the Markdown tokenizer.

    Declaration order is the scan order, which breaks ties between
    candidates that start at the same offset.
    """

    BOLD = "bold"
    ITALIC = "italic"
    STRIKE = "strike"
    UNDERLINE = "underline"


class UnderlineVariant(str, Enum):
    """Underline line styles understood by the slide renderer."""

    SINGLE = "single"
    DOUBLE = "double"
    HEAVY = "heavy"
    DOTTED = "dotted"
    DASHED = "dashed"
    WAVY = "wavy"


class BulletKind(str, Enum):
    """List marker kinds."""

    BULLET = "bullet"
    NUMBER = "number"


class Align(str, Enum):
    """Paragraph alignment values."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


@dataclass(frozen=True)
class Underline:
    """Underline decoration with its line variant."""

    variant: UnderlineVariant = UnderlineVariant.SINGLE


@dataclass(frozen=True)
class Bullet:
    """List marker attached to the first run of a list item."""

    kind: BulletKind = BulletKind.BULLET


# (attribute name, wire key) in serialization order
_WIRE_KEYS: tuple[tuple[str, str], ...] = (
    ("bold", "bold"),
    ("italic", "italic"),
    ("strike", "strike"),
    ("underline", "underline"),
    ("color", "color"),
    ("font_size", "fontSize"),
    ("font_face", "fontFace"),
    ("break_line", "breakLine"),
    ("align", "align"),
    ("indent_level", "indentLevel"),
    ("bullet", "bullet"),
    ("para_space_after", "paraSpaceAfter"),
)


def _wire_number(value: float) -> Any:
    """Emit integral floats as ints so 12.0 serializes as 12."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class StyleSet:
    """Formatting attributes in effect for a run.

    Every attribute defaults to ``None`` meaning "not set". Instances are
    immutable: deriving a child context always produces a new object, so
    a style handed to an emitted run can never change afterwards.

    Attributes:
        bold: Bold weight
        italic: Italic slant
        strike: Single strikethrough
        underline: Underline decoration and variant
        color: Hex colour string (e.g. "FF0000")
        font_size: Font size in points
        font_face: Font family name
        break_line: Marks a line-break-only sentinel run
        align: Paragraph alignment
        indent_level: Nesting depth for indentation (>= 0)
        bullet: List marker for the paragraph this run starts
        para_space_after: Spacing after the paragraph, in points
    """

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    strike: Optional[bool] = None
    underline: Optional[Underline] = None
    color: Optional[str] = None
    font_size: Optional[float] = None
    font_face: Optional[str] = None
    break_line: Optional[bool] = None
    align: Optional[Align] = None
    indent_level: Optional[int] = None
    bullet: Optional[Bullet] = None
    para_space_after: Optional[float] = None

    def __post_init__(self) -> None:
        if self.indent_level is not None and self.indent_level < 0:
            raise ValueError(f"indent_level must be >= 0, got {self.indent_level}")

    @property
    def is_empty(self) -> bool:
        """Check if no attribute is set."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def with_changes(self, **changes: Any) -> "StyleSet":
        """Return a copy with the given attributes replaced."""
        return replace(self, **changes)

    def merged_with(self, other: Optional["StyleSet"]) -> "StyleSet":
        """Return a copy overlaid with every attribute set on ``other``."""
        if other is None:
            return self
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **changes) if changes else self

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the presentation library's option keys."""
        data: dict[str, Any] = {}
        for attr, key in _WIRE_KEYS:
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, Underline):
                value = {"style": value.variant.value}
            elif isinstance(value, Bullet):
                value = {"type": value.kind.value}
            elif isinstance(value, Enum):
                value = value.value
            elif attr in ("font_size", "para_space_after"):
                value = _wire_number(value)
            data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StyleSet":
        """Build a StyleSet from serialized option keys.

        Unknown keys are ignored. ``underline`` may be given as ``true``
        (single line) or as ``{"style": <variant>}``.
        """
        values: dict[str, Any] = {}
        for attr, key in _WIRE_KEYS:
            if key not in data or data[key] is None:
                continue
            value = data[key]
            if attr == "underline":
                if value is False:
                    continue
                if isinstance(value, dict):
                    value = Underline(UnderlineVariant(value.get("style", "single")))
                else:
                    value = Underline()
            elif attr == "bullet":
                if value is False:
                    continue
                if isinstance(value, dict):
                    value = Bullet(BulletKind(value.get("type", "bullet")))
                else:
                    value = Bullet()
            elif attr == "align":
                value = Align(value)
            values[attr] = value
        return cls(**values)


@dataclass(frozen=True)
class StyledRun:
    """A contiguous run of text sharing one style snapshot.

    Attributes:
        text: Literal text content; may contain embedded newlines
        style: Style snapshot, or None for plain text
    """

    text: str
    style: Optional[StyleSet] = None

    @classmethod
    def line_break(cls) -> "StyledRun":
        """Create a line-break sentinel run."""
        return cls(text="", style=StyleSet(break_line=True))

    @property
    def is_break(self) -> bool:
        """Check if this run is a line-break sentinel."""
        return bool(self.style and self.style.break_line)

    @property
    def has_bullet(self) -> bool:
        """Check if this run carries a list marker."""
        return bool(self.style and self.style.bullet is not None)

    @property
    def bold(self) -> bool:
        return bool(self.style and self.style.bold)

    @property
    def italic(self) -> bool:
        return bool(self.style and self.style.italic)

    def with_text(self, text: str) -> "StyledRun":
        """Return a copy of this run carrying different text."""
        return replace(self, text=text)

    def with_style(self, style: Optional[StyleSet]) -> "StyledRun":
        """Return a copy of this run carrying a different style."""
        if style is not None and style.is_empty:
            style = None
        return replace(self, style=style)

    def to_dict(self) -> dict[str, Any]:
        """Serialize as ``{"text": ..., "options": {...}}``."""
        data: dict[str, Any] = {"text": self.text}
        if self.style is not None and not self.style.is_empty:
            data["options"] = self.style.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StyledRun":
        """Build a run from its serialized form."""
        options = data.get("options")
        style = StyleSet.from_dict(options) if options else None
        if style is not None and style.is_empty:
            style = None
        return cls(text=data.get("text", ""), style=style)

    def __str__(self) -> str:
        return self.text


def runs_plain_text(runs: list[StyledRun]) -> str:
    """Concatenate run text, rendering break sentinels as newlines."""
    return "".join("\n" if run.is_break else run.text for run in runs)


# =============================================================================
# Internal pipeline state
# =============================================================================

@dataclass(frozen=True)
class MarkToken:
    """An accepted inline mark on one Markdown line.

    Attributes:
        kind: Which mark the delimiters denote
        content: Text between the delimiters
        start: Offset of the opening delimiter
        end: Offset just past the closing delimiter (half-open range)
    """

    kind: MarkKind
    content: str
    start: int
    end: int

    def overlaps(self, other: "MarkToken") -> bool:
        """Check if the two half-open ranges share any position."""
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class ListContext:
    """State of one ``<ul>``/``<ol>`` while its items are converted.

    Attributes:
        indent_level: Nesting depth of this list
        ordered: True for numbered lists
        item_index: Zero-based index of the item being converted
    """

    indent_level: int = 0
    ordered: bool = False
    item_index: int = 0

    @property
    def bullet_kind(self) -> BulletKind:
        return BulletKind.NUMBER if self.ordered else BulletKind.BULLET

    def bullet_style(self, space_after: float) -> StyleSet:
        """Paragraph descriptor merged into an item's first run."""
        return StyleSet(
            bullet=Bullet(self.bullet_kind),
            indent_level=self.indent_level,
            para_space_after=space_after,
        )

    def at_item(self, index: int) -> "ListContext":
        return replace(self, item_index=index)


@dataclass
class RunBuffer:
    """Ordered, append-only run output for one conversion scope."""

    runs: list[StyledRun] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.runs)

    def __bool__(self) -> bool:
        return bool(self.runs)

    def append(self, run: StyledRun) -> None:
        self.runs.append(run)

    def extend(self, other: "RunBuffer") -> None:
        self.runs.extend(other.runs)

    def append_newline(self) -> None:
        """Close the current line.

        The newline joins the last run's text unless that run carries a
        list marker (or there is no run yet), in which case a bare
        newline run is pushed instead.
        """
        if self.runs and not self.runs[-1].has_bullet:
            last = self.runs[-1]
            self.runs[-1] = last.with_text(last.text + "\n")
        else:
            self.runs.append(StyledRun(text="\n"))

    def merge_into_first(self, style: StyleSet) -> None:
        """Overlay ``style`` onto the first run of the buffer."""
        if not self.runs:
            return
        first = self.runs[0]
        base = first.style or StyleSet()
        self.runs[0] = first.with_style(base.merged_with(style))
