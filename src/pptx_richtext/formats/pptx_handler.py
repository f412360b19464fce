"""PowerPoint (.pptx) file handler."""

import logging
from pathlib import Path
from typing import Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_ANCHOR, MSO_UNDERLINE, PP_ALIGN
from pptx.oxml import parse_xml
from pptx.util import Emu, Inches, Pt

from pptx_richtext.config import Settings, get_settings
from pptx_richtext.formats.base import FormatHandler, Paragraph, split_paragraphs
from pptx_richtext.formatting.ir import (
    Align,
    BulletKind,
    StyledRun,
    StyleSet,
    Underline,
    UnderlineVariant,
)
from pptx_richtext.formatting.parser import wrap_markdown

logger = logging.getLogger(__name__)

DRAWINGML_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"

# 16:9 slide, matching the PptxGenJS default layout
SLIDE_WIDTH = Inches(10)
SLIDE_HEIGHT = Inches(5.625)

# Text box geometry in inches: x, y, width, height
TEXT_BOX = (0.1, 0.1, 9.8, 5.4)

# Indentation per list level
LEVEL_INDENT = Inches(0.25)

# python-pptx supports paragraph levels 0-8
MAX_LEVEL = 8

ALIGNMENTS = {
    Align.LEFT: PP_ALIGN.LEFT,
    Align.CENTER: PP_ALIGN.CENTER,
    Align.RIGHT: PP_ALIGN.RIGHT,
    Align.JUSTIFY: PP_ALIGN.JUSTIFY,
}

UNDERLINES = {
    UnderlineVariant.SINGLE: MSO_UNDERLINE.SINGLE_LINE,
    UnderlineVariant.DOUBLE: MSO_UNDERLINE.DOUBLE_LINE,
    UnderlineVariant.HEAVY: MSO_UNDERLINE.HEAVY_LINE,
    UnderlineVariant.DOTTED: MSO_UNDERLINE.DOTTED_LINE,
    UnderlineVariant.DASHED: MSO_UNDERLINE.DASH_LINE,
    UnderlineVariant.WAVY: MSO_UNDERLINE.WAVY_LINE,
}


class PPTXHandler(FormatHandler):
    """Handler for PowerPoint (.pptx) files.

    Uses python-pptx to lay the runs out in a single text box on one
    blank 16:9 slide. Paragraph attributes (bullets, indentation,
    alignment, spacing) go on the paragraph; character attributes go on
    each run.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".pptx",)

    def read(self, path: Path) -> str:
        """Extract slide text as Markdown-style notation."""
        prs = Presentation(str(path))
        lines: list[str] = []

        for slide in prs.slides:
            for shape in slide.shapes:
                if not shape.has_text_frame:
                    continue
                for para in shape.text_frame.paragraphs:
                    lines.append(
                        "".join(wrap_markdown(self._read_run(run)) for run in para.runs)
                    )

        return "\n".join(lines)

    def _read_run(self, run) -> StyledRun:
        font = run.font
        r_pr = run._r.rPr
        strike = r_pr is not None and r_pr.get("strike") not in (None, "noStrike")
        style = StyleSet(
            bold=font.bold or None,
            italic=font.italic or None,
            strike=strike or None,
            underline=Underline() if font.underline else None,
        )
        return StyledRun(text=run.text, style=None if style.is_empty else style)

    def write(self, runs: list[StyledRun], path: Path) -> None:
        """Write runs to a one-slide presentation."""
        prs = Presentation()
        prs.slide_width = SLIDE_WIDTH
        prs.slide_height = SLIDE_HEIGHT

        # Layout 6 of the default template is blank
        slide = prs.slides.add_slide(prs.slide_layouts[6])
        x, y, width, height = TEXT_BOX
        box = slide.shapes.add_textbox(Inches(x), Inches(y), Inches(width), Inches(height))

        text_frame = box.text_frame
        text_frame.word_wrap = True
        text_frame.vertical_anchor = MSO_ANCHOR.TOP

        paragraphs = split_paragraphs(runs)
        for index, paragraph in enumerate(paragraphs):
            para = text_frame.paragraphs[0] if index == 0 else text_frame.add_paragraph()
            self._format_paragraph(para, paragraph)
            for run_data in paragraph.runs:
                run = para.add_run()
                run.text = run_data.text
                self._format_run(run, run_data.style)

        logger.debug("Writing %d paragraph(s) to %s", len(paragraphs), path)
        prs.save(str(path))

    def _format_paragraph(self, para, paragraph: Paragraph) -> None:
        style = paragraph.style
        para.alignment = PP_ALIGN.LEFT
        if style is None:
            return

        if style.align is not None:
            para.alignment = ALIGNMENTS[style.align]
        if style.para_space_after is not None:
            para.space_after = Pt(style.para_space_after)

        level = min(style.indent_level or 0, MAX_LEVEL)
        if level:
            para.level = level

        if style.bullet is not None:
            self._set_bullet(para, style.bullet.kind, level)

    @staticmethod
    def _set_bullet(para, kind: BulletKind, level: int) -> None:
        """Enable a list marker through the paragraph's OOXML properties.

        Text boxes have bullets off by default, so the marker element and
        a hanging indent have to be written explicitly.
        """
        p_pr = para._p.get_or_add_pPr()
        p_pr.set("marL", str(Emu(LEVEL_INDENT * (level + 1))))
        p_pr.set("indent", str(-Emu(LEVEL_INDENT)))

        if kind is BulletKind.NUMBER:
            marker = f'<a:buAutoNum xmlns:a="{DRAWINGML_NS}" type="arabicPeriod"/>'
        else:
            marker = f'<a:buChar xmlns:a="{DRAWINGML_NS}" char="•"/>'
        p_pr.append(parse_xml(marker))

    def _format_run(self, run, style: Optional[StyleSet]) -> None:
        font = run.font
        style = style or StyleSet()

        font.size = Pt(style.font_size or self.settings.slide_font_size)
        font.name = style.font_face or self.settings.slide_font_face
        font.color.rgb = RGBColor.from_string(
            (style.color or self.settings.slide_color).lstrip("#").upper()
        )

        if style.bold:
            font.bold = True
        if style.italic:
            font.italic = True
        if style.underline is not None:
            font.underline = UNDERLINES[style.underline.variant]
        if style.strike:
            run._r.get_or_add_rPr().set("strike", "sngStrike")
