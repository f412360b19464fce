"""Tests for the HTML, JSON and PPTX format handlers."""

import json
import pytest
from pathlib import Path

from pptx import Presentation
from pptx.enum.text import MSO_UNDERLINE, PP_ALIGN
from pptx.oxml.ns import qn
from pptx.util import Inches, Pt

from pptx_richtext.formats import (
    HANDLER_MAP,
    HTMLHandler,
    JSONHandler,
    PPTXHandler,
    TXTHandler,
    get_handler,
    split_paragraphs,
)
from pptx_richtext.formatting.html_walker import convert_html
from pptx_richtext.formatting.ir import (
    Align,
    Bullet,
    BulletKind,
    StyledRun,
    StyleSet,
    Underline,
    UnderlineVariant,
)
from pptx_richtext.formatting.parser import MarkdownParser


@pytest.fixture
def list_runs() -> list[StyledRun]:
    """Runs for a paragraph followed by numbered and bulleted lists."""
    return convert_html(
        "<p>Hello <strong>world</strong></p>"
        "<ol><li>First</li><li>Second</li></ol>"
        "<ul><li>Dot</li></ul>"
    )


class TestGetHandler:
    """Tests for extension lookup."""

    def test_known_extensions(self):
        assert get_handler(".md") is TXTHandler
        assert get_handler(".HTM") is HTMLHandler
        assert get_handler(".json") is JSONHandler
        assert get_handler(".pptx") is PPTXHandler

    def test_unsupported_extension(self):
        with pytest.raises(ValueError, match="Unsupported file format"):
            get_handler(".docx")

    def test_handlers_declare_their_extensions(self):
        for ext, handler_class in HANDLER_MAP.items():
            assert ext in handler_class().supported_extensions


class TestSplitParagraphs:
    """Tests for grouping runs into paragraphs."""

    def test_break_and_newline_end_paragraphs(self):
        runs = [
            StyledRun(text="a"),
            StyledRun.line_break(),
            StyledRun(text="b\nc", style=StyleSet(bold=True)),
        ]

        paragraphs = split_paragraphs(runs)

        assert [p.plain_text for p in paragraphs] == ["a", "b", "c"]
        assert paragraphs[2].runs[0].bold

    def test_bullet_run_starts_paragraph(self):
        """Test that a nested item does not join its parent's paragraph."""
        runs = convert_html("<ul><li>A<ul><li>B</li></ul></li></ul>")

        paragraphs = [p for p in split_paragraphs(runs) if p.runs]

        assert [p.plain_text for p in paragraphs] == ["A", "B"]
        assert paragraphs[0].style.indent_level == 0
        assert paragraphs[1].style.indent_level == 1

    def test_paragraph_style_does_not_leak(self):
        """Test that alignment stays with its own paragraph."""
        runs = convert_html('<p class="align-right">a</p><p>b</p>')

        paragraphs = split_paragraphs(runs)

        assert paragraphs[0].style == StyleSet(align=Align.RIGHT)
        assert paragraphs[1].style is None

    def test_empty(self):
        assert split_paragraphs([]) == []
        assert split_paragraphs([StyledRun(text="\n")]) == []


class TestHTMLHandler:
    """Tests for HTML fragment output."""

    @pytest.fixture
    def handler(self) -> HTMLHandler:
        return HTMLHandler()

    def test_nested_list_roundtrip(self, handler: HTMLHandler):
        html = "<ul><li>A<ul><li>B</li></ul></li><li>C</li></ul>"

        assert handler.render(convert_html(html)) == html

    def test_inline_marks(self, handler: HTMLHandler):
        runs = [
            StyledRun(text="a & b", style=StyleSet(bold=True, italic=True)),
            StyledRun(text="c", style=StyleSet(strike=True, font_size=9)),
        ]

        assert handler.render(runs) == (
            "<p><strong><em>a &amp; b</em></strong>"
            '<span style="font-size: 9pt"><s>c</s></span></p>'
        )

    def test_alignment_class(self, handler: HTMLHandler):
        runs = [StyledRun(text="x\n", style=StyleSet(align=Align.CENTER))]

        assert handler.render(runs) == '<p class="align-center">x</p>'

    def test_mixed_list_kinds(self, handler: HTMLHandler, list_runs: list[StyledRun]):
        assert handler.render(list_runs) == (
            "<p>Hello <strong>world</strong></p>"
            "<ol><li>First</li><li>Second</li></ol>"
            "<ul><li>Dot</li></ul>"
        )

    def test_write_and_read(self, handler: HTMLHandler, tmp_path: Path):
        path = tmp_path / "out.html"
        handler.write([StyledRun(text="x")], path)

        assert handler.read(path) == "<p>x</p>"


class TestJSONHandler:
    """Tests for serialized run files."""

    @pytest.fixture
    def handler(self) -> JSONHandler:
        return JSONHandler()

    def test_write_then_load(
        self, handler: JSONHandler, list_runs: list[StyledRun], tmp_path: Path
    ):
        path = tmp_path / "runs.json"
        handler.write(list_runs, path)

        assert handler.load_runs(path) == list_runs
        assert path.read_text(encoding="utf-8").endswith("]\n")

    def test_wire_shape(self, handler: JSONHandler, tmp_path: Path):
        path = tmp_path / "runs.json"
        handler.write([StyledRun(text="u", style=StyleSet(underline=Underline()))], path)

        data = json.loads(path.read_text(encoding="utf-8"))

        assert data == [{"text": "u", "options": {"underline": {"style": "single"}}}]

    def test_read_as_markdown(self, handler: JSONHandler, tmp_path: Path):
        path = tmp_path / "runs.json"
        handler.write(MarkdownParser().convert("a **b**\nc"), path)

        assert handler.read(path) == "a **b**\nc"

    def test_non_list_rejected(self, handler: JSONHandler, tmp_path: Path):
        path = tmp_path / "runs.json"
        path.write_text('{"text": "x"}', encoding="utf-8")

        with pytest.raises(ValueError):
            handler.load_runs(path)


class TestPPTXHandler:
    """Tests for slide output."""

    @pytest.fixture
    def handler(self) -> PPTXHandler:
        return PPTXHandler()

    def write_and_open(self, handler: PPTXHandler, runs: list[StyledRun], tmp_path: Path):
        path = tmp_path / "slide.pptx"
        handler.write(runs, path)
        prs = Presentation(str(path))
        return prs, prs.slides[0].shapes[0].text_frame

    def test_slide_layout(self, handler: PPTXHandler, tmp_path: Path):
        prs, _ = self.write_and_open(handler, [StyledRun(text="x")], tmp_path)
        box = prs.slides[0].shapes[0]

        assert prs.slide_width == Inches(10)
        assert box.left == Inches(0.1)
        assert box.width == Inches(9.8)

    def test_paragraphs_and_runs(
        self, handler: PPTXHandler, list_runs: list[StyledRun], tmp_path: Path
    ):
        _, frame = self.write_and_open(handler, list_runs, tmp_path)

        assert [p.text for p in frame.paragraphs] == ["Hello world", "First", "Second", "Dot"]
        hello, world = frame.paragraphs[0].runs
        assert world.font.bold is True
        assert hello.font.bold is None
        assert hello.font.size == Pt(8)
        assert hello.font.name == "Arial"

    def test_bullet_markup(
        self, handler: PPTXHandler, list_runs: list[StyledRun], tmp_path: Path
    ):
        _, frame = self.write_and_open(handler, list_runs, tmp_path)
        first, dot = frame.paragraphs[1], frame.paragraphs[3]

        assert first._p.pPr.find(qn("a:buAutoNum")) is not None
        assert dot._p.pPr.find(qn("a:buChar")).get("char") == "•"
        assert frame.paragraphs[0]._p.pPr.find(qn("a:buChar")) is None
        assert first.space_after == Pt(6)

    def test_character_formatting(self, handler: PPTXHandler, tmp_path: Path):
        runs = [
            StyledRun(text="u", style=StyleSet(underline=Underline(UnderlineVariant.HEAVY))),
            StyledRun(text="s", style=StyleSet(strike=True, color="FF0000", font_size=14)),
        ]
        _, frame = self.write_and_open(handler, runs, tmp_path)
        underlined, struck = frame.paragraphs[0].runs

        assert underlined.font.underline == MSO_UNDERLINE.HEAVY_LINE
        assert struck._r.rPr.get("strike") == "sngStrike"
        assert str(struck.font.color.rgb) == "FF0000"
        assert struck.font.size == Pt(14)

    def test_alignment_and_level(self, handler: PPTXHandler, tmp_path: Path):
        runs = [
            StyledRun(text="c\n", style=StyleSet(align=Align.CENTER)),
            StyledRun(
                text="n",
                style=StyleSet(bullet=Bullet(BulletKind.BULLET), indent_level=1),
            ),
        ]
        _, frame = self.write_and_open(handler, runs, tmp_path)

        assert frame.paragraphs[0].alignment == PP_ALIGN.CENTER
        assert frame.paragraphs[1].alignment == PP_ALIGN.LEFT
        assert frame.paragraphs[1].level == 1

    def test_read_as_markdown(
        self, handler: PPTXHandler, list_runs: list[StyledRun], tmp_path: Path
    ):
        path = tmp_path / "slide.pptx"
        handler.write(list_runs, path)

        assert handler.read(path) == "Hello **world**\nFirst\nSecond\nDot"
