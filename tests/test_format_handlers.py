"""Tests for document format handlers."""

import pytest
from pathlib import Path

from docx import Document
from docx.enum.text import WD_COLOR_INDEX
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor as DocxRGBColor

from bbencoder.formats import (
    DOCXHandler,
    HTMLHandler,
    MarkdownHandler,
    RTFHandler,
    SUPPORTED_EXTENSIONS,
    get_handler,
)
from bbencoder.formats.html_handler import parse_color, parse_css
from bbencoder.formatting.encoder import encode
from bbencoder.formatting.ir import RGBColor, TextStyle


def add_hyperlink(paragraph, url: str, text: str) -> None:
    """Append a w:hyperlink run to a python-docx paragraph."""
    r_id = paragraph.part.relate_to(url, RT.HYPERLINK, is_external=True)
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), r_id)
    run = OxmlElement("w:r")
    text_element = OxmlElement("w:t")
    text_element.text = text
    run.append(text_element)
    hyperlink.append(run)
    paragraph._p.append(hyperlink)


class TestGetHandler:
    """Tests for extension lookup."""

    def test_known_extensions(self):
        """Test that each supported extension maps to a handler."""
        for ext in SUPPORTED_EXTENSIONS:
            handler = get_handler(ext)()
            assert ext in handler.supported_extensions

    def test_case_insensitive(self):
        """Test that extensions are matched case-insensitively."""
        assert get_handler(".DOCX") is DOCXHandler

    def test_unsupported_extension(self):
        """Test that unknown extensions raise ValueError."""
        with pytest.raises(ValueError, match="Unsupported file format"):
            get_handler(".xyz")


class TestHTMLHandler:
    """Tests for the HTML format handler."""

    @pytest.fixture
    def handler(self) -> HTMLHandler:
        return HTMLHandler()

    def test_semantic_tags(self, handler: HTMLHandler):
        """Test b, i and paragraph handling."""
        doc = handler.parse("<p>Hello <b>bold</b> and <i>it</i></p>")

        assert doc.plain_text == "Hello bold and it"
        assert encode(doc) == "Hello [b]bold[/b] and [i]it[/i]"

    def test_paragraphs_become_lines(self, handler: HTMLHandler):
        """Test that block elements are separated by newlines."""
        doc = handler.parse("<p>One</p><p>Two</p>")
        assert doc.plain_text == "One\nTwo"

    def test_line_break(self, handler: HTMLHandler):
        """Test that br becomes a newline."""
        doc = handler.parse("a<br>b")
        assert doc.plain_text == "a\nb"

    def test_whitespace_collapsed(self, handler: HTMLHandler):
        """Test that source formatting whitespace is collapsed."""
        doc = handler.parse("<p>Hello\n      world</p>")
        assert doc.plain_text == "Hello world"

    def test_space_across_inline_elements_collapsed(self, handler: HTMLHandler):
        """Test that a space ending one element and starting the next text is kept once."""
        doc = handler.parse("<p><b>a </b> b</p>")

        assert doc.plain_text == "a b"
        assert encode(doc) == "[b]a [/b]b"

    def test_preformatted_whitespace_kept(self, handler: HTMLHandler):
        """Test that pre content keeps tabs and newlines."""
        doc = handler.parse("<pre>a\n\tb</pre>")
        assert doc.plain_text == "a\n\tb"

    def test_inline_css(self, handler: HTMLHandler):
        """Test color and weight from a style attribute."""
        doc = handler.parse('<span style="color: #ff0000; font-weight: bold">Red</span>')

        assert encode(doc) == "[color=#FF0000][b]Red[/b][/color]"

    def test_css_text_decoration(self, handler: HTMLHandler):
        """Test underline and line-through from CSS."""
        doc = handler.parse(
            '<span style="text-decoration: underline line-through">x</span>'
        )
        flags = doc.runs[0].style.style

        assert TextStyle.UNDERLINE in flags
        assert TextStyle.STRIKETHROUGH in flags

    def test_css_font_size_px(self, handler: HTMLHandler):
        """Test that pixel sizes are converted to points."""
        doc = handler.parse('<span style="font-size: 16px; font-family: \'Times New Roman\', serif">x</span>')
        style = doc.runs[0].style

        assert style.font_size == 12.0
        assert style.font_family == "Times New Roman"

    def test_link(self, handler: HTMLHandler):
        """Test anchors become links."""
        doc = handler.parse('Visit <a href="https://example.com">the site</a>.')

        assert encode(doc) == "Visit [url=https://example.com]the site[/url]."

    def test_font_tag(self, handler: HTMLHandler):
        """Test legacy font attributes."""
        doc = handler.parse('<font color="blue" face="Courier New, monospace" size="5">x</font>')

        assert encode(doc) == (
            "[font=Courier New][size=18][color=#0000FF]x[/color][/size][/font]"
        )

    def test_mark_and_strike(self, handler: HTMLHandler):
        """Test highlight and strikethrough elements."""
        doc = handler.parse("<mark>hi</mark> <del>old</del>")

        assert encode(doc) == "[bgcolor=#FFFF00]hi[/bgcolor] [s]old[/s]"

    def test_scripts_removed_and_title_kept(self, handler: HTMLHandler):
        """Test that script content is dropped and title stored as metadata."""
        html = (
            "<html><head><title>Notes</title><script>var x = 1;</script></head>"
            "<body><p>Text</p></body></html>"
        )
        doc = handler.parse(html)

        assert doc.plain_text == "Text"
        assert doc.metadata["title"] == "Notes"

    def test_read_file(self, handler: HTMLHandler, tmp_path: Path):
        """Test reading an HTML file from disk."""
        path = tmp_path / "page.html"
        path.write_text("<p><u>under</u></p>", encoding="utf-8")

        assert encode(handler.read(path)) == "[u]under[/u]"

    def test_parse_color(self):
        """Test CSS color parsing."""
        assert parse_color("rgb(255, 0, 0)") == RGBColor(255, 0, 0)
        assert parse_color("#0f0") == RGBColor(0, 255, 0)
        assert parse_color("Navy") == RGBColor(0, 0, 128)
        assert parse_color("nonsense") is None
        assert parse_color(None) is None

    def test_parse_css(self):
        """Test splitting inline style declarations."""
        css = parse_css("color: red; Font-Weight:bold;;")
        assert css == {"color": "red", "font-weight": "bold"}


class TestDOCXHandler:
    """Tests for the DOCX format handler."""

    @pytest.fixture
    def handler(self) -> DOCXHandler:
        return DOCXHandler()

    @pytest.fixture
    def docx_path(self, tmp_path: Path) -> Path:
        """Create a Word document with varied run formatting."""
        document = Document()
        document.core_properties.title = "Sample"

        para = document.add_paragraph()
        para.add_run("Plain ")
        run = para.add_run("bold")
        run.bold = True
        run = para.add_run(" red")
        run.font.color.rgb = DocxRGBColor(0xFF, 0x00, 0x00)

        para = document.add_paragraph()
        run = para.add_run("struck")
        run.font.strike = True
        run = para.add_run("hi")
        run.font.highlight_color = WD_COLOR_INDEX.YELLOW
        run = para.add_run("big")
        run.font.size = Pt(14)
        run.font.name = "Arial"

        para = document.add_paragraph()
        para.add_run("See ")
        add_hyperlink(para, "https://example.com", "site")

        path = tmp_path / "sample.docx"
        document.save(path)
        return path

    def test_plain_text(self, handler: DOCXHandler, docx_path: Path):
        """Test that paragraphs are joined with newlines."""
        doc = handler.read(docx_path)
        assert doc.plain_text == "Plain bold red\nstruckhibig\nSee site"

    def test_run_formatting(self, handler: DOCXHandler, docx_path: Path):
        """Test run-level attributes are encoded."""
        markup = encode(handler.read(docx_path))

        assert markup == (
            "Plain [b]bold[/b][color=#FF0000] red[/color]\n"
            "[s]struck[/s][bgcolor=#FFFF00]hi[/bgcolor]"
            "[font=Arial][size=14]big[/size][/font]\n"
            "See [url=https://example.com]site[/url]"
        )

    def test_metadata(self, handler: DOCXHandler, docx_path: Path):
        """Test that the document title is kept."""
        doc = handler.read(docx_path)
        assert doc.metadata["title"] == "Sample"
        assert doc.metadata["source"] == "sample.docx"


class TestMarkdownHandler:
    """Tests for the markdown format handler."""

    def test_read(self, tmp_markdown_file: Path):
        """Test reading a markdown file."""
        doc = MarkdownHandler().read(tmp_markdown_file)

        assert doc.plain_text.startswith("Some bold and italic")
        assert doc.metadata["source"] == "sample.md"


class TestRTFHandler:
    """Tests for the RTF format handler."""

    def test_read_plain_text(self, tmp_path: Path):
        """Test that RTF text is read as a single plain run."""
        path = tmp_path / "test.rtf"
        path.write_text(
            r"{\rtf1\ansi{\fonttbl\f0\fswiss Helvetica;}\f0\pard This is {\b bold} text.\par}",
            encoding="utf-8",
        )
        doc = RTFHandler().read(path)

        assert "This is bold text." in doc.plain_text
        assert "[b]" not in encode(doc)
