"""Microsoft Word (.docx) file handler."""

from pathlib import Path
from typing import Optional

from docx import Document
from docx.enum.text import WD_COLOR_INDEX
from docx.text.hyperlink import Hyperlink
from docx.text.run import Run

from bbencoder.formats.base import FormatHandler
from bbencoder.formatting.ir import RGBColor, StyledDocument, StyleSet, TextStyle


# Highlight palette used by Word
HIGHLIGHT_COLORS = {
    WD_COLOR_INDEX.BLACK: RGBColor(0, 0, 0),
    WD_COLOR_INDEX.BLUE: RGBColor(0, 0, 255),
    WD_COLOR_INDEX.BRIGHT_GREEN: RGBColor(0, 255, 0),
    WD_COLOR_INDEX.DARK_BLUE: RGBColor(0, 0, 128),
    WD_COLOR_INDEX.DARK_RED: RGBColor(128, 0, 0),
    WD_COLOR_INDEX.DARK_YELLOW: RGBColor(128, 128, 0),
    WD_COLOR_INDEX.GRAY_25: RGBColor(192, 192, 192),
    WD_COLOR_INDEX.GRAY_50: RGBColor(128, 128, 128),
    WD_COLOR_INDEX.GREEN: RGBColor(0, 128, 0),
    WD_COLOR_INDEX.PINK: RGBColor(255, 0, 255),
    WD_COLOR_INDEX.RED: RGBColor(255, 0, 0),
    WD_COLOR_INDEX.TEAL: RGBColor(0, 128, 128),
    WD_COLOR_INDEX.TURQUOISE: RGBColor(0, 255, 255),
    WD_COLOR_INDEX.VIOLET: RGBColor(128, 0, 128),
    WD_COLOR_INDEX.WHITE: RGBColor(255, 255, 255),
    WD_COLOR_INDEX.YELLOW: RGBColor(255, 255, 0),
}


class DOCXHandler(FormatHandler):
    """Handler for Microsoft Word (.docx) files.

    Uses python-docx to read run-level formatting: bold, italic,
    underline, strikethrough, font color, highlight, font name and size,
    and hyperlinks. Paragraphs are separated by newlines.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".docx",)

    def read(self, path: Path) -> StyledDocument:
        """Extract styled text from DOCX file."""
        doc = Document(path)
        styled = StyledDocument(metadata={"source": path.name})
        if doc.core_properties.title:
            styled.metadata["title"] = doc.core_properties.title

        for index, para in enumerate(doc.paragraphs):
            if index > 0:
                styled.append("\n")

            for item in para.iter_inner_content():
                if isinstance(item, Hyperlink):
                    url = item.address or None
                    if item.fragment:
                        url = f"{url or ''}#{item.fragment}"
                    for run in item.runs:
                        styled.append(run.text, self._style_for(run, url))
                else:
                    styled.append(item.text, self._style_for(item))

        return styled

    def _style_for(self, run: Run, link_url: Optional[str] = None) -> StyleSet:
        """Build the StyleSet of a python-docx run."""
        font = run.font
        flags = TextStyle.NONE
        if font.bold:
            flags |= TextStyle.BOLD
        if font.italic:
            flags |= TextStyle.ITALIC
        if font.underline:
            flags |= TextStyle.UNDERLINE
        if font.strike or font.double_strike:
            flags |= TextStyle.STRIKETHROUGH

        text_color = None
        if font.color.type is not None and font.color.rgb is not None:
            red, green, blue = font.color.rgb
            text_color = RGBColor(red, green, blue)

        return StyleSet(
            style=flags,
            text_color=text_color,
            background_color=HIGHLIGHT_COLORS.get(font.highlight_color),
            font_family=font.name,
            font_size=font.size.pt if font.size is not None else None,
            link_url=link_url,
        )
