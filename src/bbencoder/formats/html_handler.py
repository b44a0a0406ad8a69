"""HTML file handler."""

import re
from dataclasses import replace
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, Tag

from bbencoder.formats.base import FormatHandler
from bbencoder.formatting.ir import (
    PLAIN,
    RGBColor,
    StyledDocument,
    StyleSet,
    TextStyle,
)

BOLD_TAGS = {"b", "strong"}
ITALIC_TAGS = {"i", "em", "cite", "var"}
UNDERLINE_TAGS = {"u", "ins"}
STRIKE_TAGS = {"s", "strike", "del"}
BLOCK_TAGS = {
    "p", "div", "li", "blockquote", "pre", "tr", "section", "article",
    "h1", "h2", "h3", "h4", "h5", "h6",
}

# <font size="N"> to points
FONT_SIZE_POINTS = {1: 8, 2: 10, 3: 12, 4: 14, 5: 18, 6: 24, 7: 36}

NAMED_COLORS = {
    "black": RGBColor(0, 0, 0),
    "white": RGBColor(255, 255, 255),
    "red": RGBColor(255, 0, 0),
    "green": RGBColor(0, 128, 0),
    "lime": RGBColor(0, 255, 0),
    "blue": RGBColor(0, 0, 255),
    "yellow": RGBColor(255, 255, 0),
    "orange": RGBColor(255, 165, 0),
    "purple": RGBColor(128, 0, 128),
    "gray": RGBColor(128, 128, 128),
    "grey": RGBColor(128, 128, 128),
    "navy": RGBColor(0, 0, 128),
    "teal": RGBColor(0, 128, 128),
    "maroon": RGBColor(128, 0, 0),
}

MARK_COLOR = RGBColor(255, 255, 0)

RGB_FUNCTION_PATTERN = re.compile(
    r"rgba?\(\s*(\d+(?:\.\d+)?)\s*,\s*(\d+(?:\.\d+)?)\s*,\s*(\d+(?:\.\d+)?)"
)
FONT_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*(pt|px)$")
WHITESPACE_PATTERN = re.compile(r"\s+")


def parse_color(value: Optional[str]) -> Optional[RGBColor]:
    """Parse a CSS/HTML color value; unknown values give None."""
    if not value:
        return None
    value = value.strip().lower()

    if value in NAMED_COLORS:
        return NAMED_COLORS[value]

    match = RGB_FUNCTION_PATTERN.match(value)
    if match:
        red, green, blue = (min(255, round(float(c))) for c in match.groups())
        return RGBColor(red, green, blue)

    try:
        return RGBColor.from_hex(value)
    except ValueError:
        return None


def parse_css(declarations: str) -> dict[str, str]:
    """Split an inline style attribute into property -> value."""
    css: dict[str, str] = {}
    for declaration in declarations.split(";"):
        if ":" not in declaration:
            continue
        name, _, value = declaration.partition(":")
        css[name.strip().lower()] = value.strip()
    return css


class HTMLHandler(FormatHandler):
    """Handler for HTML (.html, .htm) files.

    Uses BeautifulSoup to walk the document body. Styling comes from
    semantic tags (b, i, u, s, a, mark), legacy <font> attributes and
    inline ``style`` declarations.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".html", ".htm")

    def read(self, path: Path) -> StyledDocument:
        """Extract styled text from an HTML file."""
        return self.parse(path.read_text(encoding="utf-8", errors="ignore"))

    def parse(self, html: str) -> StyledDocument:
        """Convert an HTML string to a StyledDocument."""
        soup = BeautifulSoup(html, "html.parser")

        # Remove script and style elements
        for element in soup(["script", "style"]):
            element.decompose()

        doc = StyledDocument()
        if soup.title and soup.title.string:
            doc.metadata["title"] = soup.title.string.strip()
            soup.title.decompose()

        self._walk(soup.body or soup, PLAIN, doc, preformatted=False)
        self._trim_trailing_newlines(doc)
        return doc

    def _walk(
        self, element: Tag, style: StyleSet, doc: StyledDocument, preformatted: bool
    ) -> None:
        """Recursively append the text under element with inherited style."""
        for node in element.children:
            if isinstance(node, (Comment, Doctype)):
                continue

            if isinstance(node, NavigableString):
                text = str(node)
                if not preformatted:
                    text = WHITESPACE_PATTERN.sub(" ", text)
                    if self._last_char(doc) in ("", "\n", " "):
                        text = text.lstrip(" ")
                if text:
                    doc.append(text, style)
                continue

            if not isinstance(node, Tag):
                continue

            if node.name == "br":
                doc.append("\n", style)
                continue

            is_block = node.name in BLOCK_TAGS
            if is_block and not self._at_line_start(doc):
                doc.append("\n")

            self._walk(
                node,
                self._style_for(node, style),
                doc,
                preformatted or node.name == "pre",
            )

            if is_block and not self._at_line_start(doc):
                doc.append("\n")

    def _style_for(self, element: Tag, style: StyleSet) -> StyleSet:
        """Derive the StyleSet of element's content from its parent's."""
        flags = style.style
        changes: dict = {}
        name = element.name

        if name in BOLD_TAGS:
            flags |= TextStyle.BOLD
        elif name in ITALIC_TAGS:
            flags |= TextStyle.ITALIC
        elif name in UNDERLINE_TAGS:
            flags |= TextStyle.UNDERLINE
        elif name in STRIKE_TAGS:
            flags |= TextStyle.STRIKETHROUGH
        elif name == "mark":
            changes["background_color"] = MARK_COLOR
        elif name == "a" and element.get("href"):
            changes["link_url"] = element["href"]
        elif name == "font":
            color = parse_color(element.get("color"))
            if color is not None:
                changes["text_color"] = color
            if element.get("face"):
                changes["font_family"] = element["face"].split(",")[0].strip(" '\"")
            size = element.get("size", "").strip()
            if size.isdigit() and int(size) in FONT_SIZE_POINTS:
                changes["font_size"] = float(FONT_SIZE_POINTS[int(size)])

        css = parse_css(element.get("style", ""))
        flags = self._apply_css_flags(css, flags)

        color = parse_color(css.get("color"))
        if color is not None:
            changes["text_color"] = color
        background = parse_color(css.get("background-color") or css.get("background"))
        if background is not None:
            changes["background_color"] = background
        if css.get("font-family"):
            changes["font_family"] = css["font-family"].split(",")[0].strip(" '\"")
        font_size = self._parse_font_size(css.get("font-size"))
        if font_size is not None:
            changes["font_size"] = font_size

        return replace(style, style=flags, **changes)

    def _apply_css_flags(self, css: dict[str, str], flags: TextStyle) -> TextStyle:
        weight = css.get("font-weight", "").lower()
        if weight in ("bold", "bolder") or (weight.isdigit() and int(weight) >= 600):
            flags |= TextStyle.BOLD
        elif weight in ("normal", "lighter") or (weight.isdigit() and int(weight) < 600):
            flags &= ~TextStyle.BOLD

        font_style = css.get("font-style", "").lower()
        if font_style in ("italic", "oblique"):
            flags |= TextStyle.ITALIC
        elif font_style == "normal":
            flags &= ~TextStyle.ITALIC

        decoration = (
            css.get("text-decoration-line") or css.get("text-decoration", "")
        ).lower()
        if "none" in decoration.split():
            flags &= ~(TextStyle.UNDERLINE | TextStyle.STRIKETHROUGH)
        if "underline" in decoration:
            flags |= TextStyle.UNDERLINE
        if "line-through" in decoration:
            flags |= TextStyle.STRIKETHROUGH

        return flags

    def _parse_font_size(self, value: Optional[str]) -> Optional[float]:
        """Convert a CSS font size in pt or px to points."""
        if not value:
            return None
        match = FONT_SIZE_PATTERN.match(value.strip().lower())
        if not match:
            return None
        size = float(match.group(1))
        if match.group(2) == "px":
            size = round(size * 0.75, 1)
        return size

    def _last_char(self, doc: StyledDocument) -> str:
        """Return the last character appended so far, or "" if none."""
        for run in reversed(doc.runs):
            if run.text:
                return run.text[-1]
        return ""

    def _at_line_start(self, doc: StyledDocument) -> bool:
        """Check if the next text would start a new line."""
        return self._last_char(doc) in ("", "\n")

    def _trim_trailing_newlines(self, doc: StyledDocument) -> None:
        while doc.runs and not doc.runs[-1].text.rstrip("\n"):
            doc.runs.pop()
        if doc.runs:
            last = doc.runs[-1]
            last.text = last.text.rstrip("\n")
