"""Intermediate Representation for styled text.

This module defines the data structures that bridge document readers
to the BBCode encoder. A StyledDocument is an ordered sequence of text
fragments, each carrying the full set of style attributes active over it.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Flag, auto
from typing import Iterator, Optional


class TextStyle(Flag):
    """Boolean text styling flags (combinable with |)."""

    NONE = 0
    BOLD = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    STRIKETHROUGH = auto()


HEX_COLOR_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class RGBColor:
    """A color with 8-bit red, green and blue channels."""

    red: int
    green: int
    blue: int

    @classmethod
    def from_floats(cls, red: float, green: float, blue: float) -> "RGBColor":
        """Build a color from 0.0-1.0 channel values, rounding each channel."""

        def channel(value: float) -> int:
            return max(0, min(255, round(value * 255)))

        return cls(channel(red), channel(green), channel(blue))

    @classmethod
    def from_hex(cls, value: str) -> "RGBColor":
        """Parse ``#RGB``, ``#RRGGBB`` or ``RRGGBB``.

        Raises:
            ValueError: If the value is not a hex color
        """
        match = HEX_COLOR_PATTERN.match(value.strip())
        if not match:
            raise ValueError(f"Invalid hex color: {value!r}")
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @property
    def hex(self) -> str:
        """Color as ``#RRGGBB``."""
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"

    def __str__(self) -> str:
        return self.hex


@dataclass(frozen=True)
class StyleSet:
    """The full set of style attributes active at a document position.

    Attributes:
        style: Boolean flags (bold, italic, underline, strikethrough)
        text_color: Foreground color, if any
        background_color: Background (highlight) color, if any
        font_family: Font name, if any
        font_size: Font size in points, if any
        link_url: Hyperlink address, if any
    """

    style: TextStyle = TextStyle.NONE
    text_color: Optional[RGBColor] = None
    background_color: Optional[RGBColor] = None
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    link_url: Optional[str] = None

    @property
    def bold(self) -> bool:
        return TextStyle.BOLD in self.style

    @property
    def italic(self) -> bool:
        return TextStyle.ITALIC in self.style

    @property
    def underline(self) -> bool:
        return TextStyle.UNDERLINE in self.style

    @property
    def strikethrough(self) -> bool:
        return TextStyle.STRIKETHROUGH in self.style

    @property
    def is_plain(self) -> bool:
        """Check if no attribute is active."""
        return self == PLAIN

    def with_strikethrough(self, enabled: bool) -> "StyleSet":
        """Return a copy with only the strikethrough flag changed."""
        if enabled:
            return replace(self, style=self.style | TextStyle.STRIKETHROUGH)
        return replace(self, style=self.style & ~TextStyle.STRIKETHROUGH)


PLAIN = StyleSet()


@dataclass
class TextRun:
    """A contiguous fragment of text with consistent styling.

    Attributes:
        text: The text content
        style: The attributes active over the whole fragment
    """

    text: str
    style: StyleSet = PLAIN

    @property
    def bold(self) -> bool:
        """Check if this run is bold."""
        return self.style.bold

    @property
    def italic(self) -> bool:
        """Check if this run is italic."""
        return self.style.italic

    @property
    def underline(self) -> bool:
        return self.style.underline

    @property
    def strikethrough(self) -> bool:
        return self.style.strikethrough

    def __str__(self) -> str:
        return self.text


@dataclass
class StyledDocument:
    """Styled text ready for encoding.

    Fragments are kept as the reader produced them: adjacent fragments
    may share a StyleSet and fragments may be empty. Segmentation into
    maximal runs happens in the encoder.

    Attributes:
        runs: Ordered text fragments
        metadata: Additional metadata from the source document
    """

    runs: list[TextRun] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)

    @property
    def plain_text(self) -> str:
        """Get the text content without styling."""
        return "".join(run.text for run in self.runs)

    @property
    def is_empty(self) -> bool:
        return not any(run.text for run in self.runs)

    def append(self, text: str, style: StyleSet = PLAIN) -> None:
        """Append a new fragment to this document."""
        self.runs.append(TextRun(text=text, style=style))

    def characters(self) -> Iterator[tuple[str, StyleSet]]:
        """Yield each character with its StyleSet in document order."""
        for run in self.runs:
            for char in run.text:
                yield char, run.style

    def __len__(self) -> int:
        return sum(len(run.text) for run in self.runs)

    def __str__(self) -> str:
        return self.plain_text
