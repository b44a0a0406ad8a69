"""Formatting utilities for representing and encoding styled text."""

from bbencoder.formatting.ir import (
    PLAIN,
    RGBColor,
    StyledDocument,
    StyleSet,
    TextRun,
    TextStyle,
)
from bbencoder.formatting.encoder import (
    BBCodeEncoder,
    BBCodeTag,
    EncoderFlag,
    EncoderOptions,
    encode,
    escape_text,
)
from bbencoder.formatting.parser import MarkdownParser

__all__ = [
    "PLAIN",
    "RGBColor",
    "StyledDocument",
    "StyleSet",
    "TextRun",
    "TextStyle",
    "BBCodeEncoder",
    "BBCodeTag",
    "EncoderFlag",
    "EncoderOptions",
    "encode",
    "escape_text",
    "MarkdownParser",
]
