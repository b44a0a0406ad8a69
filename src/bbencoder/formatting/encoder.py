"""Style-run to BBCode encoder.

The encoder walks a StyledDocument, groups characters into maximal runs
of constant style, and emits the minimal sequence of tag opens and
closes between consecutive runs. An explicit tag stack keeps the output
well nested: tags always close in the reverse order they were opened.
"""

import re
from dataclasses import dataclass
from enum import IntFlag
from itertools import groupby
from operator import itemgetter
from typing import Optional, Union

from bbencoder.formatting.ir import StyledDocument, StyleSet, TextRun

DEFAULT_TAB_WIDTH = 4

# Outermost first. Opens follow this order, closes follow the stack.
TAG_ORDER = ("url", "font", "size", "color", "bgcolor", "b", "i", "u", "s")

# Letters, digits and underscore, with inner apostrophes ("don't").
WORD_PATTERN = re.compile(r"\w+(?:['’]\w+)*")

NOPARSE_CLOSE_PATTERN = re.compile(r"\[(/noparse\])", re.IGNORECASE)


class EncoderFlag(IntFlag):
    """Bit-flag form of the encoder options."""

    NONE = 0
    ENCLOSE_IN_CODE_TAGS = 1 << 0
    REPLACE_TABS_WITH_SPACES = 1 << 1
    USE_STRIKE_FULL_WORD = 1 << 2


@dataclass(frozen=True)
class EncoderOptions:
    """Independent switches that adjust the encoder output.

    Attributes:
        enclose_in_code_tags: Wrap the whole output in [code]...[/code]
        replace_tabs_with_spaces: Replace each tab in the text with spaces
        use_strike_full_word: Extend strikethrough to cover whole words
        tab_width: Number of spaces that replace one tab
    """

    enclose_in_code_tags: bool = False
    replace_tabs_with_spaces: bool = False
    use_strike_full_word: bool = False
    tab_width: int = DEFAULT_TAB_WIDTH

    @classmethod
    def from_flags(
        cls, flags: Union[int, EncoderFlag], tab_width: int = DEFAULT_TAB_WIDTH
    ) -> "EncoderOptions":
        """Build options from a bitset such as ``ENCLOSE_IN_CODE_TAGS | ...``."""
        return cls(
            enclose_in_code_tags=bool(flags & EncoderFlag.ENCLOSE_IN_CODE_TAGS),
            replace_tabs_with_spaces=bool(flags & EncoderFlag.REPLACE_TABS_WITH_SPACES),
            use_strike_full_word=bool(flags & EncoderFlag.USE_STRIKE_FULL_WORD),
            tab_width=tab_width,
        )

    @property
    def flags(self) -> EncoderFlag:
        """The options as a bitset."""
        flags = EncoderFlag.NONE
        if self.enclose_in_code_tags:
            flags |= EncoderFlag.ENCLOSE_IN_CODE_TAGS
        if self.replace_tabs_with_spaces:
            flags |= EncoderFlag.REPLACE_TABS_WITH_SPACES
        if self.use_strike_full_word:
            flags |= EncoderFlag.USE_STRIKE_FULL_WORD
        return flags


@dataclass(frozen=True)
class BBCodeTag:
    """A single BBCode tag, optionally with an ``=argument``.

    Two tags are the same tag only if both name and argument match, so
    ``[color=#FF0000]`` and ``[color=#00FF00]`` are distinct.
    """

    name: str
    argument: Optional[str] = None

    @property
    def open_markup(self) -> str:
        if self.argument is None:
            return f"[{self.name}]"
        return f"[{self.name}={self.argument}]"

    @property
    def close_markup(self) -> str:
        return f"[/{self.name}]"

    @property
    def priority(self) -> int:
        """Position in the canonical nesting order (0 is outermost)."""
        return TAG_ORDER.index(self.name)

    def __str__(self) -> str:
        return self.open_markup


def escape_text(text: str) -> str:
    """Make literal brackets in text unambiguous to a BBCode parser.

    Text containing ``[`` or ``]`` is wrapped in ``[noparse]`` tags. A
    literal ``[/noparse]`` inside the text is split across two wrappers
    so it cannot terminate the first one.
    """
    if "[" not in text and "]" not in text:
        return text
    body = NOPARSE_CLOSE_PATTERN.sub(r"[[/noparse][noparse]\1", text)
    return f"[noparse]{body}[/noparse]"


def _format_url(url: str) -> str:
    return url.replace("[", "%5B").replace("]", "%5D")


def _format_font(name: str) -> str:
    return name.replace("[", "").replace("]", "").strip()


def _format_size(size: float) -> str:
    if float(size).is_integer():
        return str(int(size))
    # Plain decimal up to 15 significant digits
    return format(float(size), ".15g")


class BBCodeEncoder:
    """Encode styled documents as BBCode.

    The encoder holds only its options and is safe to share; every call
    to encode() builds its own runs and tag stack.
    """

    def __init__(self, options: Optional[EncoderOptions] = None) -> None:
        self.options = options or EncoderOptions()

    def encode(self, document: StyledDocument) -> str:
        """Convert a StyledDocument to BBCode markup.

        Args:
            document: The styled text to encode

        Returns:
            BBCode markup; empty string for an empty document
        """
        parts: list[str] = []
        stack: list[BBCodeTag] = []

        for run in self.segment(document):
            self._transition(stack, self.tags_for(run.style), parts)
            parts.append(escape_text(self._expand_tabs(run.text)))

        while stack:
            parts.append(stack.pop().close_markup)

        markup = "".join(parts)
        if self.options.enclose_in_code_tags:
            return f"[code]{markup}[/code]"
        return markup

    def segment(self, document: StyledDocument) -> list[TextRun]:
        """Split a document into maximal runs of constant style.

        With ``use_strike_full_word`` set, strikethrough is first widened
        to whole words, so run boundaries reflect the effective style.
        """
        chars = list(document.characters())
        if self.options.use_strike_full_word:
            chars = self._extend_strikethrough(chars)

        return [
            TextRun(text="".join(char for char, _ in group), style=style)
            for style, group in groupby(chars, key=itemgetter(1))
        ]

    def tags_for(self, style: StyleSet) -> tuple[BBCodeTag, ...]:
        """Map a StyleSet to its tags in canonical nesting order."""
        tags: list[BBCodeTag] = []

        if style.link_url:
            tags.append(BBCodeTag("url", _format_url(style.link_url)))
        if style.font_family and _format_font(style.font_family):
            tags.append(BBCodeTag("font", _format_font(style.font_family)))
        if style.font_size is not None:
            tags.append(BBCodeTag("size", _format_size(style.font_size)))
        if style.text_color is not None:
            tags.append(BBCodeTag("color", style.text_color.hex))
        if style.background_color is not None:
            tags.append(BBCodeTag("bgcolor", style.background_color.hex))
        if style.bold:
            tags.append(BBCodeTag("b"))
        if style.italic:
            tags.append(BBCodeTag("i"))
        if style.underline:
            tags.append(BBCodeTag("u"))
        if style.strikethrough:
            tags.append(BBCodeTag("s"))

        return tuple(tags)

    def _transition(
        self,
        stack: list[BBCodeTag],
        wanted: tuple[BBCodeTag, ...],
        parts: list[str],
    ) -> None:
        """Close and open tags so that the stack holds exactly ``wanted``."""
        wanted_set = set(wanted)

        # Everything above the lowest unwanted tag has to come off the stack
        keep = 0
        while keep < len(stack) and stack[keep] in wanted_set:
            keep += 1
        while len(stack) > keep:
            parts.append(stack.pop().close_markup)

        for tag in wanted:
            if tag not in stack:
                stack.append(tag)
                parts.append(tag.open_markup)

    def _extend_strikethrough(
        self, chars: list[tuple[str, StyleSet]]
    ) -> list[tuple[str, StyleSet]]:
        """Strike every character of a word that is partially struck."""
        text = "".join(char for char, _ in chars)

        for match in WORD_PATTERN.finditer(text):
            start, end = match.span()
            struck = [chars[i][1].strikethrough for i in range(start, end)]
            if any(struck) and not all(struck):
                for i in range(start, end):
                    char, style = chars[i]
                    chars[i] = (char, style.with_strikethrough(True))

        return chars

    def _expand_tabs(self, text: str) -> str:
        if not self.options.replace_tabs_with_spaces:
            return text
        return text.replace("\t", " " * self.options.tab_width)


def encode(document: StyledDocument, options: Optional[EncoderOptions] = None) -> str:
    """Encode a StyledDocument as BBCode with the given options."""
    return BBCodeEncoder(options).encode(document)
