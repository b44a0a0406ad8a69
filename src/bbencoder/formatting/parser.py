"""Markdown parser for converting lightweight markup to IR."""

import re
from dataclasses import replace
from typing import Optional

from bbencoder.formatting.ir import PLAIN, StyledDocument, StyleSet, TextStyle


class MarkdownParser:
    """Parse inline markdown formatting into a StyledDocument.

    Supports ***bold italic***, **bold**, *italic*, __underline__,
    ~~strikethrough~~ and [label](url). Markers may nest. Unmatched
    markers and all whitespace, including newlines, are kept as text.
    """

    # Order matters: longer markers are tried before their prefixes
    MARKERS: tuple[tuple[str, TextStyle], ...] = (
        ("***", TextStyle.BOLD | TextStyle.ITALIC),
        ("**", TextStyle.BOLD),
        ("__", TextStyle.UNDERLINE),
        ("~~", TextStyle.STRIKETHROUGH),
        ("*", TextStyle.ITALIC),
    )

    LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")

    # Characters that may start a marker or a link
    SPECIAL_PATTERN = re.compile(r"[*_~\[]")

    def parse(self, markdown_text: str, metadata: Optional[dict] = None) -> StyledDocument:
        """Convert markdown text to a StyledDocument.

        Args:
            markdown_text: The markdown-formatted text
            metadata: Optional metadata from the source document

        Returns:
            StyledDocument with one fragment per styled span
        """
        doc = StyledDocument(metadata=metadata or {})
        self._parse_into_runs(markdown_text, PLAIN, doc)
        return doc

    def _parse_into_runs(self, text: str, style: StyleSet, doc: StyledDocument) -> None:
        """Parse text and add runs to doc, handling nested formatting."""
        pos = 0

        while pos < len(text):
            if text[pos] == "[":
                match = self.LINK_PATTERN.match(text, pos)
                if match:
                    self._parse_into_runs(
                        match.group(1), replace(style, link_url=match.group(2)), doc
                    )
                    pos = match.end()
                    continue

            end = self._match_marker(text, pos, style, doc)
            if end is not None:
                pos = end
                continue

            # Plain text up to the next possible marker (at least one character)
            next_special = self.SPECIAL_PATTERN.search(text, pos + 1)
            end_pos = next_special.start() if next_special else len(text)
            doc.append(text[pos:end_pos], style)
            pos = end_pos

    def _match_marker(
        self, text: str, pos: int, style: StyleSet, doc: StyledDocument
    ) -> Optional[int]:
        """Parse a marker span starting at pos; return the position after it."""
        for marker, flag in self.MARKERS:
            if not text.startswith(marker, pos):
                continue

            start = pos + len(marker)
            end = self._find_closing(text, marker, start)
            if end is None or end == start:
                # No closing found, try shorter markers
                continue
            if text[start].isspace() or text[end - 1].isspace():
                # "a * b * c" is not emphasis
                continue

            self._parse_into_runs(
                text[start:end], replace(style, style=style.style | flag), doc
            )
            return end + len(marker)

        return None

    def _find_closing(self, text: str, marker: str, start: int) -> Optional[int]:
        """Find the closing marker, skipping doubled asterisks for *italic*."""
        end = text.find(marker, start)
        if marker != "*":
            return end if end != -1 else None

        while end != -1:
            if text.startswith("**", end):
                end = text.find("*", end + 2)
                continue
            return end
        return None

    def to_plain_text(self, doc: StyledDocument) -> str:
        """Convert a StyledDocument back to plain text."""
        return doc.plain_text
