"""Markdown (.md) file handler."""

from pathlib import Path

from bbencoder.formats.base import FormatHandler
from bbencoder.formatting.ir import StyledDocument
from bbencoder.formatting.parser import MarkdownParser


class MarkdownHandler(FormatHandler):
    """Handler for markdown-styled text files.

    Inline markers are turned into styles:
    - **bold**, *italic*, ***both***
    - __underline__ and ~~strikethrough~~
    - [label](url) for links
    """

    def __init__(self) -> None:
        self.parser = MarkdownParser()

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".md", ".markdown")

    def read(self, path: Path) -> StyledDocument:
        """Parse a markdown file into a StyledDocument."""
        text = path.read_text(encoding="utf-8")
        return self.parser.parse(text, metadata={"source": path.name})
