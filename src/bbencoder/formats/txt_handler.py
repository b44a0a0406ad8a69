"""Plain text file handler."""

from pathlib import Path

from bbencoder.formats.base import FormatHandler
from bbencoder.formatting.ir import StyledDocument


class TXTHandler(FormatHandler):
    """Handler for plain text (.txt) files.

    The whole file becomes a single unstyled run, so the encoder only
    escapes brackets and applies its options.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".txt",)

    def read(self, path: Path) -> StyledDocument:
        """Read plain text from file."""
        doc = StyledDocument(metadata={"source": path.name})
        doc.append(path.read_text(encoding="utf-8"))
        return doc
