"""Rich Text Format (.rtf) file handler."""

from pathlib import Path

from striprtf.striprtf import rtf_to_text

from bbencoder.formats.base import FormatHandler
from bbencoder.formatting.ir import StyledDocument


class RTFHandler(FormatHandler):
    """Handler for Rich Text Format (.rtf) files.

    Uses striprtf for reading RTF files. Only the text is recovered;
    the result is a single unstyled run.
    """

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return (".rtf",)

    def read(self, path: Path) -> StyledDocument:
        """Extract plain text from RTF file."""
        rtf_content = path.read_text(encoding="utf-8", errors="ignore")
        doc = StyledDocument(metadata={"source": path.name})
        doc.append(rtf_to_text(rtf_content))
        return doc
