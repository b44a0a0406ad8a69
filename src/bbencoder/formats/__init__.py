"""Document format handlers for BB Encoder."""

from bbencoder.formats.base import FormatHandler
from bbencoder.formats.txt_handler import TXTHandler
from bbencoder.formats.markdown_handler import MarkdownHandler
from bbencoder.formats.html_handler import HTMLHandler
from bbencoder.formats.docx_handler import DOCXHandler
from bbencoder.formats.rtf_handler import RTFHandler

__all__ = [
    "FormatHandler",
    "TXTHandler",
    "MarkdownHandler",
    "HTMLHandler",
    "DOCXHandler",
    "RTFHandler",
]

# Map file extensions to handlers
HANDLER_MAP: dict[str, type[FormatHandler]] = {
    ".txt": TXTHandler,
    ".md": MarkdownHandler,
    ".markdown": MarkdownHandler,
    ".html": HTMLHandler,
    ".htm": HTMLHandler,
    ".docx": DOCXHandler,
    ".rtf": RTFHandler,
}

SUPPORTED_EXTENSIONS = tuple(HANDLER_MAP.keys())


def get_handler(extension: str) -> type[FormatHandler]:
    """Get the appropriate handler class for a file extension."""
    ext = extension.lower()
    if ext not in HANDLER_MAP:
        raise ValueError(
            f"Unsupported file format: {ext}. "
            f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
        )
    return HANDLER_MAP[ext]
