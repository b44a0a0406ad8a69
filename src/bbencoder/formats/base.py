"""Abstract base class for document format handlers."""

from abc import ABC, abstractmethod
from pathlib import Path

from bbencoder.formatting.ir import StyledDocument


class FormatHandler(ABC):
    """Abstract base class for document format handlers.

    Each handler reads one family of document formats into a
    StyledDocument, keeping whatever styling the format carries.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., ('.docx',))."""
        ...

    @abstractmethod
    def read(self, path: Path) -> StyledDocument:
        """Extract styled text from a document.

        Args:
            path: Path to the input document

        Returns:
            StyledDocument with the document's text and styles
        """
        ...
