"""Conversion orchestrator: read a styled document, encode it as BBCode."""

from pathlib import Path
from typing import Optional

from bbencoder.config import get_settings
from bbencoder.formats import get_handler, SUPPORTED_EXTENSIONS
from bbencoder.formatting.encoder import BBCodeEncoder, EncoderOptions
from bbencoder.formatting.ir import StyledDocument


class ConversionError(Exception):
    """Error while reading or converting a document."""

    pass


class DocumentConverter:
    """Orchestrates the conversion pipeline.

    Pipeline:
    1. Read input file into a StyledDocument
    2. Encode the document as BBCode
    3. Optionally write the markup to an output file
    """

    def __init__(self, options: Optional[EncoderOptions] = None) -> None:
        """Initialize the converter.

        Args:
            options: Encoder options (defaults come from settings)
        """
        self.options = options or get_settings().encoder_options()
        self.encoder = BBCodeEncoder(self.options)

    def read_document(self, input_path: Path) -> StyledDocument:
        """Read an input file into a StyledDocument.

        Raises:
            ConversionError: If the file is missing, unsupported or unreadable
        """
        if not input_path.exists():
            raise ConversionError(f"Input file not found: {input_path}")

        ext = input_path.suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise ConversionError(
                f"Unsupported format: {ext}. "
                f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
            )

        handler = get_handler(ext)()
        try:
            return handler.read(input_path)
        except Exception as e:
            raise ConversionError(f"Could not read {input_path.name}: {e}") from e

    def convert_document(self, document: StyledDocument) -> str:
        """Encode a StyledDocument without file I/O."""
        return self.encoder.encode(document)

    def convert_file(
        self,
        input_path: Path,
        output_path: Optional[Path] = None,
    ) -> str:
        """Convert a document file to BBCode.

        Args:
            input_path: Path to input document
            output_path: Optional path to write the markup to

        Returns:
            The BBCode markup

        Raises:
            ConversionError: If reading or writing fails
        """
        document = self.read_document(input_path)
        markup = self.convert_document(document)

        if output_path is not None:
            self.write_markup(markup, output_path)

        return markup

    def write_markup(self, markup: str, output_path: Path) -> None:
        """Write markup as UTF-8, wrapping OS errors in ConversionError."""
        try:
            output_path.write_text(markup, encoding="utf-8")
        except OSError as e:
            raise ConversionError(f"Could not write {output_path}: {e}") from e
