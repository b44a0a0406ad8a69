"""Core conversion logic for BB Encoder."""

from bbencoder.core.converter import ConversionError, DocumentConverter

__all__ = [
    "ConversionError",
    "DocumentConverter",
]
