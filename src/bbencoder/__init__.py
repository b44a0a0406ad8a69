"""BB Encoder - convert styled text to BBCode markup."""

from bbencoder.formatting.encoder import BBCodeEncoder, EncoderOptions, encode
from bbencoder.formatting.ir import RGBColor, StyledDocument, StyleSet, TextRun, TextStyle

__version__ = "0.1.0"

__all__ = [
    "BBCodeEncoder",
    "EncoderOptions",
    "encode",
    "RGBColor",
    "StyledDocument",
    "StyleSet",
    "TextRun",
    "TextStyle",
    "__version__",
]
