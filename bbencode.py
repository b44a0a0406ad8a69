#!/usr/bin/env python3
"""
BB Encoder - styled text to BBCode converter

Simple usage:
    python bbencode.py document.docx          # Prints BBCode to stdout
    python bbencode.py page.html -o out.txt   # Writes BBCode to a file
    python bbencode.py /folder/path           # Converts all files in folder
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from bbencoder.cli import app

if __name__ == "__main__":
    app()
