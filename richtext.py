#!/usr/bin/env python3
"""
pptx-richtext - Rich text to slide text-run converter

Simple usage:
    python richtext.py convert notes.md              # Prints the run sequence
    python richtext.py convert editor.html -o a.pptx # Writes a one-slide deck
    python richtext.py sample                        # Prints sample rich text
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from pptx_richtext.cli import app

if __name__ == "__main__":
    app()
