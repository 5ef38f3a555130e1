"""Font I/O layer for ttfoutline.

This module handles getting font bytes into memory and reading them back
as big-endian values.

Key classes:
- ByteCursor: Bounds-checked sequential reader over a byte buffer
- FontReader: Load a font file into memory
"""

from ttfoutline.io.cursor import ByteCursor
from ttfoutline.io.reader import FontReader

__all__ = [
    "ByteCursor",
    "FontReader",
]
