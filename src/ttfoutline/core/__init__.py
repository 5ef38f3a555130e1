"""Core decoding pipeline for ttfoutline.

This module contains the binary decoding stages:

- Table directory indexing (tag to offset/length mapping)
- Glyph location through 'head', 'maxp' and 'loca'
- Simple glyph decoding (flag expansion, delta coordinates)
- Font assembly with per-glyph error recording

All decoding functions are:
- Stateless (safe for use in worker processes)
- Read-only over the font buffer

Key functions:
- decode_glyph: Decode the glyph record at an absolute offset
- expand_flags: Run-length expand a flag array
- read_coordinates: Rebuild absolute coordinates from deltas
- calc_checksum: sfnt table checksum

Key classes:
- TableDirectory: Parsed table directory
- GlyphLocator: Resolves glyph indexes to offsets
- SimpleGlyphDecoder: Decodes one glyph record from a cursor
- FontDecoder: Produces a Font from a byte buffer
"""

from ttfoutline.core.decoder import (
    SimpleGlyphDecoder,
    decode_glyph,
    decode_glyph_at,
    expand_flags,
    read_coordinates,
)
from ttfoutline.core.directory import TableDirectory, calc_checksum, flavor_of
from ttfoutline.core.locator import GlyphLocation, GlyphLocator
from ttfoutline.core.processor import FontDecoder, decode_glyph_batch, decode_location

__all__ = [
    # Processor classes
    "FontDecoder",
    # Locator classes
    "GlyphLocation",
    "GlyphLocator",
    # Decoder classes
    "SimpleGlyphDecoder",
    # Directory classes
    "TableDirectory",
    # Functions
    "calc_checksum",
    "decode_glyph",
    "decode_glyph_at",
    "decode_glyph_batch",
    "decode_location",
    "expand_flags",
    "flavor_of",
    "read_coordinates",
]
