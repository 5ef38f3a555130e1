"""Domain models for ttfoutline.

This module contains the decoded representations of a font: its table
directory entries, glyph outlines and points. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel decoding)

Key classes:
- TableEntry: One record of the table directory
- Point: An absolute outline point with its on-curve flag
- SimpleOutline, CompoundOutline, EmptyOutline, FailedOutline: Outline variants
- GlyphFailure: A per-glyph decoding error
- Font: Tables plus one outline per glyph index
"""

from ttfoutline.domain.font import Font, GlyphFailure
from ttfoutline.domain.outline import (
    CompoundOutline,
    EmptyOutline,
    FailedOutline,
    GlyphOutline,
    Point,
    SimpleOutline,
    outline_from_dict,
)
from ttfoutline.domain.table import TableEntry

__all__: list[str] = [
    "CompoundOutline",
    "EmptyOutline",
    "FailedOutline",
    "Font",
    "GlyphFailure",
    "GlyphOutline",
    "Point",
    "SimpleOutline",
    "TableEntry",
    "outline_from_dict",
]
