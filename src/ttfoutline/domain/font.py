"""Decoded font representation.

A Font holds the table directory and one outline per glyph index, along
with the list of glyphs that failed to decode.
"""

from dataclasses import dataclass, field
from typing import Any

from ttfoutline.domain.outline import (
    CompoundOutline,
    EmptyOutline,
    FailedOutline,
    GlyphOutline,
    SimpleOutline,
    outline_from_dict,
)
from ttfoutline.domain.table import TableEntry


@dataclass(frozen=True, slots=True)
class GlyphFailure:
    """A per-glyph decoding failure.

    Attributes:
        index: Glyph index
        error_type: Name of the exception class raised
        message: Error message
    """

    index: int
    error_type: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "error_type": self.error_type, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphFailure":
        return cls(index=data["index"], error_type=data["error_type"], message=data["message"])


@dataclass
class Font:
    """Outlines decoded from one font file.

    glyphs[i] is the outline of glyph index i. The list always has one entry
    per glyph in 'maxp'; glyphs that failed hold a FailedOutline and are
    also listed in failures.

    Attributes:
        tables: Table directory keyed by tag
        glyphs: Outline per glyph index
        failures: Per-glyph errors, in glyph index order
        checksum_mismatches: Tags whose stored checksum did not match, when
            checksums were verified
        scaler_type: The 4-character sfnt version tag
    """

    tables: dict[str, TableEntry]
    glyphs: list[GlyphOutline]
    failures: list[GlyphFailure] = field(default_factory=list)
    checksum_mismatches: list[str] = field(default_factory=list)
    scaler_type: str = ""

    @property
    def num_glyphs(self) -> int:
        return len(self.glyphs)

    @property
    def is_complete(self) -> bool:
        """True if no glyph failed to decode."""
        return not self.failures

    def glyph(self, index: int) -> GlyphOutline:
        """Get the outline of a glyph index.

        Raises:
            IndexError: If index is not a valid glyph index
        """
        if not 0 <= index < len(self.glyphs):
            raise IndexError(f"Glyph index {index} out of range 0..{len(self.glyphs) - 1}")
        return self.glyphs[index]

    def simple_glyphs(self) -> list[tuple[int, SimpleOutline]]:
        """Return (index, outline) for every decoded simple glyph."""
        return [(i, g) for i, g in enumerate(self.glyphs) if isinstance(g, SimpleOutline)]

    def compound_indices(self) -> list[int]:
        return [i for i, g in enumerate(self.glyphs) if isinstance(g, CompoundOutline)]

    def empty_indices(self) -> list[int]:
        return [i for i, g in enumerate(self.glyphs) if isinstance(g, EmptyOutline)]

    def failed_indices(self) -> list[int]:
        return [i for i, g in enumerate(self.glyphs) if isinstance(g, FailedOutline)]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "scaler_type": self.scaler_type,
            "tables": {tag: entry.to_dict() for tag, entry in self.tables.items()},
            "glyphs": [g.to_dict() for g in self.glyphs],
            "failures": [f.to_dict() for f in self.failures],
            "checksum_mismatches": list(self.checksum_mismatches),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Font":
        return cls(
            tables={tag: TableEntry.from_dict(t) for tag, t in data["tables"].items()},
            glyphs=[outline_from_dict(g) for g in data["glyphs"]],
            failures=[GlyphFailure.from_dict(f) for f in data.get("failures", [])],
            checksum_mismatches=list(data.get("checksum_mismatches", [])),
            scaler_type=data.get("scaler_type", ""),
        )
