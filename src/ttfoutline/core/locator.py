"""Glyph location through the 'head', 'maxp' and 'loca' tables.

'maxp' gives the number of glyphs, 'head' gives indexToLocFormat, and 'loca'
holds one offset per glyph (plus a final end marker) relative to the start
of 'glyf'. Short-format offsets are stored divided by two.
"""

from dataclasses import dataclass

from ttfoutline.core.directory import TableDirectory
from ttfoutline.domain import TableEntry
from ttfoutline.exceptions import (
    GlyphOffsetOutOfRangeError,
    MalformedGlyphError,
    MalformedHeaderError,
)
from ttfoutline.io.cursor import ByteCursor
from ttfoutline.utils.logging import get_logger

MAXP_NUM_GLYPHS_OFFSET = 4
HEAD_INDEX_TO_LOC_FORMAT_OFFSET = 50

SHORT_ENTRY_WIDTH = 2
LONG_ENTRY_WIDTH = 4


@dataclass(frozen=True, slots=True)
class GlyphLocation:
    """Where a glyph record lives in the font buffer.

    Attributes:
        index: Glyph index
        offset: Absolute byte offset of the record
        length: Byte length of the record's 'loca' slot, or None when the
            following 'loca' entry is not available
    """

    index: int
    offset: int
    length: int | None = None

    @property
    def is_empty(self) -> bool:
        return self.length == 0


class GlyphLocator:
    """Resolves glyph indexes to absolute offsets in the font buffer.

    Example:
        locator = GlyphLocator(directory, data)
        location = locator.locate(3)
        outline = decode_glyph(data, location.offset)
    """

    def __init__(self, directory: TableDirectory, data: bytes) -> None:
        """Read glyph count and 'loca' format from the font.

        Args:
            directory: Parsed table directory
            data: Font buffer the directory was parsed from

        Raises:
            MissingTableError: If 'head', 'maxp', 'loca' or 'glyf' is absent
            MalformedHeaderError: If 'maxp' or 'head' is too short for its field
            OutOfBoundsError: If 'maxp' or 'head' fields lie outside the buffer
        """
        self._data = data
        self._loca = directory.require("loca")
        self._glyf = directory.require("glyf")

        cursor = ByteCursor(data)

        _seek_field(cursor, directory.require("maxp"), MAXP_NUM_GLYPHS_OFFSET)
        self._num_glyphs = cursor.read_u16_be()

        _seek_field(cursor, directory.require("head"), HEAD_INDEX_TO_LOC_FORMAT_OFFSET)
        self._index_to_loc_format = cursor.read_i16_be()

        get_logger().debug(
            "Glyph locator ready",
            num_glyphs=self._num_glyphs,
            index_to_loc_format=self._index_to_loc_format,
        )

    @property
    def num_glyphs(self) -> int:
        """Number of glyphs declared in 'maxp'."""
        return self._num_glyphs

    @property
    def index_to_loc_format(self) -> int:
        return self._index_to_loc_format

    @property
    def entry_width(self) -> int:
        """Width of one 'loca' entry in bytes (2 for format 0, else 4)."""
        return SHORT_ENTRY_WIDTH if self._index_to_loc_format == 0 else LONG_ENTRY_WIDTH

    def loca_entry(self, index: int) -> int:
        """Read 'loca' entry index as a byte offset into 'glyf'.

        Args:
            index: Entry number, 0 .. num_glyphs inclusive

        Raises:
            OutOfBoundsError: If the entry lies outside the buffer
        """
        cursor = ByteCursor(self._data)
        cursor.seek_absolute(self._loca.offset + index * self.entry_width)
        if self.entry_width == SHORT_ENTRY_WIDTH:
            return cursor.read_u16_be() * 2
        return cursor.read_u32_be()

    def glyph_offset(self, index: int) -> int:
        """Return the absolute byte offset of a glyph's record.

        Raises:
            IndexError: If index is not a valid glyph index
            GlyphOffsetOutOfRangeError: If the offset is past the buffer end
            MalformedGlyphError: If 'loca' is too short to hold the entry
            OutOfBoundsError: If the 'loca' entry lies outside the buffer
        """
        self._check_index(index)
        entry_end = self._loca.offset + (index + 1) * self.entry_width
        if entry_end > self._loca.end:
            raise MalformedGlyphError(
                entry_end - self.entry_width,
                f"'loca' holds {self._loca.length // self.entry_width} entries, no entry {index}",
            )
        offset = self._glyf.offset + self.loca_entry(index)
        if offset > len(self._data):
            raise GlyphOffsetOutOfRangeError(index, offset, len(self._data))
        return offset

    def locate(self, index: int) -> GlyphLocation:
        """Resolve a glyph's offset and, when available, its slot length.

        The slot length comes from 'loca' entry index + 1, which is read only
        if it lies inside both the 'loca' table and the buffer.

        Raises:
            IndexError: If index is not a valid glyph index
            GlyphOffsetOutOfRangeError: If the offset is past the buffer end
            MalformedGlyphError: If the next 'loca' entry precedes this one, or
                'loca' is too short to hold this glyph's entry
            OutOfBoundsError: If the 'loca' entry lies outside the buffer
        """
        offset = self.glyph_offset(index)

        if not self._has_entry(index + 1):
            return GlyphLocation(index=index, offset=offset)

        length = self._glyf.offset + self.loca_entry(index + 1) - offset
        if length < 0:
            raise MalformedGlyphError(
                offset, f"'loca' entry {index + 1} precedes entry {index}"
            )
        return GlyphLocation(index=index, offset=offset, length=length)

    def _has_entry(self, index: int) -> bool:
        end = self._loca.offset + (index + 1) * self.entry_width
        return end <= self._loca.end and end <= len(self._data)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._num_glyphs:
            raise IndexError(
                f"Glyph index {index} out of range, font has {self._num_glyphs} glyphs"
            )


def _seek_field(cursor: ByteCursor, table: TableEntry, offset: int) -> None:
    """Position cursor at a 16-bit field, which must lie inside its table."""
    if offset + 2 > table.length:
        raise MalformedHeaderError(
            f"'{table.tag}' is {table.length} bytes, too short for the field at {offset}"
        )
    cursor.seek_absolute(table.offset + offset)
