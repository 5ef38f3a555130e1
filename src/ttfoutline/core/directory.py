"""sfnt table directory parsing.

The font file starts with a 12-byte offset table (scaler type, numTables,
searchRange, entrySelector, rangeShift) followed by numTables 16-byte
records: tag, checksum, offset, length. All values are big-endian.
"""

import struct
from collections.abc import Iterator

from ttfoutline.domain.table import TableEntry
from ttfoutline.exceptions import (
    InvalidTagError,
    MalformedHeaderError,
    MissingTableError,
)
from ttfoutline.io.cursor import ByteCursor
from ttfoutline.utils.logging import get_logger

HEADER_SIZE = 12
ENTRY_SIZE = 16

# Tables needed to locate and decode glyph outlines
REQUIRED_TABLES = ("head", "maxp", "loca", "glyf")

_FLAVORS = {
    "\x00\x01\x00\x00": "TrueType",
    "true": "TrueType",
    "OTTO": "OpenType",
}

# checkSumAdjustment lives at bytes 8..12 of 'head'
_HEAD_ADJUSTMENT_END = 12


def calc_checksum(data: bytes) -> int:
    """Calculate the sfnt checksum of a block of data.

    The data is treated as big-endian u32 values, zero padded to a multiple
    of four bytes, summed modulo 2**32.

        >>> calc_checksum(b"abcd")
        1633837924
        >>> calc_checksum(b"abcdxyz")
        3655064932
    """
    remainder = len(data) % 4
    if remainder:
        data += b"\0" * (4 - remainder)
    longs = struct.unpack(f">{len(data) // 4}L", data)
    return sum(longs) & 0xFFFFFFFF


def flavor_of(scaler_type: str) -> str:
    """Return "TrueType", "OpenType" or "unknown" for an sfnt scaler type."""
    return _FLAVORS.get(scaler_type, "unknown")


class TableDirectory:
    """Mapping from table tag to TableEntry, parsed from a font header.

    Example:
        directory = TableDirectory.parse(data)
        directory.ensure_required()
        glyf = directory.require("glyf")
    """

    def __init__(self, scaler_type: str, entries: dict[str, TableEntry]) -> None:
        self._scaler_type = scaler_type
        self._entries = dict(entries)

    @classmethod
    def parse(cls, data: bytes) -> "TableDirectory":
        """Parse the offset table and table records.

        Args:
            data: Complete font buffer

        Returns:
            Parsed table directory

        Raises:
            MalformedHeaderError: If the buffer is too short for the header or
                for the number of records it declares
            InvalidTagError: If a record tag is not ASCII
        """
        logger = get_logger()

        if len(data) < HEADER_SIZE:
            raise MalformedHeaderError(
                f"font is {len(data)} bytes, header needs {HEADER_SIZE}"
            )

        cursor = ByteCursor(data)
        scaler_type = cursor.read_bytes(4).decode("latin-1")
        num_tables = cursor.read_u16_be()
        cursor.skip(6)  # searchRange, entrySelector, rangeShift

        needed = HEADER_SIZE + num_tables * ENTRY_SIZE
        if len(data) < needed:
            raise MalformedHeaderError(
                f"{num_tables} table records need {needed} bytes, font is {len(data)}"
            )

        entries: dict[str, TableEntry] = {}
        for _ in range(num_tables):
            raw_tag = cursor.read_bytes(4)
            try:
                tag = raw_tag.decode("ascii")
            except UnicodeDecodeError as e:
                raise InvalidTagError(raw_tag) from e
            entry = TableEntry(
                tag=tag,
                checksum=cursor.read_u32_be(),
                offset=cursor.read_u32_be(),
                length=cursor.read_u32_be(),
            )
            logger.debug(
                "Table directory entry",
                tag=tag,
                offset=entry.offset,
                length=entry.length,
            )
            entries[tag] = entry

        logger.debug("Table directory parsed", num_tables=num_tables, unique=len(entries))
        return cls(scaler_type, entries)

    @property
    def scaler_type(self) -> str:
        """The 4-character sfnt version tag."""
        return self._scaler_type

    @property
    def flavor(self) -> str:
        return flavor_of(self._scaler_type)

    @property
    def tables(self) -> dict[str, TableEntry]:
        """Return a copy of the tag to entry mapping."""
        return dict(self._entries)

    def __contains__(self, tag: object) -> bool:
        return tag in self._entries

    def __getitem__(self, tag: str) -> TableEntry:
        return self._entries[tag]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def require(self, tag: str) -> TableEntry:
        """Get a table entry that must exist.

        Raises:
            MissingTableError: If the table is absent
        """
        entry = self._entries.get(tag)
        if entry is None:
            raise MissingTableError(tag)
        return entry

    def ensure_required(self) -> None:
        """Check that every table needed for outline decoding is present.

        Raises:
            MissingTableError: For the first required table that is absent
        """
        for tag in REQUIRED_TABLES:
            self.require(tag)

    def verify_checksums(self, data: bytes) -> list[str]:
        """Recompute table checksums against the stored values.

        Args:
            data: The font buffer the directory was parsed from

        Returns:
            Tags whose checksum does not match, including tables that extend
            past the end of the buffer
        """
        mismatched = []
        for tag, entry in self._entries.items():
            if entry.end > len(data):
                mismatched.append(tag)
                continue
            table = data[entry.offset:entry.end]
            if tag == "head" and len(table) >= _HEAD_ADJUSTMENT_END:
                table = table[:8] + b"\0\0\0\0" + table[12:]
            if calc_checksum(table) != entry.checksum:
                mismatched.append(tag)
        return mismatched

