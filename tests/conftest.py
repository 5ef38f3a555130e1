"""Shared fixtures for building synthetic sfnt buffers."""

import struct
from collections.abc import Callable, Sequence

import logging

import pytest
import structlog

ON = 0x01
X_SHORT = 0x02
Y_SHORT = 0x04
REPEAT = 0x08
X_SAME_OR_POS = 0x10
Y_SAME_OR_POS = 0x20


def _checksum(data: bytes) -> int:
    data = data + b"\0" * (-len(data) % 4)
    return sum(struct.unpack(f">{len(data) // 4}L", data)) & 0xFFFFFFFF


def make_simple_glyph(
    end_indices: Sequence[int],
    flags: bytes,
    x_data: bytes,
    y_data: bytes,
    instructions: bytes = b"",
    bbox: tuple[int, int, int, int] = (0, 0, 0, 0),
) -> bytes:
    """Assemble a simple glyph record from already-encoded parts."""
    return (
        struct.pack(">h4h", len(end_indices), *bbox)
        + struct.pack(f">{len(end_indices)}H", *end_indices)
        + struct.pack(">H", len(instructions))
        + instructions
        + flags
        + x_data
        + y_data
    )


def make_triangle_glyph() -> bytes:
    """One contour, 3 on-curve points (10, 20), (110, 20), (60, 120), all short deltas."""
    both_positive = ON | X_SHORT | X_SAME_OR_POS | Y_SHORT | Y_SAME_OR_POS
    x_negative = ON | X_SHORT | Y_SHORT | Y_SAME_OR_POS
    return make_simple_glyph(
        end_indices=[2],
        flags=bytes([both_positive, both_positive, x_negative]),
        x_data=bytes([10, 100, 50]),
        y_data=bytes([20, 0, 100]),
        bbox=(10, 20, 110, 120),
    )


def make_compound_glyph() -> bytes:
    """A composite record: numberOfContours -1 followed by one component."""
    return struct.pack(">h4h", -1, 0, 0, 100, 100) + struct.pack(">HHbb", 0x0002, 1, 0, 0)


def make_head(index_to_loc_format: int) -> bytes:
    return struct.pack(
        ">LLLLHHqqhhhhHHhhh",
        0x00010000,  # version
        0x00010000,  # fontRevision
        0,  # checkSumAdjustment
        0x5F0F3CF5,  # magicNumber
        0,  # flags
        1000,  # unitsPerEm
        0,  # created
        0,  # modified
        0, 0, 1000, 1000,  # xMin, yMin, xMax, yMax
        0,  # macStyle
        8,  # lowestRecPPEM
        2,  # fontDirectionHint
        index_to_loc_format,
        0,  # glyphDataFormat
    )


def make_sfnt(tables: dict[str, bytes], scaler_type: bytes = b"\x00\x01\x00\x00") -> bytes:
    """Assemble an sfnt file with a valid directory and table checksums."""
    tags = sorted(tables)
    header = scaler_type + struct.pack(">HHHH", len(tags), 16 * len(tags), 0, 0)
    offset = len(header) + 16 * len(tags)
    directory = b""
    body = b""
    for tag in tags:
        data = tables[tag]
        directory += tag.encode("ascii") + struct.pack(">LLL", _checksum(data), offset, len(data))
        padded = data + b"\0" * (-len(data) % 4)
        body += padded
        offset += len(padded)
    return header + directory + body


def make_font(
    glyphs: Sequence[bytes] = (),
    *,
    long_loca: bool = False,
    loca_values: Sequence[int] | None = None,
    glyf_data: bytes | None = None,
    num_glyphs: int | None = None,
    include_loca_end: bool = True,
    omit: Sequence[str] = (),
    extra_tables: dict[str, bytes] | None = None,
) -> bytes:
    """Build a font holding the given glyph records.

    Args:
        glyphs: Glyph records, one per glyph index
        long_loca: Use 4-byte 'loca' entries (indexToLocFormat 1)
        loca_values: Raw 'loca' values to store instead of computed ones
        glyf_data: Raw 'glyf' table to store instead of the joined records
        num_glyphs: numGlyphs for 'maxp' (defaults to len(glyphs))
        include_loca_end: Append the end-of-'glyf' entry to computed 'loca'
        omit: Table tags to leave out
        extra_tables: Additional tables to include
    """
    if glyf_data is None:
        glyf_data = b""
        offsets = []
        for record in glyphs:
            offsets.append(len(glyf_data))
            glyf_data += record + b"\0" * (len(record) % 2)
        if include_loca_end:
            offsets.append(len(glyf_data))
        if loca_values is None:
            loca_values = offsets if long_loca else [o // 2 for o in offsets]
    if loca_values is None:
        loca_values = []
    if num_glyphs is None:
        num_glyphs = len(glyphs)

    loca_format = "L" if long_loca else "H"
    tables = {
        "head": make_head(1 if long_loca else 0),
        "maxp": struct.pack(">LH", 0x00005000, num_glyphs),
        "loca": struct.pack(f">{len(loca_values)}{loca_format}", *loca_values),
        "glyf": glyf_data,
    }
    tables.update(extra_tables or {})
    for tag in omit:
        tables.pop(tag, None)
    return make_sfnt(tables)


@pytest.fixture
def simple_glyph() -> Callable[..., bytes]:
    """Factory for simple glyph records."""
    return make_simple_glyph


@pytest.fixture
def triangle_glyph() -> bytes:
    """Record of a triangle with points (10, 20), (110, 20), (60, 120)."""
    return make_triangle_glyph()


@pytest.fixture
def compound_glyph() -> bytes:
    """Record of a composite glyph."""
    return make_compound_glyph()


@pytest.fixture
def build_font() -> Callable[..., bytes]:
    """Factory for complete synthetic fonts."""
    return make_font


@pytest.fixture
def build_sfnt() -> Callable[..., bytes]:
    """Factory for sfnt files from raw tables."""
    return make_sfnt


@pytest.fixture
def restore_logging():
    """Undo handlers and structlog configuration installed by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
