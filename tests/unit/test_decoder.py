"""Tests for simple glyph decoding."""

import struct

import pytest

from ttfoutline.core.decoder import (
    REPEAT_FLAG,
    X_IS_SAME_OR_POSITIVE,
    X_SHORT_VECTOR,
    SimpleGlyphDecoder,
    decode_glyph,
    decode_glyph_at,
    expand_flags,
    read_coordinates,
)
from ttfoutline.domain import CompoundOutline, Point, SimpleOutline
from ttfoutline.exceptions import MalformedGlyphError, TruncatedGlyphError
from ttfoutline.io.cursor import ByteCursor

ON = 0x01
Y_SAME = 0x20


class TestExpandFlags:
    """Tests for flag run-length expansion."""

    def test_no_repeats(self):
        """Test plain flags are taken one byte each."""
        cursor = ByteCursor(bytes([0x01, 0x00, 0x37]))
        assert expand_flags(cursor, 3) == [0x01, 0x00, 0x37]
        assert cursor.position() == 3

    def test_repeat_count_zero(self):
        """Test a repeat count of 0 yields a single flag."""
        flag = ON | REPEAT_FLAG
        cursor = ByteCursor(bytes([flag, 0, 0x00]))
        assert expand_flags(cursor, 2) == [flag, 0x00]
        assert cursor.position() == 3

    def test_repeat_count_max(self):
        """Test a repeat count of 255 yields 256 identical flags."""
        flag = ON | REPEAT_FLAG | X_SHORT_VECTOR
        cursor = ByteCursor(bytes([flag, 255]))
        flags = expand_flags(cursor, 256)
        assert flags == [flag] * 256
        assert cursor.position() == 2

    def test_mixed_runs(self):
        """Test repeated and plain flags interleave."""
        cursor = ByteCursor(bytes([0x09, 2, 0x00, 0x19, 1]))
        assert expand_flags(cursor, 6) == [0x09, 0x09, 0x09, 0x00, 0x19, 0x19]

    def test_repeat_overshoot(self):
        """Test a run longer than the remaining points is malformed."""
        cursor = ByteCursor(bytes([0x09, 5]))
        with pytest.raises(MalformedGlyphError, match="repeat run"):
            expand_flags(cursor, 3)


class TestReadCoordinates:
    """Tests for delta coordinate reconstruction."""

    def test_short_long_and_same(self):
        """Test x-deltas [10, -5, 0] via short, long and same encodings."""
        flags = [
            ON | X_SHORT_VECTOR | X_IS_SAME_OR_POSITIVE,
            ON,
            ON | X_IS_SAME_OR_POSITIVE,
        ]
        cursor = ByteCursor(bytes([10]) + struct.pack(">h", -5))
        xs = read_coordinates(cursor, flags, X_SHORT_VECTOR, X_IS_SAME_OR_POSITIVE)
        assert xs == [10, 5, 5]
        assert cursor.remaining() == 0

    def test_short_negative(self):
        """Test short deltas without the positive bit subtract."""
        flags = [X_SHORT_VECTOR, X_SHORT_VECTOR]
        cursor = ByteCursor(bytes([30, 200]))
        assert read_coordinates(cursor, flags, X_SHORT_VECTOR, X_IS_SAME_OR_POSITIVE) == [
            -30,
            -230,
        ]

    def test_all_same_reads_nothing(self):
        """Test same-as-previous points consume no bytes."""
        cursor = ByteCursor(b"")
        flags = [X_IS_SAME_OR_POSITIVE] * 4
        assert read_coordinates(cursor, flags, X_SHORT_VECTOR, X_IS_SAME_OR_POSITIVE) == [0] * 4


class TestSimpleGlyphDecoder:
    """Tests for decoding complete glyph records."""

    def test_triangle(self, triangle_glyph):
        """Test the three points and single contour of a triangle."""
        outline = decode_glyph(triangle_glyph, 0)

        assert isinstance(outline, SimpleOutline)
        assert outline.contour_end_indices == (2,)
        assert outline.points == (
            Point(10, 20, True),
            Point(110, 20, True),
            Point(60, 120, True),
        )

    def test_decode_at_offset(self, triangle_glyph):
        """Test decoding starts at the given absolute offset."""
        data = b"\xaa" * 7 + triangle_glyph
        outline, consumed = decode_glyph_at(data, 7)
        assert outline == decode_glyph(triangle_glyph, 0)
        assert consumed == len(triangle_glyph)

    def test_cursor_left_after_record(self, triangle_glyph):
        """Test decode() leaves the cursor past the last byte used."""
        cursor = ByteCursor(triangle_glyph + b"\0\0\0")
        SimpleGlyphDecoder().decode(cursor)
        assert cursor.position() == len(triangle_glyph)

    def test_x_and_y_use_separate_bits(self, simple_glyph):
        """Test y coordinates follow bits 2 and 5 independently of x."""
        flags = bytes([
            ON | X_SHORT_VECTOR | X_IS_SAME_OR_POSITIVE | 0x04,  # y short negative
            ON | Y_SAME,  # x long, y same
            0x04 | 0x20,  # off-curve, x long, y short positive
        ])
        record = simple_glyph(
            end_indices=[2],
            flags=flags,
            x_data=bytes([10]) + struct.pack(">hh", -5, 300),
            y_data=bytes([7, 9]),
        )
        outline = decode_glyph(record, 0)
        assert [p.to_tuple() for p in outline.points] == [(10, -7), (5, -7), (305, 2)]
        assert [p.on_curve for p in outline.points] == [True, True, False]

    def test_off_curve_points(self, simple_glyph):
        """Test the on-curve bit is kept per point."""
        flags = bytes([0x37, 0x36, 0x37, 0x36])
        record = simple_glyph(
            end_indices=[3],
            flags=flags,
            x_data=bytes([0, 50, 50, 0]),
            y_data=bytes([0, 0, 50, 0]),
        )
        outline = decode_glyph(record, 0)
        assert [p.on_curve for p in outline.points] == [True, False, True, False]

    def test_multiple_contours(self, simple_glyph):
        """Test contour boundaries split points into slices."""
        flags = bytes([0x37 | REPEAT_FLAG, 4])
        record = simple_glyph(
            end_indices=[1, 4],
            flags=flags,
            x_data=bytes([1, 1, 1, 1, 1]),
            y_data=bytes([2, 2, 2, 2, 2]),
        )
        outline = decode_glyph(record, 0)
        assert outline.contour_end_indices == (1, 4)
        assert outline.num_points == 5
        contours = outline.contours()
        assert [len(c) for c in contours] == [2, 3]
        assert contours[1][0] == Point(3, 6, True)

    def test_instructions_skipped(self, simple_glyph, triangle_glyph):
        """Test hinting instructions do not affect the outline."""
        base = decode_glyph(triangle_glyph, 0)
        both_positive = 0x37
        record = simple_glyph(
            end_indices=[2],
            flags=bytes([both_positive, both_positive, 0x27]),
            x_data=bytes([10, 100, 50]),
            y_data=bytes([20, 0, 100]),
            instructions=b"\xb0\x01\x2c",
        )
        assert decode_glyph(record, 0) == base

    def test_compound_detected(self, compound_glyph):
        """Test negative numberOfContours yields a compound marker."""
        outline, consumed = decode_glyph_at(compound_glyph, 0)
        assert outline == CompoundOutline()
        assert consumed == 2

    def test_compound_reads_no_further(self):
        """Test compound detection needs only the contour count."""
        assert decode_glyph(struct.pack(">h", -1), 0) == CompoundOutline()

    def test_zero_contours_malformed(self, simple_glyph):
        """Test a simple glyph without contours is rejected."""
        record = simple_glyph(end_indices=[], flags=b"", x_data=b"", y_data=b"")
        with pytest.raises(MalformedGlyphError, match="no contours"):
            decode_glyph(record, 0)

    def test_end_indices_not_increasing(self, simple_glyph):
        """Test repeated contour end indices are rejected."""
        record = simple_glyph(
            end_indices=[2, 2],
            flags=bytes([0x37] * 3),
            x_data=bytes(3),
            y_data=bytes(3),
        )
        with pytest.raises(MalformedGlyphError, match="not increasing"):
            decode_glyph(record, 0)

    @pytest.mark.parametrize("cut", [1, 5, 12, 16, 18, 22])
    def test_truncated(self, triangle_glyph, cut):
        """Test a record cut at any point fails as truncated."""
        with pytest.raises(TruncatedGlyphError) as exc_info:
            decode_glyph(triangle_glyph[:cut], 0)
        assert exc_info.value.offset == 0

    def test_offset_outside_buffer(self, triangle_glyph):
        """Test decoding from past the end is a truncated glyph."""
        with pytest.raises(TruncatedGlyphError):
            decode_glyph(triangle_glyph, len(triangle_glyph) + 1)
