"""Simple glyph record decoding.

A 'glyf' record starts with numberOfContours (negative for compound glyphs)
and a bounding box. Simple glyphs continue with the contour end-point
indices, the hinting instructions, a run-length encoded flag array and two
delta-encoded coordinate arrays, x then y. Everything is read strictly
forward from one cursor; the record's length is never needed up front.
"""

from ttfoutline.domain.outline import CompoundOutline, GlyphOutline, Point, SimpleOutline
from ttfoutline.exceptions import MalformedGlyphError, OutOfBoundsError, TruncatedGlyphError
from ttfoutline.io.cursor import ByteCursor

# Outline flag bits
ON_CURVE_POINT = 0x01
X_SHORT_VECTOR = 0x02
Y_SHORT_VECTOR = 0x04
REPEAT_FLAG = 0x08
X_IS_SAME_OR_POSITIVE = 0x10
Y_IS_SAME_OR_POSITIVE = 0x20

BOUNDING_BOX_SIZE = 8


def expand_flags(cursor: ByteCursor, num_points: int) -> list[int]:
    """Read and run-length expand the flag array.

    A flag with REPEAT_FLAG set is followed by a count byte n, and stands
    for n + 1 identical flags.

    Args:
        cursor: Cursor positioned at the first flag byte
        num_points: Number of logical flags to produce

    Returns:
        Exactly num_points flags

    Raises:
        MalformedGlyphError: If a repeat run overshoots num_points
        OutOfBoundsError: If the flag data is cut short
    """
    flags: list[int] = []
    while len(flags) < num_points:
        flag = cursor.read_u8()
        count = 1
        if flag & REPEAT_FLAG:
            count += cursor.read_u8()
        if len(flags) + count > num_points:
            raise MalformedGlyphError(
                cursor.position(),
                f"flag repeat run ends at {len(flags) + count}, glyph has {num_points} points",
            )
        flags.extend([flag] * count)
    return flags


def read_coordinates(
    cursor: ByteCursor,
    flags: list[int],
    short_bit: int,
    same_or_positive_bit: int,
) -> list[int]:
    """Read one axis of delta-encoded coordinates and make them absolute.

    Args:
        cursor: Cursor positioned at the first coordinate of this axis
        flags: Expanded flags, one per point
        short_bit: X_SHORT_VECTOR or Y_SHORT_VECTOR
        same_or_positive_bit: X_IS_SAME_OR_POSITIVE or Y_IS_SAME_OR_POSITIVE

    Returns:
        Absolute coordinate per point, accumulated from 0
    """
    coords = []
    value = 0
    for flag in flags:
        if flag & short_bit:
            magnitude = cursor.read_u8()
            value += magnitude if flag & same_or_positive_bit else -magnitude
        elif not flag & same_or_positive_bit:
            value += cursor.read_i16_be()
        coords.append(value)
    return coords


class SimpleGlyphDecoder:
    """Decodes one 'glyf' record from a cursor.

    The decoder holds no state between calls. After decode() the cursor sits
    just past the last byte the record used.
    """

    def decode(self, cursor: ByteCursor) -> GlyphOutline:
        """Decode the record at the cursor's position.

        Args:
            cursor: Cursor positioned at the start of a glyph record

        Returns:
            SimpleOutline, or CompoundOutline if numberOfContours is negative

        Raises:
            TruncatedGlyphError: If the record runs past the end of the buffer
            MalformedGlyphError: If the record's structure is invalid
        """
        start = cursor.position()
        try:
            return self._decode(cursor, start)
        except OutOfBoundsError as e:
            raise TruncatedGlyphError(start, str(e)) from e

    def _decode(self, cursor: ByteCursor, start: int) -> GlyphOutline:
        num_contours = cursor.read_i16_be()
        if num_contours < 0:
            return CompoundOutline()

        cursor.skip(BOUNDING_BOX_SIZE)

        end_indices = tuple(cursor.read_u16_be() for _ in range(num_contours))
        if not end_indices:
            raise MalformedGlyphError(start, "simple glyph has no contours")
        for previous, current in zip(end_indices, end_indices[1:]):
            if current <= previous:
                raise MalformedGlyphError(
                    start, f"contour end indices not increasing: {previous} then {current}"
                )
        num_points = end_indices[-1] + 1

        instruction_length = cursor.read_u16_be()
        cursor.skip(instruction_length)

        flags = expand_flags(cursor, num_points)
        xs = read_coordinates(cursor, flags, X_SHORT_VECTOR, X_IS_SAME_OR_POSITIVE)
        ys = read_coordinates(cursor, flags, Y_SHORT_VECTOR, Y_IS_SAME_OR_POSITIVE)

        points = tuple(
            Point(x=x, y=y, on_curve=bool(flag & ON_CURVE_POINT))
            for x, y, flag in zip(xs, ys, flags)
        )
        return SimpleOutline(contour_end_indices=end_indices, points=points)


def decode_glyph(data: bytes, offset: int) -> GlyphOutline:
    """Decode the glyph record at an absolute offset.

    Each call uses its own cursor, so calls can run concurrently over the
    same buffer.

    Args:
        data: Font buffer
        offset: Absolute offset of the glyph record

    Returns:
        Decoded outline

    Raises:
        TruncatedGlyphError: If the record runs past the end of the buffer
        MalformedGlyphError: If the record's structure is invalid
    """
    return decode_glyph_at(data, offset)[0]


def decode_glyph_at(data: bytes, offset: int) -> tuple[GlyphOutline, int]:
    """Decode the glyph record at offset and report how many bytes it used.

    Returns:
        Tuple of (outline, consumed byte count)

    Raises:
        TruncatedGlyphError: If offset is outside the buffer or the record
            runs past its end
        MalformedGlyphError: If the record's structure is invalid
    """
    try:
        cursor = ByteCursor(data, offset)
    except OutOfBoundsError as e:
        raise TruncatedGlyphError(offset, str(e)) from e
    outline = SimpleGlyphDecoder().decode(cursor)
    return outline, cursor.position() - offset
