"""Sequential big-endian reader over an in-memory font buffer.

The cursor never mutates its buffer. Every read and seek is bounds checked
and raises OutOfBoundsError instead of returning short data, leaving the
position where it was.
"""

import struct

from ttfoutline.exceptions import OutOfBoundsError

_U16 = struct.Struct(">H")
_I16 = struct.Struct(">h")
_U32 = struct.Struct(">L")


class ByteCursor:
    """Seekable big-endian reader over an immutable byte buffer.

    Example:
        cursor = ByteCursor(data)
        cursor.seek_absolute(4)
        num_tables = cursor.read_u16_be()
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes, position: int = 0) -> None:
        """Initialize the cursor.

        Args:
            data: Buffer to read from
            position: Initial absolute position

        Raises:
            OutOfBoundsError: If position is outside the buffer
        """
        self._data = bytes(data)
        self._pos = 0
        self.seek_absolute(position)

    def __len__(self) -> int:
        return len(self._data)

    def position(self) -> int:
        """Return the current absolute position."""
        return self._pos

    def remaining(self) -> int:
        """Return the number of bytes left after the current position."""
        return len(self._data) - self._pos

    def seek_absolute(self, pos: int) -> None:
        """Move to an absolute position.

        Seeking to exactly the buffer length is allowed; any read from
        there fails.

        Raises:
            OutOfBoundsError: If pos is negative or past the buffer end
        """
        if pos < 0 or pos > len(self._data):
            raise OutOfBoundsError(pos, 0, len(self._data))
        self._pos = pos

    def seek_relative(self, delta: int) -> None:
        """Move by delta bytes from the current position.

        Raises:
            OutOfBoundsError: If the target is outside the buffer
        """
        self.seek_absolute(self._pos + delta)

    def skip(self, count: int) -> None:
        """Skip count bytes forward, failing if they are not all present."""
        self._take(count)

    def read_bytes(self, count: int) -> bytes:
        """Read count raw bytes."""
        start = self._take(count)
        return self._data[start:start + count]

    def read_u8(self) -> int:
        start = self._take(1)
        return self._data[start]

    def read_u16_be(self) -> int:
        start = self._take(2)
        return _U16.unpack_from(self._data, start)[0]

    def read_i16_be(self) -> int:
        start = self._take(2)
        return _I16.unpack_from(self._data, start)[0]

    def read_u32_be(self) -> int:
        start = self._take(4)
        return _U32.unpack_from(self._data, start)[0]

    def _take(self, size: int) -> int:
        """Reserve size bytes at the current position and advance past them.

        Returns:
            The position the reserved bytes start at
        """
        start = self._pos
        if size < 0 or start + size > len(self._data):
            raise OutOfBoundsError(start, size, len(self._data))
        self._pos = start + size
        return start
