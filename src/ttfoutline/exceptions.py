"""Exception hierarchy for ttfoutline."""


class TtfOutlineError(Exception):
    """Base exception for all ttfoutline errors."""

    pass


class OutOfBoundsError(TtfOutlineError):
    """A read or seek went past the end of the byte buffer."""

    def __init__(self, position: int, size: int, buffer_length: int) -> None:
        self.position = position
        self.size = size
        self.buffer_length = buffer_length
        super().__init__(
            f"Access of {size} byte(s) at position {position} is outside "
            f"buffer of length {buffer_length}"
        )


class FontError(TtfOutlineError):
    """Errors that prevent a font from being decoded at all."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class MalformedHeaderError(FontError):
    """The sfnt header or table directory is truncated or inconsistent."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed font header: {reason}")


class InvalidTagError(FontError):
    """A table directory tag is not 4 ASCII characters."""

    def __init__(self, raw: bytes) -> None:
        self.raw = raw
        super().__init__(f"Invalid table tag {raw!r}")


class MissingTableError(FontError):
    """A table required for outline decoding is absent."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Required table '{tag}' not found in font")


class GlyphError(TtfOutlineError):
    """Errors confined to a single glyph."""

    pass


class GlyphOffsetOutOfRangeError(GlyphError):
    """A glyph's resolved offset points past the end of the font."""

    def __init__(self, index: int, offset: int, buffer_length: int) -> None:
        self.index = index
        self.offset = offset
        self.buffer_length = buffer_length
        super().__init__(
            f"Glyph {index} offset {offset} is beyond font size {buffer_length}"
        )


class TruncatedGlyphError(GlyphError):
    """Glyph data ended before the record was fully decoded."""

    def __init__(self, offset: int, reason: str) -> None:
        self.offset = offset
        self.reason = reason
        super().__init__(f"Truncated glyph at offset {offset}: {reason}")


class MalformedGlyphError(GlyphError):
    """Glyph data is structurally invalid."""

    def __init__(self, offset: int, reason: str) -> None:
        self.offset = offset
        self.reason = reason
        super().__init__(f"Malformed glyph at offset {offset}: {reason}")


class GlyphLengthMismatchError(GlyphError):
    """Decoding consumed more bytes than the glyph's 'loca' slot holds."""

    def __init__(self, index: int, expected: int, consumed: int) -> None:
        self.index = index
        self.expected = expected
        self.consumed = consumed
        super().__init__(
            f"Glyph {index} decoded {consumed} bytes but its slot holds {expected}"
        )
