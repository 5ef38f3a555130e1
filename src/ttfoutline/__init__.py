"""ttfoutline - Decode glyph outlines from TrueType/OpenType fonts.

ttfoutline reads the sfnt table directory of a font, resolves every glyph's
record through the 'loca' table and decodes the simple glyph records in 'glyf'
into contours of on-curve and off-curve points.

Example:
    $ ttfoutline Inconsolata-Regular.ttf --glyph 36

This prints a decoding summary followed by the points of glyph 36.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
