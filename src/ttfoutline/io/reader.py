"""Font reader for loading font files into memory.

This module provides the FontReader class, which reads a whole TTF/OTF file
up front so that every decoding step works on an immutable in-memory buffer.
"""

from pathlib import Path

from ttfoutline.exceptions import FontLoadError


class FontReader:
    """Loads a font file's bytes.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            font = FontDecoder(settings).decode(reader.data)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._data: bytes | None = None

    @property
    def path(self) -> Path:
        """Return the path this reader loads from."""
        return self._font_path

    def load(self) -> None:
        """Read the font file into memory.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the path is not a readable file
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            self._data = self._font_path.read_bytes()
        except OSError as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

    @property
    def data(self) -> bytes:
        """Return the loaded font bytes.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        if self._data is None:
            raise RuntimeError("Font not loaded. Call load() first.")

        return self._data

    @property
    def size(self) -> int:
        """Return the size of the loaded font in bytes.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return len(self.data)

    def close(self) -> None:
        """Release the loaded buffer."""
        self._data = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
