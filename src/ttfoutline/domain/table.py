"""Table directory entry."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class TableEntry:
    """One record of the sfnt table directory.

    Attributes:
        tag: 4-character table tag (e.g. "glyf")
        checksum: Stored table checksum
        offset: Absolute byte offset of the table in the font
        length: Table length in bytes, excluding padding
    """

    tag: str
    checksum: int
    offset: int
    length: int

    @property
    def end(self) -> int:
        """Absolute offset just past the table's last byte."""
        return self.offset + self.length

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "checksum": self.checksum,
            "offset": self.offset,
            "length": self.length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TableEntry":
        return cls(
            tag=data["tag"],
            checksum=data["checksum"],
            offset=data["offset"],
            length=data["length"],
        )
