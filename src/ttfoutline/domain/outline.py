"""Glyph outline types.

This module defines the decoded form of one 'glyf' record:
- Point: An absolute point with its on-curve flag
- SimpleOutline: Contours of points from a simple glyph
- CompoundOutline: Marker for a composite glyph that was not decoded
- EmptyOutline: A glyph whose 'loca' slot holds no data
- FailedOutline: A glyph that could not be located or decoded
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Union


@dataclass(frozen=True, slots=True)
class Point:
    """A point of a TrueType outline.

    Attributes:
        x: Absolute X coordinate in font units
        y: Absolute Y coordinate in font units
        on_curve: True for on-curve points, False for quadratic control points
    """

    x: int
    y: int
    on_curve: bool = True

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "on_curve": self.on_curve}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        return cls(x=data["x"], y=data["y"], on_curve=data["on_curve"])


@dataclass(frozen=True)
class SimpleOutline:
    """Decoded outline of a simple glyph.

    Contour k spans points[contour_end_indices[k - 1] + 1] through
    points[contour_end_indices[k]] inclusive, with contour 0 starting at 0.

    Attributes:
        contour_end_indices: Index of the last point of each contour
        points: All points of the glyph in file order

    Raises:
        ValueError: If the end indices are empty, not strictly increasing,
            or do not match the number of points
    """

    kind: ClassVar[str] = "simple"

    contour_end_indices: tuple[int, ...]
    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        ends = self.contour_end_indices
        if not ends:
            raise ValueError("Simple outline needs at least one contour")
        if any(b <= a for a, b in zip(ends, ends[1:])):
            raise ValueError(f"Contour end indices not strictly increasing: {ends}")
        if len(self.points) != ends[-1] + 1:
            raise ValueError(
                f"Expected {ends[-1] + 1} points, got {len(self.points)}"
            )

    @property
    def num_contours(self) -> int:
        return len(self.contour_end_indices)

    @property
    def num_points(self) -> int:
        return len(self.points)

    def contours(self) -> list[list[Point]]:
        """Split points into their closed contours.

        Returns:
            One list of points per contour
        """
        result = []
        start = 0
        for end in self.contour_end_indices:
            result.append(list(self.points[start:end + 1]))
            start = end + 1
        return result

    def bounding_box(self) -> tuple[int, int, int, int]:
        """Return (min_x, min_y, max_x, max_y) over all points."""
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "contour_end_indices": list(self.contour_end_indices),
            "points": [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimpleOutline":
        return cls(
            contour_end_indices=tuple(data["contour_end_indices"]),
            points=tuple(Point.from_dict(p) for p in data["points"]),
        )


@dataclass(frozen=True)
class CompoundOutline:
    """A composite glyph, detected and intentionally left undecoded."""

    kind: ClassVar[str] = "compound"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompoundOutline":  # noqa: ARG003
        return cls()


@dataclass(frozen=True)
class EmptyOutline:
    """A glyph with a zero-length 'loca' slot, such as a space."""

    kind: ClassVar[str] = "empty"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EmptyOutline":  # noqa: ARG003
        return cls()


@dataclass(frozen=True)
class FailedOutline:
    """Placeholder for a glyph whose decoding failed.

    Attributes:
        error_type: Name of the exception class raised
        reason: Error message
    """

    kind: ClassVar[str] = "failed"

    error_type: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "error_type": self.error_type, "reason": self.reason}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FailedOutline":
        return cls(error_type=data["error_type"], reason=data["reason"])


GlyphOutline = Union[SimpleOutline, CompoundOutline, EmptyOutline, FailedOutline]

_OUTLINE_KINDS: dict[str, Any] = {
    SimpleOutline.kind: SimpleOutline,
    CompoundOutline.kind: CompoundOutline,
    EmptyOutline.kind: EmptyOutline,
    FailedOutline.kind: FailedOutline,
}


def outline_from_dict(data: dict[str, Any]) -> GlyphOutline:
    """Deserialize any outline variant from its dictionary form.

    Args:
        data: Dictionary produced by an outline's to_dict()

    Returns:
        Outline instance of the matching variant

    Raises:
        ValueError: If the kind is unknown
    """
    kind = data.get("kind")
    if kind not in _OUTLINE_KINDS:
        raise ValueError(f"Unknown outline kind: {kind!r}")
    return _OUTLINE_KINDS[kind].from_dict(data)
