"""
Core type definitions for the grid-diagram layer.

Enums are the canonical vocabulary; dataclasses are the derived geometry
handed to rendering collaborators. Segments and crossings are recomputed from
live cell state on every request and are never stored on the diagram.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidMarker

GridPoint = tuple[int, int]  # (row, col)

# ── Enums ──────────────────────────────────────────────────────────────────────


class CellMarker(str, Enum):
    """Contents of a single grid cell."""

    BLANK = " "
    X = "x"
    O = "o"  # noqa: E741

    @classmethod
    def parse(cls, value: object, row: int = -1, col: int = -1) -> CellMarker:
        """Return the marker spelled by *value*.

        Accepts markers, ``x``/``X``, ``o``/``O`` and the blank spellings
        ``""``, whitespace and ``"."``. Anything else raises InvalidMarker.
        """
        if isinstance(value, CellMarker):
            return value
        if isinstance(value, str):
            token = value.strip().lower()
            if token in ("", "."):
                return cls.BLANK
            if token == "x":
                return cls.X
            if token == "o":
                return cls.O
        raise InvalidMarker(row, col, value)

    @property
    def code(self) -> int:
        """Integer code used in the cell matrix."""
        return _CODES[self]

    @classmethod
    def from_code(cls, code: int) -> CellMarker:
        return _MARKERS[int(code)]


BLANK_CODE = 0
X_CODE = 1
O_CODE = 2

_CODES: dict[CellMarker, int] = {
    CellMarker.BLANK: BLANK_CODE,
    CellMarker.X: X_CODE,
    CellMarker.O: O_CODE,
}
_MARKERS: dict[int, CellMarker] = {code: marker for marker, code in _CODES.items()}


class SegmentKind(str, Enum):
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class CrossingKind(str, Enum):
    """Crossing types. Grid diagrams admit exactly one."""

    VERTICAL_OVER_HORIZONTAL = "VERTICAL_OVER_HORIZONTAL"


# ── Derived geometry ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Segment:
    """
    A straight connector between two grid points.

    Vertical segments are indexed by column and run from the column's X to its
    O. Horizontal segments are indexed by row and run from the row's O to its
    X. This matches the direction of travel along the knot.
    """

    kind: SegmentKind
    index: int
    start: GridPoint
    end: GridPoint

    @property
    def row_range(self) -> tuple[int, int]:
        """(min row, max row) covered by this segment."""
        return (min(self.start[0], self.end[0]), max(self.start[0], self.end[0]))

    @property
    def col_range(self) -> tuple[int, int]:
        """(min col, max col) covered by this segment."""
        return (min(self.start[1], self.end[1]), max(self.start[1], self.end[1]))

    @property
    def length(self) -> int:
        lo, hi = self.row_range if self.kind == SegmentKind.VERTICAL else self.col_range
        return hi - lo


@dataclass(frozen=True)
class Crossing:
    """
    Intersection of a vertical and a horizontal segment.

    row/col locate the crossing point; vertical_index is the column of the
    over-strand and horizontal_index the row of the under-strand.
    """

    row: int
    col: int
    vertical_index: int
    horizontal_index: int
    kind: CrossingKind = CrossingKind.VERTICAL_OVER_HORIZONTAL

    @property
    def point(self) -> GridPoint:
        return (self.row, self.col)
