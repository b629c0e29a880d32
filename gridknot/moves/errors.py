"""
Move rejection errors.

Every MoveError leaves the target diagram exactly as it was before the move
was requested. The classes fall into three groups:

  - topological: InterleavedRows, InterleavedColumns (the swap would change
    the knot type)
  - precondition: IndexOutOfRange, TargetNotX (parameters do not name a
    usable location)
  - unsupported: UnsupportedMove (destabilization, unknown move types)

InvalidMoveResult wraps a structural GridError raised while validating the
candidate layout.
"""

from __future__ import annotations

from gridknot.diagram.errors import GridError
from gridknot.diagram.types import CellMarker


class MoveError(Exception):
    """Base class for all rejected moves."""


class InterleavedRows(MoveError):
    def __init__(self, index: int, first: tuple[int, int], second: tuple[int, int]) -> None:
        super().__init__(
            f"rows {index} and {index + 1} are interleaved: "
            f"column spans {list(first)} and {list(second)} overlap"
        )
        self.index = index
        self.first = first
        self.second = second


class InterleavedColumns(MoveError):
    def __init__(self, index: int, first: tuple[int, int], second: tuple[int, int]) -> None:
        super().__init__(
            f"columns {index} and {index + 1} are interleaved: "
            f"row spans {list(first)} and {list(second)} overlap"
        )
        self.index = index
        self.first = first
        self.second = second


class IndexOutOfRange(MoveError):
    def __init__(self, detail: str, size: int) -> None:
        super().__init__(f"{detail} is out of range for a {size}x{size} grid")
        self.detail = detail
        self.size = size


class TargetNotX(MoveError):
    def __init__(self, row: int, col: int, found: CellMarker) -> None:
        super().__init__(f"cell ({row}, {col}) holds {found.name}, stabilization requires an X")
        self.row = row
        self.col = col
        self.found = found


class UnsupportedMove(MoveError):
    def __init__(self, move: object) -> None:
        super().__init__(f"{type(move).__name__} is not supported")
        self.move = move


class InvalidMoveResult(MoveError):
    """The candidate layout failed structural validation and was discarded."""

    def __init__(self, move: object, cause: GridError) -> None:
        super().__init__(f"{type(move).__name__} produced an invalid grid: {cause}")
        self.move = move
        self.cause = cause
