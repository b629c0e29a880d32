"""
Structural errors raised when cell data does not form a grid diagram.

Every error is fatal to construction: no partial diagram is ever produced.
"""

from __future__ import annotations


class GridError(ValueError):
    """Base class for all structural grid-diagram failures."""


class InvalidDimensions(GridError):
    """The cell table is not a complete, non-empty square."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"invalid grid dimensions: {detail}")
        self.detail = detail


class MalformedRow(GridError):
    """A row does not contain exactly one X and exactly one O.

    Attributes:
        index: The offending row.
        x_count: Number of X markers found in the row.
        o_count: Number of O markers found in the row.
    """

    def __init__(self, index: int, x_count: int, o_count: int) -> None:
        super().__init__(
            f"row {index} must contain exactly one X and one O, "
            f"found {x_count} X and {o_count} O"
        )
        self.index = index
        self.x_count = x_count
        self.o_count = o_count


class MalformedColumn(GridError):
    """A column does not contain exactly one X and exactly one O."""

    def __init__(self, index: int, x_count: int, o_count: int) -> None:
        super().__init__(
            f"column {index} must contain exactly one X and one O, "
            f"found {x_count} X and {o_count} O"
        )
        self.index = index
        self.x_count = x_count
        self.o_count = o_count


class InvalidMarker(GridError):
    """A cell holds something other than X, O or blank."""

    def __init__(self, row: int, col: int, value: object) -> None:
        super().__init__(f"cell ({row}, {col}) holds unknown marker {value!r}")
        self.row = row
        self.col = col
        self.value = value
