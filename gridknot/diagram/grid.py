"""
GridDiagram: an n×n grid of X, O and blank cells encoding a knot or link.

Construction is the single validation gate: every constructor checks the
structural invariants and raises a GridError subclass on the first violation,
so no partially valid diagram is ever produced. After construction the only
way to change the cells is commit(), which re-validates the candidate matrix
before replacing anything.

Invariants:
  1. every marker lies inside the grid
  2. each row holds exactly one X and exactly one O
  3. each column holds exactly one X and exactly one O
  4. n >= 1
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

import numpy as np

from .errors import GridError, InvalidDimensions, InvalidMarker, MalformedColumn, MalformedRow
from .segments import compute_crossings, derive_segments
from .types import BLANK_CODE, O_CODE, X_CODE, CellMarker, Crossing, GridPoint, Segment

logger = logging.getLogger(__name__)

_VALID_CODES = (BLANK_CODE, X_CODE, O_CODE)


def find_violations(matrix: np.ndarray) -> list[GridError]:
    """
    Return every structural violation in *matrix*, in row-then-column order.

    Dimension problems are reported alone, since row and column counts are
    meaningless for a non-square table.
    """
    if matrix.ndim != 2:
        return [InvalidDimensions(f"expected a 2D table, got {matrix.ndim} dimension(s)")]
    n_rows, n_cols = matrix.shape
    if n_rows != n_cols:
        return [InvalidDimensions(f"{n_rows} rows but {n_cols} columns")]
    if n_rows < 1:
        return [InvalidDimensions("grid must contain at least one cell")]

    unknown = np.argwhere(~np.isin(matrix, _VALID_CODES))
    if len(unknown):
        row, col = (int(v) for v in unknown[0])
        return [InvalidMarker(row, col, matrix[row, col].item())]

    errors: list[GridError] = []
    x_per_row = np.count_nonzero(matrix == X_CODE, axis=1)
    o_per_row = np.count_nonzero(matrix == O_CODE, axis=1)
    for i in range(n_rows):
        if x_per_row[i] != 1 or o_per_row[i] != 1:
            errors.append(MalformedRow(i, int(x_per_row[i]), int(o_per_row[i])))

    x_per_col = np.count_nonzero(matrix == X_CODE, axis=0)
    o_per_col = np.count_nonzero(matrix == O_CODE, axis=0)
    for j in range(n_cols):
        if x_per_col[j] != 1 or o_per_col[j] != 1:
            errors.append(MalformedColumn(j, int(x_per_col[j]), int(o_per_col[j])))
    return errors


def validate_matrix(matrix: np.ndarray) -> None:
    """Raise the first structural violation in *matrix*, if any."""
    errors = find_violations(matrix)
    if errors:
        raise errors[0]


def _to_code_matrix(matrix: np.ndarray) -> np.ndarray:
    """
    Copy *matrix* into an int8 code matrix without changing any value.

    Non-integer arrays and integers outside the code table are rejected
    before the cast, which would otherwise wrap or truncate them into codes.
    """
    source = np.asarray(matrix)
    if source.ndim == 2 and source.shape[0] == source.shape[1] and source.size:
        if np.issubdtype(source.dtype, np.integer):
            unknown = np.argwhere(~np.isin(source, _VALID_CODES))
        else:
            unknown = np.argwhere(np.ones(source.shape, dtype=bool))
        if len(unknown):
            row, col = (int(v) for v in unknown[0])
            raise InvalidMarker(row, col, source[row, col].item())
    return np.array(source, dtype=np.int8, copy=True)


def _rows_to_matrix(rows: Sequence[Sequence[object]]) -> np.ndarray:
    n = len(rows)
    if n == 0:
        raise InvalidDimensions("grid must contain at least one cell")
    matrix = np.zeros((n, n), dtype=np.int8)
    for i, row in enumerate(rows):
        if len(row) != n:
            raise InvalidDimensions(f"row {i} has {len(row)} cells, expected {n}")
        for j, value in enumerate(row):
            matrix[i, j] = CellMarker.parse(value, i, j).code
    return matrix


class GridDiagram:
    """
    A validated grid diagram.

    Accepts rows as any nested sequence of markers or marker spellings; a
    string counts as a row of single-character cells, so
    ``GridDiagram(["xo", "ox"])`` builds the 2×2 unknot.
    """

    def __init__(self, rows: Sequence[Sequence[object]]) -> None:
        matrix = _rows_to_matrix(rows)
        validate_matrix(matrix)
        self._cells = matrix

    @classmethod
    def from_mapping(cls, cells: Mapping[GridPoint, object], n: int) -> GridDiagram:
        """Build a diagram from a complete ``(row, col) -> marker`` assignment."""
        if n < 1:
            raise InvalidDimensions(f"size must be >= 1, got {n}")
        matrix = np.zeros((n, n), dtype=np.int8)
        seen: set[GridPoint] = set()
        for (row, col), value in cells.items():
            if not (0 <= row < n and 0 <= col < n):
                raise InvalidDimensions(f"cell ({row}, {col}) lies outside the {n}x{n} grid")
            matrix[row, col] = CellMarker.parse(value, row, col).code
            seen.add((row, col))
        if len(seen) != n * n:
            raise InvalidDimensions(f"expected {n * n} cells, got {len(seen)}")
        return cls.from_array(matrix)

    @classmethod
    def from_array(cls, matrix: np.ndarray) -> GridDiagram:
        """Build a diagram from a matrix of integer cell codes (copied)."""
        candidate = _to_code_matrix(matrix)
        validate_matrix(candidate)
        diagram = cls.__new__(cls)
        diagram._cells = candidate
        return diagram

    # ── Structure ──────────────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return int(self._cells.shape[0])

    @property
    def cells(self) -> dict[GridPoint, CellMarker]:
        """Full ``(row, col) -> marker`` mapping covering all n² cells."""
        n = self.size
        return {
            (i, j): CellMarker.from_code(self._cells[i, j]) for i in range(n) for j in range(n)
        }

    def as_array(self) -> np.ndarray:
        """Return a copy of the cell matrix."""
        return self._cells.copy()

    def rows(self) -> tuple[tuple[CellMarker, ...], ...]:
        return tuple(self.row(i) for i in range(self.size))

    def row(self, i: int) -> tuple[CellMarker, ...]:
        return tuple(CellMarker.from_code(c) for c in self._cells[i, :])

    def column(self, j: int) -> tuple[CellMarker, ...]:
        return tuple(CellMarker.from_code(c) for c in self._cells[:, j])

    def marker_at(self, i: int, j: int) -> CellMarker:
        return CellMarker.from_code(self._cells[i, j])

    def x_in_row(self, i: int) -> int:
        return int(np.flatnonzero(self._cells[i, :] == X_CODE)[0])

    def o_in_row(self, i: int) -> int:
        return int(np.flatnonzero(self._cells[i, :] == O_CODE)[0])

    def x_in_column(self, j: int) -> int:
        return int(np.flatnonzero(self._cells[:, j] == X_CODE)[0])

    def o_in_column(self, j: int) -> int:
        return int(np.flatnonzero(self._cells[:, j] == O_CODE)[0])

    def x_positions(self) -> tuple[GridPoint, ...]:
        """Every X cell, in row-major order."""
        return tuple((int(i), int(j)) for i, j in np.argwhere(self._cells == X_CODE))

    # ── Validation and mutation ────────────────────────────────────────────────

    def validate(self) -> None:
        """Re-check invariants 1–4 against the current cells."""
        validate_matrix(self._cells)

    def violations(self) -> list[GridError]:
        """Every invariant violation in the current cells (empty when valid)."""
        return find_violations(self._cells)

    def commit(self, matrix: np.ndarray) -> None:
        """
        Replace the cells with *matrix* once it passes validation.

        Raises the first GridError found; the diagram is untouched on failure.
        """
        candidate = _to_code_matrix(matrix)
        validate_matrix(candidate)
        if candidate.shape != self._cells.shape:
            logger.debug(f"Grid resized from {self.size} to {candidate.shape[0]}")
        self._cells = candidate

    def copy(self) -> GridDiagram:
        return GridDiagram.from_array(self._cells)

    # ── Derived geometry ───────────────────────────────────────────────────────

    def derive_segments(self) -> tuple[Segment, ...]:
        """Vertical segments by column, then horizontal segments by row."""
        return derive_segments(self._cells)

    def compute_crossings(self) -> tuple[Crossing, ...]:
        return compute_crossings(self.derive_segments())

    # ── Dunder helpers ─────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridDiagram):
            return NotImplemented
        return self._cells.shape == other._cells.shape and bool(
            np.array_equal(self._cells, other._cells)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ["".join("." if m == CellMarker.BLANK else m.value for m in r) for r in self.rows()]
        return f"GridDiagram({rows!r})"

    def __str__(self) -> str:
        return "\n".join(
            " ".join("." if m == CellMarker.BLANK else m.value for m in row) for row in self.rows()
        )
