"""
Cromwell move engine.

Each move variant is dispatched to a pure handler that takes a scratch copy of
the cell matrix and returns the candidate layout, raising a MoveError if the
move's preconditions do not hold. The engine then hands the candidate to
GridDiagram.commit(), which validates it before replacing the diagram's cells.
A rejected move therefore never touches the diagram.

Handlers never see the diagram itself, only its matrix, so they cannot leak
partial edits.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from gridknot.diagram.errors import GridError
from gridknot.diagram.grid import GridDiagram
from gridknot.diagram.types import BLANK_CODE, O_CODE, X_CODE, CellMarker

from .errors import (
    IndexOutOfRange,
    InterleavedColumns,
    InterleavedRows,
    InvalidMoveResult,
    MoveError,
    TargetNotX,
    UnsupportedMove,
)
from .types import (
    Axis,
    Cardinality,
    Commutation,
    CromwellMove,
    Destabilization,
    Direction,
    Stabilization,
    Translation,
)

logger = logging.getLogger(__name__)

_MoveHandler = Callable[[np.ndarray, Any], np.ndarray]


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a single try_move() call."""

    applied: bool
    move: CromwellMove
    error: Optional[MoveError]
    size_before: int
    size_after: int


def apply_move(diagram: GridDiagram, move: CromwellMove) -> None:
    """
    Apply *move* to *diagram* in place.

    Raises a MoveError subclass if the move is rejected; the diagram is left
    unchanged in that case.
    """
    handler = _DISPATCH.get(type(move))
    if handler is None:
        raise UnsupportedMove(move)

    try:
        candidate = handler(diagram.as_array(), move)
    except MoveError as exc:
        logger.info(f"Rejected {move}: {exc}")
        raise

    try:
        diagram.commit(candidate)
    except GridError as exc:
        logger.error(f"Discarded invalid layout produced by {move}: {exc}")
        raise InvalidMoveResult(move, exc) from exc

    logger.debug(f"Applied {move}; grid is now {diagram.size}x{diagram.size}")


def try_move(diagram: GridDiagram, move: CromwellMove) -> MoveResult:
    """Apply *move* and report the outcome. Never raises MoveError."""
    size_before = diagram.size
    try:
        apply_move(diagram, move)
    except MoveError as exc:
        return MoveResult(
            applied=False,
            move=move,
            error=exc,
            size_before=size_before,
            size_after=diagram.size,
        )
    return MoveResult(
        applied=True,
        move=move,
        error=None,
        size_before=size_before,
        size_after=diagram.size,
    )


def available_moves(diagram: GridDiagram) -> list[CromwellMove]:
    """
    Every move that would currently succeed on *diagram*.

    Order: translations, row commutations, column commutations, then
    stabilizations for each X in row-major order.
    """
    matrix = diagram.as_array()
    n = diagram.size
    moves: list[CromwellMove] = [Translation(d) for d in Direction]
    for axis in Axis:
        for k in range(n - 1):
            first, second = _adjacent_spans(matrix, axis, k)
            if not _overlaps(first, second):
                moves.append(Commutation(axis, k))
    for i, j in diagram.x_positions():
        moves.extend(Stabilization(c, i, j) for c in Cardinality)
    return moves


# ── Translation ────────────────────────────────────────────────────────────────

# direction -> (shift, numpy axis)
_TRANSLATION_SHIFTS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (-1, 1),
    Direction.RIGHT: (1, 1),
}


def _translate(matrix: np.ndarray, move: Translation) -> np.ndarray:
    shift, axis = _TRANSLATION_SHIFTS[move.direction]
    return np.roll(matrix, shift, axis=axis)


# ── Commutation ────────────────────────────────────────────────────────────────


def _span(line: np.ndarray) -> tuple[int, int]:
    x = int(np.flatnonzero(line == X_CODE)[0])
    o = int(np.flatnonzero(line == O_CODE)[0])
    return (min(x, o), max(x, o))


def _overlaps(first: tuple[int, int], second: tuple[int, int]) -> bool:
    return first[0] <= second[1] and second[0] <= first[1]


def _adjacent_spans(
    matrix: np.ndarray, axis: Axis, k: int
) -> tuple[tuple[int, int], tuple[int, int]]:
    if axis == Axis.ROW:
        return _span(matrix[k, :]), _span(matrix[k + 1, :])
    return _span(matrix[:, k]), _span(matrix[:, k + 1])


def _commute(matrix: np.ndarray, move: Commutation) -> np.ndarray:
    n = matrix.shape[0]
    k = move.start_index
    if k < 0 or k + 1 >= n:
        raise IndexOutOfRange(f"{move.axis.value.lower()} pair ({k}, {k + 1})", n)

    # Swapping lines whose spans overlap can change the knot type.
    first, second = _adjacent_spans(matrix, move.axis, k)
    if _overlaps(first, second):
        if move.axis == Axis.ROW:
            raise InterleavedRows(k, first, second)
        raise InterleavedColumns(k, first, second)

    candidate = matrix.copy()
    if move.axis == Axis.ROW:
        candidate[[k, k + 1], :] = matrix[[k + 1, k], :]
    else:
        candidate[:, [k, k + 1]] = matrix[:, [k + 1, k]]
    return candidate


# ── Stabilization ──────────────────────────────────────────────────────────────

# cardinality -> (row offset, col offset) of the blank corner inside the block
_BLANK_CORNER: dict[Cardinality, tuple[int, int]] = {
    Cardinality.NW: (0, 0),
    Cardinality.NE: (0, 1),
    Cardinality.SW: (1, 0),
    Cardinality.SE: (1, 1),
}


def _stabilize(matrix: np.ndarray, move: Stabilization) -> np.ndarray:
    """
    Replace the X at (i, j) by a 2×2 block at rows i, i+1 and columns j, j+1.

    The blank corner's row inherits row i's O and its column inherits column
    j's O. The new O sits in the opposite corner and X's fill the other two.
    """
    n = matrix.shape[0]
    i, j = move.i, move.j
    if not (0 <= i < n and 0 <= j < n):
        raise IndexOutOfRange(f"cell ({i}, {j})", n)
    if matrix[i, j] != X_CODE:
        raise TargetNotX(i, j, CellMarker.from_code(matrix[i, j]))

    o_col = int(np.flatnonzero(matrix[i, :] == O_CODE)[0])
    o_row = int(np.flatnonzero(matrix[:, j] == O_CODE)[0])

    grown = np.insert(matrix, i + 1, BLANK_CODE, axis=0)
    grown = np.insert(grown, j + 1, BLANK_CODE, axis=1)
    if o_col > j:
        o_col += 1
    if o_row > i:
        o_row += 1

    grown[i, j] = BLANK_CODE
    grown[i, o_col] = BLANK_CODE
    grown[o_row, j] = BLANK_CODE

    dr, dc = _BLANK_CORNER[move.cardinality]
    blank_row, blank_col = i + dr, j + dc
    new_o_row, new_o_col = i + 1 - dr, j + 1 - dc

    grown[blank_row, o_col] = O_CODE
    grown[o_row, blank_col] = O_CODE
    grown[new_o_row, new_o_col] = O_CODE
    grown[new_o_row, blank_col] = X_CODE
    grown[blank_row, new_o_col] = X_CODE
    return grown


# ── Destabilization ────────────────────────────────────────────────────────────


def _destabilize(matrix: np.ndarray, move: Destabilization) -> np.ndarray:
    # Destabilization is intentionally unsupported; every request is rejected.
    raise UnsupportedMove(move)


_DISPATCH: dict[type, _MoveHandler] = {
    Translation: _translate,
    Commutation: _commute,
    Stabilization: _stabilize,
    Destabilization: _destabilize,
}
