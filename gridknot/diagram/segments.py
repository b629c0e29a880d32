"""
Segment derivation and crossing detection.

Both functions are pure: they read a cell matrix (or a segment list) and
return fresh tuples. Nothing is cached, so they may be called at any point,
including between moves of a longer transformation.

The caller is responsible for passing a validated matrix; derive_segments
assumes every row and column holds exactly one X and one O.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from .types import O_CODE, X_CODE, Crossing, Segment, SegmentKind


def _position(line: np.ndarray, code: int) -> int:
    return int(np.flatnonzero(line == code)[0])


def derive_segments(matrix: np.ndarray) -> tuple[Segment, ...]:
    """
    Return the knot's segments: vertical segments ordered by column, followed
    by horizontal segments ordered by row.
    """
    n = matrix.shape[0]
    vertical = []
    for col in range(n):
        column = matrix[:, col]
        x_row = _position(column, X_CODE)
        o_row = _position(column, O_CODE)
        vertical.append(Segment(SegmentKind.VERTICAL, col, (x_row, col), (o_row, col)))

    horizontal = []
    for row in range(n):
        line = matrix[row, :]
        o_col = _position(line, O_CODE)
        x_col = _position(line, X_CODE)
        horizontal.append(Segment(SegmentKind.HORIZONTAL, row, (row, o_col), (row, x_col)))

    return tuple(vertical + horizontal)


def compute_crossings(segments: Iterable[Segment]) -> tuple[Crossing, ...]:
    """
    Find every point where a vertical segment passes over a horizontal one.

    A crossing exists when the horizontal segment's row lies strictly inside
    the vertical segment's row range and the vertical segment's column lies
    strictly inside the horizontal segment's column range. Shared endpoints
    are corners of the path, not crossings. Results are ordered by column,
    then by row.
    """
    segments = tuple(segments)
    vertical = [s for s in segments if s.kind == SegmentKind.VERTICAL]
    horizontal = [s for s in segments if s.kind == SegmentKind.HORIZONTAL]

    crossings: list[Crossing] = []
    for v in sorted(vertical, key=lambda s: s.index):
        v_lo, v_hi = v.row_range
        col = v.start[1]
        for h in sorted(horizontal, key=lambda s: s.index):
            row = h.start[0]
            h_lo, h_hi = h.col_range
            if v_lo < row < v_hi and h_lo < col < h_hi:
                crossings.append(
                    Crossing(row=row, col=col, vertical_index=v.index, horizontal_index=h.index)
                )
    return tuple(crossings)
