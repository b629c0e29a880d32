"""
Applying a sequence of Cromwell moves to one diagram.

apply_moves() returns a SequenceResult rather than raising so the caller can
report every rejected move at once. Each move is transactional on its own: a
failure leaves the diagram as the previous successful move left it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from gridknot.diagram.grid import GridDiagram

from .engine import try_move
from .errors import MoveError
from .types import CromwellMove

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveFailure:
    """A rejected move and its position in the requested sequence (0-based)."""

    index: int
    move: CromwellMove
    error: MoveError

    def __str__(self) -> str:
        return f"move {self.index} ({self.move}): {self.error}"


@dataclass(frozen=True)
class SequenceResult:
    """Outcome of apply_moves().

    Attributes:
        passed: True when every requested move was applied.
        applied: Indices of the moves that succeeded.
        failures: One MoveFailure per rejected move.
        final_size: Grid size after the last applied move.
    """

    passed: bool
    applied: tuple[int, ...]
    failures: tuple[MoveFailure, ...]
    final_size: int


def apply_moves(
    diagram: GridDiagram,
    moves: Iterable[CromwellMove],
    stop_on_error: bool = True,
) -> SequenceResult:
    """
    Apply *moves* to *diagram* in order.

    With ``stop_on_error=True`` (the default) the first rejected move ends the
    run and later moves are not attempted. Otherwise rejected moves are
    recorded and the run continues with the next move.
    """
    applied: list[int] = []
    failures: list[MoveFailure] = []

    for idx, move in enumerate(moves):
        result = try_move(diagram, move)
        if result.error is None:
            applied.append(idx)
            continue
        failures.append(MoveFailure(index=idx, move=move, error=result.error))
        if stop_on_error:
            break

    if failures:
        logger.info(f"{len(failures)} move(s) rejected; {len(applied)} applied")
    return SequenceResult(
        passed=len(failures) == 0,
        applied=tuple(applied),
        failures=tuple(failures),
        final_size=diagram.size,
    )
