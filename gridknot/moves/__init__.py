"""moves: Cromwell move engine public API."""

from gridknot.moves.engine import MoveResult, apply_move, available_moves, try_move
from gridknot.moves.errors import (
    IndexOutOfRange,
    InterleavedColumns,
    InterleavedRows,
    InvalidMoveResult,
    MoveError,
    TargetNotX,
    UnsupportedMove,
)
from gridknot.moves.notation import format_move, parse_move
from gridknot.moves.sequence import MoveFailure, SequenceResult, apply_moves
from gridknot.moves.types import (
    Axis,
    Cardinality,
    Commutation,
    CromwellMove,
    Destabilization,
    Direction,
    Stabilization,
    Translation,
)

__all__ = [
    # Vocabulary
    "Direction",
    "Axis",
    "Cardinality",
    "Translation",
    "Commutation",
    "Stabilization",
    "Destabilization",
    "CromwellMove",
    # Engine
    "apply_move",
    "try_move",
    "available_moves",
    "MoveResult",
    "apply_moves",
    "MoveFailure",
    "SequenceResult",
    # Notation
    "parse_move",
    "format_move",
    # Errors
    "MoveError",
    "InterleavedRows",
    "InterleavedColumns",
    "IndexOutOfRange",
    "TargetNotX",
    "UnsupportedMove",
    "InvalidMoveResult",
]
