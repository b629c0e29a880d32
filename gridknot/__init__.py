"""gridknot: knot grid diagrams and the Cromwell moves that transform them."""

from gridknot.diagram import GridDiagram, GridError, load_grid
from gridknot.moves import CromwellMove, MoveError, apply_move, try_move

__all__ = [
    "GridDiagram",
    "GridError",
    "load_grid",
    "CromwellMove",
    "MoveError",
    "apply_move",
    "try_move",
]
