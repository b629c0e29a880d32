from .errors import GridError, InvalidDimensions, InvalidMarker, MalformedColumn, MalformedRow
from .generate import random_diagram
from .grid import GridDiagram, find_violations, validate_matrix
from .io import GridFileError, load_grid, read_cells, save_grid
from .segments import compute_crossings, derive_segments
from .types import (
    CellMarker,
    Crossing,
    CrossingKind,
    GridPoint,
    Segment,
    SegmentKind,
)

__all__ = [
    # Enums
    "CellMarker",
    "SegmentKind",
    "CrossingKind",
    # Derived geometry
    "GridPoint",
    "Segment",
    "Crossing",
    "derive_segments",
    "compute_crossings",
    # Diagram
    "GridDiagram",
    "find_violations",
    "validate_matrix",
    "random_diagram",
    # Errors
    "GridError",
    "InvalidDimensions",
    "MalformedRow",
    "MalformedColumn",
    "InvalidMarker",
    # Files
    "GridFileError",
    "load_grid",
    "read_cells",
    "save_grid",
]
