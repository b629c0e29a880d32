"""
Reading and writing grid diagrams as .csv files.

Each line of the file is one grid row; each cell is ``x``, ``o`` or blank.
There is no header. The loader only turns text into markers; structural
validation is left to GridDiagram so a malformed file can never produce a
diagram.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Union

from .grid import GridDiagram
from .types import CellMarker

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

GRID_SUFFIX = ".csv"


class GridFileError(Exception):
    """Raised when a grid file cannot be located, read or decoded."""

    def __init__(self, path: PathLike, detail: str) -> None:
        super().__init__(f"{path}: {detail}")
        self.path = Path(path)
        self.detail = detail


def _check_suffix(path: Path) -> None:
    if path.suffix.lower() != GRID_SUFFIX:
        raise GridFileError(path, f"only {GRID_SUFFIX} grid files are supported")


def read_cells(path: PathLike) -> list[list[CellMarker]]:
    """Return the marker table stored in *path*, without structural checks."""
    path = Path(path)
    _check_suffix(path)
    try:
        with open(path, newline="", encoding="utf-8") as f:
            records = [record for record in csv.reader(f) if record]
    except FileNotFoundError:
        raise GridFileError(path, "file not found") from None
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise GridFileError(path, f"could not read grid: {exc}") from exc

    return [
        [CellMarker.parse(value, i, j) for j, value in enumerate(record)]
        for i, record in enumerate(records)
    ]


def load_grid(path: PathLike) -> GridDiagram:
    """Load and validate the grid diagram stored in *path*."""
    cells = read_cells(path)
    diagram = GridDiagram(cells)
    logger.info(f"Loaded {diagram.size}x{diagram.size} grid from {path}")
    return diagram


def save_grid(diagram: GridDiagram, path: PathLike) -> None:
    """Write *diagram* to *path* in the format read by load_grid."""
    path = Path(path)
    _check_suffix(path)
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            for row in diagram.rows():
                writer.writerow(["" if m == CellMarker.BLANK else m.value for m in row])
    except OSError as exc:
        raise GridFileError(path, f"could not write grid: {exc}") from exc
    logger.info(f"Saved {diagram.size}x{diagram.size} grid to {path}")
