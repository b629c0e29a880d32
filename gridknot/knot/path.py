"""
Tracing the closed curves encoded by a grid diagram.

Travel follows the usual orientation: along a column from its X to its O,
then along that O's row to the row's X, and so on until the walk returns to
its starting column. A knot yields one such loop; a link yields one per
component.

Crossings are inserted into their vertical (over) segment as lifted vertices,
in the order they are met along the direction of travel. Horizontal segments
stay flat, so a renderer that lifts the marked vertices gets the vertical
strand passing over.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Optional

import numpy as np

from gridknot.config import PathSettings
from gridknot.diagram.grid import GridDiagram
from gridknot.diagram.types import GridPoint

from .polyline import Polyline


@dataclass(frozen=True)
class PathVertex:
    row: int
    col: int
    lifted: bool = False  # True at a crossing on the over-strand

    @property
    def point(self) -> GridPoint:
        return (self.row, self.col)


@dataclass(frozen=True)
class KnotPath:
    """
    One closed component of the knot, in grid coordinates.

    The first vertex is repeated at the end so consecutive pairs cover every
    segment of the loop.
    """

    size: int
    vertices: tuple[PathVertex, ...]

    @property
    def crossing_count(self) -> int:
        return sum(1 for v in self.vertices if v.lifted)

    def grid_points(self) -> tuple[GridPoint, ...]:
        return tuple(v.point for v in self.vertices)

    def to_polyline(self, settings: Optional[PathSettings] = None) -> Polyline:
        """
        Map the path into world space.

        x grows with the column and y shrinks with the row, both centred on
        the origin; crossing vertices are raised by ``crossing_lift``.
        """
        settings = settings if settings is not None else PathSettings()
        w, h, n = settings.width, settings.height, float(self.size)
        rows = np.array([v.row for v in self.vertices], dtype=float)
        cols = np.array([v.col for v in self.vertices], dtype=float)
        x = (cols / n) * w - 0.5 * w
        y = h - (rows / n) * h - 0.5 * h
        z = np.array([settings.crossing_lift if v.lifted else 0.0 for v in self.vertices])
        return Polyline(np.column_stack((x, y, z)))


def trace_components(diagram: GridDiagram) -> tuple[tuple[GridPoint, ...], ...]:
    """
    Return the corner points of every closed loop in *diagram*.

    Each loop starts at the X of the lowest-numbered column not yet visited
    and lists corners in travel order, without repeating the first one.
    """
    visited: set[int] = set()
    components: list[tuple[GridPoint, ...]] = []
    for start in range(diagram.size):
        if start in visited:
            continue
        corners: list[GridPoint] = []
        col = start
        while col not in visited:
            visited.add(col)
            o_row = diagram.o_in_column(col)
            corners.append((diagram.x_in_column(col), col))
            corners.append((o_row, col))
            col = diagram.x_in_row(o_row)
        components.append(tuple(corners))
    return tuple(components)


def component_count(diagram: GridDiagram) -> int:
    """Number of closed loops: 1 for a knot, more for a link."""
    return len(trace_components(diagram))


def build_knot_paths(diagram: GridDiagram) -> tuple[KnotPath, ...]:
    """Return one closed KnotPath per component, with crossings inserted."""
    crossing_rows: dict[int, list[int]] = defaultdict(list)
    for crossing in diagram.compute_crossings():
        crossing_rows[crossing.vertical_index].append(crossing.row)

    paths = []
    for corners in trace_components(diagram):
        vertices: list[PathVertex] = []
        # corners alternate X, O along each column: pairs are vertical segments
        for (x_row, col), (o_row, _) in zip(corners[0::2], corners[1::2]):
            vertices.append(PathVertex(x_row, col))
            rows = sorted(crossing_rows.get(col, []), reverse=x_row > o_row)
            vertices.extend(PathVertex(r, col, lifted=True) for r in rows)
            vertices.append(PathVertex(o_row, col))
        vertices.append(vertices[0])
        paths.append(KnotPath(size=diagram.size, vertices=tuple(vertices)))
    return tuple(paths)
