"""
Polyline: an ordered chain of 3D vertices, the geometry handed to renderers.

Vertices are stored as a float ``(N, 3)`` numpy array. All operations return
new arrays or new polylines; a Polyline is never modified after construction.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


class Polyline:
    def __init__(self, vertices: npt.ArrayLike) -> None:
        array = np.array(vertices, dtype=float, copy=True).reshape(-1, 3)
        array.setflags(write=False)
        self._vertices = array

    @property
    def vertices(self) -> np.ndarray:
        """Read-only ``(N, 3)`` array of vertex positions."""
        return self._vertices

    def __len__(self) -> int:
        return int(self._vertices.shape[0])

    def segment_lengths(self) -> np.ndarray:
        """Length of each of the N-1 segments."""
        return np.linalg.norm(np.diff(self._vertices, axis=0), axis=1)

    def length(self) -> float:
        return float(self.segment_lengths().sum())

    def average_segment_length(self) -> float:
        lengths = self.segment_lengths()
        return float(lengths.mean()) if len(lengths) else 0.0

    def point_at(self, t: float) -> np.ndarray:
        """
        Return the point a fraction *t* of the way along the polyline, measured
        by arc length: 0.0 is the first vertex and 1.0 the last.
        """
        if not 0.0 <= t <= 1.0:
            raise ValueError(f"t must lie in [0, 1], got {t}")
        if len(self) == 0:
            raise ValueError("cannot sample an empty polyline")
        lengths = self.segment_lengths()
        total = lengths.sum()
        if len(lengths) == 0 or total == 0.0:
            return self._vertices[0].copy()

        target = t * total
        cumulative = np.concatenate(([0.0], np.cumsum(lengths)))
        index = int(np.searchsorted(cumulative, target, side="right")) - 1
        index = min(max(index, 0), len(lengths) - 1)
        local = (target - cumulative[index]) / lengths[index] if lengths[index] > 0 else 0.0
        a, b = self._vertices[index], self._vertices[index + 1]
        return a + (b - a) * local

    def refine(self, min_segment_length: float) -> Polyline:
        """
        Subdivide every segment into ``floor(length / min_segment_length)``
        equal pieces (at least one). Original vertices are kept.
        """
        if min_segment_length <= 0:
            raise ValueError(f"min_segment_length must be positive, got {min_segment_length}")
        if len(self) < 2:
            return Polyline(self._vertices)

        refined = [self._vertices[0]]
        for a, b, length in zip(self._vertices[:-1], self._vertices[1:], self.segment_lengths()):
            divisions = max(int(length / min_segment_length), 1)
            for k in range(1, divisions):
                refined.append(a + (b - a) * (k / divisions))
            refined.append(b)
        return Polyline(np.array(refined))

    def bounding_box(self) -> tuple[np.ndarray, np.ndarray]:
        """(minimum corner, maximum corner) of the vertices."""
        if len(self) == 0:
            raise ValueError("an empty polyline has no bounding box")
        return self._vertices.min(axis=0), self._vertices.max(axis=0)

    def __repr__(self) -> str:
        return f"Polyline({len(self)} vertices)"
