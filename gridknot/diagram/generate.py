"""
Random grid-diagram generation.

A grid diagram is fully described by two column permutations: the row of
each column's X and the row of each column's O. The two must differ in every
column, which holds exactly when the O permutation is the X permutation
composed with a derangement.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .errors import InvalidDimensions
from .grid import GridDiagram
from .types import O_CODE, X_CODE

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


def _derangement(n: int, rng: np.random.Generator) -> np.ndarray:
    while True:
        candidate = rng.permutation(n)
        if not np.any(candidate == np.arange(n)):
            return candidate


def random_diagram(
    n: int,
    rng: Optional[np.random.Generator] = None,
    knot_only: bool = False,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> GridDiagram:
    """
    Return a random valid n×n grid diagram.

    With ``knot_only=True`` the result is guaranteed to trace a single closed
    curve (a knot rather than a multi-component link); a ValueError is raised
    if none is found within *max_attempts* draws.
    """
    if n < 2:
        raise InvalidDimensions(f"a random grid needs n >= 2, got {n}")
    rng = rng if rng is not None else np.random.default_rng()

    # Imported here: knot.path depends on this package.
    from gridknot.knot.path import component_count

    for attempt in range(1, max_attempts + 1):
        x_rows = rng.permutation(n)
        o_rows = x_rows[_derangement(n, rng)]
        matrix = np.zeros((n, n), dtype=np.int8)
        cols = np.arange(n)
        matrix[x_rows, cols] = X_CODE
        matrix[o_rows, cols] = O_CODE
        diagram = GridDiagram.from_array(matrix)
        if not knot_only or component_count(diagram) == 1:
            logger.debug(f"Generated {n}x{n} diagram after {attempt} attempt(s)")
            return diagram

    raise ValueError(f"no single-component {n}x{n} diagram found in {max_attempts} attempts")
