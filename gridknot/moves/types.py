"""
Cromwell move vocabulary.

Moves are plain frozen values: a closed set of variants, each carrying only
its own parameters. They hold no reference to a diagram and no state between
applications. The engine dispatches on the variant type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

# ── Enums ──────────────────────────────────────────────────────────────────────


class Direction(str, Enum):
    """Translation direction. UP moves every row one step towards row 0."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class Axis(str, Enum):
    ROW = "ROW"
    COLUMN = "COLUMN"


class Cardinality(str, Enum):
    """Corner of the 2×2 stabilization block that is left blank."""

    NW = "NW"
    NE = "NE"
    SW = "SW"
    SE = "SE"


# ── Move variants ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Translation:
    """Cyclically shift every row (UP/DOWN) or every column (LEFT/RIGHT) by one."""

    direction: Direction

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", Direction(self.direction))


@dataclass(frozen=True)
class Commutation:
    """Swap line *start_index* with line *start_index + 1* along *axis*."""

    axis: Axis
    start_index: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "axis", Axis(self.axis))


@dataclass(frozen=True)
class Stabilization:
    """Split the X at (i, j) into a 2×2 block, growing the grid by one."""

    cardinality: Cardinality
    i: int
    j: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "cardinality", Cardinality(self.cardinality))


@dataclass(frozen=True)
class Destabilization:
    """Inverse of Stabilization. Defined but not supported by the engine."""

    cardinality: Cardinality
    i: int
    j: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "cardinality", Cardinality(self.cardinality))


CromwellMove = Union[Translation, Commutation, Stabilization, Destabilization]
