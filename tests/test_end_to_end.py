"""
End-to-end tests across the gridknot packages.

Exercises: catalog / csv file → move sequence → csv round trip → knot path
→ polyline, checking that the knot's invariants survive every step.
"""

from __future__ import annotations

import numpy as np
import pytest

from gridknot.catalog import get_catalog
from gridknot.config import PathSettings
from gridknot.diagram import GridDiagram, load_grid, random_diagram, save_grid
from gridknot.knot import build_knot_paths, component_count
from gridknot.moves import (
    Axis,
    Cardinality,
    Commutation,
    Direction,
    InterleavedColumns,
    Stabilization,
    Translation,
    apply_moves,
    available_moves,
    parse_move,
    try_move,
)


def test_trefoil_through_moves_and_file(tmp_path):
    diagram = get_catalog().get("trefoil")
    moves = [
        Translation(Direction.UP),
        Stabilization(Cardinality.SE, 0, 1),
        Translation(Direction.LEFT),
    ]
    result = apply_moves(diagram, moves)
    assert result.passed
    assert result.final_size == 6
    assert component_count(diagram) == 1

    path = tmp_path / "trefoil.csv"
    save_grid(diagram, path)
    reloaded = load_grid(path)
    assert reloaded == diagram

    (knot,) = build_knot_paths(reloaded)
    polyline = knot.to_polyline(PathSettings(crossing_lift=0.2))
    assert len(polyline) == len(knot.vertices)
    assert np.allclose(polyline.vertices[0], polyline.vertices[-1])
    low, high = polyline.bounding_box()
    assert low[0] >= -0.5 and high[0] < 0.5
    assert high[2] == pytest.approx(0.2)


@pytest.mark.parametrize(
    "notation, expected",
    [
        ("commute:row:1", ["xo..", "..xo", "ox..", "..ox"]),
        ("commute:column:1", ["x.o.", "o.x.", ".x.o", ".o.x"]),
    ],
)
def test_unlink_commutations_keep_two_components(notation, expected):
    diagram = get_catalog().get("unlink")
    result = apply_moves(diagram, [parse_move(notation)])
    assert result.passed
    assert diagram == GridDiagram(expected)
    assert component_count(diagram) == 2
    assert len(diagram.compute_crossings()) == 0


def test_row_commutation_blocks_the_column_commutation():
    # after swapping rows 1 and 2 every pair of adjacent columns overlaps
    diagram = get_catalog().get("unlink")
    result = apply_moves(
        diagram,
        [parse_move("commute:row:1"), parse_move("commute:column:1")],
    )
    assert result.applied == (0,)
    assert isinstance(result.failures[0].error, InterleavedColumns)
    column_swaps = [
        m for m in available_moves(diagram) if isinstance(m, Commutation) and m.axis is Axis.COLUMN
    ]
    assert column_swaps == []


def test_rejected_step_leaves_earlier_work_in_place():
    diagram = get_catalog().get("hopf_link")
    result = apply_moves(
        diagram,
        [Translation(Direction.RIGHT), Commutation(Axis.ROW, 0), Translation(Direction.LEFT)],
        stop_on_error=False,
    )
    assert result.applied == (0, 2)
    assert diagram == get_catalog().get("hopf_link")


@pytest.mark.parametrize("seed", range(8))
def test_random_walk_of_available_moves(seed):
    rng = np.random.default_rng(seed)
    diagram = random_diagram(5, rng=rng, knot_only=True)
    for _ in range(6):
        options = available_moves(diagram)
        move = options[int(rng.integers(0, len(options)))]
        assert try_move(diagram, move).applied
        assert diagram.violations() == []
        assert component_count(diagram) == 1
    paths = build_knot_paths(diagram)
    assert sum(p.crossing_count for p in paths) == len(diagram.compute_crossings())
