"""
Tests for GridDiagram construction, validation and accessors.

Covers:
  - Every constructor accepts valid input and rejects each invariant violation
  - Errors carry the offending index and marker counts
  - violations() collects every problem; validate() raises the first
  - commit() replaces cells only after validation
  - Seeded random grids: breaking a single row or column is always detected
"""

from __future__ import annotations

import numpy as np
import pytest

from gridknot.diagram import (
    CellMarker,
    GridDiagram,
    InvalidDimensions,
    InvalidMarker,
    MalformedColumn,
    MalformedRow,
    find_violations,
    random_diagram,
)
from gridknot.diagram.types import BLANK_CODE, O_CODE, X_CODE

UNKNOT = ["xo", "ox"]
TREFOIL = ["x..o.", ".x..o", "o.x..", ".o.x.", "..o.x"]


# ── Construction ───────────────────────────────────────────────────────────────


class TestConstruct:
    def test_unknot_is_valid(self):
        diagram = GridDiagram(UNKNOT)
        assert diagram.size == 2

    def test_accepts_marker_enums(self):
        diagram = GridDiagram([[CellMarker.X, CellMarker.O], [CellMarker.O, CellMarker.X]])
        assert diagram == GridDiagram(UNKNOT)

    def test_accepts_mixed_spellings(self):
        diagram = GridDiagram([["X", "o", " "], ["", "x", "O"], ["o", ".", "x"]])
        assert diagram.marker_at(0, 2) == CellMarker.BLANK
        assert diagram.marker_at(1, 2) == CellMarker.O

    def test_empty_grid_rejected(self):
        with pytest.raises(InvalidDimensions):
            GridDiagram([])

    def test_ragged_rows_rejected(self):
        with pytest.raises(InvalidDimensions, match="row 1 has 1 cells"):
            GridDiagram(["xo", "o"])

    def test_non_square_rejected(self):
        with pytest.raises(InvalidDimensions):
            GridDiagram(["xo.", "ox."])

    def test_malformed_row_carries_index_and_counts(self):
        with pytest.raises(MalformedRow) as exc_info:
            GridDiagram(["xx", "oo"])
        assert exc_info.value.index == 0
        assert exc_info.value.x_count == 2
        assert exc_info.value.o_count == 0

    def test_malformed_column_carries_index(self):
        with pytest.raises(MalformedColumn) as exc_info:
            GridDiagram(["xo", "xo"])
        assert exc_info.value.index == 0
        assert exc_info.value.x_count == 2
        assert exc_info.value.o_count == 0

    def test_single_cell_grid_is_invalid(self):
        with pytest.raises(MalformedRow):
            GridDiagram(["x"])

    def test_unknown_marker_rejected(self):
        with pytest.raises(InvalidMarker) as exc_info:
            GridDiagram(["xq", "ox"])
        assert (exc_info.value.row, exc_info.value.col) == (0, 1)

    def test_structural_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            GridDiagram(["xx", "oo"])


class TestFromMapping:
    def test_matches_row_constructor(self):
        cells = {(0, 0): "x", (0, 1): "o", (1, 0): "o", (1, 1): "x"}
        assert GridDiagram.from_mapping(cells, 2) == GridDiagram(UNKNOT)

    def test_missing_cell_rejected(self):
        cells = {(0, 0): "x", (0, 1): "o", (1, 0): "o"}
        with pytest.raises(InvalidDimensions, match="expected 4 cells"):
            GridDiagram.from_mapping(cells, 2)

    def test_out_of_range_cell_rejected(self):
        cells = {(0, 0): "x", (0, 1): "o", (1, 0): "o", (1, 1): "x", (2, 0): " "}
        with pytest.raises(InvalidDimensions, match="outside"):
            GridDiagram.from_mapping(cells, 2)

    def test_zero_size_rejected(self):
        with pytest.raises(InvalidDimensions):
            GridDiagram.from_mapping({}, 0)


class TestFromArray:
    def test_copies_input(self):
        matrix = np.array([[X_CODE, O_CODE], [O_CODE, X_CODE]])
        diagram = GridDiagram.from_array(matrix)
        matrix[0, 0] = BLANK_CODE
        assert diagram.marker_at(0, 0) == CellMarker.X

    def test_unknown_code_rejected(self):
        with pytest.raises(InvalidMarker):
            GridDiagram.from_array(np.array([[X_CODE, 7], [O_CODE, X_CODE]]))

    def test_wide_integers_are_not_wrapped_into_codes(self):
        # 257 would wrap to 1 (an X) in int8
        matrix = np.array([[257, O_CODE], [O_CODE, X_CODE]], dtype=np.int64)
        with pytest.raises(InvalidMarker) as exc_info:
            GridDiagram.from_array(matrix)
        assert (exc_info.value.row, exc_info.value.col) == (0, 0)
        assert exc_info.value.value == 257

    def test_float_matrix_rejected(self):
        with pytest.raises(InvalidMarker):
            GridDiagram.from_array(np.array([[1.7, 2.2], [2.9, 1.0]]))

    def test_float_matrix_with_whole_values_rejected(self):
        with pytest.raises(InvalidMarker):
            GridDiagram.from_array(np.array([[1.0, 2.0], [2.0, 1.0]]))

    def test_non_square_rejected(self):
        with pytest.raises(InvalidDimensions, match="2 rows but 3 columns"):
            GridDiagram.from_array(np.zeros((2, 3), dtype=np.int8))

    def test_empty_rejected(self):
        with pytest.raises(InvalidDimensions):
            GridDiagram.from_array(np.zeros((0, 0), dtype=np.int8))


# ── Accessors ──────────────────────────────────────────────────────────────────


class TestAccessors:
    def test_cells_mapping_is_fully_populated(self):
        cells = GridDiagram(TREFOIL).cells
        assert len(cells) == 25
        assert sum(1 for m in cells.values() if m == CellMarker.X) == 5
        assert sum(1 for m in cells.values() if m == CellMarker.O) == 5

    def test_row_and_column(self):
        diagram = GridDiagram(TREFOIL)
        assert diagram.row(0) == (
            CellMarker.X,
            CellMarker.BLANK,
            CellMarker.BLANK,
            CellMarker.O,
            CellMarker.BLANK,
        )
        assert diagram.column(0)[2] == CellMarker.O

    def test_marker_positions(self):
        diagram = GridDiagram(TREFOIL)
        assert diagram.x_in_row(2) == 2
        assert diagram.o_in_row(2) == 0
        assert diagram.x_in_column(3) == 3
        assert diagram.o_in_column(3) == 0

    def test_x_positions_row_major(self):
        assert GridDiagram(UNKNOT).x_positions() == ((0, 0), (1, 1))

    def test_as_array_is_a_copy(self):
        diagram = GridDiagram(UNKNOT)
        matrix = diagram.as_array()
        matrix[:] = BLANK_CODE
        assert diagram == GridDiagram(UNKNOT)

    def test_copy_is_independent(self):
        diagram = GridDiagram(UNKNOT)
        clone = diagram.copy()
        clone.commit(np.array([[O_CODE, X_CODE], [X_CODE, O_CODE]]))
        assert diagram == GridDiagram(UNKNOT)
        assert clone != diagram

    def test_str_and_repr(self):
        diagram = GridDiagram(["x.o", "ox.", ".ox"])
        assert str(diagram) == "x . o\no x .\n. o x"
        assert repr(diagram) == "GridDiagram(['x.o', 'ox.', '.ox'])"

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(GridDiagram(UNKNOT))

    def test_different_sizes_not_equal(self):
        assert GridDiagram(UNKNOT) != GridDiagram(TREFOIL)


# ── Validation and commit ──────────────────────────────────────────────────────


class TestValidation:
    def test_validate_passes_on_valid_diagram(self):
        diagram = GridDiagram(TREFOIL)
        diagram.validate()
        assert diagram.violations() == []

    def test_commit_replaces_cells(self):
        diagram = GridDiagram(UNKNOT)
        diagram.commit(np.array([[O_CODE, X_CODE], [X_CODE, O_CODE]]))
        assert diagram == GridDiagram(["ox", "xo"])

    def test_commit_can_resize(self):
        diagram = GridDiagram(UNKNOT)
        diagram.commit(GridDiagram(TREFOIL).as_array())
        assert diagram.size == 5

    def test_invalid_commit_leaves_cells_unchanged(self):
        diagram = GridDiagram(UNKNOT)
        with pytest.raises(MalformedRow):
            diagram.commit(np.array([[X_CODE, X_CODE], [O_CODE, O_CODE]]))
        assert diagram == GridDiagram(UNKNOT)

    @pytest.mark.parametrize(
        "matrix",
        [
            np.array([[O_CODE, 257], [257, O_CODE]], dtype=np.int64),
            np.array([[2.4, 1.2], [1.9, 2.0]]),
        ],
    )
    def test_commit_rejects_values_outside_code_table(self, matrix):
        diagram = GridDiagram(UNKNOT)
        with pytest.raises(InvalidMarker):
            diagram.commit(matrix)
        assert diagram == GridDiagram(UNKNOT)

    def test_violations_collects_everything(self):
        errors = find_violations(np.array([[X_CODE, X_CODE], [O_CODE, O_CODE]]))
        assert [type(e) for e in errors] == [MalformedRow, MalformedRow]
        assert [e.index for e in errors] == [0, 1]

    def test_violations_reports_rows_before_columns(self):
        matrix = np.array(
            [
                [X_CODE, O_CODE, BLANK_CODE],
                [X_CODE, O_CODE, BLANK_CODE],
                [BLANK_CODE, BLANK_CODE, BLANK_CODE],
            ]
        )
        errors = find_violations(matrix)
        assert isinstance(errors[0], MalformedRow)
        assert errors[0].index == 2
        assert {e.index for e in errors if isinstance(e, MalformedColumn)} == {0, 1, 2}


# ── Validation soundness over random grids ─────────────────────────────────────


@pytest.mark.parametrize("seed", range(12))
class TestValidationSoundness:
    def _diagram(self, seed: int) -> tuple[GridDiagram, np.random.Generator]:
        rng = np.random.default_rng(seed)
        n = int(rng.integers(3, 8))
        return random_diagram(n, rng=rng), rng

    def test_random_grid_is_valid(self, seed):
        diagram, _ = self._diagram(seed)
        assert GridDiagram.from_array(diagram.as_array()) == diagram

    def test_moving_x_within_row_breaks_columns(self, seed):
        diagram, rng = self._diagram(seed)
        matrix = diagram.as_array()
        row = int(rng.integers(diagram.size))
        x_col = diagram.x_in_row(row)
        blank_col = int(rng.choice(np.flatnonzero(matrix[row, :] == BLANK_CODE)))
        matrix[row, x_col], matrix[row, blank_col] = BLANK_CODE, X_CODE
        with pytest.raises(MalformedColumn):
            GridDiagram.from_array(matrix)

    def test_moving_o_within_column_breaks_rows(self, seed):
        diagram, rng = self._diagram(seed)
        matrix = diagram.as_array()
        col = int(rng.integers(diagram.size))
        o_row = diagram.o_in_column(col)
        blank_row = int(rng.choice(np.flatnonzero(matrix[:, col] == BLANK_CODE)))
        matrix[o_row, col], matrix[blank_row, col] = BLANK_CODE, O_CODE
        with pytest.raises(MalformedRow):
            GridDiagram.from_array(matrix)

    def test_removing_a_marker_is_detected(self, seed):
        diagram, rng = self._diagram(seed)
        matrix = diagram.as_array()
        row = int(rng.integers(diagram.size))
        matrix[row, diagram.x_in_row(row)] = BLANK_CODE
        with pytest.raises(MalformedRow) as exc_info:
            GridDiagram.from_array(matrix)
        assert exc_info.value.index == row
        assert exc_info.value.x_count == 0
