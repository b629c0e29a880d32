"""Tests for random_diagram()."""

from __future__ import annotations

import numpy as np
import pytest

from gridknot.diagram import GridDiagram, InvalidDimensions, random_diagram
from gridknot.knot import component_count


class TestRandomDiagram:
    @pytest.mark.parametrize("n", [2, 3, 5, 9])
    def test_produces_valid_diagram_of_requested_size(self, n):
        diagram = random_diagram(n, rng=np.random.default_rng(n))
        assert diagram.size == n
        assert diagram.violations() == []

    def test_same_seed_same_diagram(self):
        a = random_diagram(6, rng=np.random.default_rng(42))
        b = random_diagram(6, rng=np.random.default_rng(42))
        assert a == b

    def test_default_rng(self):
        assert isinstance(random_diagram(4), GridDiagram)

    @pytest.mark.parametrize("seed", range(5))
    def test_knot_only_yields_single_component(self, seed):
        diagram = random_diagram(7, rng=np.random.default_rng(seed), knot_only=True)
        assert component_count(diagram) == 1

    def test_knot_only_gives_up_after_max_attempts(self):
        with pytest.raises(ValueError, match="no single-component"):
            random_diagram(5, rng=np.random.default_rng(0), knot_only=True, max_attempts=0)

    @pytest.mark.parametrize("n", [0, 1])
    def test_rejects_sizes_without_a_valid_grid(self, n):
        with pytest.raises(InvalidDimensions):
            random_diagram(n)
