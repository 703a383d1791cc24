# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Unit tests for the targeting heuristic.
"""

import random
import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from battleship.board import CellState, Grid, GridKind
from battleship.fleet import Fleet

from ai.targeting import (
    HIT_BONUS_NEAR,
    OPEN_STATES,
    SHOT_DOWN_WEIGHT,
    build_weight_map,
    select_target,
    smallest_vessel_alive,
)


def filled_grid(fill: CellState, cells=None):
    """Plain 10x10 list grid filled with one state, with (row, col) overrides."""
    grid = [[fill] * 10 for _ in range(10)]
    for (row, col), state in (cells or {}).items():
        grid[row][col] = state
    return grid


class TestWeightMap:
    """Tests for build_weight_map."""

    def test_empty_grid_weights(self):
        """Test exact weights on an empty grid with only length 5 possible."""
        weights = build_weight_map(Grid(GridKind.TARGETING), 5)
        assert weights.shape == (10, 10)
        assert weights.dtype == np.int64
        assert weights[0, 0] == 4
        assert weights[0, 4] == 12
        assert weights[4, 4] == 20
        assert weights.max() == 20

    @pytest.mark.parametrize("smallest", [2, 3, 4, 5])
    def test_empty_grid_symmetric(self, smallest):
        """Test the empty-grid map is symmetric under flips and transpose."""
        weights = build_weight_map(Grid(GridKind.TARGETING), smallest)
        np.testing.assert_array_equal(weights, np.flipud(weights))
        np.testing.assert_array_equal(weights, np.fliplr(weights))
        np.testing.assert_array_equal(weights, weights.T)

    def test_smaller_vessels_add_weight(self):
        grid = Grid(GridKind.TARGETING)
        assert (build_weight_map(grid, 2) >= build_weight_map(grid, 5)).all()
        assert build_weight_map(grid, 2).sum() > build_weight_map(grid, 5).sum()

    def test_hit_bonus(self):
        """Test a HIT boosts the next cells where a vessel can continue."""
        grid = Grid(GridKind.TARGETING)
        grid.record_outcome((0, 0), CellState.HIT)
        weights = build_weight_map(grid, 5)

        assert weights[0, 0] == 0
        assert weights[0, 1] == 105
        assert weights[1, 0] == 105
        assert weights[0, 2] == 57
        assert weights[2, 0] == 57

    def test_hit_bonus_near_edge(self):
        """Test only the adjacent cell is boosted when two cells do not fit."""
        grid = Grid(GridKind.TARGETING)
        grid.record_outcome((0, 8), CellState.HIT)
        weights = build_weight_map(grid, 5)
        empty = build_weight_map(Grid(GridKind.TARGETING), 5)

        assert weights[0, 9] >= HIT_BONUS_NEAR
        assert weights[0, 7] >= HIT_BONUS_NEAR
        assert weights[0, 6] >= 50
        assert weights[0, 9] < empty[0, 9] + HIT_BONUS_NEAR + 50

    def test_spent_cells_zeroed(self):
        grid = Grid(GridKind.TARGETING)
        grid.record_outcome((3, 3), CellState.MISS)
        grid.record_outcome((5, 5), CellState.HIT)
        grid.record_outcome((5, 6), CellState.HIT)
        grid.mark_sunk([(5, 5), (5, 6)])
        weights = build_weight_map(grid, 2)

        assert weights[3, 3] == 0
        assert weights[5, 5] == 0
        assert weights[5, 6] == 0

    def test_shot_down_forced(self):
        grid = Grid(GridKind.TARGETING)
        grid.record_outcome((7, 2), CellState.SHOT_DOWN)
        weights = build_weight_map(grid, 2)
        assert weights[7, 2] == SHOT_DOWN_WEIGHT
        assert np.argmax(weights) == 72

    def test_pending_counts_as_miss(self):
        """Test cells chosen earlier in the turn are weighted like misses."""
        grid = Grid(GridKind.TARGETING)
        with_pending = build_weight_map(grid, 3, pending=[(4, 4)])

        missed = Grid(GridKind.TARGETING)
        missed.record_outcome((4, 4), CellState.MISS)
        np.testing.assert_array_equal(with_pending, build_weight_map(missed, 3))
        assert with_pending[4, 4] == 0


class TestSelectTarget:
    """Tests for select_target."""

    def test_opening_shot(self):
        """Test the first shot on an empty grid goes to the first centre cell."""
        assert select_target(Grid(GridKind.TARGETING), 5) == (4, 4)

    def test_follows_up_a_hit(self):
        grid = Grid(GridKind.TARGETING)
        grid.record_outcome((4, 4), CellState.HIT)
        assert select_target(grid, 2) in [(3, 4), (5, 4), (4, 3), (4, 5)]

    def test_corner_hit(self):
        grid = Grid(GridKind.TARGETING)
        grid.record_outcome((0, 0), CellState.HIT)
        assert select_target(grid, 5) == (0, 1)

    def test_shot_down_always_chosen(self):
        """Test a SHOT_DOWN cell wins even over fresh HIT neighbours."""
        grid = Grid(GridKind.TARGETING)
        grid.record_outcome((4, 4), CellState.HIT)
        grid.record_outcome((8, 8), CellState.SHOT_DOWN)
        assert select_target(grid, 2) == (8, 8)

    def test_shot_down_tie_is_row_major(self):
        grid = Grid(GridKind.TARGETING)
        grid.record_outcome((7, 2), CellState.SHOT_DOWN)
        grid.record_outcome((3, 8), CellState.SHOT_DOWN)
        assert select_target(grid, 2) == (3, 8)

    def test_pending_excluded(self):
        grid = Grid(GridKind.TARGETING)
        target = select_target(grid, 5, pending=[(4, 4)])
        assert target != (4, 4)

    def test_pending_shot_down_excluded(self):
        """Test a SHOT_DOWN cell already chosen this turn is not chosen again."""
        grid = Grid(GridKind.TARGETING)
        grid.record_outcome((3, 8), CellState.SHOT_DOWN)
        assert select_target(grid, 2, pending=[(3, 8)]) != (3, 8)

    def test_zero_weight_fallback(self):
        """Test the first open cell is chosen when nothing carries weight."""
        grid = filled_grid(CellState.MISS, cells={(6, 3): CellState.EMPTY})
        assert build_weight_map(grid, 5).sum() == 0
        assert select_target(grid, 5) == (6, 3)

    def test_no_open_cell(self):
        grid = filled_grid(CellState.MISS, cells={(6, 3): CellState.EMPTY})
        with pytest.raises(ValueError):
            select_target(grid, 5, pending=[(6, 3)])

    def test_never_picks_spent_cells(self):
        """Test random partially-played grids never yield a spent cell."""
        rng = random.Random(1234)
        states = [CellState.EMPTY, CellState.EMPTY, CellState.MISS,
                  CellState.HIT, CellState.SUNK, CellState.SHOT_DOWN]
        for _ in range(50):
            grid = [[rng.choice(states) for _ in range(10)] for _ in range(10)]
            grid[rng.randrange(10)][rng.randrange(10)] = CellState.EMPTY
            row, col = select_target(grid, rng.randint(2, 5))
            assert grid[row][col] in OPEN_STATES


class TestSmallestVesselAlive:

    def test_smallest_vessel_alive(self):
        fleet = Fleet.standard()
        assert smallest_vessel_alive(fleet) == 2
        fleet.scuttle_all()
        assert smallest_vessel_alive(fleet) == 5
