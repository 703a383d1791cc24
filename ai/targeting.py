# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Targeting heuristic for the computer opponent.

Builds a weight map over the opponent's board from the shots fired so far
and picks the heaviest cell:

1. Every EMPTY cell is tried as the origin of a vessel of each length still
   possible (smallest afloat .. 5) in all four directions; every cell of a
   run that fits gains 1. This approximates how many ways the remaining
   vessels could cover each cell.
2. Around every HIT cell the next cells get a bonus (+100 one away, +50 two
   away) in each direction a vessel could still continue, so follow-up
   shots finish off damaged vessels.
3. SHOT_DOWN cells are forced to a weight no other cell can reach, since
   the missile never landed.
4. HIT, MISS and SUNK cells are zeroed and never chosen.

Ties go to the first cell in row-major order.
"""

from typing import Sequence

import numpy as np

from battleship.board import CellState
from battleship.coordinates import BOARD_SIZE, Coordinate, all_coordinates
from battleship.fit import TARGETING, Direction, fits, run_cells
from battleship.fleet import MAX_VESSEL_SIZE, Fleet

HIT_BONUS_NEAR = 100
HIT_BONUS_FAR = 50
SHOT_DOWN_WEIGHT = 1_000_000

SPENT_STATES = (CellState.HIT, CellState.MISS, CellState.SUNK)
OPEN_STATES = (CellState.EMPTY, CellState.SHOT_DOWN)


def smallest_vessel_alive(fleet: Fleet) -> int:
    """Size of the smallest vessel still afloat in fleet (5 if none are)."""
    return fleet.smallest_afloat_size(default=MAX_VESSEL_SIZE)


def _with_pending(grid, pending: Sequence[Coordinate]):
    # Targets already chosen this turn count as misses until they resolve
    cells = [list(grid[row]) for row in range(BOARD_SIZE)]
    for row, col in pending:
        cells[row][col] = CellState.MISS
    return cells


def build_weight_map(grid, smallest_alive: int,
                     pending: Sequence[Coordinate] = ()) -> np.ndarray:
    """
    Build the targeting weight map.

    Args:
        grid: Targeting grid, indexable as grid[row][col] -> CellState
        smallest_alive: Size of the opponent's smallest vessel afloat
        pending: Cells already chosen earlier in the current turn

    Returns:
        (10, 10) int64 array of weights.
    """
    cells = _with_pending(grid, pending)
    weights = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int64)

    for row, col in all_coordinates():
        state = cells[row][col]

        if state == CellState.EMPTY:
            for length in range(smallest_alive, MAX_VESSEL_SIZE + 1):
                for direction in Direction:
                    if fits(cells, row, col, length, direction, TARGETING):
                        for r, c in run_cells(row, col, length, direction):
                            weights[r, c] += 1

        elif state == CellState.HIT:
            for direction in Direction:
                d_row, d_col = direction.step
                if fits(cells, row, col, 3, direction, TARGETING):
                    weights[row + d_row, col + d_col] += HIT_BONUS_NEAR
                    weights[row + 2 * d_row, col + 2 * d_col] += HIT_BONUS_FAR
                elif fits(cells, row, col, 2, direction, TARGETING):
                    weights[row + d_row, col + d_col] += HIT_BONUS_NEAR

    for row, col in all_coordinates():
        state = cells[row][col]
        if state == CellState.SHOT_DOWN:
            weights[row, col] = SHOT_DOWN_WEIGHT
        elif state in SPENT_STATES:
            weights[row, col] = 0

    return weights


def select_target(grid, smallest_alive: int,
                  pending: Sequence[Coordinate] = ()) -> Coordinate:
    """
    Pick the best next shot.

    Returns the heaviest cell of the weight map, first in row-major order on
    ties. If no cell carries any weight, the first cell still open to fire
    on is returned.

    Raises:
        ValueError: If no cell can be fired on.
    """
    return pick_from_weights(build_weight_map(grid, smallest_alive, pending), grid, pending)


def pick_from_weights(weights: np.ndarray, grid,
                      pending: Sequence[Coordinate] = ()) -> Coordinate:
    """Heaviest cell of weights, falling back to the first open cell of grid."""
    best = int(np.argmax(weights))
    if weights.flat[best] > 0:
        return divmod(best, BOARD_SIZE)

    for row, col in all_coordinates():
        if grid[row][col] in OPEN_STATES and (row, col) not in pending:
            return (row, col)
    raise ValueError("No cell left to fire on")
