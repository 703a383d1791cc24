# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Directional fit checks.

Answers "does an object of length n fit starting at (row, col) going in
direction d" against a grid. Two policies are in use:

- PLACEMENT rejects any non-empty cell anywhere in the run, so vessels
  never overlap.
- TARGETING rejects only MISS and SUNK cells strictly between the origin
  and the far end of the run. A HIT cell does not block, since a damaged
  vessel may still continue through it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List

from .board import CellState
from .coordinates import Coordinate, in_bounds


class Direction(Enum):
    """Direction of a run, valued by its (d_row, d_col) step."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def step(self):
        return self.value


@dataclass(frozen=True)
class FitPolicy:
    """Which cell states disqualify a run, and whether the run ends are checked."""
    name: str
    blocked_states: FrozenSet[CellState]
    check_endpoints: bool

    def blocks(self, state: CellState) -> bool:
        return state in self.blocked_states


PLACEMENT = FitPolicy(
    name="placement",
    blocked_states=frozenset(set(CellState) - {CellState.EMPTY}),
    check_endpoints=True,
)

TARGETING = FitPolicy(
    name="targeting",
    blocked_states=frozenset({CellState.MISS, CellState.SUNK}),
    check_endpoints=False,
)


def run_cells(row: int, col: int, length: int, direction: Direction) -> List[Coordinate]:
    """Coordinates of the run of `length` cells from (row, col) toward direction."""
    d_row, d_col = direction.step
    return [(row + n * d_row, col + n * d_col) for n in range(length)]


def fits(grid, row: int, col: int, length: int, direction: Direction,
         policy: FitPolicy) -> bool:
    """
    Check whether a run of `length` cells fits from (row, col) toward direction.

    Args:
        grid: Anything indexable as grid[row][col] -> CellState
        row, col: Origin of the run
        length: Number of cells in the run (origin included)
        direction: Direction the run extends in
        policy: PLACEMENT or TARGETING

    Returns:
        False if the run leaves the grid or crosses a cell the policy blocks.
    """
    if length < 1:
        raise ValueError(f"Run length must be positive, got {length}")

    cells = run_cells(row, col, length, direction)
    end_row, end_col = cells[-1]
    if not (in_bounds(row, col) and in_bounds(end_row, end_col)):
        return False

    checked = cells if policy.check_endpoints else cells[1:-1]
    return not any(policy.blocks(grid[r][c]) for r, c in checked)


def open_directions(grid, row: int, col: int, length: int,
                    policy: FitPolicy) -> List[Direction]:
    """Directions in which a run of `length` fits from (row, col)."""
    return [d for d in Direction if fits(grid, row, col, length, d, policy)]
