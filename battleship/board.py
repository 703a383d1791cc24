# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Board state for one side of a Battleship game.

Each side owns two 10x10 grids:
- an own-ships grid recording vessel placement and damage taken
- a targeting grid recording the outcomes of shots fired at the opponent

Cells only move forward through their states. The one exception is
SHOT_DOWN, which may be fired upon again.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Tuple

from .coordinates import BOARD_SIZE, Coordinate, all_coordinates, format_coordinate, in_bounds
from .errors import BoardStateError, PlacementError


class CellState(Enum):
    """State of a cell on a grid, valued by its render symbol."""
    EMPTY = " "
    SHIP = "S"
    MISS = "O"
    HIT = "X"
    SUNK = "#"
    SHOT_DOWN = "+"


class GridKind(Enum):
    """Which of a side's two grids a Grid instance is."""
    SHIPS = "ships"
    TARGETING = "targeting"


# States a cell may hold when a fresh shot lands on it
FRESH_SHOT_STATES = {
    GridKind.SHIPS: frozenset({CellState.EMPTY, CellState.SHIP, CellState.SHOT_DOWN}),
    GridKind.TARGETING: frozenset({CellState.EMPTY, CellState.SHOT_DOWN}),
}

SHOT_OUTCOME_STATES = frozenset({CellState.MISS, CellState.HIT, CellState.SHOT_DOWN})

GridSnapshot = Tuple[Tuple[CellState, ...], ...]


class Grid:
    """A 10x10 matrix of CellState, indexed grid[row][col]."""

    def __init__(self, kind: GridKind):
        self.kind = kind
        self._cells: List[List[CellState]] = [
            [CellState.EMPTY for _ in range(BOARD_SIZE)]
            for _ in range(BOARD_SIZE)
        ]

    def __getitem__(self, row: int) -> Tuple[CellState, ...]:
        return tuple(self._cells[row])

    def __len__(self) -> int:
        return BOARD_SIZE

    def state(self, coord: Coordinate) -> CellState:
        """Return the state of the cell at coord."""
        row, col = coord
        if not in_bounds(row, col):
            raise IndexError(f"Coordinate ({row}, {col}) is off the grid")
        return self._cells[row][col]

    def cells_in(self, *states: CellState) -> List[Coordinate]:
        """Return every coordinate whose state is one of states, row-major."""
        wanted = set(states)
        return [pos for pos in all_coordinates() if self._cells[pos[0]][pos[1]] in wanted]

    def count(self, state: CellState) -> int:
        return sum(row.count(state) for row in self._cells)

    def place_vessel(self, coords: Iterable[Coordinate]) -> None:
        """
        Mark coords as occupied by a vessel.

        Raises:
            PlacementError: If any cell is off the grid or already non-empty.
                Nothing is written in that case.
        """
        coords = list(coords)
        for row, col in coords:
            if not in_bounds(row, col):
                raise PlacementError(f"Cell ({row}, {col}) is off the grid")
            if self._cells[row][col] != CellState.EMPTY:
                raise PlacementError(
                    f"Cell {format_coordinate(row, col)} is already "
                    f"{self._cells[row][col].name}"
                )
        for row, col in coords:
            self._cells[row][col] = CellState.SHIP

    def record_outcome(self, coord: Coordinate, outcome: CellState) -> None:
        """
        Write the outcome of a fresh shot.

        Raises:
            BoardStateError: If the outcome is not a shot outcome or the cell
                was already resolved.
        """
        if outcome not in SHOT_OUTCOME_STATES:
            raise BoardStateError(f"{outcome.name} is not a shot outcome")
        current = self.state(coord)
        if current not in FRESH_SHOT_STATES[self.kind]:
            raise BoardStateError(
                f"Cannot record {outcome.name} at {format_coordinate(*coord)} on "
                f"{self.kind.value} grid: cell is already {current.name}"
            )
        self._cells[coord[0]][coord[1]] = outcome

    def mark_sunk(self, coords: Iterable[Coordinate]) -> None:
        """Move the cells of a sunk vessel to SUNK."""
        for row, col in coords:
            if self._cells[row][col] == CellState.SUNK:
                raise BoardStateError(f"{format_coordinate(row, col)} is already SUNK")
            self._cells[row][col] = CellState.SUNK

    def snapshot(self) -> GridSnapshot:
        """Immutable copy of the grid, indexable as snapshot[row][col]."""
        return tuple(tuple(row) for row in self._cells)


@dataclass
class BoardPair:
    """One side's own-ships grid and targeting grid."""
    ships: Grid = field(default_factory=lambda: Grid(GridKind.SHIPS))
    targeting: Grid = field(default_factory=lambda: Grid(GridKind.TARGETING))
