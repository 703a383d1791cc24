# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Vessel placement helpers: random placement for either side and the
coordinate run for an explicit (origin, direction) placement.
"""

import logging
import random
from typing import List

from .board import CellState, Grid
from .coordinates import BOARD_SIZE, Coordinate, format_coordinate
from .errors import PlacementError
from .fit import PLACEMENT, Direction, fits, open_directions, run_cells

logger = logging.getLogger(__name__)

MAX_PLACEMENT_ATTEMPTS = 1000


def placement_cells(grid: Grid, row: int, col: int, size: int,
                    direction: Direction) -> List[Coordinate]:
    """
    Cells a vessel of `size` would occupy from (row, col) toward direction.

    Raises:
        PlacementError: If the run leaves the grid or overlaps another vessel.
    """
    if not fits(grid, row, col, size, direction, PLACEMENT):
        raise PlacementError(
            f"A vessel of size {size} does not fit at "
            f"{format_coordinate(row, col)} going {direction.name}"
        )
    return run_cells(row, col, size, direction)


def random_placement(grid: Grid, size: int, rng: random.Random,
                     max_attempts: int = MAX_PLACEMENT_ATTEMPTS) -> List[Coordinate]:
    """
    Pick a random free run of `size` cells on grid.

    A random origin is drawn until it is empty and at least one direction
    fits; the direction is then drawn from those that fit.

    Raises:
        RuntimeError: If no placement is found within max_attempts draws.
    """
    for attempt in range(1, max_attempts + 1):
        row = rng.randint(0, BOARD_SIZE - 1)
        col = rng.randint(0, BOARD_SIZE - 1)

        if grid[row][col] != CellState.EMPTY:
            continue

        directions = open_directions(grid, row, col, size, PLACEMENT)
        if not directions:
            continue

        direction = rng.choice(directions)
        logger.debug(
            f"Placed size {size} at {format_coordinate(row, col)} "
            f"going {direction.name} after {attempt} attempts"
        )
        return run_cells(row, col, size, direction)

    raise RuntimeError(f"Failed to place vessel of size {size} after {max_attempts} attempts")
