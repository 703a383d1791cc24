# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
ASCII rendering of grids, fleets and weight maps for the terminal.
"""

from typing import List, Optional

import numpy as np

from .board import CellState
from .coordinates import BOARD_SIZE, ROW_LABELS
from .fleet import Fleet, Vessel

COMBINING_STRIKE = "̶"
SEPARATOR = "    " + "-" * (4 * BOARD_SIZE + 1)


def strike(text: str) -> str:
    """Return text with a strike-through, e.g. for sunk vessel names."""
    return "".join(COMBINING_STRIKE + ch for ch in text)


def _header() -> str:
    return "    |" + "|".join(f"{i:^3}" for i in range(1, BOARD_SIZE + 1)) + "|"


def _cell(state: CellState) -> str:
    if state == CellState.SUNK:
        return strike(" X ")
    return f" {state.value} "


def grid_lines(grid) -> List[str]:
    """Render a grid, indexable as grid[row][col] -> CellState, as lines of text."""
    lines = [_header(), SEPARATOR]
    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            cells.append(_cell(grid[row][col]))
        lines.append(f"  {ROW_LABELS[row]} |" + "|".join(cells) + "|")
    lines.append(SEPARATOR)
    return lines


def vessel_status(vessel: Vessel) -> str:
    """One-line status of a vessel: name and a damage bar."""
    name = strike(vessel.name) if vessel.is_sunk else vessel.name
    if vessel.health == 0:
        boxes = [strike(" X ")] * vessel.size
    else:
        boxes = [" X " if i < vessel.hits_taken else "   " for i in range(vessel.size)]
    return f"{name:<12} |" + "|".join(boxes) + "|"


def board_string(grid, fleet: Optional[Fleet] = None) -> str:
    """
    Get a grid as an ASCII string.

    When fleet is given, each vessel's status is shown beside the grid.
    """
    lines = grid_lines(grid)
    if fleet is not None:
        status = [vessel_status(vessel) for vessel in fleet]
        for i, text in enumerate(status):
            lines[2 + 2 * i] += "    " + text
    return "\n".join(lines)


def weight_map_string(weights: np.ndarray) -> str:
    """Render a targeting weight map, one number per cell."""
    lines = [_header(), SEPARATOR]
    for row in range(BOARD_SIZE):
        cells = "|".join(f"{int(w):>3}" if w < 1000 else "***" for w in weights[row])
        lines.append(f"  {ROW_LABELS[row]} |{cells}|")
    lines.append(SEPARATOR)
    return "\n".join(lines)
