# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Grid addressing helpers.

Rows are labelled A-J and columns 1-10; internally both are 0-based,
so 'A1' is (0, 0) and 'J10' is (9, 9).
"""

from typing import Iterator, Tuple

BOARD_SIZE = 10
ROW_LABELS = "ABCDEFGHIJ"

Coordinate = Tuple[int, int]


def in_bounds(row: int, col: int) -> bool:
    """Check whether (row, col) lies on the 10x10 grid."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def all_coordinates() -> Iterator[Coordinate]:
    """Yield every grid coordinate in row-major order."""
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            yield (row, col)


def parse_coordinate(coord: str) -> Coordinate:
    """
    Parse a coordinate string like 'A5' or 'B10' into (row, col).

    Args:
        coord: Coordinate string (e.g., 'A5', 'j10')

    Returns:
        Tuple of (row_index, col_index), both 0-based.

    Raises:
        ValueError: If coordinate is invalid.
    """
    coord = coord.strip().upper()

    if len(coord) < 2 or len(coord) > 3:
        raise ValueError(f"Invalid coordinate format: {coord}")

    row_char = coord[0]
    col_str = coord[1:]

    if row_char not in ROW_LABELS:
        raise ValueError(f"Invalid row '{row_char}'. Must be A-J.")

    if not col_str.isdigit():
        raise ValueError(f"Invalid column '{col_str}'. Must be 1-10.")

    col_num = int(col_str)
    if not (1 <= col_num <= BOARD_SIZE):
        raise ValueError(f"Column {col_num} out of range. Must be 1-10.")

    return (ROW_LABELS.index(row_char), col_num - 1)


def format_coordinate(row: int, col: int) -> str:
    """Convert (row, col) indices to coordinate string like 'A5'."""
    if not in_bounds(row, col):
        raise ValueError(f"Coordinate ({row}, {col}) is off the grid")
    return f"{ROW_LABELS[row]}{col + 1}"
