# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Computer-controlled opponents.

Both controllers only read the SessionView they are given and return a
target; the session applies it.
"""

import logging
import random
from typing import Optional, Sequence

from battleship.coordinates import Coordinate, all_coordinates, format_coordinate
from battleship.engine import Controller, SessionView

from ai.targeting import OPEN_STATES, build_weight_map, pick_from_weights

logger = logging.getLogger(__name__)


class HeuristicOpponent(Controller):
    """
    Opponent driven by the weight-map targeting heuristic.

    Within a multi-shot turn each call sees the targets picked earlier in
    the turn as pending, so it never picks the same cell twice.
    """

    def __init__(self, name: str = "Heuristic"):
        self.name = name
        self.last_weights = None

    def next_target(self, view: SessionView, pending: Sequence[Coordinate]) -> Coordinate:
        self.last_weights = build_weight_map(
            view.targeting, view.smallest_opponent_vessel_alive, pending
        )
        target = pick_from_weights(self.last_weights, view.targeting, pending)
        logger.debug(
            f"{self.name} targets {format_coordinate(*target)} "
            f"(weight {self.last_weights[target]})"
        )
        return target


class RandomOpponent(Controller):
    """Baseline opponent firing uniformly at cells not yet resolved."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None,
                 name: str = "Random"):
        self.name = name
        self.rng = rng if rng is not None else random.Random(seed)

    def next_target(self, view: SessionView, pending: Sequence[Coordinate]) -> Coordinate:
        open_cells = [
            (row, col) for row, col in all_coordinates()
            if view.targeting[row][col] in OPEN_STATES and (row, col) not in pending
        ]
        if not open_cells:
            raise ValueError("No cell left to fire on")
        return self.rng.choice(open_cells)
