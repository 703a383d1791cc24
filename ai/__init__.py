# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Computer opponent for Battleship.

Provides the weight-map targeting heuristic and the controllers built on it.
"""

from ai.opponent import HeuristicOpponent, RandomOpponent
from ai.targeting import build_weight_map, select_target, smallest_vessel_alive

__all__ = [
    'HeuristicOpponent',
    'RandomOpponent',
    'build_weight_map',
    'select_target',
    'smallest_vessel_alive',
]
