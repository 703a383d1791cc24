# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Battleship game core module.
"""

from .board import BoardPair, CellState, Grid, GridKind
from .coordinates import format_coordinate, parse_coordinate
from .engine import (
    Command,
    Controller,
    GameSession,
    GameStatus,
    SessionView,
    ShotOutcome,
    ShotResult,
)
from .events import EventBus, EventKind, GameEvent, Side
from .fit import PLACEMENT, TARGETING, Direction, fits
from .fleet import STANDARD_FLEET, Fleet, Vessel, VesselState
from .rules import GameVariant

__all__ = [
    'BoardPair',
    'CellState',
    'Command',
    'Controller',
    'Direction',
    'EventBus',
    'EventKind',
    'Fleet',
    'GameEvent',
    'GameSession',
    'GameStatus',
    'GameVariant',
    'Grid',
    'GridKind',
    'PLACEMENT',
    'STANDARD_FLEET',
    'SessionView',
    'ShotOutcome',
    'ShotResult',
    'Side',
    'TARGETING',
    'Vessel',
    'VesselState',
    'fits',
    'format_coordinate',
    'parse_coordinate',
]
