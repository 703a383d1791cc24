# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Exception types raised by the game core.

Misses and forfeits are ordinary shot outcomes and never raise.
"""


class PlacementError(ValueError):
    """A vessel cannot be placed where it was asked to go."""


class BoardStateError(RuntimeError):
    """A cell was written in a state that does not allow that write."""


class FleetConsistencyError(RuntimeError):
    """An occupied cell has no vessel backing it. The session cannot continue."""


class GameStateError(RuntimeError):
    """An operation was attempted in the wrong session status."""
