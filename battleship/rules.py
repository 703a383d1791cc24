# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Rule variants.

CLASSIC          - one shot per turn.
MULTIFIRE        - one shot per vessel afloat, resolved as a batch.
CRUISE_MISSILES  - one shot per turn; vessels shoot down incoming
                   missiles 80% of the time.
HARDCORE         - MULTIFIRE and CRUISE_MISSILES combined.
"""

import random
from enum import Enum

# Interception succeeds on a roll of 1..8 out of 1..10
INTERCEPTION_ROLL_SIDES = 10
INTERCEPTION_SUCCESS_MAX = 8


class GameVariant(Enum):
    CLASSIC = "classic"
    MULTIFIRE = "multifire"
    CRUISE_MISSILES = "cruise_missiles"
    HARDCORE = "hardcore"

    @classmethod
    def from_name(cls, name: str) -> "GameVariant":
        """Look up a variant by value or member name, ignoring case, spaces and dashes."""
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        for variant in cls:
            if variant.value == key:
                return variant
        valid = ", ".join(v.value for v in cls)
        raise ValueError(f"Unknown game variant '{name}'. Must be one of: {valid}")

    @property
    def description(self) -> str:
        return VARIANT_DESCRIPTIONS[self]


VARIANT_DESCRIPTIONS = {
    GameVariant.CLASSIC: (
        "The name says it all. Each player fires once per turn. "
        "First one to sink all of the opponent's ships wins."
    ),
    GameVariant.MULTIFIRE: (
        "Classic, but each player fires once for each ship afloat in their fleet."
    ),
    GameVariant.CRUISE_MISSILES: (
        "Ships have an 80% chance to shoot down incoming missiles."
    ),
    GameVariant.HARDCORE: (
        "Combines MULTIFIRE and CRUISE MISSILES into one explosive package."
    ),
}

MULTIFIRE_VARIANTS = frozenset({GameVariant.MULTIFIRE, GameVariant.HARDCORE})
INTERCEPTION_VARIANTS = frozenset({GameVariant.CRUISE_MISSILES, GameVariant.HARDCORE})


def shots_per_turn(variant: GameVariant, vessels_afloat: int) -> int:
    """Number of shots a side fires this turn."""
    if variant in MULTIFIRE_VARIANTS:
        return vessels_afloat
    return 1


def interception_enabled(variant: GameVariant) -> bool:
    """Whether vessels may shoot down incoming missiles."""
    return variant in INTERCEPTION_VARIANTS


def roll_interception(rng: random.Random) -> bool:
    """Return True if the incoming missile is shot down (80% of the time)."""
    return rng.randint(1, INTERCEPTION_ROLL_SIDES) <= INTERCEPTION_SUCCESS_MAX
