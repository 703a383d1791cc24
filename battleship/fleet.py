# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Vessels and fleets.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .coordinates import Coordinate
from .errors import PlacementError


class VesselState(Enum):
    AFLOAT = "afloat"
    SUNK = "sunk"


# Standard Battleship ships
STANDARD_FLEET = [
    ("CARRIER", 5),
    ("BATTLESHIP", 4),
    ("CRUISER", 3),
    ("SUBMARINE", 3),
    ("DESTROYER", 2),
]

MIN_VESSEL_SIZE = 2
MAX_VESSEL_SIZE = 5


@dataclass
class Vessel:
    """
    A ship occupying contiguous grid cells.

    Health starts at the vessel's size and only goes down. The vessel is
    SUNK once health reaches 0, or when its side forfeits.
    """
    name: str
    size: int
    coordinates: Tuple[Coordinate, ...] = ()
    health: int = field(init=False)
    state: VesselState = field(init=False, default=VesselState.AFLOAT)

    def __post_init__(self):
        if not (MIN_VESSEL_SIZE <= self.size <= MAX_VESSEL_SIZE):
            raise ValueError(
                f"Vessel size must be {MIN_VESSEL_SIZE}-{MAX_VESSEL_SIZE}, got {self.size}"
            )
        self.health = self.size

    @property
    def is_sunk(self) -> bool:
        return self.state == VesselState.SUNK

    @property
    def is_placed(self) -> bool:
        return bool(self.coordinates)

    @property
    def hits_taken(self) -> int:
        return self.size - self.health

    def assign_coordinates(self, coords: Iterable[Coordinate]) -> None:
        """
        Fix the vessel's position. May only be done once.

        Raises:
            PlacementError: If already placed, or coords are not `size`
                distinct cells.
        """
        if self.is_placed:
            raise PlacementError(f"{self.name} has already been placed")
        coords = tuple(coords)
        if len(coords) != self.size or len(set(coords)) != self.size:
            raise PlacementError(
                f"{self.name} needs {self.size} distinct cells, got {len(set(coords))}"
            )
        self.coordinates = coords

    def damage(self) -> None:
        """Reduce health by one, sinking the vessel at zero."""
        if self.health == 0:
            raise ValueError(f"{self.name} has no health left to lose")
        self.health -= 1
        if self.health == 0:
            self.state = VesselState.SUNK

    def scuttle(self) -> None:
        """Sink the vessel without applying damage (used on forfeit)."""
        self.state = VesselState.SUNK


class Fleet:
    """The vessels belonging to one side."""

    def __init__(self, vessels: Iterable[Vessel]):
        self.vessels: List[Vessel] = list(vessels)
        names = [vessel.name for vessel in self.vessels]
        if len(set(names)) != len(names):
            raise ValueError(f"Vessel names must be unique: {names}")

    @classmethod
    def standard(cls) -> "Fleet":
        """Build the five-vessel standard fleet."""
        return cls(Vessel(name=name, size=size) for name, size in STANDARD_FLEET)

    def __iter__(self):
        return iter(self.vessels)

    def __len__(self) -> int:
        return len(self.vessels)

    def get(self, name: str) -> Vessel:
        for vessel in self.vessels:
            if vessel.name == name:
                return vessel
        raise KeyError(f"No vessel named {name}")

    def afloat(self) -> List[Vessel]:
        return [vessel for vessel in self.vessels if not vessel.is_sunk]

    def count_afloat(self) -> int:
        return len(self.afloat())

    def is_destroyed(self) -> bool:
        """Check if every vessel has been sunk."""
        return all(vessel.is_sunk for vessel in self.vessels)

    def is_fully_placed(self) -> bool:
        return all(vessel.is_placed for vessel in self.vessels)

    def vessel_at(self, coord: Coordinate) -> Optional[Vessel]:
        """Return the vessel occupying coord, or None."""
        for vessel in self.vessels:
            if coord in vessel.coordinates:
                return vessel
        return None

    def smallest_afloat_size(self, default: int = MAX_VESSEL_SIZE) -> int:
        """Size of the smallest vessel still afloat, or default if none are."""
        sizes = [vessel.size for vessel in self.afloat()]
        return min(sizes) if sizes else default

    def scuttle_all(self) -> None:
        for vessel in self.vessels:
            vessel.scuttle()
