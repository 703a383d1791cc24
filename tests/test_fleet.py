# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Unit tests for vessels and fleets.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from battleship.errors import PlacementError
from battleship.fleet import STANDARD_FLEET, Fleet, Vessel, VesselState


class TestVessel:
    """Tests for Vessel class."""

    def test_vessel_creation(self):
        """Test creating a vessel."""
        vessel = Vessel(name="CRUISER", size=3)
        assert vessel.health == 3
        assert vessel.state == VesselState.AFLOAT
        assert not vessel.is_placed
        assert not vessel.is_sunk

    @pytest.mark.parametrize("size", [0, 1, 6])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            Vessel(name="BAD", size=size)

    def test_damage_until_sunk(self):
        """Test health drops by one per hit and the vessel sinks at zero."""
        vessel = Vessel(name="DESTROYER", size=2)
        vessel.damage()
        assert vessel.health == 1
        assert vessel.hits_taken == 1
        assert not vessel.is_sunk

        vessel.damage()
        assert vessel.health == 0
        assert vessel.is_sunk

        with pytest.raises(ValueError):
            vessel.damage()

    def test_scuttle(self):
        """Test scuttling sinks without touching health."""
        vessel = Vessel(name="CARRIER", size=5)
        vessel.scuttle()
        assert vessel.is_sunk
        assert vessel.health == 5

    def test_assign_coordinates_once(self):
        vessel = Vessel(name="DESTROYER", size=2)
        vessel.assign_coordinates([(0, 0), (0, 1)])
        assert vessel.coordinates == ((0, 0), (0, 1))

        with pytest.raises(PlacementError):
            vessel.assign_coordinates([(5, 5), (5, 6)])

    def test_assign_coordinates_wrong_count(self):
        vessel = Vessel(name="CRUISER", size=3)
        with pytest.raises(PlacementError):
            vessel.assign_coordinates([(0, 0), (0, 1)])
        with pytest.raises(PlacementError):
            vessel.assign_coordinates([(0, 0), (0, 0), (0, 1)])
        assert not vessel.is_placed


class TestFleet:
    """Tests for Fleet class."""

    def test_standard_fleet(self):
        """Test the standard fleet matches the classic ship list."""
        fleet = Fleet.standard()
        assert len(fleet) == 5
        assert [(v.name, v.size) for v in fleet] == STANDARD_FLEET
        assert sum(v.size for v in fleet) == 17

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError):
            Fleet([Vessel("A", 2), Vessel("A", 3)])

    def test_get(self):
        fleet = Fleet.standard()
        assert fleet.get("SUBMARINE").size == 3
        with pytest.raises(KeyError):
            fleet.get("ROWBOAT")

    def test_smallest_afloat_size(self):
        """Test smallest afloat size tracks sinkings and defaults to 5."""
        fleet = Fleet.standard()
        assert fleet.smallest_afloat_size() == 2

        fleet.get("DESTROYER").scuttle()
        assert fleet.smallest_afloat_size() == 3

        fleet.get("CRUISER").scuttle()
        fleet.get("SUBMARINE").scuttle()
        fleet.get("BATTLESHIP").scuttle()
        assert fleet.smallest_afloat_size() == 5

        fleet.get("CARRIER").scuttle()
        assert fleet.smallest_afloat_size() == 5
        assert fleet.is_destroyed()

    def test_count_afloat(self):
        fleet = Fleet.standard()
        assert fleet.count_afloat() == 5
        fleet.get("CARRIER").scuttle()
        assert fleet.count_afloat() == 4
        assert not fleet.is_destroyed()

    def test_vessel_at(self):
        fleet = Fleet([Vessel("DESTROYER", 2), Vessel("CRUISER", 3)])
        fleet.get("DESTROYER").assign_coordinates([(0, 0), (0, 1)])
        assert fleet.vessel_at((0, 1)).name == "DESTROYER"
        assert fleet.vessel_at((5, 5)) is None
        assert not fleet.is_fully_placed()

    def test_scuttle_all(self):
        fleet = Fleet.standard()
        fleet.scuttle_all()
        assert fleet.is_destroyed()
        assert fleet.afloat() == []
