# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Battleship turn engine.

Provides the session state machine and shot resolution:
- Fleet placement (explicit or random) for both sides
- Shot resolution with hit/miss/sunk detection and interception
- Whole-turn sequencing, including one-shot-per-vessel variants
- Win and forfeit detection

Controllers (a human at a prompt, or the computer opponent) only ever see
a read-only SessionView and return targets; the session does all mutation.
Every change is published on the session's EventBus.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .board import FRESH_SHOT_STATES, BoardPair, CellState, GridKind, GridSnapshot
from .coordinates import Coordinate, format_coordinate, in_bounds
from .errors import FleetConsistencyError, GameStateError, PlacementError
from .events import EventBus, EventKind, GameEvent, Side
from .fit import Direction
from .fleet import Fleet, Vessel
from .placement import placement_cells, random_placement
from .rules import GameVariant, interception_enabled, roll_interception, shots_per_turn

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    PLAYER_WON = "player_won"
    COMPUTER_WON = "computer_won"

    @property
    def is_over(self) -> bool:
        return self in (GameStatus.PLAYER_WON, GameStatus.COMPUTER_WON)


WINNING_STATUS = {
    Side.PLAYER: GameStatus.PLAYER_WON,
    Side.COMPUTER: GameStatus.COMPUTER_WON,
}


class Command(Enum):
    """Non-coordinate inputs a controller may return instead of a target."""
    FORFEIT = "ff"                            # firing side gives up
    OPPONENT_FORFEIT = "YOUSUNKMYBATTLESHIP"  # opposing side is made to give up
    PEEK = "~"                                # look at the opponent's ships


Target = Union[Coordinate, Command]


class ShotOutcome(Enum):
    HIT = "hit"
    MISS = "miss"
    SHOT_DOWN = "shot_down"
    FORFEIT = "forfeit"


@dataclass(frozen=True)
class ShotResult:
    """Outcome of one resolved target."""
    side: Side
    target: Target
    outcome: ShotOutcome
    vessel: Optional[str] = None
    sunk: bool = False
    forfeiting_side: Optional[Side] = None


@dataclass(frozen=True)
class SessionView:
    """Read-only picture of the game handed to a controller."""
    side: Side
    variant: GameVariant
    targeting: GridSnapshot
    smallest_opponent_vessel_alive: int
    own_vessels_afloat: int
    opponent_vessels_afloat: int
    shots_this_turn: int


class Controller:
    """Supplies targets for one side. Subclasses override next_target."""

    def next_target(self, view: SessionView, pending: Sequence[Coordinate]) -> Target:
        """
        Choose the next target for this turn.

        Args:
            view: Read-only state for the acting side
            pending: Targets already chosen earlier in the same turn

        Returns:
            A (row, col) coordinate or a Command.
        """
        raise NotImplementedError


class GameSession:
    """
    One play session between the PLAYER and the COMPUTER side.

    Status moves WAITING -> IN_PROGRESS -> PLAYER_WON | COMPUTER_WON.
    """

    def __init__(
        self,
        variant: GameVariant = GameVariant.CLASSIC,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        events: Optional[EventBus] = None,
        fleets: Optional[Dict[Side, Fleet]] = None,
    ):
        """
        Initialize a new session.

        Args:
            variant: Rule variant in force for the whole session
            seed: Seed for the session's random source (ignored if rng given)
            rng: Random source for placement and interception rolls
            events: Event bus to publish on (a private one if omitted)
            fleets: Fleets per side (standard fleets if omitted)
        """
        self.variant = variant
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.events = events if events is not None else EventBus()
        self.status = GameStatus.WAITING

        self.fleets: Dict[Side, Fleet] = fleets or {side: Fleet.standard() for side in Side}
        self.boards: Dict[Side, BoardPair] = {side: BoardPair() for side in Side}

        # Game statistics
        self.rounds = 0
        self.stats: Dict[Side, Dict[str, int]] = {
            side: {"shots_fired": 0, "hits": 0, "misses": 0, "shot_down": 0}
            for side in Side
        }

    def _publish(self, kind: EventKind, side: Optional[Side] = None,
                 target: Optional[Coordinate] = None, vessel: Optional[str] = None,
                 **data) -> None:
        self.events.publish(GameEvent(kind=kind, side=side, target=target,
                                      vessel=vessel, data=data))

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def place_vessel(self, side: Side, name: str, coords: Iterable[Coordinate]) -> Vessel:
        """
        Place the named vessel of side's fleet on the given cells.

        Raises:
            PlacementError: If the session has started, the vessel is already
                placed, or the cells are not a free straight run of its size.
        """
        if self.status != GameStatus.WAITING:
            raise PlacementError("Vessels can only be placed before the game starts")

        vessel = self.fleets[side].get(name)
        coords = list(coords)
        if vessel.is_placed:
            raise PlacementError(f"{name} has already been placed")
        if len(coords) != vessel.size or not _is_straight_run(coords):
            raise PlacementError(
                f"{name} must occupy {vessel.size} contiguous cells in a line"
            )

        self.boards[side].ships.place_vessel(coords)
        vessel.assign_coordinates(coords)
        self._publish(EventKind.VESSEL_PLACED, side=side, vessel=name,
                      coordinates=tuple(coords))
        return vessel

    def place_vessel_at(self, side: Side, name: str, row: int, col: int,
                        direction: Direction) -> Vessel:
        """Place the named vessel from (row, col) extending toward direction."""
        vessel = self.fleets[side].get(name)
        cells = placement_cells(self.boards[side].ships, row, col, vessel.size, direction)
        return self.place_vessel(side, name, cells)

    def place_fleet_randomly(self, side: Side) -> None:
        """Randomly place every not-yet-placed vessel of side's fleet."""
        for vessel in self.fleets[side]:
            if vessel.is_placed:
                continue
            cells = random_placement(self.boards[side].ships, vessel.size, self.rng)
            self.place_vessel(side, vessel.name, cells)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Move from WAITING to IN_PROGRESS once both fleets are placed."""
        if self.status != GameStatus.WAITING:
            raise GameStateError(f"Cannot start a game that is {self.status.value}")
        for side, fleet in self.fleets.items():
            if not fleet.is_fully_placed():
                raise GameStateError(f"{side.label} fleet is not fully placed")

        self.status = GameStatus.IN_PROGRESS
        logger.info(f"Game started: variant={self.variant.value}")
        self._publish(EventKind.GAME_STARTED, variant=self.variant)

    def _require_in_progress(self) -> None:
        if self.status != GameStatus.IN_PROGRESS:
            raise GameStateError(f"Game is {self.status.value}, not in progress")

    def is_game_over(self) -> bool:
        return self.status.is_over

    def is_fleet_destroyed(self, side: Side) -> bool:
        """Check if every vessel of side's fleet is sunk."""
        return self.fleets[side].is_destroyed()

    def check_win(self, acting_side: Side) -> Optional[Side]:
        """
        Check for a destroyed fleet after acting_side's shots resolved.

        The defender's fleet is checked first, then the acting side's own
        (which can only be destroyed by forfeit). The first destroyed fleet
        decides the game.

        Returns:
            The winning side, or None if the game goes on.
        """
        for loser in (acting_side.opponent, acting_side):
            if self.is_fleet_destroyed(loser):
                winner = loser.opponent
                self.status = WINNING_STATUS[winner]
                logger.info(f"{loser.label} fleet destroyed; {winner.label} wins")
                self._publish(EventKind.FLEET_DESTROYED, side=loser)
                self._publish(EventKind.GAME_WON, side=winner)
                return winner
        return None

    # ------------------------------------------------------------------
    # Shot resolution
    # ------------------------------------------------------------------

    def find_vessel_at(self, coord: Coordinate, side: Side) -> Vessel:
        """
        Return the vessel of side's fleet occupying coord.

        Raises:
            FleetConsistencyError: If no vessel owns the cell. The ship grid
                and the fleet disagree, so the session cannot continue.
        """
        vessel = self.fleets[side].vessel_at(coord)
        if vessel is None:
            logger.error(
                f"{side.label} ship grid is occupied at {format_coordinate(*coord)} "
                f"but no vessel owns that cell"
            )
            raise FleetConsistencyError(
                f"No {side.value} vessel at {format_coordinate(*coord)}"
            )
        return vessel

    def resolve_shot(self, target: Target, firing_side: Side) -> ShotResult:
        """
        Apply one target fired by firing_side.

        Args:
            target: (row, col) coordinate, or a forfeit Command
            firing_side: Side that fired

        Returns:
            ShotResult describing the outcome.
        """
        self._require_in_progress()
        defender = firing_side.opponent

        if target is Command.FORFEIT:
            return self._forfeit(target, firing_side, firing_side)
        if target is Command.OPPONENT_FORFEIT:
            return self._forfeit(target, defender, firing_side)
        if isinstance(target, Command):
            raise ValueError(f"{target.name} is not a shot")

        self._check_fresh_target(firing_side, target)
        attacker_grid = self.boards[firing_side].targeting
        defender_grid = self.boards[defender].ships

        self.stats[firing_side]["shots_fired"] += 1
        self._publish(EventKind.SHOT_FIRED, side=firing_side, target=target)

        if defender_grid.state(target) in (CellState.SHIP, CellState.SHOT_DOWN):
            if interception_enabled(self.variant) and roll_interception(self.rng):
                attacker_grid.record_outcome(target, CellState.SHOT_DOWN)
                # Mirrored for both sides, not only when the computer defends
                defender_grid.record_outcome(target, CellState.SHOT_DOWN)
                self.stats[firing_side]["shot_down"] += 1
                self._publish(EventKind.SHOT_DOWN, side=firing_side, target=target)
                return ShotResult(firing_side, target, ShotOutcome.SHOT_DOWN)
            return self._apply_hit(target, firing_side)

        attacker_grid.record_outcome(target, CellState.MISS)
        defender_grid.record_outcome(target, CellState.MISS)
        self.stats[firing_side]["misses"] += 1
        self._publish(EventKind.MISS, side=firing_side, target=target)
        return ShotResult(firing_side, target, ShotOutcome.MISS)

    def _apply_hit(self, target: Coordinate, firing_side: Side) -> ShotResult:
        defender = firing_side.opponent
        vessel = self.find_vessel_at(target, defender)

        self.boards[firing_side].targeting.record_outcome(target, CellState.HIT)
        self.boards[defender].ships.record_outcome(target, CellState.HIT)
        vessel.damage()
        self.stats[firing_side]["hits"] += 1

        self._publish(EventKind.HIT, side=firing_side, target=target)
        self._publish(EventKind.VESSEL_DAMAGED, side=defender, vessel=vessel.name,
                      health=vessel.health, size=vessel.size)

        if vessel.is_sunk:
            self.boards[firing_side].targeting.mark_sunk(vessel.coordinates)
            self.boards[defender].ships.mark_sunk(vessel.coordinates)
            logger.debug(f"{defender.label} {vessel.name} sunk by {firing_side.label}")
            self._publish(EventKind.VESSEL_SUNK, side=defender, vessel=vessel.name,
                          coordinates=vessel.coordinates)

        return ShotResult(firing_side, target, ShotOutcome.HIT,
                          vessel=vessel.name, sunk=vessel.is_sunk)

    def _forfeit(self, command: Command, forfeiting_side: Side,
                 firing_side: Side) -> ShotResult:
        self.fleets[forfeiting_side].scuttle_all()
        logger.info(f"{forfeiting_side.label} forfeits")
        self._publish(EventKind.FORFEIT, side=forfeiting_side, fired_by=firing_side)
        return ShotResult(firing_side, command, ShotOutcome.FORFEIT,
                          forfeiting_side=forfeiting_side)

    def _check_fresh_target(self, side: Side, target: Coordinate,
                            pending: Sequence[Coordinate] = ()) -> None:
        row, col = target
        if not in_bounds(row, col):
            raise ValueError(f"Target ({row}, {col}) is off the grid")
        state = self.boards[side].targeting.state(target)
        if state not in FRESH_SHOT_STATES[GridKind.TARGETING]:
            raise ValueError(
                f"{side.label} already fired at {format_coordinate(row, col)} ({state.name})"
            )
        if target in pending:
            raise ValueError(
                f"{side.label} already chose {format_coordinate(row, col)} this turn"
            )

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def view_for(self, side: Side, shots_this_turn: int = 1) -> SessionView:
        """Read-only view of the game from side's perspective."""
        opponent_fleet = self.fleets[side.opponent]
        return SessionView(
            side=side,
            variant=self.variant,
            targeting=self.boards[side].targeting.snapshot(),
            smallest_opponent_vessel_alive=opponent_fleet.smallest_afloat_size(),
            own_vessels_afloat=self.fleets[side].count_afloat(),
            opponent_vessels_afloat=opponent_fleet.count_afloat(),
            shots_this_turn=shots_this_turn,
        )

    def shots_for(self, side: Side) -> int:
        """Shots side may fire this turn under the session's variant."""
        return shots_per_turn(self.variant, self.fleets[side].count_afloat())

    def collect_targets(self, side: Side, controller: Controller) -> List[Target]:
        """
        Ask controller for this turn's targets.

        The shot count is fixed before any target is chosen. PEEK requests
        are answered with a PEEK event and do not use up a shot. A forfeit
        command ends collection.
        """
        count = self.shots_for(side)
        targets: List[Target] = []
        pending: List[Coordinate] = []

        while len(targets) < count:
            view = self.view_for(side, shots_this_turn=count)
            target = controller.next_target(view, tuple(pending))

            if target is Command.PEEK:
                self._publish(EventKind.PEEK, side=side,
                              ships=self.boards[side.opponent].ships.snapshot())
                continue

            if isinstance(target, Command):
                targets.append(target)
                break
            self._check_fresh_target(side, target, pending)
            targets.append(target)
            pending.append(target)

        return targets

    def play_turn(self, side: Side, controller: Controller) -> List[ShotResult]:
        """
        Play one full turn for side: collect targets, resolve them as a
        batch, then check for a winner.
        """
        self._require_in_progress()
        targets = self.collect_targets(side, controller)
        logger.debug(f"{side.label} fires {len(targets)} shot(s)")

        results = [self.resolve_shot(target, side) for target in targets]
        self.check_win(side)
        return results

    def play(self, controllers: Dict[Side, Controller],
             max_rounds: Optional[int] = None) -> GameStatus:
        """
        Play until a side wins or max_rounds rounds have been played.

        The PLAYER side moves first in every round.
        """
        if self.status == GameStatus.WAITING:
            self.start()
        self._require_in_progress()

        while not self.is_game_over():
            for side in (Side.PLAYER, Side.COMPUTER):
                self.play_turn(side, controllers[side])
                if self.is_game_over():
                    break
            self.rounds += 1
            if max_rounds is not None and self.rounds >= max_rounds:
                break

        self.end()
        return self.status

    def end(self) -> None:
        """Announce the end of the session, whatever its status."""
        self._publish(EventKind.GAME_ENDED, status=self.status)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def get_game_status(self) -> dict:
        """
        Get current game status.

        Returns:
            Dict with session status and per-side statistics.
        """
        sides = {}
        for side in Side:
            fleet = self.fleets[side]
            remaining = fleet.count_afloat()
            sides[side.value] = {
                "ships_remaining": remaining,
                "ships_sunk": len(fleet) - remaining,
                "sunk_ships": [vessel.name for vessel in fleet if vessel.is_sunk],
                **self.stats[side],
            }

        winner = None
        if self.status == GameStatus.PLAYER_WON:
            winner = Side.PLAYER.value
        elif self.status == GameStatus.COMPUTER_WON:
            winner = Side.COMPUTER.value

        return {
            "status": self.status.value,
            "game_over": self.is_game_over(),
            "winner": winner,
            "variant": self.variant.value,
            "rounds": self.rounds,
            "sides": sides,
        }


def _is_straight_run(coords: List[Coordinate]) -> bool:
    """Check whether coords are consecutive cells along one row or column."""
    if len(coords) < 2:
        return True
    rows = [r for r, _ in coords]
    cols = [c for _, c in coords]
    if len(set(rows)) == 1:
        line = sorted(cols)
    elif len(set(cols)) == 1:
        line = sorted(rows)
    else:
        return False
    return all(b - a == 1 for a, b in zip(line, line[1:]))
