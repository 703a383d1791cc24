#!/usr/bin/env python3
# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Interactive Battleship client.

A human player in the terminal against the computer opponent.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ai.opponent import HeuristicOpponent
from ai.targeting import OPEN_STATES

from .action_log import ActionLog
from .board import CellState
from .config import load_config
from .coordinates import Coordinate, format_coordinate, parse_coordinate
from .engine import Command, Controller, GameSession, SessionView, Target
from .events import EventKind, GameEvent, Side
from .fit import PLACEMENT, Direction, fits
from .render import board_string, weight_map_string
from .rules import GameVariant

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]

DEFAULT_CONFIG_PATH = "configs/game_config.yaml"

DIRECTION_MENU = [Direction.RIGHT, Direction.DOWN, Direction.LEFT, Direction.UP]


def print_help():
    """Print help message."""
    print("""
Fire prompt commands:
  <coordinate>          - Fire at coordinate (e.g., A5, B10, J1)
  ff                    - Forfeit the game
  ~                     - Peek at the computer's ships

Coordinate format: Letter (A-J) + Number (1-10)
Examples: A1, E5, J10
""")


def prompt_menu(title: str, options: Sequence[str], input_fn: InputFn = input) -> int:
    """Show a numbered menu until a valid choice is made. Returns 1-based choice."""
    while True:
        print(f"\n| {title}")
        for i, option in enumerate(options, 1):
            print(f"{i}. {option}")
        choice = input_fn("> ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(options):
            return int(choice)
        print(f"\nInvalid entry, please enter a number from 1 through {len(options)}.")


def choose_variant(input_fn: InputFn = input) -> Optional[GameVariant]:
    """Game type menu. Returns None if the player chooses to exit."""
    variants = list(GameVariant)
    options = [v.value.replace("_", " ").title() for v in variants]
    while True:
        choice = prompt_menu("SELECT GAME TYPE",
                             options + ["Game Type Descriptions", "Exit"], input_fn)
        if choice <= len(variants):
            return variants[choice - 1]
        if choice == len(variants) + 1:
            for variant in variants:
                print(f"\n{variant.value.replace('_', ' ').upper()} - {variant.description}")
            continue
        return None


class TerminalDisplay:
    """EventBus subscriber printing shot results for the human player."""

    def __call__(self, event: GameEvent) -> None:
        if event.kind in (EventKind.HIT, EventKind.MISS, EventKind.SHOT_DOWN):
            coord = format_coordinate(*event.target)
            outcome = {
                EventKind.HIT: "a HIT!",
                EventKind.MISS: "a MISS!",
                EventKind.SHOT_DOWN: "SHOT DOWN!",
            }[event.kind]
            if event.side == Side.PLAYER:
                print(f"Your shot at {coord} was {outcome}")
            else:
                print(f"Computer fired at {coord}. It was {outcome}")
        elif event.kind == EventKind.VESSEL_SUNK:
            if event.side == Side.COMPUTER:
                print(f"\nYOU SUNK THE ENEMY'S {event.vessel}!")
            else:
                print(f"\nTHE ENEMY SUNK YOUR {event.vessel}!")
        elif event.kind == EventKind.PEEK:
            print("\n| COMPUTER'S SHIPS")
            print(board_string(event.data["ships"]))
        elif event.kind == EventKind.GAME_WON:
            if event.side == Side.PLAYER:
                print("\nYOU HAVE DESTROYED ALL OF THE ENEMY'S SHIPS!\nYOU WIN!")
            else:
                print("\nALL FRIENDLY SHIPS HAVE BEEN DESTROYED!\nTHE COMPUTER WINS!")


class HumanController(Controller):
    """Reads targets for the human player from the terminal."""

    def __init__(self, input_fn: InputFn = input):
        self.input_fn = input_fn

    def next_target(self, view: SessionView, pending: Sequence[Coordinate]) -> Target:
        if view.shots_this_turn > 1:
            print(f"\nShot {len(pending) + 1} of {view.shots_this_turn}")

        while True:
            raw = self.input_fn("\nWhere would you like to fire (ex: C5)? ").strip()

            if raw.lower() == "ff":
                return Command.FORFEIT
            if raw == Command.OPPONENT_FORFEIT.value:
                return Command.OPPONENT_FORFEIT
            if raw == Command.PEEK.value:
                return Command.PEEK
            if raw.lower() == "help":
                print_help()
                continue

            try:
                row, col = parse_coordinate(raw)
            except ValueError as e:
                print(f"\nInvalid entry. {e} The format is LetterNumber (ex: C5).")
                continue

            if view.targeting[row][col] not in OPEN_STATES:
                print("\nInvalid entry, you have already fired on those coordinates!")
                continue
            if (row, col) in pending:
                print("\nInvalid entry, you already targeted those coordinates this turn!")
                continue
            return (row, col)


def manual_placement(session: GameSession, input_fn: InputFn = input) -> None:
    """Prompt the human player to place each vessel of their fleet."""
    grid = session.boards[Side.PLAYER].ships
    for vessel in session.fleets[Side.PLAYER]:
        while not vessel.is_placed:
            print(board_string(grid))
            raw = input_fn(f"\nWhere would you like to place your {vessel.name} (ex: C5)? ")
            try:
                row, col = parse_coordinate(raw)
            except ValueError as e:
                print(f"\nInvalid entry. {e}")
                continue
            if grid.state((row, col)) != CellState.EMPTY:
                print("\nInvalid entry, you have already placed a ship there!")
                continue

            choice = prompt_menu(
                "SELECT DIRECTION",
                [d.name.title() for d in DIRECTION_MENU] + ["Re-enter coordinates"],
                input_fn,
            )
            if choice > len(DIRECTION_MENU):
                continue
            direction = DIRECTION_MENU[choice - 1]
            if not fits(grid, row, col, vessel.size, direction, PLACEMENT):
                print("\nCannot place a ship in that direction!")
                continue
            session.place_vessel_at(Side.PLAYER, vessel.name, row, col, direction)


def show_boards(session: GameSession) -> None:
    print("\n| YOUR SHIPS")
    print(board_string(session.boards[Side.PLAYER].ships, session.fleets[Side.PLAYER]))
    print("\n| TARGETING GRID")
    print(board_string(session.boards[Side.PLAYER].targeting))
    print("\n(Type ff to forfeit, help for commands.)")


def play_game(variant: GameVariant, placement: str, seed: Optional[int],
              action_log: Optional[str], input_fn: InputFn = input) -> GameSession:
    """Set up and play one game in the terminal."""
    session = GameSession(variant=variant, seed=seed)
    session.events.subscribe(TerminalDisplay())
    log = ActionLog(action_log) if action_log else None
    if log is not None:
        session.events.subscribe(log)

    try:
        if placement == "manual":
            manual_placement(session, input_fn)
        else:
            session.place_fleet_randomly(Side.PLAYER)
        session.place_fleet_randomly(Side.COMPUTER)
        session.start()

        human = HumanController(input_fn)
        computer = HeuristicOpponent(name="Computer")
        while not session.is_game_over():
            show_boards(session)
            session.play_turn(Side.PLAYER, human)
            if session.is_game_over():
                break
            session.play_turn(Side.COMPUTER, computer)
            if logger.isEnabledFor(logging.DEBUG) and computer.last_weights is not None:
                logger.debug(f"Computer weight map:\n{weight_map_string(computer.last_weights)}")
            input_fn("\nPress Enter to Continue")
        session.end()
    finally:
        if log is not None:
            log.close()
    return session


def main(argv: Optional[List[str]] = None):
    """Run interactive Battleship games."""
    parser = argparse.ArgumentParser(description="Play Battleship against the computer")
    parser.add_argument('--config', type=str, default=DEFAULT_CONFIG_PATH,
                        help='Path to configuration file')
    parser.add_argument('--variant', type=str, default=None,
                        help='Game variant (skips the game type menu)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed (overrides config)')
    parser.add_argument('--placement', choices=['random', 'manual'], default=None,
                        help='Placement of your fleet (overrides config)')
    parser.add_argument('--no-log', action='store_true',
                        help='Do not write the action log')
    args = parser.parse_args(argv)

    if args.config == DEFAULT_CONFIG_PATH and not Path(args.config).exists():
        config = load_config()
    else:
        config = load_config(args.config)
    logging.basicConfig(
        level=config['logging']['level'].upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    seed = args.seed if args.seed is not None else config['game']['seed']
    placement = args.placement or config['game']['placement']
    action_log = None if args.no_log else config['logging']['action_log']
    variant_name = args.variant or config['game']['variant']

    print("=" * 50)
    print("       BATTLESHIP")
    print("=" * 50)
    print("\nWelcome to BATTLESHIP, a classic game of wit and strategy.")
    print("Ships: Carrier(5), Battleship(4), Cruiser(3),")
    print("       Submarine(3), Destroyer(2)")

    while True:
        if variant_name:
            variant = GameVariant.from_name(variant_name)
        else:
            try:
                variant = choose_variant()
            except (KeyboardInterrupt, EOFError):
                variant = None
            if variant is None:
                print("Goodbye!")
                return

        try:
            play_game(variant, placement, seed, action_log)
            again = prompt_menu("PLAY AGAIN?", ["Yes", "No"])
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            return

        if again == 2:
            print("Goodbye!")
            return


if __name__ == "__main__":
    sys.exit(main())
