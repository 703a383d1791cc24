# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Tests for the terminal client with scripted input.
"""

import sys
from pathlib import Path

import pytest
import yaml

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from battleship import client
from battleship.board import CellState
from battleship.client import (
    HumanController,
    choose_variant,
    main,
    manual_placement,
    play_game,
    prompt_menu,
)
from battleship.engine import Command, GameSession, GameStatus
from battleship.events import Side
from battleship.rules import GameVariant


def scripted(*answers):
    """input() replacement returning the given answers in order."""
    queue = list(answers)
    return lambda prompt="": queue.pop(0)


class TestMenus:

    def test_prompt_menu_retries(self, capsys):
        assert prompt_menu("PICK", ["a", "b"], scripted("x", "3", "2")) == 2
        assert "Invalid entry" in capsys.readouterr().out

    def test_choose_variant(self):
        assert choose_variant(scripted("3")) == GameVariant.CRUISE_MISSILES

    def test_choose_variant_descriptions_then_exit(self, capsys):
        assert choose_variant(scripted("5", "6")) is None
        assert "HARDCORE" in capsys.readouterr().out


class TestHumanController:
    """Tests for reading targets from the terminal."""

    def _view(self):
        session = GameSession(seed=1)
        session.place_fleet_randomly(Side.PLAYER)
        session.place_fleet_randomly(Side.COMPUTER)
        session.start()
        return session, session.view_for(Side.PLAYER)

    def test_coordinate(self):
        _, view = self._view()
        assert HumanController(scripted("c5")).next_target(view, ()) == (2, 4)

    def test_invalid_then_valid(self, capsys):
        _, view = self._view()
        controller = HumanController(scripted("Z9", "A11", "help", "J10"))
        assert controller.next_target(view, ()) == (9, 9)
        assert "Invalid entry" in capsys.readouterr().out

    def test_commands(self):
        _, view = self._view()
        assert HumanController(scripted("ff")).next_target(view, ()) is Command.FORFEIT
        assert HumanController(scripted("FF")).next_target(view, ()) is Command.FORFEIT
        assert (HumanController(scripted("YOUSUNKMYBATTLESHIP")).next_target(view, ())
                is Command.OPPONENT_FORFEIT)
        assert HumanController(scripted("~")).next_target(view, ()) is Command.PEEK

    def test_rejects_spent_and_pending_cells(self, capsys):
        session, _ = self._view()
        session.resolve_shot((0, 0), Side.PLAYER)
        view = session.view_for(Side.PLAYER)

        controller = HumanController(scripted("A1", "B2", "B3"))
        assert controller.next_target(view, ((1, 1),)) == (1, 2)
        out = capsys.readouterr().out
        assert "already fired" in out
        assert "this turn" in out


class TestManualPlacement:

    def test_places_whole_fleet(self):
        """Test each vessel is placed from a coordinate and a direction."""
        session = GameSession(seed=1)
        answers = []
        for row in "ACEGI":
            answers += [f"{row}1", "1"]
        manual_placement(session, scripted(*answers))

        fleet = session.fleets[Side.PLAYER]
        assert fleet.is_fully_placed()
        assert fleet.get("CARRIER").coordinates == tuple((0, c) for c in range(5))
        assert session.boards[Side.PLAYER].ships.count(CellState.SHIP) == 17

    def test_retries_on_bad_direction(self, capsys):
        session = GameSession(seed=1)
        # Carrier: A1 going up does not fit, then going right does
        answers = ["A1", "4", "A1", "1"]
        for row in "CEGI":
            answers += [f"{row}1", "1"]
        manual_placement(session, scripted(*answers))

        assert session.fleets[Side.PLAYER].is_fully_placed()
        assert "Cannot place" in capsys.readouterr().out


class TestPlayGame:

    def test_forfeit_game(self, tmp_path, capsys):
        """Test a full session where the player forfeits on the first shot."""
        log_path = tmp_path / "log.txt"
        session = play_game(GameVariant.CLASSIC, "random", seed=3,
                            action_log=str(log_path), input_fn=scripted("ff"))

        assert session.status == GameStatus.COMPUTER_WON
        assert "THE COMPUTER WINS" in capsys.readouterr().out
        assert "The player forfeits." in log_path.read_text(encoding="utf-8")


class TestMain:
    """Tests for how main picks the game variant."""

    @pytest.fixture
    def games(self, monkeypatch):
        played = []
        monkeypatch.setattr(client, "play_game",
                            lambda variant, *args, **kwargs: played.append(variant))
        # Decline the play-again menu after one game
        monkeypatch.setattr(client, "prompt_menu", lambda title, options: 2)
        return played

    def _write_config(self, tmp_path, variant):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"game": {"variant": variant}}))
        return str(path)

    def test_config_variant_skips_menu(self, tmp_path, monkeypatch, games):
        """Test the configured variant is played without showing the menu."""
        def no_menu(*args, **kwargs):
            raise AssertionError("game type menu shown")

        monkeypatch.setattr(client, "choose_variant", no_menu)
        main(["--config", self._write_config(tmp_path, "hardcore"), "--no-log"])
        assert games == [GameVariant.HARDCORE]

    def test_command_line_variant_overrides_config(self, tmp_path, games):
        main(["--config", self._write_config(tmp_path, "hardcore"),
              "--variant", "multifire", "--no-log"])
        assert games == [GameVariant.MULTIFIRE]

    def test_no_variant_shows_menu(self, tmp_path, monkeypatch, games, capsys):
        """Test the menu is shown when no variant is configured."""
        shown = []
        monkeypatch.setattr(client, "choose_variant",
                            lambda: shown.append(True) or None)
        main(["--config", self._write_config(tmp_path, None), "--no-log"])

        assert shown == [True]
        assert games == []
        assert "Goodbye!" in capsys.readouterr().out

    def test_missing_default_config_uses_defaults(self, tmp_path, monkeypatch, games):
        """Test main runs from a directory without the bundled config."""
        monkeypatch.chdir(tmp_path)
        main(["--variant", "classic", "--no-log"])
        assert games == [GameVariant.CLASSIC]
