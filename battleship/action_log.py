# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Human-readable action log.

ActionLog subscribes to a session's EventBus and writes one line per
action (placements, shots, damage, sinkings, the result) to a log file.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from .coordinates import format_coordinate
from .events import EventKind, GameEvent

ACTION_LOGGER_NAME = "battleship.actions"
LOG_FORMAT = "%(asctime)s %(message)s"
TIME_FORMAT = "%H:%M:%S"


def _owner(event: GameEvent) -> str:
    return f"The {event.side.value}'s"


def _fired(event: GameEvent, outcome: str) -> str:
    return f"{event.side.label} fired at {format_coordinate(*event.target)}. {outcome}"


def _placed(event: GameEvent) -> str:
    cells = ", ".join(format_coordinate(*c) for c in event.data["coordinates"])
    return f"{event.side.label}'s {event.vessel} placed at {cells}."


def _started(event: GameEvent) -> str:
    today = datetime.now().strftime("%d/%m/%Y")
    variant = event.data["variant"].value.replace("_", " ").upper()
    return f"New game started on {today}. Game type {variant} was selected."


FORMATTERS: Dict[EventKind, Callable[[GameEvent], str]] = {
    EventKind.GAME_STARTED: _started,
    EventKind.VESSEL_PLACED: _placed,
    EventKind.HIT: lambda e: _fired(e, "It was a HIT."),
    EventKind.MISS: lambda e: _fired(e, "It was a MISS."),
    EventKind.SHOT_DOWN: lambda e: _fired(e, "The missile was SHOT DOWN."),
    EventKind.VESSEL_DAMAGED: lambda e: (
        f"{_owner(e)} {e.vessel} was damaged. "
        f"Health reduced to {e.data['health']}/{e.data['size']}."
    ),
    EventKind.VESSEL_SUNK: lambda e: f"{_owner(e)} {e.vessel} was sunk.",
    EventKind.FORFEIT: lambda e: f"The {e.side.value} forfeits.",
    EventKind.PEEK: lambda e: f"{e.side.label} peeked at the enemy fleet.",
    EventKind.FLEET_DESTROYED: lambda e: f"All of the {e.side.value}'s ships were destroyed.",
    EventKind.GAME_WON: lambda e: f"The {e.side.label} WON!",
    EventKind.GAME_ENDED: lambda e: (
        f"Game exited on {datetime.now().strftime('%d/%m/%Y')}."
    ),
}


class ActionLog:
    """
    EventBus subscriber writing the action log file.

    Usage:
        log = ActionLog("log.txt")
        session.events.subscribe(log)
        ...
        log.close()
    """

    def __init__(self, path: Union[str, Path], logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.logger = logger or logging.getLogger(ACTION_LOGGER_NAME)
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False

        self.handler = logging.FileHandler(self.path, mode="w", encoding="utf-8")
        self.handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=TIME_FORMAT))
        self.logger.addHandler(self.handler)

    def __call__(self, event: GameEvent) -> None:
        formatter = FORMATTERS.get(event.kind)
        if formatter is not None:
            self.logger.info(formatter(event))

    def close(self) -> None:
        """Flush and detach the file handler."""
        self.logger.removeHandler(self.handler)
        self.handler.close()
