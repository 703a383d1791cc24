# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Game event stream.

The session publishes one GameEvent per notable change; displays and the
action log subscribe to the bus instead of being called from game logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .coordinates import Coordinate


class Side(Enum):
    """The two sides of a game. PLAYER always moves first."""
    PLAYER = "player"
    COMPUTER = "computer"

    @property
    def opponent(self) -> "Side":
        return Side.COMPUTER if self is Side.PLAYER else Side.PLAYER

    @property
    def label(self) -> str:
        return self.value.capitalize()


class EventKind(Enum):
    GAME_STARTED = "game_started"
    VESSEL_PLACED = "vessel_placed"
    SHOT_FIRED = "shot_fired"
    HIT = "hit"
    MISS = "miss"
    SHOT_DOWN = "shot_down"
    VESSEL_DAMAGED = "vessel_damaged"
    VESSEL_SUNK = "vessel_sunk"
    FORFEIT = "forfeit"
    PEEK = "peek"
    FLEET_DESTROYED = "fleet_destroyed"
    GAME_WON = "game_won"
    GAME_ENDED = "game_ended"


@dataclass(frozen=True)
class GameEvent:
    """
    One entry in the event stream.

    `side` is the acting side: the shooter for shot events, the owner for
    placement, damage, sinking and fleet events, the winner for GAME_WON.
    """
    kind: EventKind
    side: Optional[Side] = None
    target: Optional[Coordinate] = None
    vessel: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)


Subscriber = Callable[[GameEvent], None]


class EventBus:
    """Fan-out of GameEvents to subscribed callables, in subscription order."""

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Subscriber:
        self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback: Subscriber) -> None:
        self._subscribers.remove(callback)

    def publish(self, event: GameEvent) -> None:
        for callback in list(self._subscribers):
            callback(event)


class EventRecorder:
    """Subscriber that keeps every event it sees. Handy for tests and replays."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def __call__(self, event: GameEvent) -> None:
        self.events.append(event)

    def kinds(self) -> List[EventKind]:
        return [event.kind for event in self.events]

    def of_kind(self, kind: EventKind) -> List[GameEvent]:
        return [event for event in self.events if event.kind == kind]
