"""Outbound notifications produced by the game state machine.

Every public :class:`hearts.game.Game` command returns the events raised while
it ran, in order, so a presentation layer can replay them at its own pace.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from .cards import Card


class GameState(Enum):
    NOT_STARTED = auto()
    DEALING = auto()
    PASSING = auto()
    WAITING_FOR_PASS = auto()
    PLAYING = auto()
    WAITING_FOR_PLAY = auto()
    TRICK_COMPLETE = auto()
    ROUND_COMPLETE = auto()
    GAME_OVER = auto()


class PassDirection(Enum):
    LEFT = 1
    RIGHT = 3
    ACROSS = 2
    HOLD = 0

    @property
    def offset(self) -> int:
        """Seats to the receiver, counted clockwise."""
        return self.value


@dataclass(frozen=True)
class Event:
    pass


@dataclass(frozen=True)
class StateChanged(Event):
    state: GameState


@dataclass(frozen=True)
class CardsDealt(Event):
    round_number: int


@dataclass(frozen=True)
class PassDirectionAnnounced(Event):
    direction: PassDirection


@dataclass(frozen=True)
class PassingComplete(Event):
    received: Tuple[Card, ...]


@dataclass(frozen=True)
class CardPlayed(Event):
    seat: int
    card: Card


@dataclass(frozen=True)
class TrickWon(Event):
    winner: int
    points: int


@dataclass(frozen=True)
class RoundEnded(Event):
    round_number: int
    deltas: Tuple[int, ...]


@dataclass(frozen=True)
class GameEnded(Event):
    winner: int


@dataclass(frozen=True)
class ScoresChanged(Event):
    round_scores: Tuple[int, ...]
    total_scores: Tuple[int, ...]


@dataclass(frozen=True)
class CurrentSeatChanged(Event):
    seat: int


@dataclass(frozen=True)
class HeartsBroken(Event):
    card: Optional[Card] = None


@dataclass(frozen=True)
class ShootTheMoon(Event):
    shooter: int
    protected: bool = False


@dataclass(frozen=True)
class UndoAvailabilityChanged(Event):
    available: bool


@dataclass(frozen=True)
class UndoPerformed(Event):
    state: GameState
