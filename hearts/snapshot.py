"""Undo history: deep copies of the mutable table state."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Optional, Tuple

from .cards import Card, Suit
from .events import GameState, PassDirection
from .memory import CardMemory
from .scoring import RoundScoreResult

MAX_UNDO_HISTORY = 50


@dataclass(frozen=True)
class SeatSnapshot:
    hand: Tuple[Card, ...]
    round_score: int
    total_score: int
    memory: CardMemory
    passed_cards: Tuple[Card, ...]
    taken: Tuple[Card, ...]


@dataclass(frozen=True)
class GameSnapshot:
    state: GameState
    round_number: int
    pass_direction: PassDirection
    current_seat: int
    hearts_broken: bool
    is_first_trick: bool
    lead_suit: Optional[Suit]
    trick: Tuple[Tuple[int, Card], ...]
    seats: Tuple[SeatSnapshot, ...]
    last_round: Optional[RoundScoreResult]
    # Random.getstate() of the deal and AI generators, so a replay deals the same cards.
    deal_rng_state: Tuple[Any, ...]
    ai_rng_state: Tuple[Any, ...]


class UndoStack:
    """Bounded LIFO of snapshots; the oldest entry is dropped past the limit."""

    def __init__(self, limit: int = MAX_UNDO_HISTORY) -> None:
        self._entries: Deque[GameSnapshot] = deque(maxlen=limit)

    def push(self, snapshot: GameSnapshot) -> None:
        self._entries.append(snapshot)

    def pop(self) -> GameSnapshot:
        return self._entries.pop()

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
