"""One seat at the table: hand, scores, difficulty and card memory."""

from __future__ import annotations

from random import Random
from typing import Iterable, List, Optional, Sequence, Tuple

from bots import Difficulty, PlayView, select_pass, select_play

from .cards import Card, Suit, sort_hand
from .context import GameContext
from .mechanics import valid_plays
from .memory import CardMemory


class HandError(RuntimeError):
    """Raised when a hand operation would create or lose a card."""


class Player:
    def __init__(
        self,
        seat: int,
        name: str,
        *,
        is_human: bool = False,
        difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> None:
        self.seat = seat
        self.name = name
        self.is_human = is_human
        self.difficulty = difficulty
        self.hand: List[Card] = []
        self.round_score = 0
        self.total_score = 0
        self.memory = CardMemory()

    def __repr__(self) -> str:
        return f"Player(seat={self.seat}, name={self.name!r}, total={self.total_score})"

    # Hand management ---------------------------------------------------

    def set_hand(self, cards: Iterable[Card]) -> None:
        self.hand = sort_hand(cards)

    def add_cards(self, cards: Iterable[Card]) -> None:
        self.hand = sort_hand([*self.hand, *cards])

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def remove_card(self, card: Card) -> None:
        try:
            self.hand.remove(card)
        except ValueError as exc:
            raise HandError(f"Seat {self.seat} does not hold {card}.") from exc

    def remove_cards(self, cards: Iterable[Card]) -> None:
        for card in cards:
            self.remove_card(card)

    # Scoring -----------------------------------------------------------

    def add_round_points(self, points: int) -> None:
        self.round_score += points

    def reset_scores(self) -> None:
        self.round_score = 0
        self.total_score = 0

    def reset_memory(self) -> None:
        self.memory.reset()

    # Decisions ---------------------------------------------------------

    def valid_plays(self, lead_suit: Optional[Suit], *, is_first_trick: bool, hearts_broken: bool) -> List[Card]:
        return valid_plays(self.hand, lead_suit, is_first_trick=is_first_trick, hearts_broken=hearts_broken)

    def select_pass_cards(self, context: GameContext, rng: Random) -> List[Card]:
        return select_pass(self.difficulty, tuple(self.hand), context, rng)

    def select_play(
        self,
        trick: Sequence[Tuple[int, Card]],
        *,
        is_first_trick: bool,
        hearts_broken: bool,
        context: GameContext,
        rng: Random,
    ) -> Card:
        lead_suit = trick[0][1].suit if trick else None
        view = PlayView(
            hand=tuple(self.hand),
            valid=tuple(self.valid_plays(lead_suit, is_first_trick=is_first_trick, hearts_broken=hearts_broken)),
            trick=tuple(trick),
            lead_suit=lead_suit,
            hearts_broken=hearts_broken,
            is_first_trick=is_first_trick,
            memory=self.memory,
            context=context,
        )
        return select_play(self.difficulty, view, rng)
