"""Shared inputs and helpers for the computer-player strategies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from hearts.cards import QUEEN_OF_SPADES, Card, Rank, Suit, highest_of_suit
from hearts.context import GameContext
from hearts.memory import CardMemory

CARDS_TO_PASS = 3


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class PlayView:
    """Everything a seat may consult when choosing a card.

    Built from the seat's own hand, the face-up trick and the seat's own
    memory; other seats' hands are never part of it.
    """

    hand: Tuple[Card, ...]
    valid: Tuple[Card, ...]
    trick: Tuple[Tuple[int, Card], ...]
    lead_suit: Optional[Suit]
    hearts_broken: bool
    is_first_trick: bool
    memory: CardMemory
    context: GameContext

    @property
    def trick_cards(self) -> List[Card]:
        return [card for _, card in self.trick]

    def queen_unseen(self) -> bool:
        """Queen of spades neither played yet nor in this hand."""
        return not self.memory.queen_of_spades_played and QUEEN_OF_SPADES not in self.hand

    def winning_seat(self) -> Optional[int]:
        if not self.trick:
            return None
        winner, best = self.trick[0]
        for seat, card in self.trick[1:]:
            if card.suit is best.suit and card.rank > best.rank:
                winner, best = seat, card
        return winner

    def highest_led(self) -> Optional[Card]:
        if self.lead_suit is None:
            return None
        return highest_of_suit(self.trick_cards, self.lead_suit)


def _danger_rank(card: Card) -> Tuple[int, int]:
    if card.is_queen_of_spades:
        return 0, 0
    if card.suit is Suit.SPADES and card.rank >= Rank.KING:
        return 1, -card.rank
    if card.is_heart:
        return 2, -card.rank
    return 3, -card.rank


def danger_sorted(hand: Sequence[Card]) -> List[Card]:
    """Queen of spades, then A/K of spades, then hearts high to low, then by rank."""
    return sorted(hand, key=_danger_rank)


def pass_most_dangerous(hand: Sequence[Card]) -> List[Card]:
    return danger_sorted(hand)[:CARDS_TO_PASS]
