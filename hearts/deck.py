"""Deck creation and dealing for Hearts."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence

from .cards import Card, Rank, Suit, sort_hand

NUM_SEATS = 4
DECK_SIZE = 52
HAND_SIZE = DECK_SIZE // NUM_SEATS


class DeckError(ValueError):
    """Raised when a deck does not hold exactly the 52 unique cards."""


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(suit, rank) for suit in Suit for rank in Rank]


def deal_hands(
    *,
    rng: Optional[Random] = None,
    deck: Optional[Sequence[Card]] = None,
) -> List[List[Card]]:
    """Deal four sorted 13-card hands.

    When ``deck`` is given its order is dealt as-is, seat 0 receiving the first
    thirteen cards; otherwise a fresh deck is shuffled with ``rng``.
    """
    if deck is not None:
        cards = list(deck)
    else:
        cards = build_deck()
        if rng is None:
            rng = Random()
        rng.shuffle(cards)
    if len(cards) != DECK_SIZE or len(set(cards)) != DECK_SIZE:
        raise DeckError("Deck must contain exactly 52 unique cards.")

    return [sort_hand(cards[seat * HAND_SIZE : (seat + 1) * HAND_SIZE]) for seat in range(NUM_SEATS)]
