"""Medium tier: low leads, ducking follows and danger-first discards."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence

from hearts.cards import (
    ACE_OF_SPADES,
    KING_OF_SPADES,
    QUEEN_OF_SPADES,
    Card,
    Rank,
    Suit,
    cards_of_suit,
    highest_below,
    highest_card,
    highest_of_suit,
    lowest_card,
    lowest_of_suit,
)
from hearts.context import GameContext

from .base import PlayView, pass_most_dangerous

SPADE_PROBE_CHANCE = 0.4


def safe_low_spade(valid: Sequence[Card]) -> Optional[Card]:
    low = lowest_of_suit(valid, Suit.SPADES)
    if low is not None and low.rank < Rank.QUEEN:
        return low
    return None


def duck(valid: Sequence[Card], view: PlayView) -> Optional[Card]:
    """Highest card of the lead suit that still loses to the trick."""
    highest = view.highest_led()
    if highest is None:
        return None
    return highest_below(cards_of_suit(valid, highest.suit), highest.rank)


def choose_lead(view: PlayView, rng: Random) -> Card:
    valid = view.valid
    low_spade = safe_low_spade(valid)
    # Probe for the queen while it is still hiding in someone else's hand.
    if low_spade is not None and view.queen_unseen() and rng.random() < SPADE_PROBE_CHANCE:
        return low_spade

    for suit in (Suit.CLUBS, Suit.DIAMONDS):
        low = lowest_of_suit(valid, suit)
        if low is not None:
            return low

    if low_spade is not None:
        return low_spade

    if view.hearts_broken:
        low_heart = lowest_of_suit(valid, Suit.HEARTS)
        if low_heart is not None:
            return low_heart

    return lowest_card(valid)


def choose_follow(view: PlayView, rng: Random) -> Card:
    under = duck(view.valid, view)
    if under is not None:
        return under
    return lowest_card(view.valid)


def choose_slough(view: PlayView, rng: Random) -> Card:
    valid = view.valid
    if QUEEN_OF_SPADES in valid:
        return QUEEN_OF_SPADES

    if view.queen_unseen():
        for card in (ACE_OF_SPADES, KING_OF_SPADES):
            if card in valid:
                return card

    high_heart = highest_of_suit(valid, Suit.HEARTS)
    if high_heart is not None:
        return high_heart

    high_spade = highest_of_suit(valid, Suit.SPADES)
    if high_spade is not None and high_spade.rank >= Rank.KING:
        return high_spade

    return highest_card(valid)


def choose_pass(hand: Sequence[Card], context: GameContext, rng: Random) -> List[Card]:
    return pass_most_dangerous(hand)
