"""Legal move generation for Hearts."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cards import (
    TWO_OF_CLUBS,
    Card,
    Suit,
    cards_of_suit,
    has_only_hearts,
    has_only_point_cards,
)


def valid_plays(
    hand: Iterable[Card],
    lead_suit: Optional[Suit],
    *,
    is_first_trick: bool,
    hearts_broken: bool,
) -> List[Card]:
    """Return the cards of ``hand`` that may legally be played, in hand order.

    ``lead_suit`` is None when the seat is leading the trick.
    """
    cards = list(hand)
    if not cards:
        return []

    if lead_suit is None:
        if is_first_trick and TWO_OF_CLUBS in cards:
            return [TWO_OF_CLUBS]
        if hearts_broken or has_only_hearts(cards):
            return cards
        return [card for card in cards if not card.is_heart]

    suited = cards_of_suit(cards, lead_suit)
    if suited:
        return suited

    if is_first_trick and not has_only_point_cards(cards):
        return [card for card in cards if not card.is_point_card]
    return cards
