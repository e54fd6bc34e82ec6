"""Card-related data structures and helpers for Hearts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, List, Mapping, Optional, Sequence


class CardError(ValueError):
    """Raised when a card payload cannot be interpreted."""


class Suit(Enum):
    # Declaration order is the hand sort order.
    CLUBS = 0
    DIAMONDS = 1
    SPADES = 2
    HEARTS = 3

    def __str__(self) -> str:
        return self.name.lower()


class Rank(IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        return self.name.lower()


SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
}

RANK_SYMBOLS: dict[Rank, str] = {
    **{rank: str(rank.value) for rank in Rank if rank <= Rank.TEN},
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

QUEEN_OF_SPADES_POINTS = 13
HEART_POINTS = 1
TOTAL_ROUND_POINTS = 26


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    suit: Suit
    rank: Rank

    def _sort_key(self) -> tuple[int, int]:
        return self.suit.value, int(self.rank)

    def __lt__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    @property
    def is_heart(self) -> bool:
        return self.suit is Suit.HEARTS

    @property
    def is_queen_of_spades(self) -> bool:
        return self.suit is Suit.SPADES and self.rank is Rank.QUEEN

    @property
    def is_point_card(self) -> bool:
        return self.is_heart or self.is_queen_of_spades

    def point_value(self) -> int:
        if self.is_queen_of_spades:
            return QUEEN_OF_SPADES_POINTS
        if self.is_heart:
            return HEART_POINTS
        return 0

    def __str__(self) -> str:
        return f"{RANK_SYMBOLS[self.rank]}{SUIT_SYMBOLS[self.suit]}"


TWO_OF_CLUBS = Card(Suit.CLUBS, Rank.TWO)
QUEEN_OF_SPADES = Card(Suit.SPADES, Rank.QUEEN)
KING_OF_SPADES = Card(Suit.SPADES, Rank.KING)
ACE_OF_SPADES = Card(Suit.SPADES, Rank.ACE)


def sort_hand(cards: Iterable[Card]) -> List[Card]:
    """Return the cards sorted by suit then rank."""
    return sorted(cards)


def points_in(cards: Iterable[Card]) -> int:
    return sum(card.point_value() for card in cards)


# Selection helpers. Every helper resolves ties in favour of the earliest card
# in the given sequence so decisions stay reproducible.


def cards_of_suit(cards: Iterable[Card], suit: Suit) -> List[Card]:
    return [card for card in cards if card.suit is suit]


def has_suit(cards: Iterable[Card], suit: Suit) -> bool:
    return any(card.suit is suit for card in cards)


def count_suit(cards: Iterable[Card], suit: Suit) -> int:
    return sum(1 for card in cards if card.suit is suit)


def has_only_hearts(cards: Iterable[Card]) -> bool:
    return all(card.is_heart for card in cards)


def has_only_point_cards(cards: Iterable[Card]) -> bool:
    return all(card.is_point_card for card in cards)


def highest_card(cards: Sequence[Card]) -> Optional[Card]:
    if not cards:
        return None
    return max(cards, key=lambda c: c.rank)


def lowest_card(cards: Sequence[Card]) -> Optional[Card]:
    if not cards:
        return None
    return min(cards, key=lambda c: c.rank)


def highest_of_suit(cards: Iterable[Card], suit: Suit) -> Optional[Card]:
    return highest_card(cards_of_suit(cards, suit))


def lowest_of_suit(cards: Iterable[Card], suit: Suit) -> Optional[Card]:
    return lowest_card(cards_of_suit(cards, suit))


def highest_below(cards: Iterable[Card], max_rank: Rank) -> Optional[Card]:
    """Highest card strictly below ``max_rank``."""
    return highest_card([card for card in cards if card.rank < max_rank])


def lowest_above(cards: Iterable[Card], min_rank: Rank) -> Optional[Card]:
    """Lowest card strictly above ``min_rank``."""
    return lowest_card([card for card in cards if card.rank > min_rank])


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    try:
        rank_name = str(payload["rank"]).upper()
        suit_name = str(payload["suit"]).upper()
        return Card(Suit[suit_name], Rank[rank_name])
    except KeyError as exc:
        raise CardError(f"Cannot interpret card payload {dict(payload)!r}.") from exc


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
