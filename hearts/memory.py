"""Per-seat record of what a computer player has observed this round."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set

from .cards import Card, Rank, Suit


@dataclass
class CardMemory:
    """Cards seen, inferred voids and point flow for one round.

    Only cards that were played face up reach the memory, so anything derived
    from it is information the owning seat legitimately has.
    """

    played_cards: Set[Card] = field(default_factory=set)
    void_seats: Dict[Suit, Set[int]] = field(default_factory=dict)
    queen_of_spades_played: bool = False
    points_played: int = 0

    def reset(self) -> None:
        self.played_cards.clear()
        self.void_seats.clear()
        self.queen_of_spades_played = False
        self.points_played = 0

    def record_card(self, card: Card, seat: int, lead_suit: Suit) -> None:
        self.played_cards.add(card)
        self.points_played += card.point_value()
        if card.is_queen_of_spades:
            self.queen_of_spades_played = True
        # Failing to follow proves the seat holds none of the led suit.
        if card.suit is not lead_suit:
            self.void_seats.setdefault(lead_suit, set()).add(seat)

    def is_played(self, card: Card) -> bool:
        return card in self.played_cards

    def is_void(self, seat: int, suit: Suit) -> bool:
        return seat in self.void_seats.get(suit, set())

    def count_played_in_suit(self, suit: Suit) -> int:
        return sum(1 for card in self.played_cards if card.suit is suit)

    def count_higher_cards_out(self, suit: Suit, rank: Rank) -> int:
        """Count cards of ``suit`` ranked above ``rank`` that have not been played."""
        return sum(
            1
            for higher in Rank
            if higher > rank and Card(suit, higher) not in self.played_cards
        )
