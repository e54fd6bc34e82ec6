"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .cards import Card, Suit, points_in
from .deck import NUM_SEATS


class TrickError(RuntimeError):
    """Raised when trick play breaks ordering constraints."""


@dataclass
class Trick:
    plays: List[Tuple[int, Card]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.plays

    def is_full(self) -> bool:
        return len(self.plays) == NUM_SEATS

    def __len__(self) -> int:
        return len(self.plays)

    def add_play(self, seat: int, card: Card) -> None:
        if self.is_full():
            raise TrickError("Trick already complete.")
        if any(played_seat == seat for played_seat, _ in self.plays):
            raise TrickError(f"Seat {seat} already played to this trick.")
        self.plays.append((seat, card))

    def clear(self) -> None:
        self.plays.clear()

    def lead_suit(self) -> Optional[Suit]:
        return self.plays[0][1].suit if self.plays else None

    def cards(self) -> List[Card]:
        return [card for _, card in self.plays]

    def seats(self) -> List[int]:
        return [seat for seat, _ in self.plays]

    def points(self) -> int:
        return points_in(self.cards())

    def winning_play(self) -> Tuple[int, Card]:
        """Return the seat and card currently taking the trick.

        Hearts has no trump: only cards of the lead suit can win.
        """
        if not self.plays:
            raise TrickError("Cannot determine winner on empty trick.")
        led = self.lead_suit()
        winning_seat, winning_card = self.plays[0]
        for seat, card in self.plays[1:]:
            if card.suit is led and card.rank > winning_card.rank:
                winning_seat, winning_card = seat, card
        return winning_seat, winning_card
