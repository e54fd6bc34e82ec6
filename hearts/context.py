"""Read-only score context handed to the computer players."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GameContext:
    seat: int
    total_scores: Tuple[int, ...]
    round_scores: Tuple[int, ...]
    round_number: int
    end_score: int
    moon_protection: bool
    cards_in_hand: Tuple[int, ...]

    def leader_seat(self) -> int:
        """Seat with the lowest total (first one on a tie)."""
        leader = 0
        for seat in range(1, len(self.total_scores)):
            if self.total_scores[seat] < self.total_scores[leader]:
                leader = seat
        return leader

    def best_other_total(self) -> int:
        return min(total for seat, total in enumerate(self.total_scores) if seat != self.seat)

    def score_gap(self) -> int:
        """Own total minus the best opposing total; positive means behind."""
        return self.total_scores[self.seat] - self.best_other_total()
