"""In-memory statistics over the games played in one session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .events import Event, GameEnded, ScoresChanged, ShootTheMoon

HUMAN_SEAT = 0


@dataclass
class SessionStatistics:
    games_played: int = 0
    games_won: int = 0
    total_score: int = 0
    best_score: Optional[int] = None
    moon_shots: int = 0
    _last_totals: Tuple[int, ...] = (0, 0, 0, 0)

    def record(self, events: Iterable[Event]) -> None:
        for event in events:
            if isinstance(event, ScoresChanged):
                self._last_totals = event.total_scores
            elif isinstance(event, ShootTheMoon):
                self.moon_shots += 1
            elif isinstance(event, GameEnded):
                score = self._last_totals[HUMAN_SEAT]
                self.games_played += 1
                self.total_score += score
                if self.best_score is None or score < self.best_score:
                    self.best_score = score
                if event.winner == HUMAN_SEAT:
                    self.games_won += 1

    @property
    def win_rate(self) -> float:
        if not self.games_played:
            return 0.0
        return self.games_won / self.games_played

    @property
    def average_score(self) -> float:
        if not self.games_played:
            return 0.0
        return self.total_score / self.games_played

    def reset(self) -> None:
        self.games_played = 0
        self.games_won = 0
        self.total_score = 0
        self.best_score = None
        self.moon_shots = 0
