"""Round scoring for Hearts: moon shots, protection and reset variants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .cards import TOTAL_ROUND_POINTS
from .deck import NUM_SEATS
from .rules_schema import GameRules

EXACT_RESET_SCORE = 50
POLISH_FROM = 99
POLISH_TAKEN = 25
POLISH_RESET = 98


class ScoringError(ValueError):
    """Raised when score vectors are malformed."""


@dataclass(frozen=True)
class RoundScoreResult:
    round_points: Tuple[int, ...]
    deltas: Tuple[int, ...]
    new_totals: Tuple[int, ...]
    shooter: Optional[int]
    moon_protected: bool
    adjustments: Tuple[Tuple[int, str], ...]


def find_moon_shooter(round_points: Sequence[int]) -> Optional[int]:
    for seat, points in enumerate(round_points):
        if points == TOTAL_ROUND_POINTS:
            return seat
    return None


def apply_moon_shot(round_points: Sequence[int], shooter: int) -> List[int]:
    """Redistribute a moon shot: every other seat is raised to 26, the shooter to 0."""
    return [
        0 if seat == shooter else TOTAL_ROUND_POINTS
        for seat in range(len(round_points))
    ]


def is_game_over(totals: Sequence[int], end_score: int) -> bool:
    return any(total >= end_score for total in totals)


def find_winner(totals: Sequence[int]) -> int:
    """Lowest total wins; an exact tie goes to the first such seat."""
    winner = 0
    for seat in range(1, len(totals)):
        if totals[seat] < totals[winner]:
            winner = seat
    return winner


def _protection_applies(shooter: int, prior_totals: Sequence[int], end_score: int) -> bool:
    """True when adding 26 to everyone else would end the game with the shooter losing."""
    projected = [
        total if seat == shooter else total + TOTAL_ROUND_POINTS
        for seat, total in enumerate(prior_totals)
    ]
    return is_game_over(projected, end_score) and find_winner(projected) != shooter


def score_round(
    *,
    round_points: Sequence[int],
    prior_totals: Sequence[int],
    rules: GameRules,
) -> RoundScoreResult:
    """Score a finished round.

    Order of evaluation: raw points, moon redistribution (or protection),
    add to totals, full-polish reset, exact end-score reset.
    """
    if len(round_points) != NUM_SEATS or len(prior_totals) != NUM_SEATS:
        raise ScoringError("Exactly four seats are supported.")

    shooter = find_moon_shooter(round_points)
    protected = False
    if shooter is None:
        deltas = list(round_points)
    elif rules.moon_protection and _protection_applies(shooter, prior_totals, rules.end_score):
        protected = True
        deltas = [-TOTAL_ROUND_POINTS if seat == shooter else 0 for seat in range(NUM_SEATS)]
    else:
        deltas = apply_moon_shot(round_points, shooter)

    totals = [prior + delta for prior, delta in zip(prior_totals, deltas)]
    adjustments: List[Tuple[int, str]] = []

    for seat in range(NUM_SEATS):
        if rules.full_polish and prior_totals[seat] == POLISH_FROM and deltas[seat] == POLISH_TAKEN:
            totals[seat] = POLISH_RESET
            adjustments.append((seat, "full_polish"))
        elif rules.exact_reset_to_50 and totals[seat] == rules.end_score:
            totals[seat] = EXACT_RESET_SCORE
            adjustments.append((seat, "exact_reset"))

    return RoundScoreResult(
        round_points=tuple(round_points),
        deltas=tuple(deltas),
        new_totals=tuple(totals),
        shooter=shooter,
        moon_protected=protected,
        adjustments=tuple(adjustments),
    )
