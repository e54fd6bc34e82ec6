"""Route each decision role to the strategy for a difficulty tier."""

from __future__ import annotations

from random import Random
from typing import List, Sequence

from hearts.cards import Card, has_suit
from hearts.context import GameContext

from . import easy, hard, medium
from .base import CARDS_TO_PASS, Difficulty, PlayView


class UnknownDifficulty(ValueError):
    """Raised when a decision is requested for a tier with no strategy."""


def select_lead(difficulty: Difficulty, view: PlayView, rng: Random) -> Card:
    if difficulty is Difficulty.EASY:
        return easy.choose_lead(view, rng)
    if difficulty is Difficulty.MEDIUM:
        return medium.choose_lead(view, rng)
    if difficulty is Difficulty.HARD:
        return hard.choose_lead(view, rng)
    raise UnknownDifficulty(difficulty)


def select_follow(difficulty: Difficulty, view: PlayView, rng: Random) -> Card:
    if difficulty is Difficulty.EASY:
        return easy.choose_follow(view, rng)
    if difficulty is Difficulty.MEDIUM:
        return medium.choose_follow(view, rng)
    if difficulty is Difficulty.HARD:
        return hard.choose_follow(view, rng)
    raise UnknownDifficulty(difficulty)


def select_slough(difficulty: Difficulty, view: PlayView, rng: Random) -> Card:
    if difficulty is Difficulty.EASY:
        return easy.choose_slough(view, rng)
    if difficulty is Difficulty.MEDIUM:
        return medium.choose_slough(view, rng)
    if difficulty is Difficulty.HARD:
        return hard.choose_slough(view, rng)
    raise UnknownDifficulty(difficulty)


def select_pass(
    difficulty: Difficulty,
    hand: Sequence[Card],
    context: GameContext,
    rng: Random,
) -> List[Card]:
    if difficulty is Difficulty.EASY:
        chosen = easy.choose_pass(hand, context, rng)
    elif difficulty is Difficulty.MEDIUM:
        chosen = medium.choose_pass(hand, context, rng)
    elif difficulty is Difficulty.HARD:
        chosen = hard.choose_pass(hand, context, rng)
    else:
        raise UnknownDifficulty(difficulty)
    if len(chosen) != CARDS_TO_PASS or len(set(chosen)) != CARDS_TO_PASS:
        raise RuntimeError(f"{difficulty.value} pass selection returned {chosen}.")
    return chosen


def select_play(difficulty: Difficulty, view: PlayView, rng: Random) -> Card:
    """Pick a card for the seat described by ``view``; always one of ``view.valid``."""
    if not view.valid:
        raise RuntimeError("No legal plays available for bot.")
    if len(view.valid) == 1:
        return view.valid[0]
    if not view.trick:
        return select_lead(difficulty, view, rng)
    if has_suit(view.valid, view.lead_suit):
        return select_follow(difficulty, view, rng)
    return select_slough(difficulty, view, rng)
