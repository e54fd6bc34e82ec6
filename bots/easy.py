"""Easy tier: coin flips between a random card and the highest one."""

from __future__ import annotations

from random import Random
from typing import List, Sequence

from hearts.cards import Card, highest_card
from hearts.context import GameContext

from .base import PlayView, pass_most_dangerous


def _random_or_highest(valid: Sequence[Card], rng: Random) -> Card:
    if rng.randint(0, 1) == 0:
        return rng.choice(valid)
    return highest_card(valid)


def choose_lead(view: PlayView, rng: Random) -> Card:
    return _random_or_highest(view.valid, rng)


def choose_follow(view: PlayView, rng: Random) -> Card:
    return rng.choice(view.valid)


def choose_slough(view: PlayView, rng: Random) -> Card:
    return _random_or_highest(view.valid, rng)


def choose_pass(hand: Sequence[Card], context: GameContext, rng: Random) -> List[Card]:
    return pass_most_dangerous(hand)
