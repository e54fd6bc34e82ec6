"""Hard tier: card counting, seat position and score-aware choices."""

from __future__ import annotations

from dataclasses import dataclass
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
    count_suit,
    highest_card,
    highest_of_suit,
    lowest_card,
    lowest_of_suit,
    points_in,
)
from hearts.context import GameContext
from hearts.deck import NUM_SEATS

from .base import CARDS_TO_PASS, PlayView, danger_sorted
from .medium import duck

# Score gaps (own total minus best opposing total) that change the lead style.
AHEAD_MARGIN = 20
BEHIND_MARGIN = 30

# How far behind a seat must be before it keeps a moon hand together.
MOON_CHASE_GAP = 25
HIGH_HEART = Rank.JACK


@dataclass(frozen=True)
class LeadThresholds:
    safe_rank: Rank
    heart_rank: Rank
    spade_flush_limit: int


NORMAL = LeadThresholds(safe_rank=Rank.SEVEN, heart_rank=Rank.SIX, spade_flush_limit=6)
CAUTIOUS = LeadThresholds(safe_rank=Rank.FIVE, heart_rank=Rank.FOUR, spade_flush_limit=4)
AGGRESSIVE = LeadThresholds(safe_rank=Rank.NINE, heart_rank=Rank.EIGHT, spade_flush_limit=8)


def lead_thresholds(context: GameContext) -> LeadThresholds:
    gap = context.score_gap()
    if gap <= -AHEAD_MARGIN:
        return CAUTIOUS
    if gap >= BEHIND_MARGIN:
        return AGGRESSIVE
    return NORMAL


def choose_lead(view: PlayView, rng: Random) -> Card:
    valid = view.valid
    thresholds = lead_thresholds(view.context)

    # Flush the queen with a low spade while few spades have surfaced.
    if view.queen_unseen():
        low_spade = lowest_of_suit(valid, Suit.SPADES)
        if (
            low_spade is not None
            and low_spade.rank < Rank.QUEEN
            and view.memory.count_played_in_suit(Suit.SPADES) < thresholds.spade_flush_limit
        ):
            return low_spade

    for suit in (Suit.CLUBS, Suit.DIAMONDS):
        suited = cards_of_suit(valid, suit)
        if len(suited) >= 2:
            lowest = lowest_card(suited)
            if lowest.rank <= thresholds.safe_rank:
                return lowest

    if view.hearts_broken:
        low_heart = lowest_of_suit(valid, Suit.HEARTS)
        if low_heart is not None and low_heart.rank <= thresholds.heart_rank:
            return low_heart

    for suit in (Suit.CLUBS, Suit.DIAMONDS):
        low = lowest_of_suit(valid, suit)
        if low is not None:
            return low

    low_spade = lowest_of_suit(valid, Suit.SPADES)
    if low_spade is not None and low_spade.rank < Rank.JACK:
        return low_spade

    if view.hearts_broken:
        low_heart = lowest_of_suit(valid, Suit.HEARTS)
        if low_heart is not None:
            return low_heart

    return lowest_card(valid)


def _shed_high(cards: Sequence[Card]) -> Card:
    """Highest card short of the queen of spades, used when the trick is ours anyway."""
    safe = [card for card in cards if not card.is_queen_of_spades]
    return highest_card(safe) if safe else highest_card(cards)


def choose_follow(view: PlayView, rng: Random) -> Card:
    valid = view.valid
    highest = view.highest_led()
    under = duck(valid, view)
    played = len(view.trick)
    trick_points = points_in(view.trick_cards)

    # The queen is safe to drop under a higher spade from any position.
    if under is not None and under.is_queen_of_spades:
        return under

    if played == NUM_SEATS - 1:
        if trick_points == 0:
            # Last to a clean trick: winning costs nothing, so unload a high card.
            high = _shed_high(valid)
            if not high.is_queen_of_spades and high.rank > highest.rank:
                return high
        if under is not None:
            return under
        return _shed_high(valid)

    if played == NUM_SEATS - 2:
        if under is not None:
            return under
        next_seat = (view.context.seat + 1) % NUM_SEATS
        if view.memory.is_void(next_seat, view.lead_suit):
            # The last seat cannot overtake, so the trick is ours whatever we play.
            return _shed_high(valid)
        return lowest_card(valid)

    if under is not None:
        return under
    return lowest_card(valid)


def _biggest_penalty(valid: Sequence[Card]) -> Optional[Card]:
    if QUEEN_OF_SPADES in valid:
        return QUEEN_OF_SPADES
    return highest_of_suit(valid, Suit.HEARTS)


def choose_slough(view: PlayView, rng: Random) -> Card:
    valid = view.valid
    context = view.context

    winner = view.winning_seat()
    leader = context.leader_seat()
    behind = context.total_scores[context.seat] > context.total_scores[leader]
    if winner == leader and leader != context.seat and behind:
        dump = _biggest_penalty(valid)
        if dump is not None:
            return dump

    if points_in(view.trick_cards) > 0:
        dump = _biggest_penalty(valid)
        if dump is not None:
            return dump

    if view.queen_unseen():
        for card in (ACE_OF_SPADES, KING_OF_SPADES):
            if card in valid:
                return card

    if QUEEN_OF_SPADES in valid:
        return QUEEN_OF_SPADES

    # Work toward a void in the longest plain suit.
    longest_suit: Optional[Suit] = None
    longest_count = 0
    for card in valid:
        if card.is_heart:
            continue
        count = count_suit(view.hand, card.suit)
        if count > longest_count:
            longest_suit, longest_count = card.suit, count
    if longest_suit is not None:
        return highest_of_suit(valid, longest_suit)

    high_heart = highest_of_suit(valid, Suit.HEARTS)
    if high_heart is not None:
        return high_heart
    return highest_card(valid)


def looks_like_moon(hand: Sequence[Card]) -> bool:
    hearts = cards_of_suit(hand, Suit.HEARTS)
    high_hearts = [card for card in hearts if card.rank >= HIGH_HEART]
    if len(hearts) >= 6 and len(high_hearts) >= 3:
        return True
    return len(hearts) >= 5 and len(high_hearts) >= 4 and ACE_OF_SPADES in hand


def _pass_for_moon(hand: Sequence[Card]) -> List[Card]:
    plain = sorted((card for card in hand if not card.is_heart), key=lambda c: c.rank)
    hearts = sorted(cards_of_suit(hand, Suit.HEARTS), key=lambda c: c.rank)
    return (plain + hearts)[:CARDS_TO_PASS]


def choose_pass(hand: Sequence[Card], context: GameContext, rng: Random) -> List[Card]:
    if context.moon_protection and context.score_gap() >= MOON_CHASE_GAP and looks_like_moon(hand):
        return _pass_for_moon(hand)

    has_queen = QUEEN_OF_SPADES in hand
    has_king = KING_OF_SPADES in hand
    has_ace = ACE_OF_SPADES in hand
    keep_queen = has_queen and ((has_king and has_ace) or count_suit(hand, Suit.SPADES) >= 5)

    dangerous: List[Card] = []
    if has_queen and not keep_queen:
        dangerous.append(QUEEN_OF_SPADES)
    if not has_queen:
        dangerous.extend(card for card in (ACE_OF_SPADES, KING_OF_SPADES) if card in hand)
    high_hearts = sorted(
        (card for card in hand if card.is_heart and card.rank >= Rank.QUEEN),
        key=lambda c: c.rank,
        reverse=True,
    )
    dangerous.extend(high_hearts)

    to_pass: List[Card] = dangerous[:CARDS_TO_PASS]

    # Pass a whole short plain suit when the remaining slots can hold it.
    slots = CARDS_TO_PASS - len(to_pass)
    if slots > 0:
        short_suit: Optional[Suit] = None
        short_cards: List[Card] = []
        for suit in (Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS):
            remaining = [card for card in cards_of_suit(hand, suit) if card not in to_pass]
            if remaining and (short_suit is None or len(remaining) < len(short_cards)):
                short_suit, short_cards = suit, remaining
        if short_suit is not None and len(short_cards) <= slots:
            to_pass.extend(short_cards)

    if len(to_pass) < CARDS_TO_PASS:
        if keep_queen:
            fill_order = sorted(hand, key=lambda c: (c.suit is Suit.SPADES, -c.rank))
        else:
            fill_order = danger_sorted(hand)
        for card in fill_order:
            if len(to_pass) >= CARDS_TO_PASS:
                break
            if card not in to_pass:
                to_pass.append(card)

    return to_pass
