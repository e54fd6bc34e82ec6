from random import Random

import pytest

from bots import Difficulty, PlayView, select_pass, select_play
from bots.base import danger_sorted
from bots.dispatch import UnknownDifficulty
from bots.hard import AGGRESSIVE, CAUTIOUS, NORMAL, lead_thresholds, looks_like_moon
from hearts.cards import ACE_OF_SPADES, KING_OF_SPADES, QUEEN_OF_SPADES, Card, Rank, Suit
from hearts.context import GameContext
from hearts.mechanics import valid_plays
from hearts.memory import CardMemory


class FixedRandom(Random):
    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def c(rank: Rank, suit: Suit) -> Card:
    return Card(suit, rank)


def context(seat: int = 0, totals=(0, 0, 0, 0), moon_protection: bool = False) -> GameContext:
    return GameContext(
        seat=seat,
        total_scores=tuple(totals),
        round_scores=(0, 0, 0, 0),
        round_number=2,
        end_score=100,
        moon_protection=moon_protection,
        cards_in_hand=(13, 13, 13, 13),
    )


def view(hand, trick=(), *, seat=0, hearts_broken=False, memory=None, totals=(0, 0, 0, 0)) -> PlayView:
    lead = trick[0][1].suit if trick else None
    return PlayView(
        hand=tuple(hand),
        valid=tuple(valid_plays(hand, lead, is_first_trick=False, hearts_broken=hearts_broken)),
        trick=tuple(trick),
        lead_suit=lead,
        hearts_broken=hearts_broken,
        is_first_trick=False,
        memory=memory or CardMemory(),
        context=context(seat, totals),
    )


def test_single_legal_card_is_played():
    hand = [c(Rank.FIVE, Suit.CLUBS), c(Rank.ACE, Suit.HEARTS)]
    trick = [(1, c(Rank.TWO, Suit.CLUBS))]
    for difficulty in Difficulty:
        assert select_play(difficulty, view(hand, trick), Random(1)) == c(Rank.FIVE, Suit.CLUBS)


def test_easy_always_legal():
    hand = [c(rank, Suit.DIAMONDS) for rank in (Rank.TWO, Rank.SIX, Rank.KING)] + [c(Rank.ACE, Suit.HEARTS)]
    rng = Random(9)
    for _ in range(20):
        card = select_play(Difficulty.EASY, view(hand, [(3, c(Rank.TEN, Suit.DIAMONDS))]), rng)
        assert card.suit is Suit.DIAMONDS


def test_medium_leads_lowest_plain_card():
    hand = [c(Rank.THREE, Suit.CLUBS), c(Rank.FIVE, Suit.DIAMONDS), c(Rank.FOUR, Suit.SPADES)]
    assert select_play(Difficulty.MEDIUM, view(hand), FixedRandom(0.9)) == c(Rank.THREE, Suit.CLUBS)


def test_medium_leads_low_spade_to_flush_queen():
    hand = [c(Rank.THREE, Suit.CLUBS), c(Rank.FIVE, Suit.DIAMONDS), c(Rank.FOUR, Suit.SPADES)]
    assert select_play(Difficulty.MEDIUM, view(hand), FixedRandom(0.1)) == c(Rank.FOUR, Suit.SPADES)


def test_medium_ducks_under_the_trick():
    hand = [c(Rank.TWO, Suit.DIAMONDS), c(Rank.NINE, Suit.DIAMONDS), c(Rank.JACK, Suit.DIAMONDS)]
    trick = [(1, c(Rank.TEN, Suit.DIAMONDS))]
    assert select_play(Difficulty.MEDIUM, view(hand, trick), Random(0)) == c(Rank.NINE, Suit.DIAMONDS)


def test_medium_dumps_queen_when_void():
    hand = [QUEEN_OF_SPADES, c(Rank.ACE, Suit.HEARTS), c(Rank.THREE, Suit.CLUBS)]
    trick = [(1, c(Rank.TEN, Suit.DIAMONDS))]
    assert select_play(Difficulty.MEDIUM, view(hand, trick), Random(0)) == QUEEN_OF_SPADES


def test_hard_takes_clean_trick_with_high_card_when_last():
    hand = [c(Rank.TWO, Suit.CLUBS), c(Rank.KING, Suit.CLUBS)]
    trick = [(1, c(Rank.FIVE, Suit.CLUBS)), (2, c(Rank.NINE, Suit.CLUBS)), (3, c(Rank.SEVEN, Suit.CLUBS))]
    assert select_play(Difficulty.HARD, view(hand, trick), Random(0)) == c(Rank.KING, Suit.CLUBS)


def test_hard_ducks_when_last_trick_has_points():
    hand = [c(Rank.TWO, Suit.CLUBS), c(Rank.KING, Suit.CLUBS)]
    trick = [(1, c(Rank.FIVE, Suit.CLUBS)), (2, c(Rank.NINE, Suit.CLUBS)), (3, c(Rank.SEVEN, Suit.HEARTS))]
    assert select_play(Difficulty.HARD, view(hand, trick), Random(0)) == c(Rank.TWO, Suit.CLUBS)


def test_hard_sheds_high_when_next_seat_is_void():
    memory = CardMemory()
    hand = [c(Rank.JACK, Suit.DIAMONDS), c(Rank.ACE, Suit.DIAMONDS)]
    trick = [(2, c(Rank.TEN, Suit.DIAMONDS)), (3, c(Rank.SIX, Suit.DIAMONDS))]
    assert select_play(Difficulty.HARD, view(hand, trick, memory=memory), Random(0)) == c(Rank.JACK, Suit.DIAMONDS)

    memory.record_card(c(Rank.FIVE, Suit.HEARTS), seat=1, lead_suit=Suit.DIAMONDS)
    assert select_play(Difficulty.HARD, view(hand, trick, memory=memory), Random(0)) == c(Rank.ACE, Suit.DIAMONDS)


def test_hard_dumps_penalty_on_the_leader():
    hand = [c(Rank.ACE, Suit.HEARTS), c(Rank.FOUR, Suit.CLUBS), c(Rank.NINE, Suit.CLUBS)]
    trick = [(2, c(Rank.TEN, Suit.DIAMONDS))]
    card = select_play(Difficulty.HARD, view(hand, trick, totals=(60, 40, 10, 30)), Random(0))
    assert card == c(Rank.ACE, Suit.HEARTS)


def test_hard_voids_longest_suit_on_clean_trick():
    hand = [c(Rank.ACE, Suit.HEARTS), c(Rank.FOUR, Suit.CLUBS), c(Rank.NINE, Suit.CLUBS), c(Rank.SIX, Suit.SPADES)]
    trick = [(2, c(Rank.TEN, Suit.DIAMONDS))]
    card = select_play(Difficulty.HARD, view(hand, trick, totals=(10, 40, 60, 30)), Random(0))
    assert card == c(Rank.NINE, Suit.CLUBS)


def test_hard_lead_thresholds_follow_score_gap():
    assert lead_thresholds(context(0, (10, 40, 50, 60))) is CAUTIOUS
    assert lead_thresholds(context(0, (60, 20, 50, 40))) is AGGRESSIVE
    assert lead_thresholds(context(0, (20, 20, 30, 30))) is NORMAL


def test_hard_flushes_queen_with_low_spade():
    hand = [c(Rank.THREE, Suit.SPADES), c(Rank.FOUR, Suit.CLUBS), c(Rank.FIVE, Suit.CLUBS)]
    assert select_play(Difficulty.HARD, view(hand), Random(0)) == c(Rank.THREE, Suit.SPADES)


def test_danger_order():
    hand = [c(Rank.TWO, Suit.HEARTS), KING_OF_SPADES, c(Rank.ACE, Suit.CLUBS), QUEEN_OF_SPADES, c(Rank.ACE, Suit.HEARTS)]
    assert danger_sorted(hand)[:4] == [QUEEN_OF_SPADES, KING_OF_SPADES, c(Rank.ACE, Suit.HEARTS), c(Rank.TWO, Suit.HEARTS)]


def test_medium_pass_takes_three_most_dangerous():
    hand = [c(Rank.TWO, Suit.CLUBS), QUEEN_OF_SPADES, ACE_OF_SPADES, c(Rank.KING, Suit.HEARTS), c(Rank.ACE, Suit.DIAMONDS)]
    assert select_pass(Difficulty.MEDIUM, hand, context(), Random(0)) == [
        QUEEN_OF_SPADES,
        ACE_OF_SPADES,
        c(Rank.KING, Suit.HEARTS),
    ]


def test_hard_pass_keeps_protected_queen():
    hand = [
        QUEEN_OF_SPADES,
        KING_OF_SPADES,
        ACE_OF_SPADES,
        c(Rank.ACE, Suit.HEARTS),
        c(Rank.KING, Suit.HEARTS),
        c(Rank.QUEEN, Suit.HEARTS),
        c(Rank.TWO, Suit.CLUBS),
    ]
    chosen = select_pass(Difficulty.HARD, hand, context(), Random(0))
    assert QUEEN_OF_SPADES not in chosen
    assert chosen == [c(Rank.ACE, Suit.HEARTS), c(Rank.KING, Suit.HEARTS), c(Rank.QUEEN, Suit.HEARTS)]


def test_hard_pass_voids_short_suit():
    hand = [QUEEN_OF_SPADES, c(Rank.FIVE, Suit.DIAMONDS), c(Rank.SIX, Suit.DIAMONDS)] + [
        c(rank, Suit.CLUBS) for rank in (Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE)
    ]
    chosen = select_pass(Difficulty.HARD, hand, context(), Random(0))
    assert chosen == [QUEEN_OF_SPADES, c(Rank.FIVE, Suit.DIAMONDS), c(Rank.SIX, Suit.DIAMONDS)]


def test_hard_pass_keeps_moon_hand_when_behind():
    hearts = [c(rank, Suit.HEARTS) for rank in (Rank.ACE, Rank.KING, Rank.QUEEN, Rank.JACK, Rank.TEN, Rank.NINE)]
    hand = hearts + [c(Rank.TWO, Suit.CLUBS), c(Rank.THREE, Suit.DIAMONDS), c(Rank.FOUR, Suit.SPADES)]
    assert looks_like_moon(hand)
    behind = GameContext(
        seat=0,
        total_scores=(70, 20, 30, 40),
        round_scores=(0, 0, 0, 0),
        round_number=3,
        end_score=100,
        moon_protection=True,
        cards_in_hand=(13, 13, 13, 13),
    )
    chosen = select_pass(Difficulty.HARD, hand, behind, Random(0))
    assert not any(card.is_heart for card in chosen)


def test_unknown_difficulty():
    with pytest.raises(UnknownDifficulty):
        select_play("expert", view([c(Rank.TWO, Suit.CLUBS), c(Rank.THREE, Suit.CLUBS)]), Random(0))


class ScriptedRandom(Random):
    """Fixed coin flip and fixed pick index for the Easy tier."""

    def __init__(self, coin: int, pick: int = 0) -> None:
        super().__init__(0)
        self.coin = coin
        self.pick = pick

    def randint(self, a: int, b: int) -> int:
        return self.coin

    def choice(self, seq):
        return seq[self.pick]


def test_easy_lead_coin_flip_branches():
    hand = [c(Rank.THREE, Suit.CLUBS), c(Rank.KING, Suit.DIAMONDS), c(Rank.FIVE, Suit.SPADES)]
    assert select_play(Difficulty.EASY, view(hand), ScriptedRandom(coin=0, pick=2)) == c(Rank.FIVE, Suit.SPADES)
    assert select_play(Difficulty.EASY, view(hand), ScriptedRandom(coin=1)) == c(Rank.KING, Suit.DIAMONDS)


def test_easy_slough_coin_flip_branches():
    hand = [c(Rank.THREE, Suit.CLUBS), c(Rank.QUEEN, Suit.HEARTS), c(Rank.SEVEN, Suit.SPADES)]
    trick = [(1, c(Rank.TEN, Suit.DIAMONDS))]
    assert select_play(Difficulty.EASY, view(hand, trick), ScriptedRandom(coin=0, pick=0)) == c(Rank.THREE, Suit.CLUBS)
    assert select_play(Difficulty.EASY, view(hand, trick), ScriptedRandom(coin=1)) == c(Rank.QUEEN, Suit.HEARTS)


def test_easy_follow_is_a_random_pick():
    hand = [c(Rank.TWO, Suit.DIAMONDS), c(Rank.SIX, Suit.DIAMONDS), c(Rank.KING, Suit.DIAMONDS)]
    trick = [(3, c(Rank.TEN, Suit.DIAMONDS))]
    assert select_play(Difficulty.EASY, view(hand, trick), ScriptedRandom(coin=1, pick=1)) == c(Rank.SIX, Suit.DIAMONDS)


def test_hard_drops_queen_under_higher_spade_when_last():
    hand = [QUEEN_OF_SPADES, ACE_OF_SPADES, c(Rank.TWO, Suit.CLUBS)]
    trick = [(1, c(Rank.FIVE, Suit.SPADES)), (2, KING_OF_SPADES), (3, c(Rank.THREE, Suit.SPADES))]
    assert select_play(Difficulty.HARD, view(hand, trick), Random(0)) == QUEEN_OF_SPADES
