import pytest

from hearts.cards import QUEEN_OF_SPADES, Card, Rank, Suit
from hearts.trick import Trick, TrickError


def test_highest_of_lead_suit_wins():
    trick = Trick()
    trick.add_play(1, Card(Suit.DIAMONDS, Rank.NINE))
    trick.add_play(0, Card(Suit.DIAMONDS, Rank.TWO))
    trick.add_play(2, QUEEN_OF_SPADES)
    trick.add_play(3, Card(Suit.DIAMONDS, Rank.ACE))

    seat, card = trick.winning_play()
    assert seat == 3
    assert card == Card(Suit.DIAMONDS, Rank.ACE)
    assert trick.points() == 13
    assert trick.is_full()


def test_off_suit_cards_never_win():
    trick = Trick()
    trick.add_play(2, Card(Suit.CLUBS, Rank.THREE))
    trick.add_play(3, Card(Suit.HEARTS, Rank.ACE))
    assert trick.winning_play()[0] == 2


def test_trick_rejects_fifth_card_and_repeat_seat():
    trick = Trick()
    trick.add_play(0, Card(Suit.CLUBS, Rank.TWO))
    with pytest.raises(TrickError):
        trick.add_play(0, Card(Suit.CLUBS, Rank.THREE))
    for seat in (1, 2, 3):
        trick.add_play(seat, Card(Suit.CLUBS, Rank(seat + 3)))
    with pytest.raises(TrickError):
        trick.add_play(1, Card(Suit.CLUBS, Rank.NINE))


def test_empty_trick_has_no_winner():
    with pytest.raises(TrickError):
        Trick().winning_play()
