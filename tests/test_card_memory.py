from hearts.cards import QUEEN_OF_SPADES, Card, Rank, Suit
from hearts.memory import CardMemory
from hearts.player import Player


def test_off_suit_play_marks_void():
    memory = CardMemory()
    memory.record_card(Card(Suit.DIAMONDS, Rank.FIVE), seat=1, lead_suit=Suit.DIAMONDS)
    memory.record_card(QUEEN_OF_SPADES, seat=2, lead_suit=Suit.DIAMONDS)

    assert memory.is_void(2, Suit.DIAMONDS)
    assert not memory.is_void(1, Suit.DIAMONDS)
    assert memory.queen_of_spades_played
    assert memory.points_played == 13
    assert memory.count_played_in_suit(Suit.SPADES) == 1


def test_higher_cards_out():
    memory = CardMemory()
    assert memory.count_higher_cards_out(Suit.HEARTS, Rank.JACK) == 3
    memory.record_card(Card(Suit.HEARTS, Rank.ACE), seat=0, lead_suit=Suit.HEARTS)
    assert memory.count_higher_cards_out(Suit.HEARTS, Rank.JACK) == 2


def test_reset_clears_everything():
    memory = CardMemory()
    memory.record_card(QUEEN_OF_SPADES, seat=3, lead_suit=Suit.CLUBS)
    memory.reset()
    assert memory == CardMemory()


def test_player_reset_memory_clears_in_place():
    player = Player(1, "West")
    memory = player.memory
    memory.record_card(QUEEN_OF_SPADES, seat=2, lead_suit=Suit.CLUBS)

    player.reset_memory()

    assert player.memory is memory
    assert memory == CardMemory()
