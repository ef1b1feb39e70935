import pytest
from durak.common.card import Card, Rank, Suit
from durak.common.hand import Hand


def test_hand_stays_sorted_across_additions():
    hand = Hand()
    hand.add_cards([Card(Suit.DIAMONDS, Rank.SIX)])
    hand.add_cards([Card(Suit.CLUBS, Rank.KING)])
    hand.add_cards([Card(Suit.CLUBS, Rank.SEVEN)])

    assert hand.cards == [
        Card(Suit.CLUBS, Rank.SEVEN),
        Card(Suit.CLUBS, Rank.KING),
        Card(Suit.DIAMONDS, Rank.SIX),
    ]


def test_add_cards(cards):
    hand = Hand()
    hand.add_cards(cards("AH 6C 9S"))
    assert hand.cards == cards("6C 9S AH")
    assert len(hand) == 3


def test_cards_is_a_copy(cards):
    hand = Hand()
    hand.add_cards(cards("6C 9S"))
    hand.cards.clear()
    assert len(hand) == 2


def test_card_at_and_pop(cards):
    hand = Hand()
    hand.add_cards(cards("AH 6C 9S"))

    assert hand.card_at(1) == cards("9S")[0]
    assert hand.pop(0) == cards("6C")[0]
    assert hand.cards == cards("9S AH")

    with pytest.raises(IndexError):
        hand.card_at(2)
    with pytest.raises(IndexError):
        hand.pop(-1)


def test_clear(cards):
    hand = Hand()
    hand.add_cards(cards("7H 8H"))
    hand.clear()
    assert len(hand) == 0


def test_hand_repr_and_str(cards):
    hand = Hand()
    hand.add_cards(cards("8H 7H"))
    assert str(hand) == "7♥, 8♥"
    assert repr(hand) == "Hand([Card(Suit.HEARTS, Rank.SEVEN), Card(Suit.HEARTS, Rank.EIGHT)])"
