import random

import pytest
from durak.common.card import Card, Rank, Suit
from durak.common.deck import Deck, DeckSize, build_cards


@pytest.mark.parametrize("deck_size", list(DeckSize))
def test_deck_composition(deck_size):
    cards = build_cards(deck_size)
    assert len(cards) == deck_size.value
    assert len(set(cards)) == deck_size.value


def test_reduced_deck_starts_at_nine():
    ranks = {card.rank for card in build_cards(DeckSize.REDUCED)}
    assert min(ranks) == Rank.NINE
    assert max(ranks) == Rank.ACE


def test_standard_deck_starts_at_six():
    ranks = {card.rank for card in build_cards(DeckSize.STANDARD)}
    assert min(ranks) == Rank.SIX
    assert Rank.JOKER not in ranks


def test_extended_deck_has_two_jokers():
    jokers = [card for card in build_cards(DeckSize.EXTENDED) if card.rank == Rank.JOKER]
    assert jokers == [Card(Suit.HEARTS, Rank.JOKER), Card(Suit.SPADES, Rank.JOKER)]
    assert not DeckSize.FULL.has_jokers


def test_max_players():
    assert DeckSize.REDUCED.max_players == 4
    assert DeckSize.STANDARD.max_players == 6
    assert DeckSize.FULL.max_players == 8
    assert DeckSize.EXTENDED.max_players == 9


def test_parse_deck_size():
    assert DeckSize.parse(DeckSize.FULL) is DeckSize.FULL
    assert DeckSize.parse("reduced") is DeckSize.REDUCED
    assert DeckSize.parse("54") is DeckSize.EXTENDED
    assert DeckSize.parse(36) is DeckSize.STANDARD
    with pytest.raises(ValueError):
        DeckSize.parse(40)
    with pytest.raises(ValueError):
        DeckSize.parse("huge")


def test_deal():
    deck = Deck()
    top = deck.cards[-1]
    assert deck.deal() == [top]
    assert deck.size == 35

    top_five = deck.cards[-5:]
    assert deck.deal(5) == top_five
    assert deck.size == 30


def test_deal_runs_short():
    deck = Deck(DeckSize.REDUCED)
    assert deck.deal(0) == []
    assert len(deck.deal(30)) == 24
    assert deck.is_empty()
    assert deck.deal(3) == []


def test_shuffle_is_reproducible_with_seed():
    first = Deck(rng=random.Random(42)).shuffle().cards
    second = Deck(rng=random.Random(42)).shuffle().cards
    assert first == second
    assert sorted(first) == sorted(build_cards(DeckSize.STANDARD))


def test_bottom_card_and_reset():
    deck = Deck(DeckSize.REDUCED)
    bottom = deck.bottom_card
    assert bottom == deck.cards[0]

    deck.deal(24)
    assert deck.is_empty()
    assert deck.bottom_card is None

    deck.reset()
    assert deck.size == 24
    assert deck.bottom_card == bottom


def test_deck_str():
    assert str(Deck(DeckSize.FULL)) == "Deck of 52 cards"
    assert str(DeckSize.FULL) == "52 cards"
