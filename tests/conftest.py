"""
Pytest configuration and shared fixtures.
"""

import random

import pytest

from durak.common.card import Card, Rank, Suit
from durak.events import EventBus

_SUITS = {"C": Suit.CLUBS, "S": Suit.SPADES, "H": Suit.HEARTS, "D": Suit.DIAMONDS}
_RANKS = {"J": Rank.JACK, "Q": Rank.QUEEN, "K": Rank.KING, "A": Rank.ACE, "X": Rank.JOKER}


def parse_cards(text):
    """
    Build cards from short notation: rank then suit letter, e.g. "7H 10S AD".
    "X" is the joker rank.
    """
    result = []
    for part in text.split():
        rank_text, suit_text = part[:-1], part[-1]
        rank = _RANKS[rank_text] if rank_text in _RANKS else Rank(int(rank_text))
        result.append(Card(_SUITS[suit_text], rank))
    return result


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def cards():
    """The short card notation parser, e.g. ``cards("7H 10S")``."""
    return parse_cards


@pytest.fixture
def card():
    return lambda text: parse_cards(text)[0]


@pytest.fixture
def recorded_events():
    """(event_type, data) pairs emitted on the global bus during the test."""
    events = []
    EventBus.get_instance().on_any(events.append)
    return events
