"""
This module contains the DeckSize presets and the Deck class, which represents a deck of cards.

>>> deck = Deck(DeckSize.STANDARD)
>>> deck.size
36
>>> deck.deal(2)
[Card(Suit.DIAMONDS, Rank.KING), Card(Suit.DIAMONDS, Rank.ACE)]
>>> deck.size
34
"""

import random
from enum import Enum
from typing import List, Optional

from durak.common.card import Card, Rank, Suit
from durak.constants import HAND_SIZE


class DeckSize(Enum):
    """
    Named deck sizes. The size decides which ranks take part in the game.
    """

    REDUCED = 24
    STANDARD = 36
    FULL = 52
    EXTENDED = 54

    @property
    def max_players(self) -> int:
        """How many players can be dealt a full hand from this deck."""
        return self.value // HAND_SIZE

    @property
    def lowest_rank(self) -> Rank:
        """The lowest rank dealt with this deck size."""
        return _LOWEST_RANK[self]

    @property
    def has_jokers(self) -> bool:
        return self is DeckSize.EXTENDED

    @classmethod
    def parse(cls, value) -> "DeckSize":
        """
        Accept a DeckSize, its name or its card count.

        >>> DeckSize.parse("standard")
        <DeckSize.STANDARD: 36>
        >>> DeckSize.parse(52)
        <DeckSize.FULL: 52>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and not value.isdigit():
            try:
                return cls[value.upper()]
            except KeyError as exc:
                raise ValueError(f"Unknown deck size: {value}") from exc
        try:
            return cls(int(value))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Unknown deck size: {value}") from exc

    def __str__(self) -> str:
        return f"{self.value} cards"


_LOWEST_RANK = {
    DeckSize.REDUCED: Rank.NINE,
    DeckSize.STANDARD: Rank.SIX,
    DeckSize.FULL: Rank.TWO,
    DeckSize.EXTENDED: Rank.TWO,
}

# Jokers carry a suit: one red, one black.
_JOKERS = [Card(Suit.HEARTS, Rank.JOKER), Card(Suit.SPADES, Rank.JOKER)]


def build_cards(deck_size: DeckSize) -> List[Card]:
    """
    Construct the unshuffled card list for a deck size.

    :param deck_size: The preset deciding which ranks are included.
    :return: A new list with exactly ``deck_size.value`` unique cards.
    """
    lowest = deck_size.lowest_rank
    cards = [
        Card(suit, rank)
        for suit in Suit
        for rank in Rank
        if rank is not Rank.JOKER and rank >= lowest
    ]
    if deck_size.has_jokers:
        cards.extend(_JOKERS)
    return cards


class Deck:
    """
    A class representing a deck of cards. The top of the deck is the end of
    the card list, so ``deal`` takes from the end and ``cards[0]`` is the
    bottom card.
    """

    def __init__(
        self,
        deck_size: DeckSize = DeckSize.STANDARD,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a Deck instance.

        :param deck_size: Preset deciding the composition of the deck.
        :param rng: Random source used for shuffling. Pass a seeded
                    ``random.Random`` for reproducible games.
        """
        self.deck_size = deck_size
        self.rng = rng or random.Random()
        self.cards: List[Card] = build_cards(deck_size)

    def shuffle(self):
        """
        Shuffle the cards in the deck.

        >>> deck = Deck(rng=random.Random(1))
        >>> before = set(deck.cards)
        >>> set(deck.shuffle().cards) == before
        True
        """
        self.rng.shuffle(self.cards)
        return self

    def deal(self, num_cards=1) -> List[Card]:
        """
        Take up to n cards off the top of the deck.

        The cards keep their deck order (bottom-most first). Fewer cards come
        back when the deck runs short, none when it is empty.

        :return: A list of card instances.
        """
        if num_cards <= 0 or self.is_empty():
            return []
        start = max(len(self.cards) - num_cards, 0)
        dealt = self.cards[start:]
        del self.cards[start:]
        return dealt

    @property
    def size(self) -> int:
        """
        Return the number of remaining cards in the deck.
        """
        return len(self.cards)

    @property
    def bottom_card(self) -> Optional[Card]:
        return self.cards[0] if self.cards else None

    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def reset(self):
        """
        Reset the deck by recreating the full, unshuffled card list.
        """
        self.cards = build_cards(self.deck_size)
        return self

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
