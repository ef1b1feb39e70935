"""
This module contains classes to represent a hand of cards in a card game.

It includes an abstract base class `AbstractHand`, and a concrete implementation `Hand`.
A `Hand` keeps its cards sorted (suit first, then rank) after every change, so
the index a player sees on screen is stable until the hand changes again.

Classes:

AbstractHand: An abstract base class for a hand of cards.
Hand: A sorted hand of cards with index access.
"""
from abc import ABC
from typing import Iterable, List

from durak.common.card import Card


class AbstractHand(ABC):
    """
    An abstract base class for a hand of cards.

    This class holds the cards and reports how many there are.
    Subclasses should override the __repr__ and __str__ methods to provide a string representation of the hand.
    """

    def __init__(self):
        self._cards: List[Card] = []

    @property
    def cards(self) -> List[Card]:
        """Returns a copy of the cards in the hand."""
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)


class Hand(AbstractHand):
    """
    A hand of cards kept in sorted order.
    """

    def add_cards(self, cards: Iterable[Card]) -> None:
        """
        Adds several cards at once and re-sorts the hand.

        Args:
            cards: The cards to add.
        """
        self._cards.extend(cards)
        self.sort()

    def sort(self) -> None:
        self._cards.sort()

    def card_at(self, index: int) -> Card:
        """
        Returns the card at a display index without removing it.

        Raises:
            IndexError: If the index is negative or past the end of the hand.
        """
        if index < 0 or index >= len(self._cards):
            raise IndexError(index)
        return self._cards[index]

    def pop(self, index: int) -> Card:
        """
        Removes and returns the card at a display index.

        Raises:
            IndexError: If the index is negative or past the end of the hand.
        """
        card = self.card_at(index)
        del self._cards[index]
        return card

    def clear(self) -> None:
        self._cards.clear()

    def __repr__(self) -> str:
        """
        Returns a string representation of the hand for debugging.

        Returns:
            A string in the form "Hand([Card(...), ...])".
        """
        return f"Hand({self._cards!r})"

    def __str__(self) -> str:
        """
        Returns a string representation of the hand for display.

        Returns:
            A string in the form "7♥, 8♥, ...".
        """
        return ", ".join(str(card) for card in self._cards)
