"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits: Clubs, Spades, Hearts and
Diamonds. Declaration order is the order used when sorting a hand.

- `Rank`: An enum representing the ranks Two through Ace, plus a Joker rank
that outranks every other card.

- `Card`: An immutable (suit, rank) pair. Cards compare by suit first and rank
second; that order is only used to keep hands tidy, the trick rules live in
`durak.game.table`.
"""

from enum import Enum, unique
from functools import total_ordering


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    CLUBS = "♣"
    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"

    @property
    def order(self) -> int:
        """Position of the suit when sorting a hand."""
        return list(Suit).index(self)

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck. The value is the rank's strength.
    """

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14
    JOKER = 15

    @property
    def rank_str(self) -> str:
        """A string representation of the rank."""
        if self == Rank.JOKER:
            return "Joker"
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE):
            return self.name[0]
        return str(self.value)

    def __lt__(self, other):
        if isinstance(other, Rank):
            return self.value < other.value
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, Rank):
            return self.value <= other.value
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, Rank):
            return self.value > other.value
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, Rank):
            return self.value >= other.value
        return NotImplemented

    def __str__(self) -> str:
        return self.rank_str


@total_ordering
class Card:
    """
    Class representing a playing card.

    >>> card = Card(Suit.HEARTS, Rank.SEVEN)
    >>> print(card)
    7♥
    >>> Card(Suit.CLUBS, Rank.ACE) < Card(Suit.HEARTS, Rank.TWO)
    True
    """

    __slots__ = ("_suit", "_rank")

    def __init__(self, suit: Suit, rank: Rank):
        """
        Initialize a Card instance.

        :param suit: Suit of the card. Jokers carry a suit too so the trick
                     rules treat every card the same way.
        :param rank: Rank of the card (one of the Rank enums)
        """
        if not isinstance(suit, Suit):
            raise TypeError(f"Invalid suit: {suit}")
        if not isinstance(rank, Rank):
            raise TypeError(f"Invalid rank: {rank}")
        object.__setattr__(self, "_suit", suit)
        object.__setattr__(self, "_rank", rank)

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def sort_key(self):
        return (self._suit.order, self._rank.value)

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    def __eq__(self, other):
        """
        Checks if this card is equal to another card.

        :param other: The other card to compare to.
        :return: True if the cards have the same rank and suit, False otherwise.
        """
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, Card):
            return self.sort_key < other.sort_key
        return NotImplemented

    def __hash__(self):
        return hash((self._suit, self._rank))

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"Card(Suit.{self._suit.name}, Rank.{self._rank.name})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: A string representation of the card.
        """
        if self._rank == Rank.JOKER:
            return f"Joker{self._suit}"
        return f"{self._rank.rank_str}{self._suit}"
