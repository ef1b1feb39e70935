"""
The shared play area of a Durak game.

The ``Table`` owns every card that is not in a player's hand: the attack and
defense piles of the current round, the discard pile and the draw stock. It
is the only authority on which plays are legal. ``check_*`` methods raise a
``DurakError`` for an illegal play; ``take_*`` methods only move cards and
expect the caller to have checked first.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Set

from durak.common.card import Card, Rank, Suit
from durak.common.deck import Deck, DeckSize
from durak.constants import HAND_SIZE
from durak.game.errors import (
    AbsentCardValue,
    ContractViolation,
    IncorrectDefense,
    InvalidAttackIndex,
    NoCardsToBeat,
    TooManyAttackCards,
)

logger = logging.getLogger("durak.table")


class Table:
    """
    Attack, defense, discard and stock piles plus the trump suit.

    The stock's top is the end of its list; ``stock[0]`` is the bottom card
    whose suit is trump and which is drawn last. ``defense[i]`` is the card
    that beat ``attack[i]``.
    """

    def __init__(
        self,
        deck_size: DeckSize = DeckSize.STANDARD,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            deck_size: Preset deciding the composition of the stock
            rng: Random source used to shuffle the stock
        """
        self.deck_size = deck_size
        self.rng = rng or random.Random()
        self._attack: List[Card] = []
        self._defense: List[Card] = []
        self._discard: List[Card] = []
        self._stock = Deck(deck_size, rng=self.rng)
        # empty until reset()
        self._stock.cards = []
        self._trump: Optional[Suit] = None
        self._trump_card: Optional[Card] = None

    def reset(self) -> None:
        """
        Clear every pile, rebuild and shuffle the stock and reveal trump.
        """
        self._attack.clear()
        self._defense.clear()
        self._discard.clear()

        self._stock.reset().shuffle()
        self._trump_card = self._stock.bottom_card
        self._trump = self._trump_card.suit
        logger.debug(
            "Stock of %d cards shuffled, trump is %s (%s)",
            self._stock.size,
            self._trump,
            self._trump_card,
        )

    # --- read access ---

    @property
    def attack_cards(self) -> List[Card]:
        return list(self._attack)

    @property
    def defense_cards(self) -> List[Card]:
        return list(self._defense)

    @property
    def discarded_cards(self) -> List[Card]:
        return list(self._discard)

    @property
    def stock_cards(self) -> List[Card]:
        return list(self._stock.cards)

    @property
    def stock_count(self) -> int:
        return self._stock.size

    @property
    def trump(self) -> Optional[Suit]:
        return self._trump

    @property
    def trump_card(self) -> Optional[Card]:
        return self._trump_card

    @property
    def played_ranks(self) -> Set[Rank]:
        """Ranks currently on the attack or defense pile."""
        return {card.rank for card in self._attack + self._defense}

    @property
    def played_count(self) -> int:
        return len(self._attack) + len(self._defense)

    def first_unbeaten_index(self) -> Optional[int]:
        """Index of the oldest attack card still waiting for a defense."""
        if self.is_attack_beaten():
            return None
        return len(self._defense)

    # --- attack ---

    def is_attack_finished(self) -> bool:
        return len(self._attack) >= HAND_SIZE

    def check_attack_card(self, card: Card, is_first_attack: bool) -> None:
        """
        Check that a card may be added to the attack.

        Args:
            card: The proposed attack card
            is_first_attack: Whether this card opens the round

        Raises:
            TooManyAttackCards: The attack pile is already full
            AbsentCardValue: The card's rank is not on the table yet
        """
        if self.is_attack_finished():
            raise TooManyAttackCards(HAND_SIZE)
        if is_first_attack:
            return
        if card.rank not in self.played_ranks:
            raise AbsentCardValue(card.rank)

    def take_attack_card(self, card: Card) -> None:
        self._attack.append(card)

    # --- defense ---

    def is_attack_beaten(self) -> bool:
        return len(self._attack) == len(self._defense)

    def can_beat(self, defense_card: Card, attack_index: int) -> bool:
        """
        The trick rule.

        A non-trump card beats only a card of its own suit with a strictly
        higher rank. A trump beats any non-trump, and a lower trump.
        """
        attack_card = self._attack[attack_index]
        if defense_card.suit != self._trump:
            return (
                defense_card.suit == attack_card.suit
                and defense_card.rank > attack_card.rank
            )
        if attack_card.suit != self._trump:
            return True
        return defense_card.rank > attack_card.rank

    def check_defense_card(self, card: Card, attack_index: int) -> None:
        """
        Check that a card may beat the attack card at ``attack_index``.

        Raises:
            NoCardsToBeat: Every attack card is already beaten
            InvalidAttackIndex: No unbeaten attack card at that index
            IncorrectDefense: The card does not beat the attack card
        """
        if self.is_attack_beaten():
            raise NoCardsToBeat()
        if attack_index < len(self._defense) or attack_index >= len(self._attack):
            raise InvalidAttackIndex(attack_index)
        if not self.can_beat(card, attack_index):
            raise IncorrectDefense(card, self._attack[attack_index])

    def take_defense_card(self, card: Card, attack_index: int) -> None:
        self._defense.insert(attack_index, card)

    # --- transfers ---

    def discard_cards(self) -> None:
        """Move the played cards onto the discard pile."""
        self._discard.extend(self._attack)
        self._discard.extend(self._defense)
        self._attack.clear()
        self._defense.clear()

    def draw_stock_cards(self, count: int) -> List[Card]:
        """
        Take up to ``count`` cards off the top of the stock.

        Returns fewer cards when the stock runs short and an empty list when
        it is empty or ``count`` is not positive.
        """
        return self._stock.deal(count)

    def draw_played_cards(self) -> List[Card]:
        """
        Take every card off the attack and defense piles, attack cards first.
        """
        if not self._attack:
            raise ContractViolation("There isn't any attack card to draw")
        drawn = self._attack + self._defense
        self._attack = []
        self._defense = []
        return drawn

    def stack_stock(self, cards: List[Card], trump: Optional[Suit] = None) -> None:
        """
        Replace the stock with a prepared list, bottom card first.

        Used to replay recorded deals and to set up deterministic games. The
        trump suit defaults to the suit of the bottom card.
        """
        self._stock.cards = list(cards)
        self._trump_card = self._stock.bottom_card
        if trump is not None:
            self._trump = trump
        elif self._trump_card is not None:
            self._trump = self._trump_card.suit

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trump": str(self._trump) if self._trump else None,
            "trump_card": str(self._trump_card) if self._trump_card else None,
            "stock_remaining": self._stock.size,
            "discard_pile_size": len(self._discard),
            "attack_cards": [str(card) for card in self._attack],
            "defense_cards": [str(card) for card in self._defense],
        }

    def __str__(self) -> str:
        return f"Table(trump={self._trump}, stock={self._stock.size}, attack={len(self._attack)}, defense={len(self._defense)})"
