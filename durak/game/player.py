"""
Players of a Durak game.

``Player`` is the capability the game orchestrator relies on: a hand of cards
plus two decisions, which card to attack with and how to answer an attack.
Two variants implement it:

- ``HumanPlayer`` asks a person through an ``IOInterface`` and re-prompts on
  any input mistake.
- ``BotPlayer`` picks the first legal card it finds, keeping trumps for when
  nothing else beats the attack.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from durak.common.card import Card
from durak.common.hand import Hand
from durak.common.io_interface import DummyIOInterface, IOInterface
from durak.constants import HAND_SIZE
from durak.game.errors import (
    AbsentCardValue,
    ContractViolation,
    DurakError,
    InvalidDeckIndex,
)
from durak.game.table import Table
from durak.ui.console import render_cards

logger = logging.getLogger("durak.player")

PASS_COMMAND = "pass"
TAKE_COMMAND = "take"

Defense = Tuple[int, Card]


class Player(ABC):
    """
    Abstract base class for a seat at the table.

    :param name: Display name of the player
    :param io_interface: Where the player's messages go
    """

    def __init__(self, name: str, io_interface: Optional[IOInterface] = None):
        self.name = name
        self.io_interface = io_interface or DummyIOInterface()
        self._hand = Hand()

    @property
    def hand(self) -> Hand:
        return self._hand

    @property
    def cards(self) -> List[Card]:
        """The player's cards in display order."""
        return self._hand.cards

    @property
    def cards_count(self) -> int:
        return len(self._hand)

    def has_cards(self) -> bool:
        return len(self._hand) > 0

    def missing_cards_count(self) -> int:
        """How many cards the player needs to be back at a full hand."""
        return max(HAND_SIZE - len(self._hand), 0)

    def take_cards(self, cards: Iterable[Card]) -> None:
        self._hand.add_cards(cards)

    def remove_card(self, index: int) -> Card:
        """
        Remove the card at a display index from the hand.

        :raises InvalidDeckIndex: If the player has no card at that index.
        """
        try:
            return self._hand.pop(index)
        except IndexError as exc:
            raise InvalidDeckIndex(index) from exc

    def show_cards(self) -> None:
        self.io_interface.output(f"{self.name}'s cards:\n{render_cards(self.cards)}")

    @abstractmethod
    def play_attack_card(self, table: Table, is_first_attack: bool) -> Optional[Card]:
        """
        Choose a card to attack with, removing it from the hand.

        :param table: The table, for checking which cards are playable
        :param is_first_attack: Whether this card opens the round; passing is
                                not allowed then
        :return: The card, or None to pass
        """

    @abstractmethod
    def play_defense_card(self, table: Table) -> Optional[Defense]:
        """
        Choose a card to beat one of the attack cards, removing it from the hand.

        :param table: The table holding the attack
        :return: ``(attack_index, card)``, or None to take the table's cards
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, cards={self.cards_count})"

    def __str__(self) -> str:
        return self.name


class HumanPlayer(Player):
    """
    A player driven by a person through an IOInterface.
    """

    def __init__(self, name: str, io_interface: IOInterface):
        super().__init__(name, io_interface)

    def _card_at(self, index: int) -> Optional[Card]:
        try:
            return self._hand.card_at(index)
        except IndexError:
            self.io_interface.output(
                f"{InvalidDeckIndex(index)} (you have only {self.cards_count} cards)"
            )
            return None

    def play_attack_card(self, table: Table, is_first_attack: bool) -> Optional[Card]:
        self.show_cards()
        prompt = (
            "Choose the attack card: "
            if is_first_attack
            else f"Choose the attack card (or type '{PASS_COMMAND}'): "
        )
        while True:
            choice = self.io_interface.read_choice(prompt)
            if isinstance(choice, str):
                if choice == PASS_COMMAND and not is_first_attack:
                    return None
                self.io_interface.output(f"Unrecognized answer '{choice}'")
                continue

            card = self._card_at(choice)
            if card is None:
                continue
            try:
                table.check_attack_card(card, is_first_attack)
            except DurakError as exc:
                self.io_interface.output(str(exc))
                continue
            return self.remove_card(choice)

    def play_defense_card(self, table: Table) -> Optional[Defense]:
        self.show_cards()
        while True:
            choice = self.io_interface.read_choice(
                f"Choose the defense card (or type '{TAKE_COMMAND}'): "
            )
            if isinstance(choice, str):
                if choice == TAKE_COMMAND:
                    return None
                self.io_interface.output(f"Unrecognized answer '{choice}'")
                continue

            card = self._card_at(choice)
            if card is None:
                continue

            target = self.io_interface.read_choice(
                f"Choose the card to beat (or type '{TAKE_COMMAND}'): "
            )
            if isinstance(target, str):
                if target == TAKE_COMMAND:
                    return None
                self.io_interface.output(f"Unrecognized answer '{target}'")
                continue
            try:
                table.check_defense_card(card, target)
            except DurakError as exc:
                self.io_interface.output(str(exc))
                continue
            return target, self.remove_card(choice)


class BotDifficulty(Enum):
    """Label shown in a bot's name. Every difficulty plays the same way."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    def __str__(self) -> str:
        return self.value


class BotPlayer(Player):
    """
    A greedy automated player.

    :param number: Seat number used in the bot's name, handed out by the game
    :param difficulty: Label for the bot's name
    """

    def __init__(
        self,
        number: int,
        difficulty: BotDifficulty = BotDifficulty.EASY,
        io_interface: Optional[IOInterface] = None,
    ):
        super().__init__(f"Bot #{number} ({difficulty})", io_interface)
        self.number = number
        self.difficulty = difficulty

    def play_attack_card(self, table: Table, is_first_attack: bool) -> Optional[Card]:
        for index, card in enumerate(self.cards):
            try:
                table.check_attack_card(card, is_first_attack)
            except AbsentCardValue:
                continue
            except DurakError as exc:
                raise ContractViolation(
                    f"{self.name} was asked to attack but can't: {exc}"
                ) from exc
            logger.debug("%s attacks with %s", self.name, card)
            return self.remove_card(index)
        return None

    def play_defense_card(self, table: Table) -> Optional[Defense]:
        target = table.first_unbeaten_index()
        if target is None:
            raise ContractViolation(f"{self.name} was asked to defend with nothing to beat")

        cards = self.cards
        plain_index = None
        trump_index = None
        for index in range(len(cards) - 1, -1, -1):
            card = cards[index]
            if not table.can_beat(card, target):
                continue
            if card.suit == table.trump:
                trump_index = index
            else:
                plain_index = index

        chosen = plain_index if plain_index is not None else trump_index
        if chosen is None:
            logger.debug("%s can't beat %s", self.name, table.attack_cards[target])
            return None
        return target, self.remove_card(chosen)
