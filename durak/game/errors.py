"""
Errors raised by the Durak rules engine.

Two separate channels are used:

- ``DurakError`` and its subclasses are recoverable domain errors. The table
  raises them when a proposed play is illegal and callers may catch them,
  for instance to re-prompt a human player.
- ``ContractViolation`` signals a bug in the caller, such as a bot play that
  passed its own legality scan and still failed a table check. It is never
  caught by the engine and aborts the game.
"""

from durak.common.card import Rank


class DurakError(ValueError):
    """Base class for recoverable rule errors."""


class TooManyPlayers(DurakError):
    def __init__(self, max_players: int):
        self.max_players = max_players
        super().__init__(f"Can't add more than {max_players} players to this game")


class TooManyAttackCards(DurakError):
    def __init__(self, limit: int = 6):
        self.limit = limit
        super().__init__(f"Maximum {limit} attack cards")


class AbsentCardValue(DurakError):
    def __init__(self, rank: Rank):
        self.rank = rank
        super().__init__(f"There isn't any card with value '{rank}' on the table")


class NoCardsToBeat(DurakError):
    def __init__(self):
        super().__init__("There isn't any card to beat")


class InvalidAttackIndex(DurakError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"There isn't an attack card to beat at #{index}")


class InvalidDeckIndex(DurakError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"You don't have a card at #{index}")


class IncorrectDefense(DurakError):
    def __init__(self, defense_card=None, attack_card=None):
        self.defense_card = defense_card
        self.attack_card = attack_card
        if defense_card is not None and attack_card is not None:
            message = f"You can't beat {attack_card} with {defense_card}"
        else:
            message = "Given defense card can't beat given attack card"
        super().__init__(message)


class ContractViolation(RuntimeError):
    """A play that was supposed to be valid broke the rules."""
