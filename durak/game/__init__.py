"""
Durak rules engine.

This package provides the table, the players and the round orchestrator for
the Durak card game.
"""

from durak.game.errors import (
    AbsentCardValue as AbsentCardValue,
    ContractViolation as ContractViolation,
    DurakError as DurakError,
    IncorrectDefense as IncorrectDefense,
    InvalidAttackIndex as InvalidAttackIndex,
    InvalidDeckIndex as InvalidDeckIndex,
    NoCardsToBeat as NoCardsToBeat,
    TooManyAttackCards as TooManyAttackCards,
    TooManyPlayers as TooManyPlayers,
)
from durak.game.game import Game as Game
from durak.game.player import (
    BotDifficulty as BotDifficulty,
    BotPlayer as BotPlayer,
    HumanPlayer as HumanPlayer,
    Player as Player,
)
from durak.game.settings import GameSettings as GameSettings
from durak.game.state import RoundStage as RoundStage, RoundState as RoundState
from durak.game.table import Table as Table

__all__ = [
    "AbsentCardValue",
    "BotDifficulty",
    "BotPlayer",
    "ContractViolation",
    "DurakError",
    "Game",
    "GameSettings",
    "HumanPlayer",
    "IncorrectDefense",
    "InvalidAttackIndex",
    "InvalidDeckIndex",
    "NoCardsToBeat",
    "Player",
    "RoundStage",
    "RoundState",
    "Table",
    "TooManyAttackCards",
    "TooManyPlayers",
]
