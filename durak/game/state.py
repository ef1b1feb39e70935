"""
Per-round bookkeeping for the Durak round state machine.

A ``RoundState`` is created fresh at the start of every round by the game
orchestrator and thrown away once the cards have been redistributed.
"""

from dataclasses import dataclass
from typing import Any, Dict
from enum import Enum, auto


class RoundStage(Enum):
    """Stages of a single Durak round."""

    FIRST_ATTACK = auto()
    DEFENSE = auto()
    ATTACK_CONTINUATION = auto()
    RESOLUTION = auto()


@dataclass
class RoundState:
    """
    Mutable state of the round being played.

    Attributes:
        round_number: 1-based number of the round within the game
        first_attacker: Seat that opened the attack
        defender: Seat defending this round
        attacker: Seat currently asked to attack or throw in
        last_attacker: Last seat that put a card on the table
        passes: Consecutive passes since the last card was played
        defense_succeeded: Whether the defender beat everything
        stage: Current stage of the round
    """

    round_number: int
    first_attacker: int
    defender: int
    attacker: int = 0
    last_attacker: int = 0
    passes: int = 0
    defense_succeeded: bool = True
    stage: RoundStage = RoundStage.FIRST_ATTACK

    def __post_init__(self):
        self.attacker = self.first_attacker
        self.last_attacker = self.first_attacker

    def record_play(self, seat: int) -> None:
        """A seat put an attack card on the table."""
        self.last_attacker = seat
        self.passes = 0

    def record_pass(self) -> None:
        self.passes += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "first_attacker": self.first_attacker,
            "defender": self.defender,
            "attacker": self.attacker,
            "last_attacker": self.last_attacker,
            "passes": self.passes,
            "defense_succeeded": self.defense_succeeded,
            "stage": self.stage.name,
        }
