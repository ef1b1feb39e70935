"""
Game configuration.

``GameSettings`` is immutable; build it directly or from a plain dict with
``GameSettings.from_config``, which fills in ``DEFAULT_CONFIG`` for missing
keys the same way every engine in this package merges its configuration.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from durak.common.deck import DeckSize
from durak.constants import DEFAULT_CONFIG


@dataclass(frozen=True)
class GameSettings:
    """
    Immutable settings for a Durak game.

    Attributes:
        deck_size: Deck preset; decides the cards in play and the seat limit
        cheats_allowed: Reported to the players, not used by the rules
        finish_after_first_win: Stop at the first winner instead of playing
            until a single player is left holding cards
    """

    deck_size: DeckSize = DeckSize.STANDARD
    cheats_allowed: bool = False
    finish_after_first_win: bool = True

    def __post_init__(self):
        if not isinstance(self.deck_size, DeckSize):
            object.__setattr__(self, "deck_size", DeckSize.parse(self.deck_size))

    @property
    def max_players(self) -> int:
        return self.deck_size.max_players

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "GameSettings":
        """
        Build settings from a configuration dict.

        Args:
            config: Options overriding ``DEFAULT_CONFIG``. ``deck_size`` may be
                a ``DeckSize``, its name or its card count.

        Returns:
            A new GameSettings instance

        Raises:
            ValueError: For unknown keys or an unknown deck size
        """
        merged = dict(DEFAULT_CONFIG)
        if config:
            unknown = set(config) - set(DEFAULT_CONFIG)
            if unknown:
                raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
            merged.update(config)

        return cls(
            deck_size=DeckSize.parse(merged["deck_size"]),
            cheats_allowed=bool(merged["cheats_allowed"]),
            finish_after_first_win=bool(merged["finish_after_first_win"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deck_size": self.deck_size.value,
            "max_players": self.max_players,
            "cheats_allowed": self.cheats_allowed,
            "finish_after_first_win": self.finish_after_first_win,
        }

    def describe(self) -> str:
        """One-line summary shown to players before a game."""
        cheats = "cheats are allowed" if self.cheats_allowed else "cheats are forbidden"
        goal = (
            "playing until the first win"
            if self.finish_after_first_win
            else "playing until one player remains"
        )
        return f"{self.deck_size}, {cheats}, {goal}"
