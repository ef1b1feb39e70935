"""
Bot-versus-bot simulation.

Plays many games between bots and summarises how long games last and which
seats tend to win or end up as the durak. Useful for checking that rule
changes keep games finite and balanced.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from durak.common.deck import DeckSize
from durak.common.io_interface import DummyIOInterface, IOInterface, LoggingIOInterface
from durak.constants import MIN_PLAYERS
from durak.events import EngineEventType, EventEmitter
from durak.game.game import Game
from durak.game.settings import GameSettings

logger = logging.getLogger("durak.simulation")

# Greedy bots can in principle pass cards around forever once the stock is
# empty; games longer than this are counted as unfinished.
DEFAULT_MAX_ROUNDS = 500


@dataclass
class SimulationReport:
    """
    Results of a batch of simulated games.

    Attributes:
        seats: Number of bots at each table
        rounds: Rounds played in each finished game
        first_winner_seats: Seat of the first player to go out, per game
        loser_seats: Seat left holding cards, per game that reached one
        unfinished: Games stopped at the round limit
    """

    seats: int
    rounds: np.ndarray = field(default_factory=lambda: np.array([], dtype=int))
    first_winner_seats: List[int] = field(default_factory=list)
    loser_seats: List[int] = field(default_factory=list)
    unfinished: int = 0

    @property
    def games(self) -> int:
        return len(self.rounds) + self.unfinished

    @property
    def mean_rounds(self) -> float:
        return float(np.mean(self.rounds)) if len(self.rounds) else 0.0

    @property
    def std_rounds(self) -> float:
        return float(np.std(self.rounds)) if len(self.rounds) else 0.0

    @property
    def win_counts(self) -> np.ndarray:
        return np.bincount(
            np.asarray(self.first_winner_seats, dtype=int), minlength=self.seats
        )

    @property
    def loss_counts(self) -> np.ndarray:
        return np.bincount(np.asarray(self.loser_seats, dtype=int), minlength=self.seats)

    def summary(self) -> Dict[str, Any]:
        finished = len(self.rounds)
        win_rates = self.win_counts / finished if finished else np.zeros(self.seats)
        return {
            "games": self.games,
            "finished": finished,
            "unfinished": self.unfinished,
            "mean_rounds": round(self.mean_rounds, 2),
            "std_rounds": round(self.std_rounds, 2),
            "max_rounds": int(self.rounds.max()) if finished else 0,
            "first_win_rate_by_seat": [round(float(r), 3) for r in win_rates],
            "losses_by_seat": [int(c) for c in self.loss_counts],
        }

    def stat_lines(self) -> List[str]:
        stats = self.summary()
        lines = [
            f"Games played: {stats['games']} ({stats['unfinished']} unfinished)",
            f"Rounds per game: {stats['mean_rounds']:.2f} ± {stats['std_rounds']:.2f}"
            f" (longest {stats['max_rounds']})",
        ]
        for seat, rate in enumerate(stats["first_win_rate_by_seat"]):
            lines.append(
                f"Seat {seat}: first out in {rate * 100:.1f}% of games, "
                f"durak {stats['losses_by_seat'][seat]} times"
            )
        return lines

    def display_stats(self, io_interface: IOInterface) -> None:
        for line in self.stat_lines():
            io_interface.output(line)

    async def log_stats(self, io_interface: LoggingIOInterface) -> None:
        """Append the statistics to a log file without blocking the loop."""
        for line in self.stat_lines():
            await io_interface.output_async(line)


def simulate(
    games: int,
    bots: int = 2,
    deck_size: DeckSize = DeckSize.STANDARD,
    finish_after_first_win: bool = False,
    seed: Optional[int] = None,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
) -> SimulationReport:
    """
    Play ``games`` bot-only games and collect their results.

    Args:
        games: Number of games to play
        bots: Bots per table, at least 2 and at most the deck's seat limit
        deck_size: Deck preset for every game
        finish_after_first_win: Stop each game at its first winner
        seed: Seed for the shared random source, for reproducible batches
        max_rounds: Round limit per game

    Returns:
        A SimulationReport

    Raises:
        ValueError: If the table can't seat ``bots`` players
    """
    if not MIN_PLAYERS <= bots <= deck_size.max_players:
        raise ValueError(
            f"Games with {deck_size} seat {MIN_PLAYERS} to "
            f"{deck_size.max_players} bots, got {bots}"
        )
    rng = random.Random(seed)
    settings = GameSettings(
        deck_size=deck_size, finish_after_first_win=finish_after_first_win
    )
    # a private emitter keeps thousands of games off the global bus
    event_bus = EventEmitter()
    io_interface = DummyIOInterface()

    rounds: List[int] = []
    report = SimulationReport(seats=bots)

    for number in range(games):
        game = Game(settings, io_interface=io_interface, rng=rng, event_bus=event_bus)
        for _ in range(bots):
            game.add_bot()

        won: List[Dict[str, Any]] = []
        unsubscribe = event_bus.on(EngineEventType.PLAYER_WON, won.append)
        try:
            game.start(max_rounds=max_rounds)
        finally:
            unsubscribe()

        if not game.is_over():
            report.unfinished += 1
            logger.debug("Simulated game %d hit the round limit", number)
            continue

        rounds.append(game.rounds_played)
        if won:
            report.first_winner_seats.append(won[0]["seat"])
        loser = game.loser
        if loser is not None:
            report.loser_seats.append(game.players.index(loser))

    report.rounds = np.asarray(rounds, dtype=int)
    logger.info(
        "Simulated %d games: %.2f rounds on average",
        report.games,
        report.mean_rounds,
    )
    return report
