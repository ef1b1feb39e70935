"""
The Durak game orchestrator.

``Game`` seats the players, deals, and drives rounds until its stop condition
is met. Every round runs the same state machine::

    FIRST_ATTACK -> DEFENSE -> (ATTACK_CONTINUATION <-> DEFENSE)* -> RESOLUTION

The first attacker opens with any card. The defender answers each attack card
as soon as it is played, or takes everything on the table. While the attack
pile has room, every other seat in turn order may throw in a card whose rank
is already on the table; the round ends when all of them have passed since
the last card was played, when the defender takes, or when the defender has
no cards left. At resolution the table is discarded (defense held) or handed
to the defender (defense failed), hands are refilled from the stock, and
anyone left without cards is recorded as a winner.

Decisions are requested from one player at a time; a player returning an
illegal play after its own checks is a ``ContractViolation`` and ends the
game with that exception.
"""

import logging
import random
import time
import uuid
from typing import Any, Dict, List, Optional

from durak.common.io_interface import DummyIOInterface, IOInterface
from durak.constants import HAND_SIZE, MIN_PLAYERS
from durak.events import EngineEventType, EventBus, EventEmitter
from durak.game.errors import ContractViolation, DurakError, TooManyPlayers
from durak.game.player import BotDifficulty, BotPlayer, Player
from durak.game.settings import GameSettings
from durak.game.state import RoundStage, RoundState
from durak.game.table import Table
from durak.ui.console import render_table

logger = logging.getLogger("durak.game")


class Game:
    """
    A game of Durak between two or more players.

    Args:
        settings: Game settings; defaults to a 36-card game stopping at the
            first winner
        io_interface: Where narration for people at the table goes
        rng: Random source for shuffling and for picking the first attacker;
            pass ``random.Random(seed)`` for a reproducible game
        event_bus: Emitter for game events; defaults to the global EventBus
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        io_interface: Optional[IOInterface] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        self.id = str(uuid.uuid4())
        self.settings = settings or GameSettings()
        self.io_interface = io_interface or DummyIOInterface()
        self.rng = rng or random.Random()
        self.event_bus = event_bus or EventBus.get_instance()
        self.table = Table(self.settings.deck_size, self.rng)
        self.players: List[Player] = []
        self.winners: List[Player] = []
        self.rounds_played = 0
        self.round: Optional[RoundState] = None
        self._next_first_attacker = 0
        self._bot_count = 0

        self._emit(
            EngineEventType.GAME_CREATED,
            {"settings": self.settings.to_dict()},
        )

    # --- roster ---

    @property
    def max_players_count(self) -> int:
        return self.settings.max_players

    @property
    def players_count(self) -> int:
        return len(self.players)

    @property
    def winners_count(self) -> int:
        return len(self.winners)

    @property
    def next_first_attacker(self) -> int:
        """Seat scheduled to open the next round."""
        return self._next_first_attacker

    @next_first_attacker.setter
    def next_first_attacker(self, seat: int) -> None:
        if not 0 <= seat < self.players_count:
            raise ValueError(f"No seat #{seat} at this table")
        self._next_first_attacker = seat

    def add_player(self, player: Player) -> None:
        """
        Seat a player.

        Raises:
            TooManyPlayers: The deck can't deal a full hand to another player
        """
        if self.players_count >= self.max_players_count:
            raise TooManyPlayers(self.max_players_count)
        self.players.append(player)
        self._narrate(f"{player.name} joined the game!")
        self._emit(
            EngineEventType.PLAYER_JOINED,
            {"player_name": player.name, "seat": len(self.players) - 1},
        )

    def add_bot(self, difficulty: BotDifficulty = BotDifficulty.EASY) -> BotPlayer:
        """
        Seat a new bot, numbered by how many bots this game has created.

        Raises:
            TooManyPlayers: The table is full
        """
        bot = BotPlayer(self._bot_count + 1, difficulty)
        self.add_player(bot)
        self._bot_count += 1
        return bot

    def players_with_cards(self) -> List[Player]:
        return [player for player in self.players if player.has_cards()]

    # --- game loop ---

    def prepare(self) -> None:
        """
        Shuffle, deal a full hand to every player and pick the first attacker.
        """
        self._narrate(f"Current settings: {self.settings.describe()}")
        self._narrate("Shuffling deck...")
        self.table.reset()
        self.winners = []
        self.rounds_played = 0
        self._emit(
            EngineEventType.SHUFFLE,
            {
                "stock_size": self.table.stock_count,
                "trump": str(self.table.trump),
                "trump_card": str(self.table.trump_card),
            },
        )

        self._narrate("Serving cards...")
        for player in self.players:
            player.hand.clear()
            self._deal(player, HAND_SIZE)
            player.show_cards()

        self._next_first_attacker = self.rng.randrange(self.players_count)
        self._narrate(
            f"{self.players[self._next_first_attacker].name} attacks first, "
            f"trump is {self.table.trump}"
        )

    def start(self, max_rounds: Optional[int] = None) -> bool:
        """
        Play a whole game.

        Args:
            max_rounds: Stop after this many rounds even if nobody has won;
                used by simulations to bound runaway games

        Returns:
            False if there were too few players to start, True once the game
            has been played to its end
        """
        if self.players_count < MIN_PLAYERS:
            missing = MIN_PLAYERS - self.players_count
            self._narrate(
                f"There are not enough players in this game to start (need {missing} more)"
            )
            logger.warning(
                "Game %s not started: %d player(s), %d needed",
                self.id,
                self.players_count,
                MIN_PLAYERS,
            )
            return False

        self.prepare()
        logger.info(
            "Game %s started with %d players (%s)",
            self.id,
            self.players_count,
            self.settings.describe(),
        )
        self._emit(
            EngineEventType.GAME_STARTED,
            {"players": [player.name for player in self.players]},
        )
        self._narrate("Game has started!")

        while not self.is_over():
            if max_rounds is not None and self.rounds_played >= max_rounds:
                logger.warning(
                    "Game %s stopped after %d rounds without a result",
                    self.id,
                    self.rounds_played,
                )
                break
            self.play_round()

        loser = self.loser
        logger.info(
            "Game %s ended after %d rounds, winners: %s",
            self.id,
            self.rounds_played,
            ", ".join(player.name for player in self.winners) or "none",
        )
        self._emit(
            EngineEventType.GAME_ENDED,
            {
                "rounds_played": self.rounds_played,
                "winners": [player.name for player in self.winners],
                "loser": loser.name if loser else None,
            },
        )
        if loser is not None:
            self._narrate(f"{loser.name} is the durak!")
        return True

    def is_over(self) -> bool:
        if len(self.players_with_cards()) < MIN_PLAYERS:
            return True
        if self.settings.finish_after_first_win:
            return self.winners_count >= 1
        return self.winners_count >= self.players_count - 1

    @property
    def loser(self) -> Optional[Player]:
        """The last player holding cards in a game played to the end."""
        if self.settings.finish_after_first_win or not self.is_over():
            return None
        holders = self.players_with_cards()
        return holders[0] if len(holders) == 1 else None

    # --- round state machine ---

    def play_round(self) -> RoundState:
        """
        Play one round and redistribute the cards.

        A ContractViolation is announced as an ERROR event before it
        propagates.

        Returns:
            The finished round's state
        """
        try:
            return self._play_round()
        except ContractViolation as exc:
            logger.error(
                "Game %s stopped in round %d: %s", self.id, self.rounds_played, exc
            )
            self._emit(
                EngineEventType.ERROR,
                {"error": str(exc), "round": self.rounds_played},
            )
            raise

    def _play_round(self) -> RoundState:
        first = self._seat_with_cards(self._next_first_attacker)
        defender = None
        if first is not None:
            defender = self._seat_with_cards((first + 1) % self.players_count, first)
        if first is None or defender is None:
            raise ContractViolation("A round needs two players holding cards")

        self.rounds_played += 1
        rnd = RoundState(
            round_number=self.rounds_played, first_attacker=first, defender=defender
        )
        self.round = rnd
        logger.debug(
            "Round %d: %s attacks %s",
            rnd.round_number,
            self.players[first].name,
            self.players[defender].name,
        )
        self._narrate("New round started! ──────────────────────")
        self._narrate(render_table(self.table))
        self._emit(EngineEventType.ROUND_STARTED, rnd.to_dict())

        if not self._process_attack(rnd, first, is_first_attack=True):
            raise ContractViolation(
                f"{self.players[first].name} didn't open the attack"
            )

        rnd.stage = RoundStage.DEFENSE
        if self._process_defense(rnd):
            self._continue_attack(rnd)
        else:
            rnd.defense_succeeded = False

        rnd.stage = RoundStage.RESOLUTION
        self._resolve(rnd)
        self.round = None
        return rnd

    def _continue_attack(self, rnd: RoundState) -> None:
        defender = self.players[rnd.defender]
        rnd.stage = RoundStage.ATTACK_CONTINUATION

        while not self.table.is_attack_finished():
            if not defender.has_cards():
                # the last defense used the defender's last card
                break

            seat = rnd.attacker
            if seat == rnd.defender:
                rnd.attacker = (seat + 1) % self.players_count
                continue

            self._narrate(render_table(self.table))
            if self._process_attack(rnd, seat, is_first_attack=False):
                rnd.record_play(seat)
                rnd.stage = RoundStage.DEFENSE
                if not self._process_defense(rnd):
                    rnd.defense_succeeded = False
                    return
                rnd.stage = RoundStage.ATTACK_CONTINUATION
            else:
                rnd.record_pass()
                if rnd.passes >= self.players_count - 1:
                    return
                rnd.attacker = (seat + 1) % self.players_count

    def _process_attack(self, rnd: RoundState, seat: int, is_first_attack: bool) -> bool:
        """Ask a seat for an attack card. Returns whether a card was played."""
        player = self.players[seat]
        if not player.has_cards():
            if is_first_attack:
                raise ContractViolation(f"{player.name} can't open with an empty hand")
            return False

        card = player.play_attack_card(self.table, is_first_attack)
        if card is None:
            if is_first_attack:
                raise ContractViolation(f"{player.name} passed on the first attack")
            self._narrate(f"{player.name} passed")
            self._emit(
                EngineEventType.PLAYER_ACTION,
                {"player_name": player.name, "action": "pass", "round": rnd.round_number},
            )
            return False

        try:
            self.table.check_attack_card(card, is_first_attack)
        except DurakError as exc:
            raise ContractViolation(
                f"{player.name} played {card} which is not a legal attack: {exc}"
            ) from exc

        self.table.take_attack_card(card)
        verb = "started the attack" if is_first_attack else "continued the attack"
        self._narrate(f"{player.name} {verb} with the {card}")
        self._emit(
            EngineEventType.CARD_PLAYED,
            {
                "player_name": player.name,
                "card": str(card),
                "role": "attack",
                "round": rnd.round_number,
            },
        )
        return True

    def _process_defense(self, rnd: RoundState) -> bool:
        """Ask the defender to beat the pending card. Returns whether they did."""
        player = self.players[rnd.defender]
        answer = player.play_defense_card(self.table)
        if answer is None:
            self._narrate(f"{player.name} is taking the cards")
            self._emit(
                EngineEventType.PLAYER_ACTION,
                {"player_name": player.name, "action": "take", "round": rnd.round_number},
            )
            return False

        attack_index, card = answer
        try:
            self.table.check_defense_card(card, attack_index)
        except DurakError as exc:
            raise ContractViolation(
                f"{player.name} played {card} which is not a legal defense: {exc}"
            ) from exc

        attack_card = self.table.attack_cards[attack_index]
        self.table.take_defense_card(card, attack_index)
        self._narrate(f"{player.name} beat the {attack_card} with the {card}")
        self._emit(
            EngineEventType.CARD_PLAYED,
            {
                "player_name": player.name,
                "card": str(card),
                "beats": str(attack_card),
                "role": "defense",
                "round": rnd.round_number,
            },
        )
        return True

    def _resolve(self, rnd: RoundState) -> None:
        defender = self.players[rnd.defender]
        cards_played = self.table.played_count

        if rnd.defense_succeeded:
            self._narrate(f"{defender.name} beat the attack")
            self.table.discard_cards()
        else:
            self._narrate(f"{defender.name} didn't beat the attack")
            defender.take_cards(self.table.draw_played_cards())

        cards_drawn = self._replenish(rnd)

        if rnd.defense_succeeded:
            self._next_first_attacker = rnd.defender
        else:
            self._next_first_attacker = (rnd.defender + 1) % self.players_count

        self._record_winners()
        self._emit(
            EngineEventType.ROUND_ENDED,
            {
                **rnd.to_dict(),
                "defender_name": defender.name,
                "cards_played": cards_played,
                "cards_drawn": cards_drawn,
                "stock_remaining": self.table.stock_count,
                "next_first_attacker": self._next_first_attacker,
            },
        )

    def _replenish(self, rnd: RoundState) -> int:
        """Refill hands from the stock, attackers first. Returns cards drawn."""
        drawn = 0
        for offset in range(self.players_count):
            seat = (rnd.first_attacker + offset) % self.players_count
            if seat == rnd.defender:
                continue
            drawn += self._deal(self.players[seat], self.players[seat].missing_cards_count())

        # a defender who took the table has already been refilled by it
        if rnd.defense_succeeded:
            defender = self.players[rnd.defender]
            drawn += self._deal(defender, defender.missing_cards_count())
        return drawn

    def _record_winners(self) -> None:
        for seat, player in enumerate(self.players):
            if player.has_cards() or player in self.winners:
                continue
            self.winners.append(player)
            self._narrate(
                f"{player.name} won! ({self.winners_count} winners in total)"
            )
            logger.info("%s won game %s", player.name, self.id)
            self._emit(
                EngineEventType.PLAYER_WON,
                {"player_name": player.name, "seat": seat, "place": self.winners_count},
            )

    # --- helpers ---

    def _seat_with_cards(self, start: int, exclude: Optional[int] = None) -> Optional[int]:
        for offset in range(self.players_count):
            seat = (start + offset) % self.players_count
            if seat != exclude and self.players[seat].has_cards():
                return seat
        return None

    def _deal(self, player: Player, count: int) -> int:
        cards = self.table.draw_stock_cards(count)
        if not cards:
            return 0
        player.take_cards(cards)
        self._emit(
            EngineEventType.CARD_DEALT,
            {
                "player_name": player.name,
                "count": len(cards),
                "stock_remaining": self.table.stock_count,
            },
        )
        return len(cards)

    def _narrate(self, message: str) -> None:
        self.io_interface.output(message)

    def _emit(self, event_type: EngineEventType, data: Dict[str, Any]) -> None:
        self.event_bus.emit(
            event_type, {"game_id": self.id, "timestamp": time.time(), **data}
        )

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the game for observers."""
        return {
            "game_id": self.id,
            "settings": self.settings.to_dict(),
            "rounds_played": self.rounds_played,
            "next_first_attacker": self._next_first_attacker,
            "round": self.round.to_dict() if self.round else None,
            "table": self.table.to_dict(),
            "players": [
                {
                    "name": player.name,
                    "hand_size": player.cards_count,
                    "is_winner": player in self.winners,
                }
                for player in self.players
            ],
            "winners": [player.name for player in self.winners],
        }
