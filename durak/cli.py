import argparse
import asyncio
import logging
import random
import sys

from durak.common.deck import DeckSize
from durak.common.io_interface import ConsoleIOInterface, LoggingIOInterface
from durak.events import EventBus
from durak.game.errors import DurakError
from durak.game.game import Game
from durak.game.player import BotDifficulty, HumanPlayer
from durak.game.settings import GameSettings
from durak.simulation import DEFAULT_MAX_ROUNDS, simulate

logger = logging.getLogger("durak.cli")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play a game of Durak.")
    parser.add_argument(
        "-d",
        "--deck",
        type=int,
        choices=[size.value for size in DeckSize],
        default=DeckSize.STANDARD.value,
        help="number of cards in the deck (default: 36)",
    )
    parser.add_argument(
        "-b",
        "--bots",
        type=int,
        default=None,
        help="number of bots at the table (default: 1 next to a human player, "
        "2 with --bots-only or --simulate)",
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in BotDifficulty],
        default="easy",
        help="label for the bots (default: easy)",
    )
    parser.add_argument(
        "-n",
        "--name",
        default="Player",
        help="name of the human player (default: Player)",
    )
    parser.add_argument(
        "--bots-only",
        action="store_true",
        help="seat no human player and watch the bots play",
    )
    parser.add_argument(
        "--until-last",
        action="store_true",
        help="play until only one player holds cards instead of stopping at the first win",
    )
    parser.add_argument(
        "--cheats", action="store_true", help="allow cheats (announced only)"
    )
    parser.add_argument("--seed", type=int, help="seed for a reproducible game")
    parser.add_argument(
        "--simulate",
        type=int,
        metavar="GAMES",
        help="play GAMES bot-only games and print statistics",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="append the bots-only game narration or the simulation statistics "
        "to PATH instead of printing them",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)
    if args.log_file and not (args.bots_only or args.simulate is not None):
        parser.error("--log-file needs --bots-only or --simulate")
    if args.bots is None:
        args.bots = 2 if args.bots_only or args.simulate is not None else 1
    return args


def create_io_interface(args):
    """Create the IO interface based on the command line arguments."""
    if args.log_file and args.bots_only:
        return LoggingIOInterface(args.log_file)
    return ConsoleIOInterface()


def log_event(event):
    event_type, data = event
    logger.debug("%s %s", event_type, data)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    io_interface = create_io_interface(args)
    deck_size = DeckSize(args.deck)

    if args.simulate is not None:
        try:
            report = simulate(
                args.simulate,
                bots=args.bots,
                deck_size=deck_size,
                finish_after_first_win=not args.until_last,
                seed=args.seed,
            )
        except ValueError as exc:
            io_interface.output(str(exc))
            return 1
        if args.log_file:
            asyncio.run(report.log_stats(LoggingIOInterface(args.log_file)))
        else:
            report.display_stats(io_interface)
        return 0

    settings = GameSettings(
        deck_size=deck_size,
        cheats_allowed=args.cheats,
        finish_after_first_win=not args.until_last,
    )
    game = Game(settings, io_interface=io_interface, rng=random.Random(args.seed))

    try:
        if not args.bots_only:
            game.add_player(HumanPlayer(args.name, io_interface))
        difficulty = BotDifficulty[args.difficulty.upper()]
        for _ in range(args.bots):
            game.add_bot(difficulty)
    except DurakError as exc:
        io_interface.output(str(exc))
        return 1

    unsubscribe = EventBus.get_instance().on_any(log_event)
    try:
        played = game.start(max_rounds=DEFAULT_MAX_ROUNDS if args.bots_only else None)
    except (KeyboardInterrupt, EOFError):
        io_interface.output("\nGame aborted.")
        return 130
    finally:
        unsubscribe()
    return 0 if played else 1


if __name__ == "__main__":
    sys.exit(main())
