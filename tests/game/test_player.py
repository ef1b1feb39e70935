import pytest

from durak.common.card import Suit
from durak.common.io_interface import DummyIOInterface, TestIOInterface
from durak.game.errors import ContractViolation, InvalidDeckIndex
from durak.game.player import BotDifficulty, BotPlayer, HumanPlayer
from durak.game.table import Table


@pytest.fixture
def table():
    """A table with hearts as trump and an empty stock."""
    table = Table()
    table.stack_stock([], trump=Suit.HEARTS)
    return table


@pytest.fixture
def io():
    return TestIOInterface()


def test_player_hand_bookkeeping(cards):
    bot = BotPlayer(1)
    assert not bot.has_cards()
    assert bot.missing_cards_count() == 6

    bot.take_cards(cards("AH 6C 9S"))
    assert bot.cards == cards("6C 9S AH")
    assert bot.cards_count == 3
    assert bot.missing_cards_count() == 3

    bot.take_cards(cards("7C 7S 7H 7D"))
    assert bot.missing_cards_count() == 0

    assert bot.remove_card(0) == cards("6C")[0]
    with pytest.raises(InvalidDeckIndex) as excinfo:
        bot.remove_card(10)
    assert excinfo.value.index == 10


def test_show_cards(io, cards):
    player = HumanPlayer("Alice", io)
    player.take_cards(cards("7H"))
    player.show_cards()

    assert io.sent_messages[-1].startswith("Alice's cards:\n┌────┐")


def test_bot_names():
    assert BotPlayer(1).name == "Bot #1 (Easy)"
    assert BotPlayer(3, BotDifficulty.HARD).name == "Bot #3 (Hard)"
    assert isinstance(BotPlayer(2).io_interface, DummyIOInterface)
    assert str(BotPlayer(2)) == "Bot #2 (Easy)"


class TestHumanAttack:
    def test_first_attack_reprompts_until_valid(self, table, io, cards):
        player = HumanPlayer("Alice", io)
        player.take_cards(cards("9S 6C"))
        io.add_responses("5", "x", "pass", "1")

        assert player.play_attack_card(table, is_first_attack=True) == cards("9S")[0]
        assert player.cards == cards("6C")
        assert io.prompts == ["Choose the attack card: "] * 4
        assert "You don't have a card at #5 (you have only 2 cards)" in io.sent_messages
        assert "Unrecognized answer 'x'" in io.sent_messages
        # passing is not an option when opening the round
        assert "Unrecognized answer 'pass'" in io.sent_messages

    def test_continuation_pass(self, table, io, cards):
        table.take_attack_card(cards("7C")[0])
        player = HumanPlayer("Alice", io)
        player.take_cards(cards("9S"))
        io.add_responses("Pass")

        assert player.play_attack_card(table, is_first_attack=False) is None
        assert player.cards_count == 1
        assert io.prompts == ["Choose the attack card (or type 'pass'): "]

    def test_continuation_needs_rank_on_table(self, table, io, cards):
        table.take_attack_card(cards("7C")[0])
        player = HumanPlayer("Alice", io)
        player.take_cards(cards("9S 7D"))
        io.add_responses("0", "1")

        assert player.play_attack_card(table, is_first_attack=False) == cards("7D")[0]
        assert "There isn't any card with value '9' on the table" in io.sent_messages


class TestHumanDefense:
    def test_take(self, table, io, cards):
        table.take_attack_card(cards("7C")[0])
        player = HumanPlayer("Bob", io)
        player.take_cards(cards("9C"))
        io.add_responses("take")

        assert player.play_defense_card(table) is None
        assert player.cards_count == 1

    def test_take_instead_of_target(self, table, io, cards):
        table.take_attack_card(cards("7C")[0])
        player = HumanPlayer("Bob", io)
        player.take_cards(cards("9C"))
        io.add_responses("0", "take")

        assert player.play_defense_card(table) is None
        assert player.cards_count == 1

    def test_reprompts_until_valid(self, table, io, cards):
        table.take_attack_card(cards("7C")[0])
        player = HumanPlayer("Bob", io)
        player.take_cards(cards("9C 6C AH"))
        io.add_responses("0", "0", "1", "5", "1", "0")

        assert player.play_defense_card(table) == (0, cards("9C")[0])
        assert player.cards == cards("6C AH")
        assert "You can't beat 7♣ with 6♣" in io.sent_messages
        assert "There isn't an attack card to beat at #5" in io.sent_messages
        assert io.prompts[:2] == [
            "Choose the defense card (or type 'take'): ",
            "Choose the card to beat (or type 'take'): ",
        ]


class TestBotAttack:
    def test_first_attack_plays_first_card(self, table, cards):
        bot = BotPlayer(1)
        bot.take_cards(cards("AH 9S 6D"))

        assert bot.play_attack_card(table, is_first_attack=True) == cards("9S")[0]
        assert bot.cards == cards("AH 6D")

    def test_continuation_plays_first_matching_rank(self, table, cards):
        table.take_attack_card(cards("7C")[0])
        table.take_defense_card(cards("9C")[0], 0)
        bot = BotPlayer(1)
        bot.take_cards(cards("6S 9D 7H"))

        assert bot.play_attack_card(table, is_first_attack=False) == cards("7H")[0]
        assert bot.cards == cards("6S 9D")

    def test_passes_without_matching_rank(self, table, cards):
        table.take_attack_card(cards("7C")[0])
        bot = BotPlayer(1)
        bot.take_cards(cards("6S 9D"))

        assert bot.play_attack_card(table, is_first_attack=False) is None
        assert bot.cards_count == 2

    def test_full_attack_is_a_contract_violation(self, table, cards):
        for attack in cards("7C 7S 7H 7D 8C 8S"):
            table.take_attack_card(attack)
        bot = BotPlayer(1)
        bot.take_cards(cards("8D"))

        with pytest.raises(ContractViolation):
            bot.play_attack_card(table, is_first_attack=False)


class TestBotDefense:
    def test_prefers_lowest_plain_card(self, table, cards):
        table.take_attack_card(cards("7C")[0])
        bot = BotPlayer(1)
        bot.take_cards(cards("QC 8C 6H"))

        assert bot.play_defense_card(table) == (0, cards("8C")[0])
        assert bot.cards == cards("QC 6H")

    def test_falls_back_to_lowest_trump(self, table, cards):
        table.take_attack_card(cards("7C")[0])
        bot = BotPlayer(1)
        bot.take_cards(cards("8H 6H 9S"))

        assert bot.play_defense_card(table) == (0, cards("6H")[0])

    def test_beats_first_unbeaten_card(self, table, cards):
        table.take_attack_card(cards("7C")[0])
        table.take_defense_card(cards("9C")[0], 0)
        table.take_attack_card(cards("9S")[0])
        bot = BotPlayer(1)
        bot.take_cards(cards("8C 10S"))

        assert bot.play_defense_card(table) == (1, cards("10S")[0])

    def test_takes_when_nothing_beats(self, table, cards):
        table.take_attack_card(cards("AC")[0])
        bot = BotPlayer(1)
        bot.take_cards(cards("6C KS"))

        assert bot.play_defense_card(table) is None
        assert bot.cards_count == 2

    def test_nothing_to_beat_is_a_contract_violation(self, table, cards):
        bot = BotPlayer(1)
        bot.take_cards(cards("6C"))

        with pytest.raises(ContractViolation):
            bot.play_defense_card(table)
