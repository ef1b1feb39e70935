import dataclasses

import pytest

from durak.common.deck import DeckSize
from durak.game.settings import GameSettings
from durak.game.state import RoundStage, RoundState


def test_default_settings():
    settings = GameSettings()
    assert settings.deck_size is DeckSize.STANDARD
    assert settings.cheats_allowed is False
    assert settings.finish_after_first_win is True
    assert settings.max_players == 6


def test_settings_are_frozen():
    settings = GameSettings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.cheats_allowed = True


def test_deck_size_is_parsed():
    assert GameSettings(deck_size=52).deck_size is DeckSize.FULL
    assert GameSettings(deck_size="reduced").max_players == 4
    with pytest.raises(ValueError):
        GameSettings(deck_size=40)


def test_from_config_merges_defaults():
    settings = GameSettings.from_config({"deck_size": "54", "cheats_allowed": 1})
    assert settings == GameSettings(
        deck_size=DeckSize.EXTENDED,
        cheats_allowed=True,
        finish_after_first_win=True,
    )
    assert GameSettings.from_config() == GameSettings()


def test_from_config_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Unknown settings: players"):
        GameSettings.from_config({"players": 3})


def test_to_dict_and_describe():
    settings = GameSettings(deck_size=DeckSize.REDUCED, finish_after_first_win=False)
    assert settings.to_dict() == {
        "deck_size": 24,
        "max_players": 4,
        "cheats_allowed": False,
        "finish_after_first_win": False,
    }
    assert settings.describe() == (
        "24 cards, cheats are forbidden, playing until one player remains"
    )


def test_round_state_bookkeeping():
    rnd = RoundState(round_number=3, first_attacker=2, defender=0)
    assert rnd.attacker == rnd.last_attacker == 2
    assert rnd.stage is RoundStage.FIRST_ATTACK

    rnd.record_pass()
    rnd.record_pass()
    assert rnd.passes == 2

    rnd.record_play(1)
    assert rnd.passes == 0
    assert rnd.last_attacker == 1

    rnd.stage = RoundStage.RESOLUTION
    assert rnd.to_dict()["stage"] == "RESOLUTION"
    assert rnd.to_dict()["round_number"] == 3
