"""Game-wide constants and default configuration."""

# Cards each player is dealt, and the most attack cards one round can hold.
HAND_SIZE = 6

MIN_PLAYERS = 2

DEFAULT_CONFIG = {
    "deck_size": 36,
    "cheats_allowed": False,
    "finish_after_first_win": True,
}
