"""
durak: a rules engine for the Durak card game.

Subpackages:

- ``durak.common``: cards, decks, hands and the IO interface
- ``durak.game``: the table, players and the round orchestrator
- ``durak.events``: the event bus the game reports to
- ``durak.ui``: console rendering
"""

__version__ = "0.1.0"
