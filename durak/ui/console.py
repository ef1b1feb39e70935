"""
Console rendering of cards and of the table.

These helpers only build strings; callers pass them to an ``IOInterface``.
Every card is drawn as a small box with its index underneath, matching the
indices players type when choosing a card.

>>> from durak.common.card import Card, Rank, Suit
>>> print(render_cards([Card(Suit.HEARTS, Rank.SEVEN), Card(Suit.CLUBS, Rank.TEN)]))
┌────┐┌────┐
│ 7♥ ││10♣ │
└────┘└────┘
  0     1
"""

from typing import List, Optional, Sequence

from durak.common.card import Card, Rank

CELL_WIDTH = 6
_TOP = "┌────┐"
_BOTTOM = "└────┘"
_BLANK = " " * CELL_WIDTH


def card_label(card: Card) -> str:
    """Four-character face of a card: right-aligned rank plus suit symbol."""
    rank = "JK" if card.rank == Rank.JOKER else card.rank.rank_str
    return f"{rank:>2}{card.suit} "


def _box_rows(slots: Sequence[Optional[Card]]) -> List[str]:
    top, middle, bottom = [], [], []
    for card in slots:
        if card is None:
            top.append(_BLANK)
            middle.append(_BLANK)
            bottom.append(_BLANK)
        else:
            top.append(_TOP)
            middle.append(f"│{card_label(card)}│")
            bottom.append(_BOTTOM)
    return ["".join(top), "".join(middle), "".join(bottom)]


def _index_row(count: int) -> str:
    return "".join(f"{i:>3}   " for i in range(count)).rstrip()


def render_cards(cards: Sequence[Card]) -> str:
    """
    Draw a row of cards with their indices.

    :param cards: The cards to draw, e.g. a player's hand.
    :return: A multi-line string; empty hands render as "(no cards)".
    """
    if not cards:
        return "(no cards)"
    return "\n".join(_box_rows(cards) + [_index_row(len(cards))])


def render_table(table) -> str:
    """
    Draw the attack pile with the defense pile under it, slot by slot.

    :param table: A ``durak.game.table.Table``.
    :return: A multi-line string headed by the stock size and trump.
    """
    trump_card = f" ({table.trump_card})" if table.trump_card else ""
    lines = [f"Cards remain: {table.stock_count}, trump: {table.trump}{trump_card}"]

    attack = table.attack_cards
    defense = table.defense_cards
    if not attack:
        lines.append("(no cards on the table)")
        return "\n".join(lines)

    defense_slots: List[Optional[Card]] = [None] * len(attack)
    for i, card in enumerate(defense):
        defense_slots[i] = card

    lines.extend(_box_rows(attack))
    if defense:
        lines.extend(row.rstrip() for row in _box_rows(defense_slots))
    lines.append(_index_row(len(attack)))
    return "\n".join(lines)
