"""Player identities and square occupancy values."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict


class Square(IntEnum):
    """Occupancy of one board square."""

    EMPTY = 0
    FIRST = 1
    SECOND = 2

    @property
    def glyph(self) -> str:
        return SQUARE_GLYPH[self]


class PlayerId(IntEnum):
    """Seat identity, also used as turn-order key."""

    FIRST = 1
    SECOND = 2

    @property
    def square(self) -> Square:
        return Square(int(self))

    @property
    def symbol(self) -> str:
        return SQUARE_GLYPH[self.square]

    def opponent(self) -> "PlayerId":
        return next_player(self)


SQUARE_GLYPH: Dict[Square, str] = {
    Square.EMPTY: " ",
    Square.FIRST: "X",
    Square.SECOND: "O",
}

GLYPH_SQUARE: Dict[str, Square] = {
    "X": Square.FIRST,
    "O": Square.SECOND,
}


def next_player(current: PlayerId) -> PlayerId:
    """Return the other player."""
    return PlayerId.SECOND if current is PlayerId.FIRST else PlayerId.FIRST


def player_for_move(move_count: int) -> PlayerId:
    """Return who plays the move following ``move_count`` moves."""
    return PlayerId.FIRST if move_count % 2 == 0 else PlayerId.SECOND
