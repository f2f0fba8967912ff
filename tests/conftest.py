from __future__ import annotations

from typing import Callable, Iterable, List, Sequence

import pytest

from ai.base_ai import BaseAI
from engine.game import GameState
from engine.rules import Position
from engine.tokens import GLYPH_SQUARE


class ScriptedAI(BaseAI):
    """Plays a fixed list of positions, in order."""

    def __init__(self, moves: Iterable[Position]) -> None:
        self.moves: List[Position] = list(moves)
        self.calls = 0

    def choose_move(self, game: GameState) -> Position:
        self.calls += 1
        return self.moves.pop(0)


@pytest.fixture
def messages() -> List[str]:
    return []


@pytest.fixture
def make_game(messages: List[str]) -> Callable[..., GameState]:
    """Build a game from rows of ``X``/``O``/space glyphs."""

    def _make(rows: Sequence[str], win_length: int | None = None) -> GameState:
        game = GameState(len(rows), len(rows[0]), win_length, announce=messages.append)
        for r, line in enumerate(rows):
            for c, glyph in enumerate(line):
                value = GLYPH_SQUARE.get(glyph)
                if value is not None:
                    assert game.board.occupy((r, c), value)
                    game.move_count += 1
        return game

    return _make
