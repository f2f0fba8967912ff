"""Decision centre that asks a human at the console."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ai.base_ai import BaseAI
from engine.game import GameState
from engine.rules import Position

LOGGER = logging.getLogger(__name__)

PROMPT = "Where? (row col) "


class PlayerGaveUp(RuntimeError):
    """The human's input ran out before a move was entered."""


class HumanAI(BaseAI):
    """Reads ``row col`` pairs until a playable square is given."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.input_fn = input_fn
        self.output_fn = output_fn

    def choose_move(self, game: GameState) -> Position:
        while True:
            try:
                command = self.input_fn(PROMPT)
            except EOFError as exc:
                raise PlayerGaveUp("Ah ah, you gave up!") from exc

            pos = self._parse(command, game)
            if pos is not None:
                return pos

    def _parse(self, command: str, game: GameState) -> Optional[Position]:
        parts = command.split()
        if len(parts) != 2:
            self.output_fn("Expected two numbers: row col, try again.")
            return None
        try:
            row, col = int(parts[0]), int(parts[1])
        except ValueError:
            self.output_fn("Invalid numbers, try again.")
            return None

        if not 0 <= row < game.rows:
            self.output_fn(f"row out of range [0,{game.rows}[, try again.")
            return None
        if not 0 <= col < game.cols:
            self.output_fn(f"column out of range [0,{game.cols}[, try again.")
            return None
        if not game.can_play_at((row, col)):
            self.output_fn("Cannot play there, try again.")
            return None
        LOGGER.debug("Human entered %s", (row, col))
        return (row, col)
