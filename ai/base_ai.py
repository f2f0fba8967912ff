"""Base decision centre interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from engine.rules import Position

if TYPE_CHECKING:
    from engine.game import GameState


class BaseAI(ABC):
    """Abstract move-choosing strategy contract, shared by humans and AIs."""

    @abstractmethod
    def choose_move(self, game: "GameState") -> Position:
        """Choose a position on the board for the next move.

        The live game state is passed in and may be mutated during the call,
        but must be restored before returning.
        """
        raise NotImplementedError
