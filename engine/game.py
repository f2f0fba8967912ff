"""Game state, seats, and the turn loop."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional

from engine.board import Board
from engine.rules import Position, is_winning_move
from engine.tokens import PlayerId, Square, next_player, player_for_move

if TYPE_CHECKING:
    from ai.base_ai import BaseAI

LOGGER = logging.getLogger(__name__)

MAX_SEATS = 2
_EMPTY = int(Square.EMPTY)


@dataclass(frozen=True)
class Player:
    """A seat: a decision centre and the name it plays under."""

    ai: "BaseAI"
    name: str

    def choose_move(self, game: "GameState") -> Position:
        return self.ai.choose_move(game)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class GameOutcome:
    """How a game ended."""

    winner: Optional[PlayerId]
    winner_name: Optional[str]
    moves: int
    last_move: Optional[Position]

    @property
    def is_draw(self) -> bool:
        return self.winner is None


class GameState:
    """
    Everything about a game in progress: the board, the number of moves
    played, the run length needed to win, and the seated players.
    """

    def __init__(
        self,
        rows: int = 3,
        cols: Optional[int] = None,
        win_length: Optional[int] = None,
        announce: Callable[[str], None] = print,
    ) -> None:
        self.board = Board(rows, cols)
        self.win_length = win_length if win_length else rows
        self._check_win_length()
        self.move_count = 0
        self.players: List[Player] = []
        self.announce = announce

    def _check_win_length(self) -> None:
        limit = min(self.board.rows, self.board.cols)
        if not 1 <= self.win_length <= limit:
            raise ValueError(f"win_length must be within [1, {limit}], got {self.win_length}")

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def current_player(self) -> PlayerId:
        return player_for_move(self.move_count)

    def is_full(self) -> bool:
        return self.move_count >= self.rows * self.cols

    def push(self, ai: "BaseAI", name: str) -> Player:
        """Seat a new player; seats are filled in turn order."""
        if len(self.players) >= MAX_SEATS:
            raise ValueError(f"A game seats at most {MAX_SEATS} players")
        player = Player(ai=ai, name=name)
        self.players.append(player)
        return player

    def seat(self, player_id: PlayerId) -> Player:
        return self.players[int(player_id) - 1]

    def load_board(self, board: Board) -> None:
        """Replace the board, e.g. with a loaded snapshot."""
        previous = self.board
        self.board = board
        try:
            self._check_win_length()
        except ValueError:
            self.board = previous
            raise
        self.move_count = board.occupied_count()
        LOGGER.info("Loaded %dx%d board with %d moves played", board.rows, board.cols, self.move_count)

    def can_play_at(self, pos: Position) -> bool:
        return self.board.is_empty(pos)

    def apply_move(self, pos: Position, player_id: PlayerId) -> bool:
        """Put a token of ``player_id`` at ``pos``; False if the square is taken."""
        return self.board.occupy(pos, player_id.square)

    def undo_move(self, pos: Position) -> None:
        self.board.clear(pos)

    @contextmanager
    def trial_move(self, pos: Position, player_id: PlayerId) -> Iterator[Position]:
        """Play a speculative move for the duration of the block."""
        if not self.apply_move(pos, player_id):
            raise RuntimeError(f"Cannot try {pos}: square is taken")
        try:
            yield pos
        finally:
            self.undo_move(pos)

    def iter_moves(self) -> Iterator[Position]:
        """Lazily yield every empty square in row-major order."""
        grid = self.board.grid
        for row in range(self.board.rows):
            cells = grid[row]
            for col in range(self.board.cols):
                if cells[col] == _EMPTY:
                    yield (row, col)

    def is_winning_move_for(self, pos: Position, player_id: PlayerId) -> bool:
        return is_winning_move(self.board, pos, self.win_length, player_id.square)

    def run(self) -> GameOutcome:
        """Play until someone wins or the board is full."""
        if len(self.players) != MAX_SEATS:
            raise RuntimeError(f"A game needs {MAX_SEATS} players, got {len(self.players)}")

        player_id = self.current_player
        last_move: Optional[Position] = None
        while not self.is_full():
            seat = self.seat(player_id)
            self.announce(f"Moves: {self.move_count} ; Player {int(player_id)}, {seat.name}")
            pos = seat.choose_move(self)
            if not self.board.contains(pos):
                raise RuntimeError(f"{seat.name} chose {pos}, outside the {self.rows}x{self.cols} board")

            if not self.apply_move(pos, player_id):
                LOGGER.debug("%s tried occupied square %s", seat.name, pos)
                self.announce("Cannot play there, try again.")
                continue

            last_move = pos
            self.announce(self.board.render_ascii())
            if self.is_winning_move_for(pos, player_id):
                self.move_count += 1
                self.announce(f"Player {int(player_id)}, {seat.name}, has won!")
                LOGGER.info("%s won after %d moves", seat.name, self.move_count)
                return GameOutcome(player_id, seat.name, self.move_count, pos)
            player_id = next_player(player_id)
            self.move_count += 1

        self.announce("Draw. Nobody wins.")
        LOGGER.info("Draw after %d moves", self.move_count)
        return GameOutcome(None, None, self.move_count, last_move)
