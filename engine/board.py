"""Board state for m,n,k games, square accessors, and state encoding."""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from engine.rules import Position, in_range
from engine.tokens import Square


class Board:
    """Fixed-size ``rows x cols`` grid of squares."""

    def __init__(self, rows: int = 3, cols: int | None = None) -> None:
        cols = rows if cols is None else cols
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        # Plain ints: the search reads this grid at every node.
        self.grid: List[List[int]] = [[int(Square.EMPTY) for _ in range(cols)] for _ in range(rows)]

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def copy(self) -> "Board":
        """Deep copy of the board."""
        cloned = Board.__new__(Board)
        cloned.rows = self.rows
        cloned.cols = self.cols
        cloned.grid = [list(row) for row in self.grid]
        return cloned

    def iter_positions(self) -> Iterable[Position]:
        """Yield all board positions in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)

    def contains(self, pos: Position) -> bool:
        return in_range(pos, self.rows, self.cols)

    def _check(self, pos: Position) -> None:
        if not in_range(pos, self.rows, self.cols):
            raise IndexError(f"Position {pos} is outside the {self.rows}x{self.cols} board")

    def cell_at(self, pos: Position) -> Square:
        """Return the occupancy of a square."""
        self._check(pos)
        row, col = pos
        return Square(self.grid[row][col])

    def is_empty(self, pos: Position) -> bool:
        self._check(pos)
        row, col = pos
        return self.grid[row][col] == Square.EMPTY

    def occupy(self, pos: Position, value: Square) -> bool:
        """
        Put a token on an empty square.

        Returns False, leaving the board untouched, if the square is taken.
        """
        self._check(pos)
        row, col = pos
        if self.grid[row][col] != Square.EMPTY:
            return False
        self.grid[row][col] = int(value)
        return True

    def clear(self, pos: Position) -> None:
        """Empty a square whatever it holds."""
        self._check(pos)
        row, col = pos
        self.grid[row][col] = int(Square.EMPTY)

    def count(self, value: Square) -> int:
        """Count squares holding ``value``."""
        return int(np.count_nonzero(self.encode_state() == int(value)))

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.encode_state()))

    def encode_state(self) -> np.ndarray:
        """Encode the board as a ``(rows, cols)`` int8 array of Square values."""
        return np.array(self.grid, dtype=np.int8).reshape(self.rows, self.cols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.shape == other.shape and self.grid == other.grid

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols})"

    def render_ascii(self) -> str:
        """Return the board as a bordered text grid."""
        border = "+" + "-+" * self.cols
        lines: List[str] = [border]
        for row in range(self.rows):
            cells = "".join(f"{Square(value).glyph}|" for value in self.grid[row])
            lines.append("|" + cells)
            lines.append(border)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render_ascii()
