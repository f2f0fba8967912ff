"""Coordinate helpers and win detection for m,n,k games."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from engine.tokens import Square

if TYPE_CHECKING:
    from engine.board import Board

Position = Tuple[int, int]
Delta = Tuple[int, int]

VERTICAL: Delta = (1, 0)
HORIZONTAL: Delta = (0, 1)
DIAGONAL: Delta = (1, 1)
ANTI_DIAGONAL: Delta = (1, -1)

AXES: Tuple[Delta, ...] = (VERTICAL, HORIZONTAL, DIAGONAL, ANTI_DIAGONAL)


def in_range(pos: Position, rows: int, cols: int) -> bool:
    """Return whether a position is inside a ``rows x cols`` board."""
    row, col = pos
    return 0 <= row < rows and 0 <= col < cols


def run_length(board: "Board", pos: Position, delta: Delta, value: Square) -> int:
    """
    Length of the run of ``value`` through ``pos`` along one axis.

    The pivot always counts, whatever it holds: callers evaluate a square
    that has just been (or is about to be considered) played.
    """
    grid = board.grid
    rows, cols = board.rows, board.cols
    wanted = int(value)
    count = 1
    for sign in (-1, 1):
        row, col = pos
        dr, dc = delta[0] * sign, delta[1] * sign
        while True:
            row += dr
            col += dc
            if not (0 <= row < rows and 0 <= col < cols):
                break
            if grid[row][col] != wanted:
                break
            count += 1
    return count


def is_winning_move(board: "Board", pos: Position, required: int, value: Square) -> bool:
    """Return whether ``value`` at ``pos`` completes a run of ``required`` tokens."""
    for delta in AXES:
        if run_length(board, pos, delta, value) >= required:
            return True
    return False
