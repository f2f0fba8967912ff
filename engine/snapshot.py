"""Text snapshots of a board, in the same format as ``Board.render_ascii``.

Rows are the lines starting with ``|``; square ``c`` of a row is the
character at index ``2 * c + 1``. Border and other lines are ignored, and
reading stops at a ``<<EOF`` line::

    +-+-+-+
    |X|X| |
    +-+-+-+
    |O| | |
    +-+-+-+
    | | | |
    +-+-+-+
    <<EOF
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from engine.board import Board
from engine.tokens import GLYPH_SQUARE

LOGGER = logging.getLogger(__name__)

END_MARKER = "<<EOF"


class SnapshotError(ValueError):
    """Raised when a board snapshot cannot be parsed."""


def parse_snapshot(lines: Iterable[str]) -> Tuple[Board, int]:
    """Parse snapshot lines into a board and the number of moves already played."""
    rows: List[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line == END_MARKER:
            break
        if line.startswith("|"):
            rows.append(line)

    if not rows:
        raise SnapshotError("Snapshot contains no board row")

    cols = (len(rows[0]) - 1) // 2
    if cols <= 0:
        raise SnapshotError("Snapshot rows have no square")
    for index, line in enumerate(rows):
        if (len(line) - 1) // 2 != cols:
            raise SnapshotError(f"Row {index} has {(len(line) - 1) // 2} squares, expected {cols}")

    board = Board(len(rows), cols)
    moves = 0
    for row, line in enumerate(rows):
        for col in range(cols):
            value = GLYPH_SQUARE.get(line[2 * col + 1])
            if value is not None:
                board.occupy((row, col), value)
                moves += 1
    LOGGER.debug("Parsed %dx%d snapshot with %d moves", board.rows, board.cols, moves)
    return board, moves


def load_snapshot(path: str | Path) -> Tuple[Board, int]:
    """Read a snapshot file."""
    text = Path(path).read_text(encoding="utf-8")
    return parse_snapshot(text.splitlines())


def dump_snapshot(board: Board) -> str:
    """Serialize a board so that ``parse_snapshot`` reads it back."""
    return f"{board.render_ascii()}\n{END_MARKER}\n"
