"""Game settings loaded from a JSON config file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional


class GameConfig:
    """Container for board geometry and AI settings."""

    def __init__(self, payload: Optional[Dict[str, object]] = None) -> None:
        payload = payload or {}

        board = payload.get("board", {})
        self.rows = int(board.get("rows", 8))
        self.cols = int(board.get("cols", self.rows))
        self.win_length = int(board.get("win_length", 4))

        ai = payload.get("ai", {})
        self.negamax_depth = int(ai.get("negamax_depth", 4))
        self.alphabeta_depth = int(ai.get("alphabeta_depth", 6))
        self.trace = bool(ai.get("trace", False))

        self.validate()

    def validate(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.rows}x{self.cols}")
        if not 1 <= self.win_length <= min(self.rows, self.cols):
            raise ValueError(f"win_length {self.win_length} does not fit a {self.rows}x{self.cols} board")
        if self.negamax_depth < 1 or self.alphabeta_depth < 1:
            raise ValueError("Search depths must be at least 1")

    @classmethod
    def from_json(cls, path: str | Path) -> "GameConfig":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(payload)
