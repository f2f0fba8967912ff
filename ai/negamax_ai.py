"""Negamax AIs, with and without alpha-beta pruning.

Only terminal positions are scored: a win found with ``depth`` plies of
search left is worth ``-WIN_SCORE + depth`` to the side that has to reply
to it, and both a depth cut-off and a full board are worth 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ai.base_ai import BaseAI
from engine.game import GameState
from engine.rules import Position
from engine.tokens import PlayerId, next_player

LOGGER = logging.getLogger(__name__)

WIN_SCORE = 1000
# Scores past this threshold mean a forced win was found.
VERDICT_THRESHOLD = 950


@dataclass(frozen=True)
class SearchResult:
    """Result of one root search."""

    move: Position
    score: int
    nodes: int


@dataclass
class _SearchStats:
    nodes: int = 0
    tracing: bool = False


class NegamaxAI(BaseAI):
    """Depth-limited negamax over every empty square."""

    label = "negamax"

    def __init__(self, depth: int, player_id: PlayerId, trace: bool = False) -> None:
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.player_id = player_id
        self.trace = trace

    def choose_move(self, game: GameState) -> Position:
        return self.search(game).move

    def search(self, game: GameState) -> SearchResult:
        """Score every root move and keep the first best one."""
        stats = self._new_stats()
        best_move: Optional[Position] = None
        best_score: Optional[int] = None
        for move in game.iter_moves():
            with game.trial_move(move, self.player_id):
                score = -self._negamax(game, self.depth - 1, self.player_id, move, stats)
            if best_score is None or score > best_score:
                best_score = score
                best_move = move

        if best_move is None or best_score is None:
            raise RuntimeError("No empty square left to play")
        result = SearchResult(move=best_move, score=best_score, nodes=stats.nodes)
        self._report(game, result)
        return result

    def _negamax(
        self,
        game: GameState,
        depth: int,
        who: PlayerId,
        current: Position,
        stats: _SearchStats,
    ) -> int:
        """Score the position after ``who`` played ``current``, seen by the other side."""
        stats.nodes += 1
        if game.is_winning_move_for(current, who):
            score = -WIN_SCORE + depth
            if stats.tracing:
                self._trace(depth, "%s by %s wins => %d", current, who.symbol, score)
            return score
        if depth == 0:
            if stats.tracing:
                self._trace(depth, "%s by %s leaf => 0", current, who.symbol)
            return 0

        adversary = next_player(who)
        best: Optional[int] = None
        for child in game.iter_moves():
            with game.trial_move(child, adversary):
                score = -self._negamax(game, depth - 1, adversary, child, stats)
            if best is None or score > best:
                best = score

        # No child: the board is full, a draw.
        if best is None:
            best = 0
        if stats.tracing:
            self._trace(depth, "%s by %s => %d", current, who.symbol, best)
        return best

    def _new_stats(self) -> _SearchStats:
        return _SearchStats(tracing=self.trace and LOGGER.isEnabledFor(logging.DEBUG))

    def _trace(self, depth: int, message: str, *args: object) -> None:
        LOGGER.debug("%s" + message, "    " * (self.depth - depth), *args)

    def _report(self, game: GameState, result: SearchResult) -> None:
        row, col = result.move
        game.announce(f"{self.label} plays at {{{row},{col}}} ({result.score})")
        if result.score > VERDICT_THRESHOLD:
            game.announce("You'll lose!")
        elif result.score < -VERDICT_THRESHOLD:
            game.announce("You should win...")
        LOGGER.debug(
            "%s depth=%d as %s searched %d nodes",
            self.label,
            self.depth,
            self.player_id.symbol,
            result.nodes,
        )


class AlphaBetaAI(NegamaxAI):
    """Negamax with alpha-beta pruning; picks a move of the same score as ``NegamaxAI``."""

    label = "negamax-ab"

    def search(self, game: GameState) -> SearchResult:
        stats = self._new_stats()
        alpha = -WIN_SCORE
        beta = WIN_SCORE
        best_move: Optional[Position] = None
        best_score: Optional[int] = None
        for move in game.iter_moves():
            with game.trial_move(move, self.player_id):
                score = -self._alphabeta(game, self.depth - 1, self.player_id, move, -beta, -alpha, stats)
            if best_score is None or score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score
                if alpha >= beta:
                    break

        if best_move is None or best_score is None:
            raise RuntimeError("No empty square left to play")
        result = SearchResult(move=best_move, score=best_score, nodes=stats.nodes)
        self._report(game, result)
        return result

    def _alphabeta(
        self,
        game: GameState,
        depth: int,
        who: PlayerId,
        current: Position,
        alpha: int,
        beta: int,
        stats: _SearchStats,
    ) -> int:
        stats.nodes += 1
        if game.is_winning_move_for(current, who):
            score = -WIN_SCORE + depth
            if stats.tracing:
                self._trace(depth, "%s by %s wins => %d", current, who.symbol, score)
            return score
        if depth == 0:
            if stats.tracing:
                self._trace(depth, "%s by %s leaf => 0", current, who.symbol)
            return 0

        adversary = next_player(who)
        best: Optional[int] = None
        for child in game.iter_moves():
            with game.trial_move(child, adversary):
                score = -self._alphabeta(game, depth - 1, adversary, child, -beta, -alpha, stats)
            if best is None or score > best:
                best = score
            if score > alpha:
                alpha = score
                if alpha >= beta:
                    if stats.tracing:
                        self._trace(depth, "%s cut-off at %s (%d >= %d)", current, child, alpha, beta)
                    break

        if best is None:
            best = 0
        if stats.tracing:
            self._trace(depth, "%s by %s => %d [%d, %d]", current, who.symbol, best, alpha, beta)
        return best
