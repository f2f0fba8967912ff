"""CLI entrypoint for playing m,n,k games between humans and AIs."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from ai.base_ai import BaseAI
from ai.human_ai import HumanAI
from ai.negamax_ai import AlphaBetaAI, NegamaxAI
from engine.config import GameConfig
from engine.game import GameState
from engine.snapshot import load_snapshot
from engine.tokens import PlayerId, next_player

LOGGER = logging.getLogger("mnk.cli")

PLAYER_KINDS = {
    "n": "negamax",
    "negamax": "negamax",
    "a": "negamax-ab",
    "negamax-ab": "negamax-ab",
    "h": "human",
    "human": "human",
}

SEAT_NAMES = {
    "negamax": "(AI-negamax)",
    "negamax-ab": "(AI-negamax-AB)",
    "human": "(Human)",
}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play an m,n,k game (tic-tac-toe and friends) in the terminal.")
    parser.add_argument(
        "players",
        nargs=2,
        choices=sorted(PLAYER_KINDS),
        metavar="PLAYER",
        help="Seat occupant, first then second: n|negamax, a|negamax-ab, h|human",
    )
    parser.add_argument("-b", "--board", type=str, default=None, help="Board snapshot to start from")
    parser.add_argument("--config", type=str, default=None, help="Path to game config JSON")
    parser.add_argument("--rows", type=int, default=None, help="Board rows")
    parser.add_argument("--cols", type=int, default=None, help="Board columns")
    parser.add_argument("--win-length", type=int, default=None, help="Aligned tokens needed to win")
    parser.add_argument("--negamax-depth", type=int, default=None, help="Plies searched by negamax")
    parser.add_argument("--alphabeta-depth", type=int, default=None, help="Plies searched by negamax-ab")
    parser.add_argument("--trace", action="store_true", help="Log the search tree (needs --log-level DEBUG)")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Python logging level")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.from_json(args.config) if args.config else GameConfig()
    if args.rows is not None:
        config.rows = args.rows
        if args.cols is None:
            config.cols = args.rows
    if args.cols is not None:
        config.cols = args.cols
    if args.win_length is not None:
        config.win_length = args.win_length
    if args.negamax_depth is not None:
        config.negamax_depth = args.negamax_depth
    if args.alphabeta_depth is not None:
        config.alphabeta_depth = args.alphabeta_depth
    if args.trace:
        config.trace = True
    config.validate()
    return config


def build_player(kind: str, player_id: PlayerId, config: GameConfig) -> BaseAI:
    if kind == "negamax":
        return NegamaxAI(depth=config.negamax_depth, player_id=player_id, trace=config.trace)
    if kind == "negamax-ab":
        return AlphaBetaAI(depth=config.alphabeta_depth, player_id=player_id, trace=config.trace)
    if kind == "human":
        return HumanAI()
    raise ValueError(f"Unsupported player kind: {kind}")


def build_game(args: argparse.Namespace) -> GameState:
    config = load_config(args)
    game = GameState(config.rows, config.cols, config.win_length)
    if args.board:
        board, moves = load_snapshot(args.board)
        game.load_board(board)
        LOGGER.info("Starting from %s (%d moves, %s to play)", args.board, moves, game.current_player.symbol)

    player_id = PlayerId.FIRST
    for option in args.players:
        kind = PLAYER_KINDS[option]
        game.push(build_player(kind, player_id, config), SEAT_NAMES[kind])
        player_id = next_player(player_id)
    return game


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    try:
        game = build_game(args)
        print(game.board.render_ascii())
        outcome = game.run()
    except (OSError, ValueError, RuntimeError) as exc:
        LOGGER.error("%s", exc)
        return 1
    LOGGER.info("Game over after %d moves, winner=%s", outcome.moves, outcome.winner_name or "none")
    return 0


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
