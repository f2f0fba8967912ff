import logging
import random

import pytest

from ai.negamax_ai import WIN_SCORE, AlphaBetaAI, NegamaxAI
from engine.game import GameState
from engine.tokens import PlayerId, next_player

AI_CLASSES = [NegamaxAI, AlphaBetaAI]


def random_position(rng, rows, cols, win_length, min_moves, max_moves):
    """Alternate random moves, stopping before anyone wins."""
    game = GameState(rows, cols, win_length, announce=lambda _: None)
    player = PlayerId.FIRST
    for _ in range(rng.randint(min_moves, max_moves)):
        moves = list(game.iter_moves())
        if len(moves) <= 1:
            break
        move = rng.choice(moves)
        game.apply_move(move, player)
        if game.is_winning_move_for(move, player):
            game.undo_move(move)
            break
        game.move_count += 1
        player = next_player(player)
    return game


class TestSearchBasics:
    @pytest.mark.parametrize("ai_class", AI_CLASSES)
    @pytest.mark.parametrize("depth", [1, 3])
    def test_takes_immediate_win(self, make_game, ai_class, depth):
        game = make_game(["XX ", "OO ", "   "])
        result = ai_class(depth, PlayerId.FIRST).search(game)
        assert result.move == (0, 2)
        assert result.score == WIN_SCORE - depth + 1

    @pytest.mark.parametrize("ai_class", AI_CLASSES)
    @pytest.mark.parametrize("depth", [2, 4])
    def test_blocks_opponent_threat(self, make_game, ai_class, depth):
        game = make_game(["XX ", " O ", "   "])
        assert ai_class(depth, PlayerId.SECOND).choose_move(game) == (0, 2)

    @pytest.mark.parametrize("ai_class", AI_CLASSES)
    def test_board_unchanged_after_search(self, make_game, ai_class):
        game = make_game(["X   ", " O  ", "  X ", "    "], win_length=3)
        before = game.board.copy()
        ai_class(4, PlayerId.SECOND).choose_move(game)
        assert game.board == before
        assert game.move_count == 3

    @pytest.mark.parametrize("ai_class", AI_CLASSES)
    def test_last_empty_square(self, make_game, ai_class):
        game = make_game(["XOX", "XOO", "OX "])
        assert ai_class(3, PlayerId.FIRST).choose_move(game) == (2, 2)

    @pytest.mark.parametrize("ai_class", AI_CLASSES)
    def test_full_board_has_no_move(self, make_game, ai_class):
        game = make_game(["XOX", "XOO", "OXX"])
        with pytest.raises(RuntimeError):
            ai_class(2, PlayerId.SECOND).choose_move(game)

    @pytest.mark.parametrize("ai_class", AI_CLASSES)
    def test_rejects_zero_depth(self, ai_class):
        with pytest.raises(ValueError):
            ai_class(0, PlayerId.FIRST)

    def test_depth_cut_off_scores_neutral(self, make_game):
        game = make_game(["    ", "    ", "    ", "    "])
        result = NegamaxAI(2, PlayerId.FIRST).search(game)
        assert result.score == 0
        assert result.move == (0, 0)

    def test_announces_forced_win(self, make_game, messages):
        game = make_game(["XX ", "OO ", "   "])
        AlphaBetaAI(2, PlayerId.FIRST).choose_move(game)
        assert messages[-2] == "negamax-ab plays at {0,2} (999)"
        assert messages[-1] == "You'll lose!"

    def test_announces_lost_position(self, make_game, messages):
        # O threatens (0,2) and (2,0); X cannot block both.
        game = make_game(["OO ", "OX ", "  X"])
        result = NegamaxAI(2, PlayerId.FIRST).search(game)
        assert result.score < -950
        assert messages[-1] == "You should win..."

    def test_trace_logs_search_tree(self, make_game, caplog):
        game = make_game(["XX ", "OO ", "   "])
        with caplog.at_level(logging.DEBUG, logger="ai.negamax_ai"):
            AlphaBetaAI(2, PlayerId.SECOND, trace=True).choose_move(game)
        assert any("wins =>" in record.getMessage() for record in caplog.records)

    def test_no_trace_without_flag(self, make_game, caplog):
        game = make_game(["XX ", "OO ", "   "])
        with caplog.at_level(logging.DEBUG, logger="ai.negamax_ai"):
            NegamaxAI(2, PlayerId.SECOND).choose_move(game)
        assert not any("=>" in record.getMessage() for record in caplog.records)


class TestAlphaBetaEquivalence:
    @pytest.mark.parametrize(
        "rows, cols, win_length, min_moves, max_moves, depths",
        [
            (3, 3, 3, 3, 6, (1, 2, 3, 5, 9)),
            (4, 4, 3, 4, 10, (1, 2, 3, 4)),
            (3, 5, 3, 4, 9, (1, 2, 3, 4)),
        ],
    )
    def test_same_score_as_plain_negamax(self, rows, cols, win_length, min_moves, max_moves, depths):
        rng = random.Random(1234)
        for _ in range(12):
            game = random_position(rng, rows, cols, win_length, min_moves, max_moves)
            before = game.board.copy()
            for depth in depths:
                plain = NegamaxAI(depth, game.current_player).search(game)
                pruned = AlphaBetaAI(depth, game.current_player).search(game)
                assert pruned.score == plain.score
                assert game.can_play_at(pruned.move)
                assert pruned.nodes <= plain.nodes
                assert game.board == before

    def test_pruning_visits_fewer_nodes(self):
        game = GameState(3, announce=lambda _: None)
        plain = NegamaxAI(9, PlayerId.FIRST).search(game)
        pruned = AlphaBetaAI(9, PlayerId.FIRST).search(game)
        assert plain.score == pruned.score == 0
        assert pruned.nodes < plain.nodes // 4


class TestPerfectPlay:
    def _play(self, first, second):
        game = GameState(3, announce=lambda _: None)
        game.push(first(9, PlayerId.FIRST), "first")
        game.push(second(9, PlayerId.SECOND), "second")
        return game.run()

    def test_alphabeta_self_play_draws(self):
        outcome = self._play(AlphaBetaAI, AlphaBetaAI)
        assert outcome.is_draw
        assert outcome.moves == 9

    def test_plain_negamax_first_never_loses(self):
        outcome = self._play(NegamaxAI, AlphaBetaAI)
        assert outcome.winner is not PlayerId.SECOND

    def test_punishes_a_blunder(self, make_game):
        # X opened in a corner, O answered on an edge: X has a forced win.
        game = make_game(["XO ", "   ", "   "])
        result = AlphaBetaAI(7, PlayerId.FIRST).search(game)
        assert result.score > 950
