"""
Unit Tests for Evaluation Module

Tests for stable disc detection and the phase-weighted evaluator:
    - Edge and filled-line stability on hand-built positions
    - Soundness: cached stable discs never change colour later in the game
    - Monotonic cache growth along a game line
    - Phase formulas
"""

import pytest

from othello_engine.board import BitBoard, Turn
from othello_engine.board.movegen import legal_moves, popcount
from othello_engine.evaluation import DiscCountEvaluator, PositionalEvaluator
from othello_engine.evaluation.positional import (
    ENDGAME_START,
    OPENING_END,
    POSITION_WEIGHTS,
    positional_score,
)
from othello_engine.evaluation.stability import count_stable, edge_stable, stable_discs
from tests.helpers import random_line, random_position


def _bits(*cells):
    mask = 0
    for x, y in cells:
        mask |= 1 << (y * 8 + x)
    return mask


def _rows(top_row):
    return [top_row] + ["........"] * 7


class TestStableDiscs:
    """Tests for stable_discs() and edge_stable()."""

    def test_filled_top_row(self):
        """
        Top row B B W W B W W B, rest empty: every disc is stable, black
        through the corners and the full row alike.
        """
        board = BitBoard.from_rows(_rows("XXOOXOOX"))
        black, white = board.masks()
        occupied = black | white

        assert stable_discs(black, occupied) == _bits((0, 0), (1, 0), (4, 0), (7, 0))
        assert count_stable(black, occupied) == 4
        assert stable_discs(white, occupied) == white

    def test_corner_run(self):
        board = BitBoard.from_rows(_rows("XXX....."))
        black, white = board.masks()

        assert stable_discs(black, black | white) == black

    def test_gap_breaks_run(self):
        """A disc separated from the corner by an empty cell is not stable."""
        board = BitBoard.from_rows(_rows("X.X....."))
        black, white = board.masks()

        assert stable_discs(black, black | white) == _bits((0, 0))

    def test_edge_scan_from_both_corners(self):
        assert edge_stable(_bits((0, 0), (1, 0), (6, 0), (7, 0))) == _bits((0, 0), (1, 0), (6, 0), (7, 0))
        assert edge_stable(_bits((0, 7), (0, 6), (0, 5))) == _bits((0, 7), (0, 6), (0, 5))
        assert edge_stable(_bits((3, 0))) == 0

    def test_start_position_has_none(self):
        black, white = BitBoard().masks()
        assert stable_discs(black, black | white) == 0
        assert stable_discs(white, black | white) == 0

    def test_full_board_all_stable(self):
        positions, _ = random_line(seed=2)
        board = positions[-1]
        black, white = board.masks()
        if black | white != (1 << 64) - 1:
            pytest.skip("random line ended before the board filled")
        assert stable_discs(black, black | white) == black
        assert stable_discs(white, black | white) == white

    def test_seed_outside_own_ignored(self):
        """Seed bits not owned by the colour never show up in the result."""
        black, white = BitBoard().masks()
        assert stable_discs(black, black | white, seed=white) == 0

    @pytest.mark.parametrize("seed", range(5))
    def test_stable_discs_never_flip(self, seed):
        """A disc found stable keeps its colour for the rest of the game."""
        positions, _ = random_line(seed)
        for i, board in enumerate(positions):
            black, white = board.masks()
            stable_black = stable_discs(black, black | white)
            stable_white = stable_discs(white, black | white)
            for later in positions[i + 1:]:
                later_black, later_white = later.masks()
                assert stable_black & later_black == stable_black
                assert stable_white & later_white == stable_white


class TestPositionalEvaluator:
    """Tests for PositionalEvaluator."""

    @pytest.fixture
    def evaluator(self):
        return PositionalEvaluator()

    def test_start_position_is_zero(self, evaluator):
        assert evaluator.evaluate(BitBoard()) == 0

    def test_cell_weights(self):
        assert positional_score(_bits((0, 0)), 0) == 30
        assert positional_score(_bits((1, 1)), 0) == -15
        assert positional_score(0, _bits((7, 7))) == -30
        assert POSITION_WEIGHTS[0, 1] == POSITION_WEIGHTS[1, 0] == -12

    def test_weights_are_symmetric(self):
        assert (POSITION_WEIGHTS == POSITION_WEIGHTS.T).all()
        assert (POSITION_WEIGHTS == POSITION_WEIGHTS[::-1, :]).all()
        assert (POSITION_WEIGHTS == POSITION_WEIGHTS[:, ::-1]).all()

    def test_cache_grows_monotonically(self, evaluator):
        """advance() along a line only ever adds discs to the cache."""
        positions, _ = random_line(seed=9)
        previous = {Turn.BLACK: 0, Turn.WHITE: 0}
        for board in positions:
            evaluator.advance(board)
            black, white = board.masks()
            for turn, own in ((Turn.BLACK, black), (Turn.WHITE, white)):
                cached = evaluator.stable_cache[turn]
                assert cached & previous[turn] == previous[turn]
                assert cached & own == cached, "Cached discs must still be owned"
                previous[turn] = cached

    def test_cache_does_not_change_result(self, evaluator):
        """Seeding from the live line gives the same stability as a cold start."""
        positions, _ = random_line(seed=4)
        cold = PositionalEvaluator()
        for board in positions:
            evaluator.advance(board)
            assert evaluator.stability(board) == cold.stability(board)

    def test_evaluate_does_not_touch_cache(self, evaluator):
        board = BitBoard.from_rows(_rows("XXOOXOOX"))
        evaluator.evaluate(board)
        assert evaluator.stable_cache == {Turn.BLACK: 0, Turn.WHITE: 0}

    def test_reset_clears_cache(self, evaluator):
        evaluator.advance(BitBoard.from_rows(_rows("XXOOXOOX")))
        assert evaluator.stable_cache[Turn.BLACK] != 0

        evaluator.reset()

        assert evaluator.stable_cache == {Turn.BLACK: 0, Turn.WHITE: 0}

    @pytest.mark.parametrize("discs", [10, 30, 50])
    def test_phase_formula(self, evaluator, discs):
        board = random_position(seed=discs, min_discs=discs)
        black, white = board.masks()
        occupied = black | white
        positional = positional_score(black, white)
        stability = count_stable(black, occupied) - count_stable(white, occupied)
        mobility = popcount(legal_moves(black, white)) - popcount(legal_moves(white, black))

        count = popcount(occupied)
        if count < OPENING_END:
            expected = positional + 5 * stability + 4 * mobility
        elif count < ENDGAME_START:
            expected = 2 * positional + 5 * stability + mobility
        else:
            expected = 2 * positional + 8 * stability

        assert evaluator.evaluate(board) == expected

    def test_corner_beats_x_square(self, evaluator):
        corner = BitBoard.from_rows(_rows("X......."))
        x_square = BitBoard.from_rows(["........", ".X......"] + ["........"] * 6)
        assert evaluator.evaluate(corner) > evaluator.evaluate(x_square)


class TestDiscCountEvaluator:
    def test_disc_difference(self):
        board = BitBoard()
        board.apply_move(next(iter(board.legal_moves())))
        assert DiscCountEvaluator().evaluate(board) == 3
