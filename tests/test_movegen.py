"""
Unit Tests for Move Generation

The shift-and-mask generator is checked against the plain cell-by-cell walk
(is_placeable) on many positions from random games, for both sides.
"""

import pytest

from othello_engine.board import BitBoard, Move, Turn
from othello_engine.board.movegen import (
    FULL,
    flips,
    is_placeable,
    iter_moves,
    legal_moves,
    mobility,
    popcount,
    shift,
    squares,
)
from tests.helpers import random_line


class TestLegalMoves:
    """Tests for legal_moves() / iter_moves()."""

    def test_start_position(self):
        """Black has exactly D3, C4, F5, E6 at the start."""
        board = BitBoard()
        moves = list(iter_moves(board))

        assert moves == [Move.put(3, 2), Move.put(2, 3), Move.put(5, 4), Move.put(4, 5)]
        assert mobility(board, Turn.WHITE) == 4

    @pytest.mark.parametrize("seed", range(6))
    def test_matches_cell_walk(self, seed):
        """Bitboard generator agrees with the reference walk everywhere."""
        positions, _ = random_line(seed)
        for board in positions:
            for turn in (Turn.BLACK, Turn.WHITE):
                generated = {(m.x, m.y) for m in iter_moves(board, turn)}
                walked = {
                    (x, y)
                    for y in range(8)
                    for x in range(8)
                    if is_placeable(board, x, y, turn)
                }
                assert generated == walked, f"Mismatch for {turn.name} on\n{board}"

    def test_never_occupied(self):
        positions, _ = random_line(seed=21)
        for board in positions:
            black, white = board.masks()
            assert legal_moves(black, white) & (black | white) == 0
            assert legal_moves(white, black) & (black | white) == 0

    def test_move_list_is_restartable(self):
        """Iterating twice yields the same sequence."""
        moves = BitBoard().legal_moves()

        assert list(moves) == list(moves)
        assert len(moves) == 4
        assert Move.put(2, 3) in moves
        assert Move.PASS not in moves

    def test_empty_list_means_pass(self):
        board = BitBoard.from_rows([
            "OX......",
            "........",
            "........",
            "........",
            "........",
            "........",
            "........",
            "........",
        ], turn=Turn.BLACK)

        assert not board.legal_moves()
        assert board.is_legal(Move.PASS)
        assert not board.is_game_over(), "White can still play C1"

    def test_pass_illegal_when_moves_exist(self):
        assert not BitBoard().is_legal(Move.PASS)


class TestFlips:
    """Tests for flips()."""

    def test_flips_match_apply(self):
        """Applying a move changes exactly the flipped cells plus the placed one."""
        positions, _ = random_line(seed=5)
        for board in positions[:40]:
            black, white = board.masks()
            me, opp = (black, white) if board.turn is Turn.BLACK else (white, black)
            for move in board.legal_moves():
                captured = flips(me, opp, move.square)
                after = board.copy()
                after.apply_move(move)

                assert captured != 0
                assert captured & opp == captured
                changed = (after.masks()[0] ^ black) | (after.masks()[1] ^ white)
                assert changed == captured | (1 << move.square)

    def test_no_flips_for_illegal_square(self):
        black, white = BitBoard().masks()
        assert flips(black, white, 0) == 0


class TestBitHelpers:
    def test_shift_drops_high_bits(self):
        assert shift(1 << 63, 1) == 0
        assert shift(FULL, 8) == FULL ^ 0xFF
        assert shift(1 << 8, -8) == 1

    def test_squares_ascending(self):
        assert list(squares((1 << 5) | (1 << 0) | (1 << 63))) == [0, 5, 63]

    def test_popcount(self):
        assert popcount(0) == 0
        assert popcount(FULL) == 64
