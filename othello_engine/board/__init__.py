"""
Board Module

Board state, move application and legal-move generation.

Key Components:
    - Tile, Turn, Move: value types (Move.PASS / Move.put(x, y))
    - Board: abstract interface, rules implemented once on mask export
    - BitBoard: production implementation (two 64-bit masks)
    - ArrayBoard: list-backed reference implementation for cross-checks
    - movegen: shift-and-mask legal move / flip computation

Data Flow:
    Board.masks() → legal_moves(me, opp) → MoveList → Board.apply_move()
"""

from othello_engine.board.array_board import ArrayBoard, to_array_board
from othello_engine.board.base import Board
from othello_engine.board.bitboard import BitBoard
from othello_engine.board.movegen import MoveList, is_placeable, iter_moves, mobility
from othello_engine.board.types import (
    FILL_BYTE,
    PASS_BYTE,
    AlreadyOccupiedError,
    IllegalMoveError,
    Move,
    NoCaptureError,
    Tile,
    Turn,
    opposite,
)


def make_board() -> BitBoard:
    """Starting position on the default (bitboard) implementation."""
    return BitBoard()


__all__ = [
    'ArrayBoard',
    'BitBoard',
    'Board',
    'Move',
    'MoveList',
    'Tile',
    'Turn',
    'IllegalMoveError',
    'AlreadyOccupiedError',
    'NoCaptureError',
    'PASS_BYTE',
    'FILL_BYTE',
    'is_placeable',
    'iter_moves',
    'make_board',
    'mobility',
    'opposite',
    'to_array_board',
]
