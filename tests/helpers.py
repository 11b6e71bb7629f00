"""
Shared helpers for the test suite: reproducible random game lines.
"""

import random
from typing import List, Tuple

from othello_engine.board import BitBoard, Move


def random_line(seed: int, max_plies: int = 80) -> Tuple[List[BitBoard], List[Move]]:
    """
    Play random legal moves from the start position.

    Returns:
        (positions, moves) where positions[i] is the board before moves[i]
        and positions[-1] is the final board
    """
    rng = random.Random(seed)
    board = BitBoard()
    positions = [board.copy()]
    moves = []
    for _ in range(max_plies):
        if board.is_game_over():
            break
        legal = list(board.legal_moves())
        move = rng.choice(legal) if legal else Move.PASS
        board.apply_move(move)
        moves.append(move)
        positions.append(board.copy())
    return positions, moves


def random_position(seed: int, min_discs: int) -> BitBoard:
    """First position of a random line with at least `min_discs` discs (or the final one)."""
    positions, _ = random_line(seed)
    for board in positions:
        if board.count_both() >= min_discs:
            return board
    return positions[-1]
