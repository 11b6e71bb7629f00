"""
Alpha-Beta Search

Fixed-depth minimax with alpha-beta pruning, written in negamax form: every
node returns its value from the point of view of the side to move, and the
parent negates it. The evaluator always scores from Black's perspective, so
leaf scores are negated when White is to move. One comparison direction is
enough for both sides.

Details:
    - PASS is searched like any other move when the side to move has no
      placement, so forced passes need no special casing
    - Depth 0 or a double pass (game over) ends a line with the evaluator
      score of the frozen position
    - Moves are searched in generator order; no transposition table
    - Ties keep the first move reaching the best value

References:
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
    - Negamax: https://www.chessprogramming.org/Negamax
"""

import logging
from typing import List, Optional, Tuple

from othello_engine.board.base import Board
from othello_engine.board.types import Move, Turn
from othello_engine.evaluation.base import Evaluator
from othello_engine.evaluation.positional import PositionalEvaluator

logger = logging.getLogger(__name__)

INFINITY = 10 ** 9


def _sign(board: Board) -> int:
    return 1 if board.turn is Turn.BLACK else -1


def candidate_moves(board: Board) -> List[Move]:
    """Legal placements, or [PASS] if there are none."""
    moves = list(board.legal_moves())
    return moves if moves else [Move.PASS]


def alphabeta(
    board: Board,
    depth: int,
    alpha: int,
    beta: int,
    evaluator: Evaluator,
    nodes_searched: Optional[List[int]] = None,
) -> int:
    """
    Negamax search with alpha-beta pruning.

    Args:
        board: Position to search (not modified; children are copies)
        depth: Remaining plies
        alpha: Lower bound for the side to move
        beta: Upper bound for the side to move
        evaluator: Leaf evaluation (Black's perspective)
        nodes_searched: Optional mutable [count] incremented per node

    Returns:
        int: Value of the position for the side to move

    Raises:
        IllegalMoveError: Only if move generation is broken
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    if depth == 0 or board.is_game_over():
        return _sign(board) * evaluator.evaluate(board)

    best = -INFINITY
    for move in candidate_moves(board):
        child = board.copy()
        child.apply_move(move)

        score = -alphabeta(child, depth - 1, -beta, -alpha, evaluator, nodes_searched)

        if score > best:
            best = score
        if best > alpha:
            alpha = best
        if alpha >= beta:
            break  # cutoff
    return best


def find_best_move(
    board: Board,
    depth: int,
    evaluator: Evaluator,
) -> Tuple[Move, int, int]:
    """
    Find the best move for the side to move.

    Args:
        board: Current position
        depth: Search depth in plies (>= 1)
        evaluator: Position evaluation function

    Returns:
        Tuple of (best_move, score, nodes)
            - best_move: Best move found (PASS if no placement exists)
            - score: Value of best_move from Black's perspective
            - nodes: Number of positions visited

    Raises:
        ValueError: If depth < 1
    """
    if depth < 1:
        raise ValueError(f"depth must be >= 1, got {depth}")

    nodes = [1]
    sign = _sign(board)

    if board.is_game_over():
        return Move.PASS, evaluator.evaluate(board), nodes[0]

    best_move = None
    alpha = -INFINITY
    for move in candidate_moves(board):
        child = board.copy()
        child.apply_move(move)

        score = -alphabeta(child, depth - 1, -INFINITY, -alpha, evaluator, nodes)

        logger.debug(f"Move {move}: {sign * score}")
        if best_move is None or score > alpha:
            alpha = score
            best_move = move

    return best_move, sign * alpha, nodes[0]


class Searcher:
    """
    Midgame move selection by fixed-depth alpha-beta.

    Attributes:
        evaluator: Leaf evaluator (owned; its stable-disc cache is advanced
            with every position passed to search())
        depth: Search depth in plies
    """

    def __init__(self, evaluator: Optional[Evaluator] = None, depth: int = 4):
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        self.evaluator = evaluator if evaluator is not None else PositionalEvaluator()
        self.depth = depth

    def search(self, board: Board) -> Move:
        """Return the best move for the side to move in `board`."""
        self.evaluator.advance(board)
        move, score, nodes = find_best_move(board, self.depth, self.evaluator)
        logger.debug(f"Search depth {self.depth}: {move} (score {score}, {nodes} nodes)")
        return move

    def reset(self) -> None:
        self.evaluator.reset()

    def __repr__(self) -> str:
        return f"Searcher(depth={self.depth}, evaluator={self.evaluator!r})"
