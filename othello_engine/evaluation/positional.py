"""
Positional Evaluation

Phase-weighted combination of three terms, all from Black's perspective:

    positional: fixed weight per cell (corners good, cells next to corners
                bad), summed over black discs minus white discs
    stability:  stable black discs minus stable white discs
    mobility:   legal moves for Black minus legal moves for White

Weights by number of discs on the board:

    < 20     positional     + 5 * stability + 4 * mobility
    20..43   2 * positional + 5 * stability + mobility
    >= 44    2 * positional + 8 * stability

Mobility is dropped near the end where it says little about the result.

Reference:
    http://uguisu.skr.jp/othello/5-1.html (cell weights)
"""

import logging
from typing import Dict, Tuple

import numpy as np

from othello_engine.board.base import Board
from othello_engine.board.movegen import legal_moves, popcount
from othello_engine.board.types import Turn
from othello_engine.evaluation.base import Evaluator
from othello_engine.evaluation.stability import stable_discs

logger = logging.getLogger(__name__)

#fmt: off
# Indexed [y, x]
POSITION_WEIGHTS = np.array([
    [ 30, -12,   0,  -1,  -1,   0, -12,  30],
    [-12, -15,  -3,  -3,  -3,  -3, -15, -12],
    [  0,  -3,   0,  -1,  -1,   0,  -3,   0],
    [ -1,  -3,  -1,  -1,  -1,  -1,  -3,  -1],
    [ -1,  -3,  -1,  -1,  -1,  -1,  -3,  -1],
    [  0,  -3,   0,  -1,  -1,   0,  -3,   0],
    [-12, -15,  -3,  -3,  -3,  -3, -15, -12],
    [ 30, -12,   0,  -1,  -1,   0, -12,  30],
], dtype=np.int32)
#fmt: on

OPENING_END = 20
ENDGAME_START = 44


def _weight_masks(weights: np.ndarray) -> Tuple[Tuple[int, int], ...]:
    """Group cells by weight so scoring is a few popcounts per weight."""
    flat = weights.ravel()
    groups = []
    for weight in np.unique(flat):
        if weight == 0:
            continue
        mask = 0
        for index in np.flatnonzero(flat == weight):
            mask |= 1 << int(index)
        groups.append((int(weight), mask))
    return tuple(groups)


WEIGHT_MASKS = _weight_masks(POSITION_WEIGHTS)


def positional_score(black: int, white: int) -> int:
    score = 0
    for weight, mask in WEIGHT_MASKS:
        score += weight * (popcount(black & mask) - popcount(white & mask))
    return score


class PositionalEvaluator(Evaluator):
    """
    Cell weights + stable discs + mobility, weighted by game phase.

    Stable discs are cached per colour. The cache only ever holds discs that
    were stable in a position on the live game line, which stays true for
    every later position of that game, so it is a valid seed for any
    position the search reaches from there.

    Attributes:
        stable_cache: Known stable discs per colour
    """

    def __init__(self):
        self.stable_cache: Dict[Turn, int] = {Turn.BLACK: 0, Turn.WHITE: 0}

    def reset(self) -> None:
        self.stable_cache = {Turn.BLACK: 0, Turn.WHITE: 0}

    def advance(self, board: Board) -> None:
        """Grow the stable-disc cache from a position reached in the game."""
        black, white = board.masks()
        occupied = black | white
        self.stable_cache[Turn.BLACK] = stable_discs(black, occupied, self.stable_cache[Turn.BLACK])
        self.stable_cache[Turn.WHITE] = stable_discs(white, occupied, self.stable_cache[Turn.WHITE])
        logger.debug(
            f"Stable discs: black={popcount(self.stable_cache[Turn.BLACK])} "
            f"white={popcount(self.stable_cache[Turn.WHITE])}"
        )

    def stability(self, board: Board) -> int:
        """Stable black discs minus stable white discs."""
        black, white = board.masks()
        occupied = black | white
        stable_black = stable_discs(black, occupied, self.stable_cache[Turn.BLACK])
        stable_white = stable_discs(white, occupied, self.stable_cache[Turn.WHITE])
        return popcount(stable_black) - popcount(stable_white)

    def evaluate(self, board: Board) -> int:
        black, white = board.masks()
        discs = popcount(black | white)

        positional = positional_score(black, white)
        stability = self.stability(board)

        if discs >= ENDGAME_START:
            return 2 * positional + 8 * stability

        mobility = popcount(legal_moves(black, white)) - popcount(legal_moves(white, black))
        if discs < OPENING_END:
            return positional + 5 * stability + 4 * mobility
        return 2 * positional + 5 * stability + mobility
