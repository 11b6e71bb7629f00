"""
Strategy Interface

A strategy picks a move for the side to move. It is told the opponent's
previous move so stateful components (opening book, endgame tree) can
follow the game without seeing every intermediate board.
"""

import random
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from othello_engine.board.base import Board
from othello_engine.board.types import Move


class Strategy(ABC):
    """Abstract move selector."""

    @abstractmethod
    def play(self, board: Board, last_move: Optional[Move] = None, time_ms: Optional[int] = None) -> Move:
        """
        Choose a move for board.turn.

        Args:
            board: Current position (not modified)
            last_move: Opponent's previous move, None at the start of a game
            time_ms: Remaining time budget in milliseconds (informational)

        Returns:
            A legal move (PASS only when no placement exists)
        """

    def reset(self) -> None:
        """Prepare for a new game."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class RandomStrategy(Strategy):
    """
    Plays the first legal cell of a shuffled cell order.

    The order is reshuffled on every reset, so each game gets a different
    (but within the game fixed) preference order.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self.points: List[Tuple[int, int]] = [(i % 8, i // 8) for i in range(64)]
        self.rng.shuffle(self.points)

    def reset(self) -> None:
        self.rng.shuffle(self.points)

    def play(self, board: Board, last_move: Optional[Move] = None, time_ms: Optional[int] = None) -> Move:
        legal = board.legal_moves()
        for x, y in self.points:
            move = Move(x, y)
            if move in legal:
                return move
        return Move.PASS
