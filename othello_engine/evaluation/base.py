"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, we can swap between evaluators without
modifying the search algorithm.

Convention:
    - evaluate() returns an int from Black's perspective
    - Positive = Black advantage, Negative = White advantage
    - 0 for a perfectly balanced position

Evaluators may keep a cache that is only valid along one game line. The
owner of the evaluator drives it explicitly:
    - advance(board): feed a position that was actually reached in the game
    - reset(): forget everything (new game)
"""

from abc import ABC, abstractmethod

from othello_engine.board.base import Board
from othello_engine.board.types import Tile


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    Methods:
        evaluate(board): Returns position score (Black's perspective)
        advance(board): Update line-of-play caches (default: no-op)
        reset(): Drop all caches (default: no-op)
    """

    @abstractmethod
    def evaluate(self, board: Board) -> int:
        """
        Evaluate a position from Black's perspective.

        Args:
            board: Position to evaluate (never modified)

        Returns:
            int: Score, positive favours Black
        """

    def advance(self, board: Board) -> None:
        """Record a position reached on the live game line."""

    def reset(self) -> None:
        """Clear any cached state."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class DiscCountEvaluator(Evaluator):
    """Black discs minus white discs. Useful as a baseline and in tests."""

    def evaluate(self, board: Board) -> int:
        return board.count(Tile.BLACK) - board.count(Tile.WHITE)
