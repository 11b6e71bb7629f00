"""
Main Strategy (phase state machine)

Combines the engine's components by game phase:

    BOOK ──► SEARCH ──► ENDING ──► RANDOM
      └────────┴───────────┴──────────┘ (on unusable output)

    - BOOK: opening book while it has data for the current line
    - SEARCH: alpha-beta over the positional evaluator
    - ENDING: exact solver once count_both() >= 64 - ending_turns
    - RANDOM: legal-random fallback if a component hands back a move that
      is not legal on the current board

Transitions only move forward; reset() returns to BOOK.

The time budget passed to play() is logged but does not bound the search:
depth and the endgame threshold come from EngineConfig.
"""

import logging
import random
from enum import IntEnum
from typing import Optional

from othello_engine.board.base import Board
from othello_engine.board.types import Move
from othello_engine.book.book import BookData, OpeningBook
from othello_engine.book.format import BookFormatError
from othello_engine.config import EngineConfig
from othello_engine.evaluation.positional import PositionalEvaluator
from othello_engine.search.alphabeta import Searcher
from othello_engine.search.ending import EndgameSolver
from othello_engine.strategy.base import RandomStrategy, Strategy

logger = logging.getLogger(__name__)


class StrategyState(IntEnum):
    """Game phases, in the only order they may be entered."""
    BOOK = 0
    SEARCH = 1
    ENDING = 2
    RANDOM = 3


class MainStrategy(Strategy):
    """
    Book → search → endgame solver, with a random fallback.

    Attributes:
        config: Engine configuration
        state: Current phase
        book: Opening book cursor
        searcher: Midgame alpha-beta searcher
        ending: Endgame solver
        random: Fallback strategy
    """

    def __init__(self, config: Optional[EngineConfig] = None, book_data: Optional[BookData] = None):
        """
        Initialize the strategy.

        Args:
            config: Engine configuration (default: EngineConfig())
            book_data: Preloaded book bytes; if None the book is read from
                config.book_path (a missing file disables the book)
        """
        self.config = config if config is not None else EngineConfig()
        if book_data is None:
            book_data = BookData.load(self.config.book_path) if self.config.book_path else BookData()

        rng = random.Random(self.config.random_seed)
        self.book = OpeningBook(
            book_data,
            sample_size=self.config.book_sample_size,
            full_scan_size=self.config.book_full_scan_size,
            rng=rng,
        )
        self.searcher = Searcher(PositionalEvaluator(), depth=self.config.search_depth)
        self.ending = EndgameSolver(ending_opt=self.config.ending_opt)
        self.random = RandomStrategy(rng)
        self.state = StrategyState.BOOK

    def reset(self) -> None:
        self.book.reset()
        self.searcher.reset()
        self.ending.reset()
        self.random.reset()
        self.state = StrategyState.BOOK

    def _enter(self, state: StrategyState) -> None:
        if state > self.state:
            logger.info(f"Strategy phase {self.state.name} -> {state.name}")
            self.state = state

    def _usable(self, board: Board, move: Move, source: str) -> bool:
        if board.is_legal(move):
            return True
        logger.warning(f"{source} produced {move}, which is not legal here; falling back to random play")
        self._enter(StrategyState.RANDOM)
        return False

    def play(self, board: Board, last_move: Optional[Move] = None, time_ms: Optional[int] = None) -> Move:
        if time_ms is not None:
            logger.debug(f"Time budget: {time_ms} ms")

        if self.state is StrategyState.BOOK:
            try:
                result = self.book.gen(board.turn, last_move)
            except BookFormatError as e:
                logger.warning(f"Opening book is corrupt ({e}); leaving the book")
                self.book.runout = True
                result = None
            if result is None:
                self._enter(StrategyState.SEARCH)
            else:
                move, has_more = result
                if not has_more:
                    self._enter(StrategyState.SEARCH)
                if self._usable(board, move, "Opening book"):
                    logger.debug(f"Using opening book: {move}")
                    return move

        if self.state is StrategyState.SEARCH:
            if board.count_both() >= self.config.ending_threshold:
                self._enter(StrategyState.ENDING)
            else:
                move = self.searcher.search(board)
                if self._usable(board, move, "Search"):
                    logger.debug(f"Using searching strategy: {move}")
                    return move

        if self.state is StrategyState.ENDING:
            move = self.ending.search(board, board.turn, last_move)
            if self._usable(board, move, "Endgame solver"):
                logger.debug(f"Using ending strategy: {move}")
                return move

        logger.debug("Using random strategy")
        return self.random.play(board, last_move, time_ms)

    def __repr__(self) -> str:
        return f"MainStrategy(state={self.state.name})"


def make_strategy(config: Optional[EngineConfig] = None, book_data: Optional[BookData] = None) -> MainStrategy:
    return MainStrategy(config, book_data)
