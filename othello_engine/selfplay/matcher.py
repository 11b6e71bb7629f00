"""
Self-play matches between two strategies.

Each game gets fresh strategy objects; games are independent, so several
can run on a thread pool. The only thing shared between games is the
read-only BookData.
"""

import logging
import random
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import Callable, Optional

from tqdm import tqdm

from othello_engine.board.bitboard import BitBoard
from othello_engine.board.types import IllegalMoveError, Move, Tile, Turn
from othello_engine.book.book import BookData
from othello_engine.config import EngineConfig, MatchConfig
from othello_engine.selfplay.records import MatchResult, encode_record
from othello_engine.strategy.base import Strategy
from othello_engine.strategy.main import MainStrategy

logger = logging.getLogger(__name__)

StrategyFactory = Callable[[Optional[int]], Strategy]


def play_game(black: Strategy, white: Strategy, time_ms: Optional[int] = None) -> MatchResult:
    """
    Play one game until both sides pass in a row.

    Args:
        black: Strategy playing Black
        white: Strategy playing White
        time_ms: Time budget handed to each play() call

    Returns:
        MatchResult with every move played and the final disc counts

    Raises:
        IllegalMoveError: If a strategy returns an illegal move
    """
    board = BitBoard()
    black.reset()
    white.reset()
    players = {Turn.BLACK: black, Turn.WHITE: white}

    moves = []
    last_move: Optional[Move] = None
    passes = 0
    while passes < 2:
        move = players[board.turn].play(board.copy(), last_move, time_ms)
        board.apply_move(move)
        passes = passes + 1 if move.is_pass else 0
        moves.append(move)
        last_move = move

    return MatchResult(moves, board.count(Tile.BLACK), board.count(Tile.WHITE))


def default_factory(config: Optional[EngineConfig] = None, book_data: Optional[BookData] = None) -> StrategyFactory:
    """MainStrategy factory sharing one loaded book between games."""
    config = config if config is not None else EngineConfig()
    if book_data is None:
        book_data = BookData.load(config.book_path) if config.book_path else BookData()

    def factory(seed: Optional[int]) -> Strategy:
        return MainStrategy(replace(config, random_seed=seed), book_data)

    return factory


def run_matches(config: MatchConfig, factory: StrategyFactory, time_ms: Optional[int] = None) -> int:
    """
    Play config.games games and append their records to config.output_path.

    Colours are assigned at random per game. Games aborted by an illegal
    move are logged and skipped.

    Returns:
        Number of records written
    """
    config.output_path.parent.mkdir(parents=True, exist_ok=True)

    def play_one(index: int) -> MatchResult:
        rng = random.Random(None if config.seed is None else config.seed + index)
        first = factory(rng.getrandbits(32))
        second = factory(rng.getrandbits(32))
        if rng.random() < 0.5:
            first, second = second, first
        return play_game(first, second, time_ms)

    written = 0
    with open(config.output_path, "ab") as f, ThreadPoolExecutor(max_workers=config.workers) as pool:
        futures = [pool.submit(play_one, i) for i in range(config.games)]
        for future in tqdm(as_completed(futures), total=config.games, desc="Self-play"):
            try:
                result = future.result()
            except IllegalMoveError as e:
                logger.warning(f"Game aborted: {e}")
                continue

            f.write(encode_record(result))
            f.flush()
            written += 1
            logger.debug(f"Game finished: black={result.black} white={result.white}")
            if written % 10 == 0:
                logger.info(f"{written} games written")

    logger.info(f"Wrote {written} records to {config.output_path}")
    return written
