"""
Self-play game records.

Fixed 64-byte record per game, appended to a binary file:

    bytes 0..61   move bytes (high nibble x, low nibble y; PASS_BYTE for a
                  pass), at most 60 moves, padded with FILL_BYTE
    byte  62      final black disc count
    byte  63      final white disc count
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

import numpy as np

from othello_engine.board.types import FILL_BYTE, Move, Turn

logger = logging.getLogger(__name__)

RECORD_SIZE = 64
MOVE_SLOTS = 62
MAX_MOVES = 60


@dataclass
class MatchResult:
    """Outcome of one finished game."""

    moves: List[Move] = field(default_factory=list)
    black: int = 0
    white: int = 0

    @property
    def winner(self) -> Optional[Turn]:
        if self.black > self.white:
            return Turn.BLACK
        if self.white > self.black:
            return Turn.WHITE
        return None


def encode_record(result: MatchResult) -> bytes:
    """Pack a game into its 64-byte record (moves past 60 are dropped)."""
    record = np.full(RECORD_SIZE, FILL_BYTE, dtype=np.uint8)
    codes = [move.to_byte() for move in result.moves[:MAX_MOVES]]
    record[:len(codes)] = codes
    record[MOVE_SLOTS] = result.black
    record[MOVE_SLOTS + 1] = result.white
    return record.tobytes()


def decode_records(data: bytes) -> List[MatchResult]:
    """
    Unpack a record file.

    Raises:
        ValueError: If the data is not a whole number of records or holds
            an invalid move byte
    """
    if len(data) % RECORD_SIZE:
        raise ValueError(f"Record data length {len(data)} is not a multiple of {RECORD_SIZE}")

    table = np.frombuffer(data, dtype=np.uint8).reshape(-1, RECORD_SIZE)
    results = []
    for row in table:
        moves = []
        for value in row[:MOVE_SLOTS]:
            if value == FILL_BYTE:
                break
            moves.append(Move.from_byte(int(value)))
        results.append(MatchResult(moves, int(row[MOVE_SLOTS]), int(row[MOVE_SLOTS + 1])))
    return results


def read_records(path: Union[str, Path]) -> List[MatchResult]:
    path = Path(path)
    results = decode_records(path.read_bytes())
    logger.info(f"Read {len(results)} game records from {path}")
    return results


def append_records(path: Union[str, Path], results: Iterable[MatchResult]) -> int:
    """Append records to a file, creating it if needed. Returns the count."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with open(path, "ab") as f:
        for result in results:
            f.write(encode_record(result))
            written += 1
    return written
