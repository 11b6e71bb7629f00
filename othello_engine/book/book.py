"""
Opening Book Lookup

Plays known opening lines from a precomputed book file.

Per game:
    1. Black's first move is always C4 (the book's canonical opening); the
       actual first move, whoever played it, fixes the symmetry Transform.
    2. Every later move is canonicalised and looked up in the current block
       with lower/upper bound searches (move bytes may repeat).
    3. Among matching records one is picked by stored score: up to
       `sample_size` candidates are drawn at random and the best for the
       side that moved wins (max for Black, min for White). Small ranges are
       scanned completely. Its successor pointer gives the next block.
    4. The book's own reply is picked the same way from the whole current
       block and translated back to board coordinates.

The book runs out (permanently, until reset) on an unknown move, a pass, a
terminator byte, or a missing/empty successor block. Running out is normal
control flow: gen() returns None and go() returns False.
"""

import logging
import random
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from othello_engine.book.format import HEADER_SIZE, read_block, read_count, find_range
from othello_engine.book.transform import CANONICAL_FIRST, SYMMETRIES, Transform
from othello_engine.board.types import Move, Turn

logger = logging.getLogger(__name__)

DEFAULT_BOOK_PATH = Path("data/opening.db")


def is_move_byte(value: int) -> bool:
    """True if the byte encodes a board square (not pass/terminator)."""
    return (value >> 4) <= 7 and (value & 0x0F) <= 7


class BookData:
    """
    Immutable book bytes.

    One instance can be shared by any number of OpeningBook objects (e.g.
    self-play games running in parallel); nothing ever writes to it.
    """

    def __init__(self, data: bytes = b""):
        self.data = bytes(data)

    @classmethod
    def load(cls, path: Union[str, Path] = DEFAULT_BOOK_PATH) -> "BookData":
        """
        Read a book file.

        A missing file is not an error: the result is an empty book, which
        is permanently exhausted.
        """
        path = Path(path)
        if not path.exists():
            logger.warning(f"Opening book not found: {path} (book disabled)")
            return cls()
        data = path.read_bytes()
        logger.info(f"Loaded opening book: {path} ({len(data)} bytes)")
        return cls(data)

    @property
    def empty(self) -> bool:
        return len(self.data) < HEADER_SIZE or read_count(self.data, 0) == 0

    def block(self, offset: int) -> np.ndarray:
        return read_block(self.data, offset)

    def __len__(self) -> int:
        return len(self.data)


class OpeningBook:
    """
    Per-game opening book cursor.

    Attributes:
        data: Shared book bytes
        sample_size: Max random candidates compared when picking a record
        full_scan_size: Ranges up to this size are compared entirely
        runout: True once the book has nothing more for this game
        ply: Number of moves consumed in the current game
    """

    def __init__(
        self,
        data: Optional[BookData] = None,
        sample_size: int = 10,
        full_scan_size: int = 3,
        rng: Optional[random.Random] = None,
    ):
        self.data = data if data is not None else BookData()
        self.sample_size = sample_size
        self.full_scan_size = full_scan_size
        self.rng = rng if rng is not None else random.Random()
        self.transform = Transform()
        self.reset()

    def reset(self) -> None:
        """Start over for a new game."""
        self.transform = Transform()
        self.opening = True
        self.ply = 0
        self.runout = self.data.empty
        self.block = None if self.runout else self.data.block(0)

    def gen(self, turn: Turn, last_move: Optional[Move]) -> Optional[Tuple[Move, bool]]:
        """
        Produce the book move for `turn`.

        Args:
            turn: Side the book is choosing for
            last_move: Opponent's previous move, None at the start of a game

        Returns:
            (move, has_more) or None if the book has run out. has_more is
            False when the book has no continuation after `move`.
        """
        if self.runout:
            return None

        if last_move is None:
            if not self.opening:
                logger.debug("Book called without a last move mid-game")
                self.runout = True
                return None
            move = Move.put(*CANONICAL_FIRST)
            self._start(move)
            return move, True

        if not self.go(last_move):
            return None

        index = self._select(0, len(self.block) - 1, maximize=turn is Turn.BLACK)
        value = int(self.block["move"][index])
        if not is_move_byte(value):
            logger.debug(f"Book line ends with {value:#04x}")
            self.runout = True
            return None

        move = Move.from_byte(self.transform.inv(value))
        has_more = self._descend(index)
        return move, has_more

    def go(self, move: Move) -> bool:
        """
        Advance the book by a played move.

        Returns:
            bool: Whether the book still has data after this move
        """
        if self.runout:
            return False

        if move.is_pass:
            self.runout = True
            return False

        if self.opening:
            if (move.x, move.y) not in SYMMETRIES:
                logger.warning(f"Unexpected first move {move}; book disabled for this game")
                self.runout = True
                return False
            # The first move itself is not stored in the book
            self._start(move)
            return True

        found = find_range(self.block["move"], self.transform.get(move.to_byte()))
        if found is None:
            logger.debug(f"Move {move} not in book")
            self.runout = True
            return False

        first, last = found
        mover = Turn.BLACK if self.ply % 2 == 0 else Turn.WHITE
        index = self._select(first, last, maximize=mover is Turn.BLACK)
        return self._descend(index)

    def _start(self, move: Move) -> None:
        self.transform.init(move.x, move.y)
        self.opening = False
        self.ply = 1

    def _select(self, first: int, last: int, maximize: bool) -> int:
        """Pick a record index in [first, last] by stored score."""
        size = last - first + 1
        if size <= self.full_scan_size:
            candidates = list(range(first, last + 1))
        else:
            logger.debug(f"Selecting from {size} candidates")
            candidates = [self.rng.randint(first, last) for _ in range(min(self.sample_size, size))]

        scores = self.block["score"]
        best = candidates[0]
        for index in candidates[1:]:
            if maximize and scores[index] > scores[best]:
                best = index
            elif not maximize and scores[index] < scores[best]:
                best = index
        return best

    def _descend(self, index: int) -> bool:
        """Follow the successor pointer of record `index`."""
        offset = int(self.block["next"][index])
        self.ply += 1
        if offset == 0:
            self.runout = True
            self.block = None
            return False
        block = self.data.block(offset)
        if len(block) == 0:
            self.runout = True
            self.block = None
            return False
        self.block = block
        return True

    @property
    def candidates(self) -> int:
        """Number of records in the current block."""
        return 0 if self.block is None else len(self.block)
