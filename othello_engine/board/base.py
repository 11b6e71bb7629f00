"""
Abstract Board Interface

Every board implementation exposes cell access (get/set), the side to move,
and an export of its contents as a pair of 64-bit masks (black, white).
The rules (flip computation, legality, counting) are implemented once in
this base class on top of the mask export, so storage can be swapped
without touching move logic.

Key Principles:
    1. black & white == 0 at all times
    2. apply_move() either fully succeeds or leaves the board untouched
    3. Illegal placements raise IllegalMoveError subclasses; PASS never fails
"""

from abc import ABC, abstractmethod
from typing import Iterable, Tuple

from othello_engine.board.movegen import MoveList, flips, legal_moves, popcount
from othello_engine.board.types import (
    AlreadyOccupiedError,
    Move,
    NoCaptureError,
    Tile,
    Turn,
)

START_BLACK = (1 << 28) | (1 << 35)  # E4 (4,3), D5 (3,4)
START_WHITE = (1 << 27) | (1 << 36)  # D4 (3,3), E5 (4,4)

_SYMBOLS = {Tile.EMPTY: ".", Tile.BLACK: "X", Tile.WHITE: "O"}
_PARSE = {".": Tile.EMPTY, "-": Tile.EMPTY, "X": Tile.BLACK, "B": Tile.BLACK,
          "O": Tile.WHITE, "W": Tile.WHITE}


class Board(ABC):
    """
    Abstract 8x8 Othello board.

    Subclasses provide storage (get/set/masks/set_masks/copy); everything
    else is derived.

    Attributes:
        turn: Side to move
    """

    def __init__(self):
        self.turn = Turn.BLACK

    @abstractmethod
    def get(self, x: int, y: int) -> Tile:
        """Return the tile at column x, row y."""

    @abstractmethod
    def set(self, x: int, y: int, tile: Tile) -> None:
        """Overwrite the tile at column x, row y."""

    @abstractmethod
    def masks(self) -> Tuple[int, int]:
        """Return (black, white) occupancy masks."""

    @abstractmethod
    def set_masks(self, black: int, white: int) -> None:
        """Replace the whole position from occupancy masks."""

    @abstractmethod
    def copy(self) -> "Board":
        """Independent copy (position and turn)."""

    def get_turn(self) -> Turn:
        return self.turn

    def set_turn(self, turn: Turn) -> None:
        self.turn = turn

    def reset(self) -> None:
        """Restore the four-disc starting position with Black to move."""
        self.set_masks(START_BLACK, START_WHITE)
        self.turn = Turn.BLACK

    def count(self, tile: Tile) -> int:
        black, white = self.masks()
        if tile == Tile.BLACK:
            return popcount(black)
        if tile == Tile.WHITE:
            return popcount(white)
        return 64 - popcount(black | white)

    def count_both(self) -> int:
        """Number of discs on the board."""
        black, white = self.masks()
        return popcount(black | white)

    def key(self) -> Tuple[int, int, Turn]:
        """Hashable identity of the position."""
        black, white = self.masks()
        return black, white, self.turn

    def _sides(self) -> Tuple[int, int]:
        black, white = self.masks()
        if self.turn is Turn.BLACK:
            return black, white
        return white, black

    def legal_moves(self) -> MoveList:
        """Legal placements for the side to move."""
        me, opp = self._sides()
        return MoveList(legal_moves(me, opp))

    def is_legal(self, move: Move) -> bool:
        """
        Check a move against the current position.

        PASS is legal only when the side to move has no placement.
        """
        moves = self.legal_moves()
        if move.is_pass:
            return not moves
        return move in moves

    def is_game_over(self) -> bool:
        """True when neither side can place a disc (double pass)."""
        black, white = self.masks()
        return not legal_moves(black, white) and not legal_moves(white, black)

    def apply_move(self, move: Move) -> None:
        """
        Play a move for the side to move.

        Args:
            move: Move.PASS or a placement

        Raises:
            AlreadyOccupiedError: Target cell is not empty
            NoCaptureError: Placement flips nothing (board left unchanged)
        """
        if move.is_pass:
            self.turn = self.turn.opposite()
            return

        black, white = self.masks()
        bit = 1 << move.square
        if (black | white) & bit:
            raise AlreadyOccupiedError(f"{move} is already occupied")

        me, opp = (black, white) if self.turn is Turn.BLACK else (white, black)
        captured = flips(me, opp, move.square)
        if not captured:
            raise NoCaptureError(f"{move} captures nothing for {self.turn.name}")

        me |= captured | bit
        opp ^= captured
        if self.turn is Turn.BLACK:
            self.set_masks(me, opp)
        else:
            self.set_masks(opp, me)
        self.turn = self.turn.opposite()

    @classmethod
    def from_rows(cls, rows: Iterable[str], turn: Turn = Turn.BLACK) -> "Board":
        """
        Build a board from 8 strings of 8 characters, top row (y = 0) first.

        "X"/"B" = black, "O"/"W" = white, "."/"-" = empty. Whitespace is
        ignored.
        """
        rows = ["".join(row.split()) for row in rows]
        if len(rows) != 8 or any(len(row) != 8 for row in rows):
            raise ValueError("Expected 8 rows of 8 cells")
        board = cls()
        board.set_masks(0, 0)
        for y, row in enumerate(rows):
            for x, char in enumerate(row.upper()):
                try:
                    board.set(x, y, _PARSE[char])
                except KeyError:
                    raise ValueError(f"Unknown cell symbol {char!r}") from None
        board.turn = turn
        return board

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.key() == other.key()

    def __str__(self) -> str:
        lines = ["  " + "ABCDEFGH"]
        for y in range(8):
            cells = "".join(_SYMBOLS[self.get(x, y)] for x in range(8))
            lines.append(f"{y + 1} {cells}")
        lines.append(f"{self.turn.name} to move")
        return "\n".join(lines)

    def __repr__(self) -> str:
        black, white = self.masks()
        return f"{self.__class__.__name__}(black={black:#018x}, white={white:#018x}, turn={self.turn.name})"
