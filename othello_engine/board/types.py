"""
Core Value Types

Tiles, turns, moves and the board-engine exception hierarchy.

Move Encodings:
    - Board coordinates: x = column (0-7), y = row (0-7), index = y * 8 + x
    - Text: "PASS", or column letter A-H followed by row digit 1-8 ("C4")
    - Byte: high nibble = x, low nibble = y; PASS_BYTE for a pass and
      FILL_BYTE as terminator/padding (book and self-play record files)
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar

PASS_BYTE = 0x88
FILL_BYTE = 0xFF

COLUMNS = "ABCDEFGH"


class Tile(IntEnum):
    """Contents of a single cell."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2


class Turn(Enum):
    """Side to move."""
    BLACK = 0
    WHITE = 1

    def opposite(self) -> "Turn":
        return Turn.WHITE if self is Turn.BLACK else Turn.BLACK

    @property
    def tile(self) -> Tile:
        return Tile.BLACK if self is Turn.BLACK else Tile.WHITE


def opposite(turn: Turn) -> Turn:
    """Return the other side."""
    return turn.opposite()


class IllegalMoveError(ValueError):
    """A placement that the rules do not allow."""


class AlreadyOccupiedError(IllegalMoveError):
    """Target cell is not empty."""


class NoCaptureError(IllegalMoveError):
    """Placement would not flip any opponent disc."""


@dataclass(frozen=True)
class Move:
    """
    A move: either a pass or a placement at (x, y).

    Use Move.put(x, y) for placements and Move.PASS for passing. The pass
    move is represented with x = y = -1.
    """

    x: int = -1
    y: int = -1

    PASS: ClassVar["Move"]

    @classmethod
    def put(cls, x: int, y: int) -> "Move":
        if not (0 <= x <= 7 and 0 <= y <= 7):
            raise ValueError(f"Coordinates out of range: ({x}, {y})")
        return cls(x, y)

    @property
    def is_pass(self) -> bool:
        return self.x < 0

    @property
    def square(self) -> int:
        """Bit index of the placement (y * 8 + x)."""
        if self.is_pass:
            raise ValueError("PASS has no square")
        return self.y * 8 + self.x

    def to_byte(self) -> int:
        if self.is_pass:
            return PASS_BYTE
        return (self.x << 4) | self.y

    @classmethod
    def from_byte(cls, value: int) -> "Move":
        """
        Decode a nibble-encoded move byte.

        Raises:
            ValueError: If the byte is neither PASS_BYTE nor a valid square
        """
        if value == PASS_BYTE:
            return cls.PASS
        x, y = value >> 4, value & 0x0F
        if x > 7 or y > 7:
            raise ValueError(f"Not a move byte: {value:#04x}")
        return cls(x, y)

    @classmethod
    def parse(cls, text: str) -> "Move":
        """Parse "PASS" or a coordinate such as "C4"."""
        token = text.strip().upper()
        if token == "PASS":
            return cls.PASS
        if len(token) != 2 or token[0] not in COLUMNS or token[1] not in "12345678":
            raise ValueError(f"Invalid move text: {text!r}")
        return cls(COLUMNS.index(token[0]), int(token[1]) - 1)

    def __str__(self) -> str:
        if self.is_pass:
            return "PASS"
        return f"{COLUMNS[self.x]}{self.y + 1}"


Move.PASS = Move()
