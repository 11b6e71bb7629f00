"""
Bitboard Implementation

The production board: two disjoint 64-bit ints, one bit per cell
(index = y * 8 + x). Copying is two int assignments, so the search can
clone freely instead of undoing moves.
"""

from typing import Tuple

from othello_engine.board.base import START_BLACK, START_WHITE, Board
from othello_engine.board.types import Tile, Turn


class BitBoard(Board):
    """
    Bitboard-backed Othello board.

    Attributes:
        black: Mask of black discs
        white: Mask of white discs
        turn: Side to move
    """

    __slots__ = ("black", "white", "turn")

    def __init__(self, black: int = START_BLACK, white: int = START_WHITE, turn: Turn = Turn.BLACK):
        if black & white:
            raise ValueError("black and white masks overlap")
        self.black = black
        self.white = white
        self.turn = turn

    def get(self, x: int, y: int) -> Tile:
        bit = 1 << (y * 8 + x)
        if self.black & bit:
            return Tile.BLACK
        if self.white & bit:
            return Tile.WHITE
        return Tile.EMPTY

    def set(self, x: int, y: int, tile: Tile) -> None:
        bit = 1 << (y * 8 + x)
        self.black &= ~bit
        self.white &= ~bit
        if tile == Tile.BLACK:
            self.black |= bit
        elif tile == Tile.WHITE:
            self.white |= bit

    def masks(self) -> Tuple[int, int]:
        return self.black, self.white

    def set_masks(self, black: int, white: int) -> None:
        self.black = black
        self.white = white

    def copy(self) -> "BitBoard":
        return BitBoard(self.black, self.white, self.turn)
