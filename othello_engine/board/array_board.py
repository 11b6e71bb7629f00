"""
Array Board (reference implementation)

A plain 64-cell list of tiles. It is slower than BitBoard and only used to
cross-validate the bitboard code in tests: both share the rules in
Board, so any disagreement points at storage or mask export.
"""

from typing import List, Tuple

from othello_engine.board.base import START_BLACK, START_WHITE, Board
from othello_engine.board.types import Tile


class ArrayBoard(Board):
    """List-backed Othello board (cells[y * 8 + x])."""

    def __init__(self):
        super().__init__()
        self.cells: List[Tile] = [Tile.EMPTY] * 64
        self.set_masks(START_BLACK, START_WHITE)

    def get(self, x: int, y: int) -> Tile:
        return self.cells[y * 8 + x]

    def set(self, x: int, y: int, tile: Tile) -> None:
        self.cells[y * 8 + x] = tile

    def masks(self) -> Tuple[int, int]:
        black = 0
        white = 0
        for index, tile in enumerate(self.cells):
            if tile == Tile.BLACK:
                black |= 1 << index
            elif tile == Tile.WHITE:
                white |= 1 << index
        return black, white

    def set_masks(self, black: int, white: int) -> None:
        for index in range(64):
            bit = 1 << index
            if black & bit:
                self.cells[index] = Tile.BLACK
            elif white & bit:
                self.cells[index] = Tile.WHITE
            else:
                self.cells[index] = Tile.EMPTY

    def copy(self) -> "ArrayBoard":
        board = ArrayBoard()
        board.cells = list(self.cells)
        board.turn = self.turn
        return board


def to_array_board(board: Board) -> ArrayBoard:
    """Convert any board into an ArrayBoard with the same position and turn."""
    result = ArrayBoard()
    result.set_masks(*board.masks())
    result.turn = board.turn
    return result

