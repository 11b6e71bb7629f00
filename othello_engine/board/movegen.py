"""
Bitboard Move Generation

All functions here work on plain 64-bit ints, one bit per cell with
index = y * 8 + x (bit 0 = A1, bit 63 = H8). Each of the 8 directions is a
shift amount paired with a mask of the cells a shifted bit may legally land
on; without the mask a disc on column H would "wrap" onto column A of the
next row.

Legal-move generation (per direction):
    1. Shift my discs one step and keep the ones landing on opponent discs
    2. Extend that run through further opponent discs (at most 6 in a row)
    3. Shift the run one more step: landing on an empty cell = legal move

This computes every legal move in a handful of word operations, which
matters because the search calls it at every node.

Reference:
    - Dumb7Fill: https://www.chessprogramming.org/Dumb7Fill
"""

from typing import Iterator, Optional, Tuple

from othello_engine.board.types import Move, Tile, Turn

FULL = 0xFFFFFFFFFFFFFFFF

FILE_A = 0x0101010101010101
FILE_H = 0x8080808080808080
NOT_FILE_A = FULL ^ FILE_A
NOT_FILE_H = FULL ^ FILE_H

# Longest possible run of opponent discs between two of mine
MAX_RUN = 6

# (shift, landing mask). Positive shift = towards higher indices.
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (1, NOT_FILE_A),   # east
    (-1, NOT_FILE_H),  # west
    (8, FULL),         # south (y + 1)
    (-8, FULL),        # north (y - 1)
    (9, NOT_FILE_A),   # south-east
    (7, NOT_FILE_H),   # south-west
    (-7, NOT_FILE_A),  # north-east
    (-9, NOT_FILE_H),  # north-west
)


def shift(bits: int, amount: int) -> int:
    """Shift a 64-bit mask, discarding bits pushed off either end."""
    if amount > 0:
        return (bits << amount) & FULL
    return bits >> -amount


def popcount(bits: int) -> int:
    return bits.bit_count()


def legal_moves(me: int, opp: int) -> int:
    """
    Compute the mask of legal placements for the side owning `me`.

    Args:
        me: Discs of the side to move
        opp: Discs of the opponent

    Returns:
        Bitmask of empty cells where a placement captures at least one disc
    """
    empty = FULL ^ (me | opp)
    moves = 0
    for amount, mask in DIRECTIONS:
        run = shift(me, amount) & mask & opp
        for _ in range(MAX_RUN - 1):
            run |= shift(run, amount) & mask & opp
        moves |= shift(run, amount) & mask & empty
    return moves


def flips(me: int, opp: int, square: int) -> int:
    """
    Compute the discs captured by placing on `square`.

    Returns:
        Bitmask of opponent discs to flip (0 if the placement captures nothing)
    """
    move = 1 << square
    captured = 0
    for amount, mask in DIRECTIONS:
        run = 0
        cursor = shift(move, amount) & mask
        while cursor & opp:
            run |= cursor
            cursor = shift(cursor, amount) & mask
        if cursor & me:
            captured |= run
    return captured


def squares(bits: int) -> Iterator[int]:
    """Yield set bit indices in ascending order."""
    while bits:
        low = bits & -bits
        yield low.bit_length() - 1
        bits ^= low


class MoveList:
    """
    Lazy, restartable sequence of legal placements.

    Iterating yields Move.put() in ascending cell index (row by row). The
    list never contains PASS; an empty list means the side has to pass.
    """

    __slots__ = ("mask",)

    def __init__(self, mask: int):
        self.mask = mask

    def __iter__(self) -> Iterator[Move]:
        for sq in squares(self.mask):
            yield Move(sq & 7, sq >> 3)

    def __len__(self) -> int:
        return popcount(self.mask)

    def __bool__(self) -> bool:
        return self.mask != 0

    def __contains__(self, move: Move) -> bool:
        return not move.is_pass and bool(self.mask >> move.square & 1)

    def __repr__(self) -> str:
        return f"MoveList([{', '.join(str(m) for m in self)}])"


def side_masks(board, turn: Turn) -> Tuple[int, int]:
    """Return (me, opp) masks of `board` for `turn`."""
    black, white = board.masks()
    if turn is Turn.BLACK:
        return black, white
    return white, black


def iter_moves(board, turn: Optional[Turn] = None) -> MoveList:
    """
    Legal placements for `turn` (defaults to the side to move).

    Args:
        board: Any Board implementation
        turn: Side to generate moves for

    Returns:
        MoveList over the legal placements
    """
    me, opp = side_masks(board, board.turn if turn is None else turn)
    return MoveList(legal_moves(me, opp))


def mobility(board, turn: Turn) -> int:
    """Number of legal placements for `turn`."""
    me, opp = side_masks(board, turn)
    return popcount(legal_moves(me, opp))


_STEPS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


def is_placeable(board, x: int, y: int, turn: Optional[Turn] = None) -> bool:
    """
    Check a placement cell by cell, without bit tricks.

    This is the straightforward walk (step outward over opponent discs until
    one of our own closes the run). It is slow and exists to cross-check
    legal_moves().
    """
    if board.get(x, y) != Tile.EMPTY:
        return False
    side = board.turn if turn is None else turn
    me, op = side.tile, side.opposite().tile
    for dx, dy in _STEPS:
        cx, cy = x + dx, y + dy
        seen_opponent = False
        while 0 <= cx <= 7 and 0 <= cy <= 7:
            tile = board.get(cx, cy)
            if tile == op:
                seen_opponent = True
            elif tile == me and seen_opponent:
                return True
            else:
                break
            cx += dx
            cy += dy
    return False
