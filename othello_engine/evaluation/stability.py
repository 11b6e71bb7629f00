"""
Stable Disc Detection

A stable disc can never be flipped again, whatever is played. Detection
works on one colour at a time and has two stages:

1. Outer ring: walking along an edge from a corner, an unbroken run of the
   colour is stable. Each edge is scanned from both of its corners.
2. Fixed point over the whole board: a disc is stable if, on each of its
   4 axes (horizontal, vertical, both diagonals), either
       - one of its two neighbours is off the board,
       - one of its two neighbours is already a stable disc of the colour, or
       - the whole line through it on that axis is filled,
   because a flip along an axis needs an empty cell on one side.
   Passes repeat until no new disc is found.

Stability is monotonic along a line of play: a disc stable at move N is
still stable at move N + k. That is what allows seeding the fixed point with
an earlier result instead of starting from nothing. Seeding with a result
from a position that is not an ancestor is NOT safe.
"""

from typing import List, Tuple

from othello_engine.board.movegen import popcount, squares

_AXES = ((1, 0), (0, 1), (1, 1), (-1, 1))

# Cell indices of each edge, ordered corner to corner
_EDGES = (
    tuple(range(0, 8)),              # top (y = 0)
    tuple(range(56, 64)),            # bottom (y = 7)
    tuple(range(0, 64, 8)),          # left (x = 0)
    tuple(range(7, 64, 8)),          # right (x = 7)
)


def _on_board(x: int, y: int) -> bool:
    return 0 <= x <= 7 and 0 <= y <= 7


def _build_axis_table() -> List[Tuple[Tuple[int, bool, int], ...]]:
    """Per cell, per axis: (neighbour mask, touches edge, line mask)."""
    table = []
    for sq in range(64):
        x, y = sq & 7, sq >> 3
        entries = []
        for dx, dy in _AXES:
            neighbours = 0
            walled = False
            line = 0
            for sign in (1, -1):
                cx, cy = x + sign * dx, y + sign * dy
                if not _on_board(cx, cy):
                    walled = True
                    continue
                neighbours |= 1 << (cy * 8 + cx)
                while _on_board(cx, cy):
                    line |= 1 << (cy * 8 + cx)
                    cx += sign * dx
                    cy += sign * dy
            entries.append((neighbours, walled, line))
        table.append(tuple(entries))
    return table


AXIS_TABLE = _build_axis_table()


def edge_stable(own: int) -> int:
    """Stable discs found by scanning every edge from both corners."""
    fixed = 0
    for cells in _EDGES:
        start = 0
        while start < 8 and own >> cells[start] & 1:
            fixed |= 1 << cells[start]
            start += 1
        end = 7
        while end > start and own >> cells[end] & 1:
            fixed |= 1 << cells[end]
            end -= 1
    return fixed


def stable_discs(own: int, occupied: int, seed: int = 0) -> int:
    """
    Compute the stable discs of one colour.

    Args:
        own: Discs of the colour being checked
        occupied: All discs on the board (both colours)
        seed: Stable discs already known for this colour on an ancestor
            position of the same game line

    Returns:
        Mask of stable discs (always a subset of `own`)
    """
    fixed = (seed & own) | edge_stable(own)

    changed = True
    while changed:
        changed = False
        for sq in squares(own & ~fixed):
            for neighbours, walled, line in AXIS_TABLE[sq]:
                if walled or fixed & neighbours:
                    continue
                if occupied & line == line:
                    continue
                break
            else:
                fixed |= 1 << sq
                changed = True
    return fixed


def count_stable(own: int, occupied: int, seed: int = 0) -> int:
    return popcount(stable_discs(own, occupied, seed))
