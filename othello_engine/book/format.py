"""
Opening Book File Format

The book is a forest of blocks. Each block lists the book moves known in
one position; following a record's successor pointer gives the block for
the position after that move. The root block sits at offset 0.

Layout (all multi-byte fields big-endian):

    block  := count:uint64  record[count]
    record := padding:7 bytes  move:uint8  score:float64  next:uint64

    - move: high nibble = x, low nibble = y (canonical orientation),
      PASS_BYTE / FILL_BYTE end a book line
    - score: from Black's perspective (higher = better for Black)
    - next: absolute offset of the successor block, 0 = none

Records inside a block are sorted ascending by move byte. A move byte may
repeat (sibling lines recorded separately), so lookups use lower/upper
bound searches rather than an exact-match search.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

HEADER_SIZE = 8

RECORD_DTYPE = np.dtype([
    ("pad", "V7"),
    ("move", "u1"),
    ("score", ">f8"),
    ("next", ">u8"),
])

RECORD_SIZE = RECORD_DTYPE.itemsize  # 24


class BookFormatError(ValueError):
    """Book bytes do not follow the block layout."""


def read_count(data: bytes, offset: int) -> int:
    if offset < 0 or offset + HEADER_SIZE > len(data):
        raise BookFormatError(f"Block header at {offset} is outside the book ({len(data)} bytes)")
    return int.from_bytes(data[offset:offset + HEADER_SIZE], "big")


def read_block(data: bytes, offset: int) -> np.ndarray:
    """
    Decode the block starting at `offset`.

    Returns:
        Structured array with fields move, score, next (read-only view)

    Raises:
        BookFormatError: If the block runs past the end of the data
    """
    count = read_count(data, offset)
    end = offset + HEADER_SIZE + count * RECORD_SIZE
    if end > len(data):
        raise BookFormatError(f"Block at {offset} with {count} records runs past end of book")
    return np.frombuffer(data, dtype=RECORD_DTYPE, count=count, offset=offset + HEADER_SIZE)


def lower_bound(moves: np.ndarray, value: int) -> int:
    """First index whose move byte is >= value."""
    return int(np.searchsorted(moves, np.uint8(value), side="left"))


def upper_bound(moves: np.ndarray, value: int) -> int:
    """First index whose move byte is > value."""
    return int(np.searchsorted(moves, np.uint8(value), side="right"))


def find_range(moves: np.ndarray, value: int) -> Optional[Tuple[int, int]]:
    """
    Locate all records carrying `value`.

    Args:
        moves: Sorted move bytes of one block
        value: Move byte to look for

    Returns:
        Inclusive (first, last) index range, or None if absent
    """
    first = lower_bound(moves, value)
    last = upper_bound(moves, value) - 1
    if first > last:
        return None
    return first, last


@dataclass
class BookEntry:
    """One record of a book under construction."""

    move: int
    score: float
    children: List["BookEntry"] = field(default_factory=list)


def encode_book(root: List[BookEntry]) -> bytes:
    """
    Serialise a tree of entries into book bytes.

    Blocks are laid out breadth-first starting with the root block at
    offset 0, so a successor offset of 0 can only mean "no successor".
    """
    order = []
    offsets = {}
    position = 0
    queue = deque([root])
    while queue:
        block = queue.popleft()
        block.sort(key=lambda entry: entry.move)
        offsets[id(block)] = position
        order.append(block)
        position += HEADER_SIZE + RECORD_SIZE * len(block)
        for entry in block:
            if entry.children:
                queue.append(entry.children)

    chunks = []
    for block in order:
        records = np.zeros(len(block), dtype=RECORD_DTYPE)
        records["move"] = [entry.move for entry in block]
        records["score"] = [entry.score for entry in block]
        records["next"] = [offsets[id(entry.children)] if entry.children else 0 for entry in block]
        chunks.append(len(block).to_bytes(HEADER_SIZE, "big"))
        chunks.append(records.tobytes())
    return b"".join(chunks)
