"""
Board Symmetry Transform

Black's four legal first moves (C4, D3, F5, E6) are equivalent under board
symmetry. The book is recorded as if the game opened with C4, so every game
picks the one symmetry that maps its actual first move onto C4 and
translates all later moves through it.

All four symmetries are involutions, but get/inv use separate tables so the
code does not rely on it. Bytes that are not squares (pass, terminator)
map to themselves.
"""

from typing import Callable, Dict, List, Tuple

CANONICAL_FIRST = (2, 3)  # C4

# first move -> coordinate mapping that sends it to C4
SYMMETRIES: Dict[Tuple[int, int], Callable[[int, int], Tuple[int, int]]] = {
    (2, 3): lambda x, y: (x, y),
    (3, 2): lambda x, y: (y, x),
    (5, 4): lambda x, y: (7 - x, 7 - y),
    (4, 5): lambda x, y: (7 - y, 7 - x),
}


def _identity() -> List[int]:
    return list(range(256))


class Transform:
    """
    256-entry move-byte translation between board and book orientation.

    Attributes:
        forward: board byte -> canonical byte
        inverse: canonical byte -> board byte
    """

    def __init__(self):
        self.forward = _identity()
        self.inverse = _identity()

    def init(self, x: int, y: int) -> None:
        """
        Select the symmetry from the game's first move.

        Raises:
            ValueError: If (x, y) is not one of Black's opening moves
        """
        try:
            mapping = SYMMETRIES[(x, y)]
        except KeyError:
            raise ValueError(f"({x}, {y}) is not an opening move") from None

        forward = _identity()
        for cx in range(8):
            for cy in range(8):
                tx, ty = mapping(cx, cy)
                forward[(cx << 4) | cy] = (tx << 4) | ty
        inverse = _identity()
        for raw, canonical in enumerate(forward):
            inverse[canonical] = raw
        self.forward = forward
        self.inverse = inverse

    def get(self, value: int) -> int:
        """Board orientation -> book orientation."""
        return self.forward[value]

    def inv(self, value: int) -> int:
        """Book orientation -> board orientation."""
        return self.inverse[value]
