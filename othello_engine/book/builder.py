"""
Opening Book Builder

Builds a book file from finished games (self-play records). Every game is
rotated into the canonical orientation using its first move, then its moves
are merged into a tree. A record's score is the mean final disc difference
(black - white) of all games that went through it.

The first move is not stored (it is always C4 once canonicalised); the root
block holds White's replies. A line stops at the first pass.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from othello_engine.book.format import BookEntry, encode_book
from othello_engine.book.transform import SYMMETRIES, Transform

logger = logging.getLogger(__name__)


@dataclass
class _Node:
    total: float = 0.0
    games: int = 0
    children: Dict[int, "_Node"] = field(default_factory=dict)


def _entries(level: Dict[int, _Node], min_games: int) -> List[BookEntry]:
    entries = []
    for move, node in sorted(level.items()):
        if node.games < min_games:
            continue
        entries.append(BookEntry(move, node.total / node.games, _entries(node.children, min_games)))
    return entries


def build_book(games: Iterable, max_depth: int = 20, min_games: int = 1) -> bytes:
    """
    Build book bytes from finished games.

    Args:
        games: Objects with `moves` (list of Move), `black` and `white`
            (final disc counts), e.g. MatchResult
        max_depth: Number of moves after the first one to keep per game
        min_games: Drop records seen in fewer games than this

    Returns:
        Book file contents
    """
    root: Dict[int, _Node] = {}
    used = 0
    for game in games:
        moves = list(game.moves)
        if not moves or moves[0].is_pass or (moves[0].x, moves[0].y) not in SYMMETRIES:
            continue
        transform = Transform()
        transform.init(moves[0].x, moves[0].y)
        score = float(game.black - game.white)

        level = root
        for move in moves[1:1 + max_depth]:
            if move.is_pass:
                break
            node = level.setdefault(transform.get(move.to_byte()), _Node())
            node.total += score
            node.games += 1
            level = node.children
        used += 1

    logger.info(f"Building book from {used} games (max depth {max_depth}, min games {min_games})")
    return encode_book(_entries(root, min_games))
