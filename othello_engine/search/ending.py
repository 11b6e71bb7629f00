"""
Exact Endgame Solver

Near the end of the game the remaining tree is small enough to search to
the real end (double pass). Instead of numeric scores the solver works with
outcome classes seen from the colour that started the solve:

    MY_WIN > TIE > MY_LOSS

Each GameTree node records the best and worst outcome among the children it
explored, and keeps its children sorted best-outcome-first. Under optimal
play a node is worth `best` when it is my turn and `worst` otherwise.

Early exit:
    - On my turn, once a child reaches MY_WIN the other siblings are skipped
      (nothing beats a win).
    - On the opponent's turn, with ending_opt enabled, once a child reaches
      MY_LOSS the other siblings are skipped: an optimal opponent picks it.
      Without ending_opt every opponent reply stays in the tree, so the
      tree can follow whatever the opponent actually plays.

Tree reuse:
    The tree is built once and then consumed ply by ply. Each move played
    (by either side) replaces the root with the matching child via
    GameTree.take(), which hands the child over and drops the siblings. A
    move that was pruned away, or a root that no longer matches the board,
    forces a rebuild.
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple

from othello_engine.board.base import Board
from othello_engine.board.types import Move, Turn

logger = logging.getLogger(__name__)


class Outcome(IntEnum):
    """Final result class from the solving colour's point of view."""
    MY_LOSS = -1
    TIE = 0
    MY_WIN = 1


@dataclass(eq=False)
class GameTree:
    """
    A solved node.

    Attributes:
        key: (black, white, turn) of the position
        my_turn: True if the solving colour is to move here
        best: Best outcome among explored children (or the final result)
        worst: Worst outcome among explored children (or the final result)
        children: (move, subtree) pairs sorted best-outcome-first
    """

    key: Tuple[int, int, Turn]
    my_turn: bool
    best: Outcome
    worst: Outcome
    children: List[Tuple[Move, "GameTree"]] = field(default_factory=list)

    @property
    def value(self) -> Outcome:
        """Outcome under optimal play from this node."""
        return self.best if self.my_turn else self.worst

    @property
    def is_terminal(self) -> bool:
        return not self.children

    def take(self, move: Move) -> Optional["GameTree"]:
        """
        Detach and return the child reached by `move`.

        The node gives up all its children; only the returned subtree stays
        alive. Returns None if the move was not explored.
        """
        for child_move, child in self.children:
            if child_move == move:
                self.children = []
                return child
        self.children = []
        return None

    def size(self) -> int:
        """Number of nodes in this subtree."""
        return 1 + sum(child.size() for _, child in self.children)


def final_outcome(board: Board, my_color: Turn) -> Outcome:
    """Compare disc counts at the end of the game."""
    mine = board.count(my_color.tile)
    theirs = board.count(my_color.opposite().tile)
    if mine > theirs:
        return Outcome.MY_WIN
    if mine < theirs:
        return Outcome.MY_LOSS
    return Outcome.TIE


def solve(board: Board, my_color: Turn, ending_opt: bool = True) -> GameTree:
    """
    Solve a position exactly, to the end of the game.

    Args:
        board: Position to solve (not modified)
        my_color: Colour whose outcome classes are computed
        ending_opt: Also prune opponent nodes (assume an optimal opponent)

    Returns:
        GameTree rooted at `board`
    """
    my_turn = board.turn is my_color
    moves = list(board.legal_moves())
    if not moves:
        if board.is_game_over():
            result = final_outcome(board, my_color)
            return GameTree(board.key(), my_turn, result, result)
        moves = [Move.PASS]

    children = []
    for move in moves:
        child_board = board.copy()
        child_board.apply_move(move)
        child = solve(child_board, my_color, ending_opt)
        children.append((move, child))

        if my_turn and child.value is Outcome.MY_WIN:
            break
        if not my_turn and ending_opt and child.value is Outcome.MY_LOSS:
            break

    values = [child.value for _, child in children]
    children.sort(key=lambda pair: pair[1].value, reverse=True)
    return GameTree(board.key(), my_turn, max(values), min(values), children)


class EndgameSolver:
    """
    Endgame move selection with tree reuse across plies.

    Attributes:
        ending_opt: Prune opponent replies assuming optimal play
        tree: Current root, or None before the first solve
        builds: Number of full solves performed since creation
    """

    def __init__(self, ending_opt: bool = True):
        self.ending_opt = ending_opt
        self.tree: Optional[GameTree] = None
        self.my_color: Optional[Turn] = None
        self.builds = 0

    def search(self, board: Board, my_color: Turn, last_move: Optional[Move] = None) -> Move:
        """
        Choose the move for `my_color` in `board`.

        Args:
            board: Current position, my_color to move
            my_color: Colour the solver plays for
            last_move: Opponent's move that led to `board`, if any

        Returns:
            Best move (PASS if no placement exists or the game is over)
        """
        if last_move is not None:
            self.go(last_move)

        if self.tree is None or self.my_color is not my_color or self.tree.key != board.key():
            logger.info(f"Solving endgame: {64 - board.count_both()} empty cells")
            self.tree = solve(board, my_color, self.ending_opt)
            self.my_color = my_color
            self.builds += 1
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Endgame tree: {self.tree.size()} nodes, outcome {self.tree.value.name}")

        if self.tree.is_terminal:
            return Move.PASS

        move, child = self.tree.children[0]
        logger.debug(f"Endgame move {move} ({child.value.name})")
        self.go(move)
        return move

    def go(self, move: Move) -> None:
        """Advance the cached tree by one played move."""
        if self.tree is not None:
            self.tree = self.tree.take(move)

    @property
    def outcome(self) -> Optional[Outcome]:
        """Outcome of the current root under optimal play."""
        return None if self.tree is None else self.tree.value

    def reset(self) -> None:
        self.tree = None
        self.my_color = None
