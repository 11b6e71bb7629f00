"""
Search Module

Move selection by look-ahead.

Key Components:
    - alphabeta / find_best_move / Searcher: fixed-depth alpha-beta search
      over a positional evaluator (midgame)
    - solve / EndgameSolver / GameTree: exact solve to the end of the game
      over outcome classes, with the solved tree reused across plies
"""

from othello_engine.search.alphabeta import Searcher, alphabeta, find_best_move
from othello_engine.search.ending import EndgameSolver, GameTree, Outcome, final_outcome, solve

__all__ = [
    'alphabeta',
    'find_best_move',
    'Searcher',
    'EndgameSolver',
    'GameTree',
    'Outcome',
    'final_outcome',
    'solve',
]
