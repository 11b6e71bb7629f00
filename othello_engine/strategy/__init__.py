"""
Strategy Module

Key Components:
    - Strategy (ABC): play(board, last_move, time_ms) -> Move
    - RandomStrategy: first legal cell of a shuffled order
    - MainStrategy: BOOK → SEARCH → ENDING → RANDOM state machine
"""

from othello_engine.strategy.base import RandomStrategy, Strategy
from othello_engine.strategy.main import MainStrategy, StrategyState, make_strategy

__all__ = ['Strategy', 'RandomStrategy', 'MainStrategy', 'StrategyState', 'make_strategy']
