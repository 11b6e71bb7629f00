"""
Evaluation Module

This module provides position evaluation functions for the engine.
Evaluators are SWAPPABLE - the search works with any object implementing
the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - PositionalEvaluator: cell weights + stable discs + mobility
    - DiscCountEvaluator: plain disc difference
    - stability: stable disc detection (outer ring + fixed point)

Data Flow:
    Board → evaluator.evaluate() → int
                                   Positive = Black advantage
                                   Negative = White advantage
"""

from othello_engine.evaluation.base import DiscCountEvaluator, Evaluator
from othello_engine.evaluation.positional import PositionalEvaluator
from othello_engine.evaluation.stability import stable_discs

__all__ = ['Evaluator', 'DiscCountEvaluator', 'PositionalEvaluator', 'stable_discs']
