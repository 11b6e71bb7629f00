"""
Othello Strategy Engine

Move selection for 8x8 Othello (Reversi) combining an opening book, a
fixed-depth alpha-beta search and an exact endgame solver, with a
legal-random fallback.

## Architecture

The engine is organized into several key modules:

1. **board**: Bitboard state, move application, legal move generation
   - BitBoard (two 64-bit masks) and ArrayBoard (reference)
   - Shift-and-mask move generation with wraparound masks

2. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - PositionalEvaluator: cell weights, stable discs, mobility

3. **search**: Search algorithms
   - Alpha-beta (negamax form) to a fixed depth
   - Exact endgame solver over win/tie/loss with tree reuse

4. **book**: Opening book
   - Binary block file, lower/upper bound lookup
   - Symmetry transform fixed by the first move

5. **strategy**: Phase state machine (BOOK → SEARCH → ENDING → RANDOM)

6. **selfplay**: Self-play games, 64-byte game records

## Quick Start

```python
from othello_engine import BitBoard, EngineConfig, MainStrategy

board = BitBoard()
strategy = MainStrategy(EngineConfig(book_path=None))

move = strategy.play(board, last_move=None)
board.apply_move(move)
print(board)
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from othello_engine.board import ArrayBoard, BitBoard, Board, Move, Tile, Turn
from othello_engine.config import EngineConfig, MatchConfig
from othello_engine.strategy import MainStrategy, RandomStrategy, StrategyState

__all__ = [
    'ArrayBoard',
    'BitBoard',
    'Board',
    'Move',
    'Tile',
    'Turn',
    'EngineConfig',
    'MatchConfig',
    'MainStrategy',
    'RandomStrategy',
    'StrategyState',
]
