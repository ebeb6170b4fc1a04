"""
Chess Companion

The game core of a casual chess app: play against a built-in opponent or
another human on the same device, review archived matches move by move,
and follow a running positional evaluation.

## Architecture

The package is organized into several key modules:

1. **board**: Rules engine adapter over python-chess
   - Move lookup from (from, to) squares, promotion defaults
   - AppliedMove descriptors, undo, FEN/PGN round-trips
   - Terminal state detection (checkmate, draw)

2. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - ClassicalEvaluator: material + Piece-Square Tables

3. **search**: Search algorithms
   - Minimax with alpha-beta pruning
   - SearchEngine service with difficulty -> depth mapping

4. **analysis**: Post-hoc move review
   - Move quality classification (blunder ... brilliant)
   - Match replay with evaluation history

5. **session**: Game orchestration
   - GameSession state machine (idle / in progress / terminal)
   - Cancellable background engine turns

6. **storage** / **feedback**: Collaborator boundaries
   - Saved game snapshot and match library (memory or JSON file)
   - Fire-and-forget notifications (move, check, game over)

## Quick Start

```python
from chess_companion import GameSession, GameMode, Difficulty

session = GameSession()
session.start_new_game(GameMode.VS_ENGINE, Difficulty.EASY)
session.apply_move("e2", "e4")
session.wait_for_engine(timeout=10)
print(session.get_history(), session.get_evaluation())
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from chess_companion.board import AppliedMove, InvalidMove, MatchResult, RulesEngine
from chess_companion.evaluation import ClassicalEvaluator, Evaluator
from chess_companion.search import Difficulty, SearchEngine, find_best_move, minimax
from chess_companion.analysis import QualityLabel, classify, review_match
from chess_companion.session import GameMode, GameSession, SessionConfig, SessionState

__all__ = [
    'AppliedMove',
    'InvalidMove',
    'MatchResult',
    'RulesEngine',
    'Evaluator',
    'ClassicalEvaluator',
    'Difficulty',
    'SearchEngine',
    'find_best_move',
    'minimax',
    'QualityLabel',
    'classify',
    'review_match',
    'GameMode',
    'GameSession',
    'SessionConfig',
    'SessionState',
]
