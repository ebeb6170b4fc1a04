"""
Utilities Module

Logging setup and the engine tactics suite used by tools/run_benchmark.py.
"""

from chess_companion.utils.log import setup_logger
from chess_companion.utils.testing import (
    TACTICAL_POSITIONS,
    evaluate_position,
    run_tactics,
)

__all__ = [
    'setup_logger',
    'TACTICAL_POSITIONS',
    'evaluate_position',
    'run_tactics',
]
