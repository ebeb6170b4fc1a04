"""
Analysis Module

Post-hoc review of played moves.

Key Components:
    - classify: Label one move from its before/after positions
    - review_match: Replay an archived match with evaluations and labels
    - review_library: Review many matches, isolating corrupted records
"""

from chess_companion.analysis.classifier import (
    QualityLabel,
    classify,
    classify_delta,
    evaluation_delta,
)
from chess_companion.analysis.review import (
    LibraryReview,
    MatchReview,
    review_library,
    review_match,
)

__all__ = [
    'QualityLabel',
    'classify',
    'classify_delta',
    'evaluation_delta',
    'LibraryReview',
    'MatchReview',
    'review_library',
    'review_match',
]
